import struct

import pytest

from rmperiph.crc import append_crc8, append_crc16
from rmperiph.referee import RefereeInfo, RefereeParser
from rmperiph.referee_protocol import CmdId, FrameHeader, GameRobotHP


def make_frame(cmd_id: int, payload: bytes, seq: int = 0) -> bytes:
    header = append_crc8(FrameHeader(data_length=len(payload), seq=seq).pack())
    body = header + int(cmd_id).to_bytes(2, "little") + payload + b"\x00\x00"
    return append_crc16(body)


ROBOT_STATE = struct.pack("<BBHHHHHB", 3, 2, 200, 400, 40, 240, 60, 0b101)


def test_robot_state_frame_is_decoded():
    info = RefereeParser().feed(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE))
    state = info.game_robot_state
    assert info.cmd_id == 0x0201
    assert (state.robot_id, state.robot_level) == (3, 2)
    assert (state.current_hp, state.maximum_hp) == (200, 400)
    assert state.chassis_power_limit == 60
    assert state.power_management_gimbal_output == 1
    assert state.power_management_chassis_output == 0
    assert state.power_management_shooter_output == 1


def test_header_is_recorded():
    info = RefereeParser().feed(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE, seq=7))
    assert info.frame_header.sof == 0xA5
    assert info.frame_header.data_length == len(ROBOT_STATE)
    assert info.frame_header.seq == 7


def test_power_heat_data_float():
    payload = struct.pack("<HHfHHHH", 24000, 1500, 36.5, 60, 10, 20, 30)
    info = RefereeParser().feed(make_frame(CmdId.POWER_HEAT_DATA, payload))
    data = info.power_heat_data
    assert data.chassis_volt == 24000
    assert data.chassis_power == pytest.approx(36.5)
    assert data.shooter_heat_42mm == 30


def test_game_state_bit_fields():
    payload = struct.pack("<BH", (4 << 4) | 1, 180)
    info = RefereeParser().feed(make_frame(CmdId.GAME_STATE, payload))
    assert (info.game_state.game_type, info.game_state.game_progress) == (1, 4)
    assert info.game_state.stage_remain_time == 180


def test_several_frames_in_one_buffer():
    buffer = make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE) + make_frame(
        CmdId.SHOOT_DATA, struct.pack("<BBBf", 1, 1, 10, 15.5)
    )
    info = RefereeParser().feed(buffer)
    assert info.game_robot_state.robot_id == 3
    assert info.shoot_data.bullet_freq == 10
    assert info.shoot_data.bullet_speed == pytest.approx(15.5)
    assert info.cmd_id == CmdId.SHOOT_DATA


def test_bad_crc16_is_ignored_but_next_frame_parsed():
    bad = bytearray(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE))
    bad[-1] ^= 0xFF
    good = make_frame(CmdId.BUFF_MUSK, b"\x05")
    info = RefereeParser().feed(bytes(bad) + good)
    assert info.game_robot_state.robot_id == 0
    assert info.buff_musk.power_rune_buff == 5


def test_bad_crc8_leaves_data_unchanged():
    frame = bytearray(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE))
    frame[4] ^= 0xFF
    info = RefereeParser().feed(bytes(frame))
    assert info.cmd_id == 0
    assert info.game_robot_state.robot_id == 0


def test_wrong_start_byte_stops_parsing():
    frame = bytearray(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE))
    frame[0] = 0x00
    info = RefereeParser().feed(bytes(frame))
    assert info.cmd_id == 0
    assert info.frame_header.sof == 0
    assert info.game_robot_state.robot_id == 0


def test_robot_hp_updates_only_first_field():
    parser = RefereeParser()
    parser.info.game_robot_hp = GameRobotHP(blue_base_hp=5000)
    info = parser.feed(make_frame(CmdId.GAME_ROBOT_SURVIVORS, struct.pack("<H", 150)))
    assert info.game_robot_hp.red_1_robot_hp == 150
    assert info.game_robot_hp.blue_base_hp == 5000


def test_interactive_data_is_decoded():
    payload = struct.pack("<HHH", 0x0200, 3, 4) + b"hello"
    info = RefereeParser().feed(make_frame(CmdId.STUDENT_INTERACTIVE, payload))
    assert info.receive_data.header.data_cmd_id == 0x0200
    assert info.receive_data.header.sender_id == 3
    assert info.receive_data.header.receiver_id == 4
    assert info.receive_data.data == b"hello"


def test_unknown_command_sets_only_cmd_id():
    info = RefereeParser().feed(make_frame(0x0999, b"\x01\x02"))
    assert info.cmd_id == 0x0999
    assert info == RefereeInfo(frame_header=info.frame_header, cmd_id=0x0999)


def test_short_buffer_changes_nothing():
    info = RefereeParser().feed(b"\xa5\x01")
    assert info == RefereeInfo()


def test_state_persists_between_feeds():
    parser = RefereeParser()
    parser.feed(make_frame(CmdId.GAME_ROBOT_STATE, ROBOT_STATE))
    info = parser.feed(make_frame(CmdId.GAME_RESULT, b"\x02"))
    assert info.game_result.winner == 2
    assert info.game_robot_state.robot_id == 3
    assert info is parser.info