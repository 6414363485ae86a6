"""Decoder for the frames the referee system sends over its serial link."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass, field

from .crc import verify_crc8, verify_crc16
from .referee_protocol import (
    DATA_LENGTHS,
    DATA_OFFSET,
    LEN_CMDID,
    LEN_HEADER,
    LEN_TAIL,
    REFEREE_SOF,
    ROBOT_RED,
    AerialRobotEnergy,
    BuffMusk,
    CmdId,
    EventData,
    FrameHeader,
    GameResult,
    GameRobotHP,
    GameRobotPos,
    GameRobotState,
    GameState,
    PowerHeatData,
    ReceiveData,
    RobotHurt,
    ShootData,
    SupplyProjectileAction,
)

RX_BUFFER_SIZE = 255


@dataclass
class RefereeId:
    """Identity of this robot and of the client its UI is drawn on."""

    robot_color: int = ROBOT_RED
    robot_id: int = 0
    client_id: int = 0
    receiver_robot_id: int = 0


@dataclass
class RefereeInfo:
    """Latest data received from the referee system, one record per command."""

    referee_id: RefereeId = field(default_factory=RefereeId)
    frame_header: FrameHeader = field(default_factory=lambda: FrameHeader(sof=0))
    cmd_id: int = 0
    game_state: GameState = field(default_factory=GameState)
    game_result: GameResult = field(default_factory=GameResult)
    game_robot_hp: GameRobotHP = field(default_factory=GameRobotHP)
    event_data: EventData = field(default_factory=EventData)
    supply_projectile_action: SupplyProjectileAction = field(
        default_factory=SupplyProjectileAction
    )
    game_robot_state: GameRobotState = field(default_factory=GameRobotState)
    power_heat_data: PowerHeatData = field(default_factory=PowerHeatData)
    game_robot_pos: GameRobotPos = field(default_factory=GameRobotPos)
    buff_musk: BuffMusk = field(default_factory=BuffMusk)
    aerial_robot_energy: AerialRobotEnergy = field(default_factory=AerialRobotEnergy)
    robot_hurt: RobotHurt = field(default_factory=RobotHurt)
    shoot_data: ShootData = field(default_factory=ShootData)
    receive_data: ReceiveData = field(default_factory=ReceiveData)
    init_flag: bool = False


_RECORDS = {
    CmdId.GAME_STATE: ("game_state", GameState),
    CmdId.GAME_RESULT: ("game_result", GameResult),
    CmdId.EVENT_DATA: ("event_data", EventData),
    CmdId.SUPPLY_PROJECTILE_ACTION: ("supply_projectile_action", SupplyProjectileAction),
    CmdId.GAME_ROBOT_STATE: ("game_robot_state", GameRobotState),
    CmdId.POWER_HEAT_DATA: ("power_heat_data", PowerHeatData),
    CmdId.GAME_ROBOT_POS: ("game_robot_pos", GameRobotPos),
    CmdId.BUFF_MUSK: ("buff_musk", BuffMusk),
    CmdId.AERIAL_ROBOT_ENERGY: ("aerial_robot_energy", AerialRobotEnergy),
    CmdId.ROBOT_HURT: ("robot_hurt", RobotHurt),
    CmdId.SHOOT_DATA: ("shoot_data", ShootData),
    CmdId.STUDENT_INTERACTIVE: ("receive_data", ReceiveData),
}


class RefereeParser:
    """Decode received buffers into a shared :class:`RefereeInfo`."""

    def __init__(self) -> None:
        self.info = RefereeInfo()

    def feed(self, buffer: bytes) -> RefereeInfo:
        """Parse every back-to-back frame at the start of ``buffer``."""
        data = bytes(buffer)
        offset = 0
        while True:
            frame = data[offset:]
            if len(frame) < LEN_HEADER:
                break
            header = FrameHeader.unpack(frame)
            self.info.frame_header = header
            if frame[0] != REFEREE_SOF:
                break
            if verify_crc8(frame[:LEN_HEADER]):
                # Only the low byte of the length enters the CRC16 span.
                judge_length = frame[1] + LEN_HEADER + LEN_CMDID + LEN_TAIL
                if len(frame) >= judge_length and verify_crc16(frame[:judge_length]):
                    self.info.cmd_id = frame[5] | (frame[6] << 8)
                    self._store(self.info.cmd_id, frame)
            step = LEN_HEADER + LEN_CMDID + header.data_length + LEN_TAIL
            if step < len(frame) and frame[step] == REFEREE_SOF:
                offset += step
            else:
                break
        return self.info

    def _store(self, raw_cmd: int, frame: bytes) -> None:
        try:
            cmd = CmdId(raw_cmd)
        except ValueError:
            return
        length = DATA_LENGTHS.get(cmd)
        if length is None:
            return
        payload = frame[DATA_OFFSET : DATA_OFFSET + length].ljust(length, b"\x00")
        if cmd is CmdId.GAME_ROBOT_SURVIVORS:
            # Only the first field of the record is carried by this command.
            (red_1,) = struct.unpack("<H", payload)
            self.info.game_robot_hp = dataclasses.replace(
                self.info.game_robot_hp, red_1_robot_hp=red_1
            )
            return
        attr, record = _RECORDS[cmd]
        setattr(self.info, attr, record.unpack(payload))