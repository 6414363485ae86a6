import pytest

from rmperiph.crc import verify_crc16
from rmperiph.referee_protocol import (
    ROBOT_BLUE,
    ROBOT_RED,
    GraphColor,
    GraphData,
    GraphOperate,
    InteractiveDataId,
    InteractiveHeader,
)
from rmperiph.referee_task import (
    REFRESH_PERIOD,
    UITask,
    determine_referee_id,
    draw_cross,
    draw_energy_bar,
)
from rmperiph.referee_ui import UIFrameBuilder


def _graphs(frame):
    body = frame[13:-2]
    return [GraphData.unpack(body[i : i + 15]) for i in range(0, len(body), 15)]


def test_determine_referee_id_red():
    rid = determine_referee_id(3)
    assert rid.robot_color == ROBOT_RED
    assert rid.robot_id == 3
    assert rid.client_id == 0x0100 + 3
    assert rid.receiver_robot_id == 0


def test_determine_referee_id_blue():
    rid = determine_referee_id(101)
    assert rid.robot_color == ROBOT_BLUE
    assert rid.client_id == 0x0100 + 101


def test_draw_cross_lines():
    lines = draw_cross(960, 460)
    assert len(lines) == 4
    assert lines[0].name == b"0ls"
    assert (lines[0].start_x, lines[0].end_x) == (960 - 15, 960 - 4)
    assert all(line.operate == GraphOperate.ADD for line in lines)
    assert all(line.color == GraphColor.GREEN for line in lines)
    assert all(line.layer == 9 for line in lines)


def test_energy_bar_first_draw_has_zero_length():
    bar = draw_energy_bar(960, 250, 15, 22.0, True)
    assert bar.operate == GraphOperate.ADD
    assert bar.start_x == bar.end_x == 960 - 200
    assert bar.start_y == bar.end_y == 250


@pytest.mark.parametrize(
    "voltage, color",
    [
        (22.0, GraphColor.GREEN),
        (20.0, GraphColor.YELLOW),
        (12.0, GraphColor.YELLOW),
        (10.0, GraphColor.PURPLISH_RED),
        (5.0, GraphColor.PURPLISH_RED),
    ],
)
def test_energy_bar_color(voltage, color):
    assert draw_energy_bar(960, 250, 15, voltage, False).color == color


def test_energy_bar_length_limits():
    low = draw_energy_bar(960, 250, 15, 5.0, False)
    high = draw_energy_bar(960, 250, 15, 30.0, False)
    assert low.end_x == low.start_x
    assert high.end_x - high.start_x == 400
    assert high.operate == GraphOperate.CHANGE


def test_energy_bar_length_grows_with_voltage():
    lengths = [
        draw_energy_bar(960, 250, 15, v, False).end_x - 760 for v in (8.0, 12.0, 16.0, 20.0)
    ]
    assert lengths == sorted(lengths)
    assert lengths[0] < lengths[-1]


def test_task_cycle_and_frames():
    sent = []
    rid = determine_referee_id(3)
    task = UITask(rid, UIFrameBuilder(), sent.append)

    assert task.run(20.0) is None
    assert sent == []

    first = task.run(20.0)
    assert sent == [first]
    assert verify_crc16(first)
    head = InteractiveHeader.unpack(first[7:13])
    assert head.data_cmd_id == InteractiveDataId.DRAW5
    assert head.receiver_id == rid.client_id
    graphs = _graphs(first)
    assert len(graphs) == 5
    assert graphs[4].operate == GraphOperate.ADD

    assert task.run(20.0) is None
    for _ in range(REFRESH_PERIOD):
        task.tick()
    second = task.run(20.0)
    assert len(sent) == 2
    graphs = _graphs(second)
    assert graphs[4].operate == GraphOperate.CHANGE
    assert graphs[4].end_x > graphs[4].start_x
    assert [g.name for g in graphs[:4]] == [b"0ls", b"1ls", b"2ls", b"3ls"]


def test_tick_stops_at_zero():
    task = UITask(determine_referee_id(1), UIFrameBuilder(), lambda frame: None)
    task.tick()
    assert task.count == 0