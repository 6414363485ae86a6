"""Periodic UI task: a crosshair and a supercapacitor energy bar on the referee client."""

from __future__ import annotations

from collections.abc import Callable

from .referee import RefereeId
from .referee_protocol import ROBOT_BLUE, ROBOT_RED, GraphColor, GraphData, GraphOperate
from .referee_ui import UIFrameBuilder, line_graph

CLIENT_ID_BASE = 0x0100
UI_LAYER = 9
REFRESH_PERIOD = 500

CROSS_CENTER = (960, 460)
CROSS_WIDTH = 3
ENERGY_BAR_CENTER_X = 960
ENERGY_BAR_Y = 250
ENERGY_BAR_WIDTH = 15
ENERGY_BAR_LENGTH = 400

_MIN_VOLTAGE = 7.0
_MAX_VOLTAGE = 24.0


def determine_referee_id(robot_id: int) -> RefereeId:
    """Work out the colour and the client to draw on from the robot identifier."""
    return RefereeId(
        robot_color=ROBOT_BLUE if robot_id > 7 else ROBOT_RED,
        robot_id=robot_id,
        client_id=CLIENT_ID_BASE + robot_id,
        receiver_robot_id=0,
    )


def draw_cross(center_x: int, center_y: int) -> list[GraphData]:
    """Four short lines forming a crosshair with a gap around the centre."""
    segments = [
        ("sl0", center_x - 15, center_y, center_x - 4, center_y),
        ("sl1", center_x + 4, center_y, center_x + 15, center_y),
        ("sl2", center_x, center_y - 15, center_x, center_y - 4),
        ("sl3", center_x, center_y + 4, center_x, center_y + 15),
    ]
    return [
        line_graph(name, GraphOperate.ADD, UI_LAYER, GraphColor.GREEN, CROSS_WIDTH, x0, y0, x1, y1)
        for name, x0, y0, x1, y1 in segments
    ]


def _bar_color(voltage: float) -> GraphColor:
    if voltage > 20.0:
        return GraphColor.GREEN
    if voltage >= 12.0:
        return GraphColor.YELLOW
    return GraphColor.PURPLISH_RED


def draw_energy_bar(
    center_x: int, start_y: int, width: int, voltage: float, first_draw: bool
) -> GraphData:
    """Horizontal bar whose length follows the voltage between 7 V and 24 V."""
    normalized = max(0.0, voltage - _MIN_VOLTAGE)
    scale = ENERGY_BAR_LENGTH / (_MAX_VOLTAGE - _MIN_VOLTAGE)
    length = min(int(normalized * scale), ENERGY_BAR_LENGTH)
    start_x = center_x - ENERGY_BAR_LENGTH // 2
    color = _bar_color(voltage)
    if first_draw:
        return line_graph(
            "sl4", GraphOperate.ADD, UI_LAYER, color, width, start_x, start_y, start_x, start_y
        )
    return line_graph(
        "sl4", GraphOperate.CHANGE, UI_LAYER, color, width,
        start_x, start_y, start_x + length, start_y,
    )


class UITask:
    """Push the crosshair and the energy bar every ``REFRESH_PERIOD`` ticks."""

    def __init__(
        self,
        referee_id: RefereeId,
        builder: UIFrameBuilder,
        send: Callable[[bytes], object],
    ) -> None:
        self.referee_id = referee_id
        self.builder = builder
        self.send = send
        self.flag = 0
        self.count = 0
        self.first_draw = True
        self.cross: list[GraphData] = []

    def tick(self) -> None:
        """Count one millisecond down towards the next refresh."""
        if self.count > 0:
            self.count -= 1

    def run(self, cap_voltage: float) -> bytes | None:
        """Send a refresh frame when one is due; return the frame that was sent."""
        if self.count > 0:
            return None
        if self.flag == 0:
            self.flag = 1
            return None
        frame = self._refresh(cap_voltage)
        self.count = REFRESH_PERIOD
        return frame

    def _refresh(self, cap_voltage: float) -> bytes:
        if self.first_draw:
            self.cross = draw_cross(*CROSS_CENTER)
        bar = draw_energy_bar(
            ENERGY_BAR_CENTER_X, ENERGY_BAR_Y, ENERGY_BAR_WIDTH, cap_voltage, self.first_draw
        )
        frame = self.builder.graph_refresh(self.referee_id, *self.cross, bar)
        self.send(frame)
        self.first_draw = False
        return frame