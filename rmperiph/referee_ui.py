"""Figures and frames for drawing on the referee client's user interface."""

from __future__ import annotations

from .crc import append_crc16, crc8
from .referee import RefereeId
from .referee_protocol import (
    LEN_CRC8,
    LEN_TAIL,
    REFEREE_SOF,
    SHOW_DATA_LEN,
    CmdId,
    FrameHeader,
    GraphData,
    GraphType,
    InteractiveDataId,
    InteractiveHeader,
    StringData,
)

_DRAW_IDS = {
    1: InteractiveDataId.DRAW1,
    2: InteractiveDataId.DRAW2,
    5: InteractiveDataId.DRAW5,
    7: InteractiveDataId.DRAW7,
}


def _encode_name(name: str | bytes) -> bytes:
    """Store up to three name characters in reverse order, as the client expects."""
    raw = name.encode() if isinstance(name, str) else bytes(name)
    raw = raw.split(b"\x00", 1)[0][:3]
    return raw[::-1].rjust(3, b"\x00")


def _graph(name: str | bytes, graphic_type: GraphType, **values: int) -> GraphData:
    return GraphData(name=_encode_name(name), graphic_type=int(graphic_type), **values)


def _split_number(value: int) -> dict[str, int]:
    return {
        "radius": value & 0x3FF,
        "end_x": (value >> 10) & 0x7FF,
        "end_y": (value >> 21) & 0x7FF,
    }


def line_graph(name, operate, layer, color, width, start_x, start_y, end_x, end_y) -> GraphData:
    """A straight line from the start point to the end point."""
    return _graph(
        name, GraphType.LINE, operate=operate, layer=layer, color=color,
        start_angle=0, end_angle=0, width=width, start_x=start_x, start_y=start_y,
        radius=0, end_x=end_x, end_y=end_y,
    )


def rectangle_graph(name, operate, layer, color, width, start_x, start_y, end_x, end_y) -> GraphData:
    """A rectangle given by two opposite corners."""
    return _graph(
        name, GraphType.RECTANGLE, operate=operate, layer=layer, color=color,
        start_angle=0, end_angle=0, width=width, start_x=start_x, start_y=start_y,
        radius=0, end_x=end_x, end_y=end_y,
    )


def circle_graph(name, operate, layer, color, width, start_x, start_y, radius) -> GraphData:
    """A full circle around the start point."""
    return _graph(
        name, GraphType.CIRCLE, operate=operate, layer=layer, color=color,
        start_angle=0, end_angle=0, width=width, start_x=start_x, start_y=start_y,
        radius=radius, end_x=0, end_y=0,
    )


def oval_graph(name, operate, layer, color, width, start_x, start_y, end_x, end_y) -> GraphData:
    """An ellipse around the start point; end_x and end_y are its half axes."""
    return _graph(
        name, GraphType.ELLIPSE, operate=operate, layer=layer, color=color,
        start_angle=0, end_angle=0, width=width, start_x=start_x, start_y=start_y,
        radius=0, end_x=end_x, end_y=end_y,
    )


def arc_graph(
    name, operate, layer, color, start_angle, end_angle, width, start_x, start_y, end_x, end_y
) -> GraphData:
    """An elliptic arc between two angles around the start point."""
    return _graph(
        name, GraphType.ARC, operate=operate, layer=layer, color=color,
        start_angle=start_angle, end_angle=end_angle, width=width,
        start_x=start_x, start_y=start_y, radius=0, end_x=end_x, end_y=end_y,
    )


def float_graph(name, operate, layer, color, size, digit, width, start_x, start_y, value) -> GraphData:
    """A number shown with ``digit`` decimals; ``value`` is the number times 1000."""
    return _graph(
        name, GraphType.FLOAT, operate=operate, layer=layer, color=color,
        start_angle=size, end_angle=digit, width=width, start_x=start_x,
        start_y=start_y, **_split_number(int(value)),
    )


def int_graph(name, operate, layer, color, size, width, start_x, start_y, value) -> GraphData:
    """A 32-bit integer shown at the start point."""
    return _graph(
        name, GraphType.INT, operate=operate, layer=layer, color=color,
        start_angle=size, end_angle=0, width=width, start_x=start_x,
        start_y=start_y, **_split_number(int(value)),
    )


def char_graph(name, operate, layer, color, size, width, start_x, start_y, text) -> StringData:
    """A text figure of at most 30 bytes."""
    raw = text.encode() if isinstance(text, str) else bytes(text)
    if len(raw) > SHOW_DATA_LEN:
        raise ValueError(f"text holds at most {SHOW_DATA_LEN} bytes, got {len(raw)}")
    graph = _graph(
        name, GraphType.CHAR, operate=operate, layer=layer, color=color,
        start_angle=size, end_angle=len(raw), width=width, start_x=start_x,
        start_y=start_y, radius=0, end_x=0, end_y=0,
    )
    return StringData(graph=graph, show_data=raw)


class UIFrameBuilder:
    """Build complete UI frames, keeping the packet sequence number."""

    def __init__(self, seq: int = 0) -> None:
        self.seq = seq & 0xFF

    def _frame(self, referee_id: RefereeId, data_cmd_id: int, body: bytes) -> bytes:
        head = InteractiveHeader(data_cmd_id, referee_id.robot_id, referee_id.client_id)
        data = head.pack() + body
        header = FrameHeader(sof=REFEREE_SOF, data_length=len(data), seq=self.seq)
        header.crc8 = crc8(header.pack()[:LEN_CRC8])
        cmd = int(CmdId.STUDENT_INTERACTIVE).to_bytes(2, "little")
        return append_crc16(header.pack() + cmd + data + bytes(LEN_TAIL))

    def _advance(self) -> None:
        self.seq = (self.seq + 1) & 0xFF

    def delete(self, referee_id: RefereeId, operate: int, layer: int) -> bytes:
        """Frame that deletes one layer or everything; advances the sequence."""
        frame = self._frame(referee_id, InteractiveDataId.DEL, bytes([operate, layer]))
        self._advance()
        return frame

    def graph_refresh(self, referee_id: RefereeId, *args: GraphData) -> bytes:
        """Frame that pushes 1, 2, 5 or 7 figures; the sequence is left as it is."""
        try:
            data_cmd_id = _DRAW_IDS[len(args)]
        except KeyError:
            raise ValueError(f"1, 2, 5 or 7 figures can be sent, got {len(args)}") from None
        body = b"".join(graph.pack() for graph in args)
        return self._frame(referee_id, data_cmd_id, body)

    def char_refresh(self, referee_id: RefereeId, string_data: StringData) -> bytes:
        """Frame that pushes one text figure; advances the sequence."""
        frame = self._frame(referee_id, InteractiveDataId.DRAW_CHAR, string_data.pack())
        self._advance()
        return frame