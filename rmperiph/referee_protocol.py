"""Frame layout, identifiers and payload records of the referee serial protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

REFEREE_SOF = 0xA5
ROBOT_RED = 0
ROBOT_BLUE = 1
COMMUNICATE_DATA_LEN = 5

FRAME_HEADER_OFFSET = 0
CMD_ID_OFFSET = 5
DATA_OFFSET = 7

LEN_HEADER = 5
LEN_CMDID = 2
LEN_TAIL = 2
LEN_CRC8 = 4

INTERACTIVE_DATA_LEN_HEAD = 6
UI_OPERATE_LEN_DEL = 2
UI_OPERATE_LEN_PER_DRAW = 15
UI_OPERATE_LEN_DRAW_CHAR = 15 + 30
SHOW_DATA_LEN = 30


class CmdId(IntEnum):
    GAME_STATE = 0x0001
    GAME_RESULT = 0x0002
    GAME_ROBOT_SURVIVORS = 0x0003
    EVENT_DATA = 0x0101
    SUPPLY_PROJECTILE_ACTION = 0x0102
    SUPPLY_PROJECTILE_BOOKING = 0x0103
    GAME_ROBOT_STATE = 0x0201
    POWER_HEAT_DATA = 0x0202
    GAME_ROBOT_POS = 0x0203
    BUFF_MUSK = 0x0204
    AERIAL_ROBOT_ENERGY = 0x0205
    ROBOT_HURT = 0x0206
    SHOOT_DATA = 0x0207
    STUDENT_INTERACTIVE = 0x0301


# Bytes copied from the data section of a received frame for each command.
DATA_LENGTHS: dict[CmdId, int] = {
    CmdId.GAME_STATE: 3,
    CmdId.GAME_RESULT: 1,
    CmdId.GAME_ROBOT_SURVIVORS: 2,
    CmdId.EVENT_DATA: 4,
    CmdId.SUPPLY_PROJECTILE_ACTION: 4,
    CmdId.GAME_ROBOT_STATE: 13,
    CmdId.POWER_HEAT_DATA: 16,
    CmdId.GAME_ROBOT_POS: 16,
    CmdId.BUFF_MUSK: 1,
    CmdId.AERIAL_ROBOT_ENERGY: 1,
    CmdId.ROBOT_HURT: 1,
    CmdId.SHOOT_DATA: 7,
    CmdId.STUDENT_INTERACTIVE: 6 + COMMUNICATE_DATA_LEN,
}


class RobotId(IntEnum):
    R_HERO = 1
    R_ENGINEER = 2
    R_STANDARD1 = 3
    R_STANDARD2 = 4
    R_STANDARD3 = 5
    R_AERIAL = 6
    R_SENTRY = 7
    R_RADAR = 9
    B_HERO = 101
    B_ENGINEER = 102
    B_STANDARD1 = 103
    B_STANDARD2 = 104
    B_STANDARD3 = 105
    B_AERIAL = 106
    B_SENTRY = 107
    B_RADAR = 109


class InteractiveDataId(IntEnum):
    DEL = 0x100
    DRAW1 = 0x101
    DRAW2 = 0x102
    DRAW5 = 0x103
    DRAW7 = 0x104
    DRAW_CHAR = 0x110
    COMMUNICATE = 0x0200


class DeleteOperate(IntEnum):
    NO_OPERATE = 0
    LAYER = 1
    ALL = 2


class GraphOperate(IntEnum):
    ADD = 1
    CHANGE = 2
    DEL = 3


class GraphType(IntEnum):
    LINE = 0
    RECTANGLE = 1
    CIRCLE = 2
    ELLIPSE = 3
    ARC = 4
    FLOAT = 5
    INT = 6
    CHAR = 7


class GraphColor(IntEnum):
    MAIN = 0
    YELLOW = 1
    GREEN = 2
    ORANGE = 3
    PURPLISH_RED = 4
    PINK = 5
    CYAN = 6
    BLACK = 7
    WHITE = 8


def _require(data: bytes, size: int, what: str) -> bytes:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")
    return bytes(data[:size])


@dataclass
class FrameHeader:
    sof: int = REFEREE_SOF
    data_length: int = 0
    seq: int = 0
    crc8: int = 0

    _FORMAT = struct.Struct("<BHBB")

    def pack(self) -> bytes:
        return self._FORMAT.pack(self.sof, self.data_length, self.seq & 0xFF, self.crc8)

    @classmethod
    def unpack(cls, data: bytes) -> FrameHeader:
        return cls(*cls._FORMAT.unpack(_require(data, LEN_HEADER, "frame header")))


@dataclass
class GameState:
    game_type: int = 0
    game_progress: int = 0
    stage_remain_time: int = 0

    SIZE = 3

    @classmethod
    def unpack(cls, data: bytes) -> GameState:
        bits, remain = struct.unpack("<BH", _require(data, cls.SIZE, "game state"))
        return cls(bits & 0x0F, bits >> 4, remain)


@dataclass
class GameResult:
    winner: int = 0

    SIZE = 1

    @classmethod
    def unpack(cls, data: bytes) -> GameResult:
        return cls(_require(data, cls.SIZE, "game result")[0])


@dataclass
class GameRobotHP:
    red_1_robot_hp: int = 0
    red_2_robot_hp: int = 0
    red_3_robot_hp: int = 0
    red_4_robot_hp: int = 0
    red_5_robot_hp: int = 0
    red_7_robot_hp: int = 0
    red_outpost_hp: int = 0
    red_base_hp: int = 0
    blue_1_robot_hp: int = 0
    blue_2_robot_hp: int = 0
    blue_3_robot_hp: int = 0
    blue_4_robot_hp: int = 0
    blue_5_robot_hp: int = 0
    blue_7_robot_hp: int = 0
    blue_outpost_hp: int = 0
    blue_base_hp: int = 0

    SIZE = 32

    @classmethod
    def unpack(cls, data: bytes) -> GameRobotHP:
        return cls(*struct.unpack("<16H", _require(data, cls.SIZE, "robot HP")))


@dataclass
class EventData:
    event_type: int = 0

    SIZE = 4

    @classmethod
    def unpack(cls, data: bytes) -> EventData:
        return cls(*struct.unpack("<I", _require(data, cls.SIZE, "event data")))


@dataclass
class SupplyProjectileAction:
    supply_projectile_id: int = 0
    supply_robot_id: int = 0
    supply_projectile_step: int = 0
    supply_projectile_num: int = 0

    SIZE = 4

    @classmethod
    def unpack(cls, data: bytes) -> SupplyProjectileAction:
        return cls(*_require(data, cls.SIZE, "supply action"))


@dataclass
class GameRobotState:
    robot_id: int = 0
    robot_level: int = 0
    current_hp: int = 0
    maximum_hp: int = 0
    shooter_barrel_cooling_value: int = 0
    shooter_barrel_heat_limit: int = 0
    chassis_power_limit: int = 0
    power_management_gimbal_output: int = 0
    power_management_chassis_output: int = 0
    power_management_shooter_output: int = 0
    reserved: int = 0

    SIZE = 13

    @classmethod
    def unpack(cls, data: bytes) -> GameRobotState:
        *fields, bits = struct.unpack(
            "<BBHHHHHB", _require(data, cls.SIZE, "robot state")
        )
        return cls(*fields, bits & 1, (bits >> 1) & 1, (bits >> 2) & 1, bits >> 3)


@dataclass
class PowerHeatData:
    chassis_volt: int = 0
    chassis_current: int = 0
    chassis_power: float = 0.0
    chassis_power_buffer: int = 0
    shooter_heat0_17mm: int = 0
    shooter_heat1_17mm: int = 0
    shooter_heat_42mm: int = 0

    SIZE = 16

    @classmethod
    def unpack(cls, data: bytes) -> PowerHeatData:
        return cls(*struct.unpack("<HHfHHHH", _require(data, cls.SIZE, "power heat")))


@dataclass
class GameRobotPos:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0

    SIZE = 16

    @classmethod
    def unpack(cls, data: bytes) -> GameRobotPos:
        return cls(*struct.unpack("<4f", _require(data, cls.SIZE, "robot position")))


@dataclass
class BuffMusk:
    power_rune_buff: int = 0

    SIZE = 1

    @classmethod
    def unpack(cls, data: bytes) -> BuffMusk:
        return cls(_require(data, cls.SIZE, "buff")[0])


@dataclass
class AerialRobotEnergy:
    attack_time: int = 0

    SIZE = 1

    @classmethod
    def unpack(cls, data: bytes) -> AerialRobotEnergy:
        return cls(_require(data, cls.SIZE, "aerial energy")[0])


@dataclass
class RobotHurt:
    armor_id: int = 0
    hurt_type: int = 0

    SIZE = 1

    @classmethod
    def unpack(cls, data: bytes) -> RobotHurt:
        bits = _require(data, cls.SIZE, "robot hurt")[0]
        return cls(bits & 0x0F, bits >> 4)


@dataclass
class ShootData:
    bullet_type: int = 0
    shooter_id: int = 0
    bullet_freq: int = 0
    bullet_speed: float = 0.0

    SIZE = 7

    @classmethod
    def unpack(cls, data: bytes) -> ShootData:
        return cls(*struct.unpack("<BBBf", _require(data, cls.SIZE, "shoot data")))


@dataclass
class InteractiveHeader:
    data_cmd_id: int = 0
    sender_id: int = 0
    receiver_id: int = 0

    SIZE = INTERACTIVE_DATA_LEN_HEAD

    def pack(self) -> bytes:
        return struct.pack("<HHH", self.data_cmd_id, self.sender_id, self.receiver_id)

    @classmethod
    def unpack(cls, data: bytes) -> InteractiveHeader:
        return cls(*struct.unpack("<HHH", _require(data, cls.SIZE, "interactive header")))


@dataclass
class ReceiveData:
    header: InteractiveHeader = field(default_factory=InteractiveHeader)
    data: bytes = bytes(COMMUNICATE_DATA_LEN)

    SIZE = INTERACTIVE_DATA_LEN_HEAD + COMMUNICATE_DATA_LEN

    @classmethod
    def unpack(cls, data: bytes) -> ReceiveData:
        raw = _require(data, cls.SIZE, "interactive data")
        return cls(
            InteractiveHeader.unpack(raw[:INTERACTIVE_DATA_LEN_HEAD]),
            raw[INTERACTIVE_DATA_LEN_HEAD:],
        )


_GRAPH_WORDS = (
    (
        ("operate", 3),
        ("graphic_type", 3),
        ("layer", 4),
        ("color", 4),
        ("start_angle", 9),
        ("end_angle", 9),
    ),
    (("width", 10), ("start_x", 11), ("start_y", 11)),
    (("radius", 10), ("end_x", 11), ("end_y", 11)),
)


@dataclass
class GraphData:
    """One figure of a UI drawing command; fields are cut to their bit widths on packing."""

    name: bytes = b"\x00\x00\x00"
    operate: int = 0
    graphic_type: int = 0
    layer: int = 0
    color: int = 0
    start_angle: int = 0
    end_angle: int = 0
    width: int = 0
    start_x: int = 0
    start_y: int = 0
    radius: int = 0
    end_x: int = 0
    end_y: int = 0

    SIZE = UI_OPERATE_LEN_PER_DRAW

    def pack(self) -> bytes:
        if len(self.name) > 3:
            raise ValueError("graphic name holds at most 3 bytes")
        words = []
        for layout in _GRAPH_WORDS:
            word = 0
            shift = 0
            for attr, bits in layout:
                word |= (int(getattr(self, attr)) & ((1 << bits) - 1)) << shift
                shift += bits
            words.append(word)
        return bytes(self.name).ljust(3, b"\x00") + struct.pack("<3I", *words)

    @classmethod
    def unpack(cls, data: bytes) -> GraphData:
        raw = _require(data, cls.SIZE, "graph data")
        values: dict[str, int] = {}
        for word, layout in zip(struct.unpack("<3I", raw[3:]), _GRAPH_WORDS):
            for attr, bits in layout:
                values[attr] = word & ((1 << bits) - 1)
                word >>= bits
        return cls(name=raw[:3], **values)


@dataclass
class StringData:
    """A character figure followed by up to 30 bytes of text."""

    graph: GraphData = field(default_factory=GraphData)
    show_data: bytes = b""

    SIZE = UI_OPERATE_LEN_DRAW_CHAR

    def pack(self) -> bytes:
        if len(self.show_data) > SHOW_DATA_LEN:
            raise ValueError(f"text holds at most {SHOW_DATA_LEN} bytes")
        return self.graph.pack() + bytes(self.show_data).ljust(SHOW_DATA_LEN, b"\x00")