"""CAN frames for the chassis, gimbal and shooter motors, and yaw unwrapping."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum


class Bus(Enum):
    """The two CAN buses of the board."""

    CAN1 = 1
    CAN2 = 2


class MotorId(IntEnum):
    """Standard identifiers of the feedback frames the board listens for."""

    CHASSIS_1 = 0x201  # front left
    CHASSIS_2 = 0x202  # front right
    CHASSIS_3 = 0x203  # rear left
    CHASSIS_4 = 0x204  # rear right
    YAW = 0x209
    SUPERCAP = 0x211
    FEEDER = 0x205
    FRICTION_LEFT = 0x206
    FRICTION_RIGHT = 0x207


@dataclass(frozen=True)
class CanFrame:
    """A standard-identifier data frame addressed to one bus."""

    bus: Bus
    std_id: int
    data: bytes

    @property
    def dlc(self) -> int:
        return len(self.data)


YAW_CURRENT_ID = 0x2FF
ROBOT_STATUS_ID = 0x300
POWER_LIMIT_ID = 0x210
DM_MOTOR_ID = 0x10C
MG_MOTOR_ID = 0x141

_DM_ENABLE = 0xFC
_DM_DISABLE = 0xFD
_DM_CLEAR_ERROR = 0xFB

_MG_POSITION = 0xA4
_MG_SHUTDOWN = 0x80
_MG_STOP = 0x81
_MG_RUN = 0x88


def _check_range(value: int, low: int, high: int, name: str) -> int:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")
    return value


def _int16(value: int, name: str) -> int:
    return _check_range(value, -0x8000, 0x7FFF, name)


def _uint16(value: int, name: str) -> int:
    return _check_range(value, 0, 0xFFFF, name)


def yaw_motor_current(current: int) -> CanFrame:
    """Current command for the yaw motor, big-endian."""
    return CanFrame(Bus.CAN2, YAW_CURRENT_ID, struct.pack(">h", _int16(current, "current")))


def robot_status(robot_level: int, heat_energy: int) -> CanFrame:
    """Robot level and barrel heat forwarded to the other board."""
    _check_range(robot_level, 0, 0xFF, "robot_level")
    return CanFrame(
        Bus.CAN2,
        ROBOT_STATUS_ID,
        struct.pack(">BH", robot_level, _uint16(heat_energy, "heat_energy")),
    )


def motor_currents(bus: Bus, can_id: int, currents: Sequence[int]) -> CanFrame:
    """Four big-endian current commands in one eight-byte frame."""
    if len(currents) != 4:
        raise ValueError(f"exactly 4 currents are needed, got {len(currents)}")
    values = [_int16(current, "current") for current in currents]
    return CanFrame(bus, can_id, struct.pack(">4h", *values))


def power_limit(power: int) -> CanFrame:
    """Power limit for the supercapacitor controller, big-endian."""
    return CanFrame(Bus.CAN1, POWER_LIMIT_ID, struct.pack(">H", _uint16(power, "power")))


def dm_motor_command(p_des: float, v_des: float) -> CanFrame:
    """Position and velocity set-points as little-endian single floats."""
    return CanFrame(Bus.CAN2, DM_MOTOR_ID, struct.pack("<ff", p_des, v_des))


def _dm_special(code: int) -> CanFrame:
    return CanFrame(Bus.CAN2, DM_MOTOR_ID, bytes([0xFF] * 7 + [code]))


def dm_motor_enable() -> CanFrame:
    return _dm_special(_DM_ENABLE)


def dm_motor_disable() -> CanFrame:
    return _dm_special(_DM_DISABLE)


def dm_motor_clear_error() -> CanFrame:
    return _dm_special(_DM_CLEAR_ERROR)


def mg_multiturn_position(angle_control: int, max_speed: int) -> CanFrame:
    """Multi-turn position command with a speed limit, little-endian."""
    _check_range(angle_control, -0x80000000, 0x7FFFFFFF, "angle_control")
    _int16(max_speed, "max_speed")
    return CanFrame(
        Bus.CAN2,
        MG_MOTOR_ID,
        struct.pack("<BBhi", _MG_POSITION, 0, max_speed, angle_control),
    )


def _mg_command(code: int) -> CanFrame:
    return CanFrame(Bus.CAN2, MG_MOTOR_ID, bytes([code] + [0] * 7))


def mg_motor_shutdown() -> CanFrame:
    return _mg_command(_MG_SHUTDOWN)


def mg_motor_stop() -> CanFrame:
    return _mg_command(_MG_STOP)


def mg_motor_run() -> CanFrame:
    return _mg_command(_MG_RUN)


class YawTracker:
    """Unwrap a yaw reading and report its offset from the nearest reference."""

    def __init__(self) -> None:
        self.previous_yaw = 0.0
        self.rotation_count = 0
        self.absolute_angle = 0.0

    def update(self, current_yaw: float, yaw_mode: int) -> float:
        """Mode 1: references every 180°, mode 2: every 90°, otherwise only 0°."""
        if current_yaw - self.previous_yaw > 180:
            self.rotation_count -= 1
        elif current_yaw - self.previous_yaw < -180:
            self.rotation_count += 1

        self.absolute_angle = self.rotation_count * 360.0 + current_yaw
        self.previous_yaw = current_yaw

        if yaw_mode == 1:
            return self._offset(180.0)
        if yaw_mode == 2:
            return self._offset(90.0)
        return self.absolute_angle

    def _offset(self, step: float) -> float:
        base_point = int(self.absolute_angle / step) * step
        offset = self.absolute_angle - base_point
        half = step / 2
        if offset > half:
            offset -= step
        elif offset < -half:
            offset += step
        return offset