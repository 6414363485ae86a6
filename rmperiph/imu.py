"""Parser for the attitude packets of a WIT-protocol gyroscope."""

from __future__ import annotations

import struct
from dataclasses import dataclass

WIT_HEADER = 0x55
WIT_ANG_RATE = 0x52
WIT_ANGLE = 0x53
PACKET_SIZE = 11

_RATE_SCALE = 2000.0 / 32768.0
_ANGLE_SCALE = 180.0 / 32768.0


@dataclass
class Gyro:
    """Attitude in degrees and angular rates in degrees per second."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    roll_rate: float = 0.0
    pitch_rate: float = 0.0
    yaw_rate: float = 0.0


def parse_gyro_data(data: bytes, gyro: Gyro) -> Gyro:
    """Scan ``data`` for valid packets, update ``gyro`` in place and return it."""
    if len(data) < PACKET_SIZE:
        return gyro
    last_start = len(data) - PACKET_SIZE
    i = 0
    while i <= last_start:
        if data[i] != WIT_HEADER or sum(data[i : i + 10]) & 0xFF != data[i + 10]:
            i += 1
            continue
        x, y, z = struct.unpack_from("<hhh", data, i + 2)
        kind = data[i + 1]
        if kind == WIT_ANG_RATE:
            gyro.roll_rate = x * _RATE_SCALE
            gyro.pitch_rate = y * _RATE_SCALE
            gyro.yaw_rate = z * _RATE_SCALE
        elif kind == WIT_ANGLE:
            gyro.roll = x * _ANGLE_SCALE
            gyro.pitch = y * _ANGLE_SCALE
            gyro.yaw = z * _ANGLE_SCALE
        i += PACKET_SIZE
    return gyro