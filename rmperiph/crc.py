"""Table-driven CRC8 and CRC16 checksums used by the referee serial protocol."""

from __future__ import annotations

CRC8_INIT = 0xFF
CRC16_INIT = 0xFFFF

_CRC8_POLY = 0x8C  # reflected form of x^8 + x^5 + x^4 + 1
_CRC16_POLY = 0x8408  # reflected form of x^16 + x^12 + x^5 + 1


def _reflected_table(poly: int) -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC8_TABLE = _reflected_table(_CRC8_POLY)
_CRC16_TABLE = _reflected_table(_CRC16_POLY)


def crc8(data: bytes, init: int = CRC8_INIT) -> int:
    """Return the CRC8 of ``data`` starting from ``init``."""
    crc = init & 0xFF
    for byte in data:
        crc = _CRC8_TABLE[crc ^ byte]
    return crc


def verify_crc8(frame: bytes) -> bool:
    """Check that the last byte of ``frame`` is the CRC8 of the bytes before it."""
    if len(frame) <= 2:
        return False
    return crc8(frame[:-1]) == frame[-1]


def append_crc8(frame: bytes) -> bytes:
    """Return ``frame`` with its last byte replaced by the CRC8 of the rest."""
    if len(frame) <= 2:
        raise ValueError("frame too short to carry a CRC8")
    return bytes(frame[:-1]) + bytes([crc8(frame[:-1])])


def crc16(data: bytes, init: int = CRC16_INIT) -> int:
    """Return the CRC16 of ``data`` starting from ``init``."""
    crc = init & 0xFFFF
    for byte in data:
        crc = (crc >> 8) ^ _CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


def verify_crc16(frame: bytes) -> bool:
    """Check that the last two bytes of ``frame`` are its CRC16, low byte first."""
    if len(frame) <= 2:
        return False
    return bytes(frame[-2:]) == crc16(frame[:-2]).to_bytes(2, "little")


def append_crc16(frame: bytes) -> bytes:
    """Return ``frame`` with its last two bytes replaced by the CRC16 of the rest."""
    if len(frame) <= 2:
        raise ValueError("frame too short to carry a CRC16")
    return bytes(frame[:-2]) + crc16(frame[:-2]).to_bytes(2, "little")