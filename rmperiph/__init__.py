"""Referee protocol, UI frames, CAN commands, IMU parsing, CRC, PID and filters for robot peripherals."""

__version__ = "0.1.0"
__all__ = [
    "can",
    "crc",
    "filters",
    "imu",
    "pid",
    "referee",
    "referee_protocol",
    "referee_task",
    "referee_ui",
]