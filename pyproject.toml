[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmperiph"
version = "0.1.0"
description = "Peripheral protocols for a competition robot: referee frames, UI drawing, CAN motor commands, IMU parsing, CRC, PID and filters"
requires-python = ">=3.10"
keywords = ["robotics", "can", "crc", "pid", "referee", "imu", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rmperiph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
