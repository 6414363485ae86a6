# rmperiph

Pure-Python building blocks for a competition robot's peripherals: the
referee-system serial protocol, client UI drawing frames, CAN motor command
frames, WIT-protocol IMU packet parsing, the referee CRC8/CRC16 checksums,
a PID controller and a few signal filters.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Overview

| Module | What it provides |
| --- | --- |
| `rmperiph.crc` | `crc8`, `crc16`, `verify_crc8`, `verify_crc16`, `append_crc8`, `append_crc16` |
| `rmperiph.pid` | `PidController`, `PidState` |
| `rmperiph.filters` | `LowPassFilter`, `RateLimiter`, `MovingAverage`, `HybridFilter` |
| `rmperiph.imu` | `Gyro`, `parse_gyro_data` |
| `rmperiph.can` | `CanFrame`, `Bus`, `MotorId`, motor command builders, `YawTracker` |
| `rmperiph.referee_protocol` | protocol enums and packed record types (`FrameHeader`, `GraphData`, `StringData`, ...) |
| `rmperiph.referee` | `RefereeParser`, `RefereeInfo`, `RefereeId` |
| `rmperiph.referee_ui` | figure builders (`line_graph`, `char_graph`, ...) and `UIFrameBuilder` |
| `rmperiph.referee_task` | `UITask`, `determine_referee_id`, `draw_cross`, `draw_energy_bar` |

## Examples

Checksums on referee frames. `append_crc16` replaces the last two bytes of
the frame with the CRC16 of the bytes before them, low byte first:

```python
from rmperiph.crc import append_crc16, verify_crc16

frame = append_crc16(b"\xa5\x01\x02\x03\x04\x00\x00")
assert verify_crc16(frame)
```

A PID loop. Errors smaller than `err_dz` count as zero; the integral and the
output are clamped to `±i_err_limit` and `±output_limit`:

```python
from rmperiph.pid import PidController

pid = PidController()
pid.configure(kp=1.0, ki=0.1, kd=0.0, i_err_limit=100.0, err_dz=0.5, output_limit=16000.0)
output = pid.update(120.0)
```

Building CAN frames to hand to whatever bus driver you use:

```python
from rmperiph.can import Bus, motor_currents

frame = motor_currents(Bus.CAN1, 0x200, [1000, -1000, 500, 0])
print(frame.bus, hex(frame.std_id), frame.dlc, frame.data.hex())
```

Parsing IMU packets into a `Gyro`:

```python
from rmperiph.imu import Gyro, parse_gyro_data

gyro = parse_gyro_data(received_bytes, Gyro())
print(gyro.yaw, gyro.yaw_rate)
```

Parsing referee data from a serial stream. `feed` decodes every back-to-back
frame at the start of the buffer whose CRC8 and CRC16 check out and stores
each record in `parser.info`:

```python
from rmperiph.referee import RefereeParser

parser = RefereeParser()
parser.feed(received_bytes)
print(parser.info.game_robot_state)
```

Drawing on the operator's client:

```python
from rmperiph.referee_protocol import GraphColor, GraphOperate
from rmperiph.referee_task import determine_referee_id
from rmperiph.referee_ui import UIFrameBuilder, line_graph

referee_id = determine_referee_id(3)
builder = UIFrameBuilder(seq=0)
line = line_graph("ln0", GraphOperate.ADD, 9, GraphColor.GREEN, 3, 100, 100, 200, 200)
frame = builder.graph_refresh(referee_id, line)
```

`graph_refresh` accepts 1, 2, 5 or 7 figures and raises `ValueError`
otherwise. `delete` and `char_refresh` advance the builder's sequence
number; `graph_refresh` leaves it as it is.

The periodic UI task draws a crosshair and a supercapacitor energy bar.
Call `tick()` once per millisecond and `run()` from the main loop; it hands
each refresh frame to the `send` callable and returns it:

```python
from rmperiph.referee_task import UITask, determine_referee_id
from rmperiph.referee_ui import UIFrameBuilder

task = UITask(determine_referee_id(3), UIFrameBuilder(), send=serial_port.write)
task.run(cap_voltage=22.5)
```

## What it does not do

The package only builds and decodes bytes and keeps controller state. It
does not open serial ports or CAN interfaces, does not drive any hardware,
and has no command-line program: reading from and writing to the robot's
buses is left to the caller.