# eggbot

eggbot is a small library with these parts:

- `eggbot.maxarm` drives a MaxArm robot arm over a serial link.
- `eggbot.fifo` provides a bounded, thread-safe FIFO.
- `eggbot.bitfields` describes hardware registers as packed bit fields.
- `eggbot.mpu6050` holds the register map of the MPU-6050 motion sensor.
- `eggbot.ak8963` holds the register map of the AK8963 magnetometer.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Driving the arm

```python
from eggbot.maxarm import MaxArm

with MaxArm("/dev/ttyUSB0", retries=10, retry_delay=0.1) as arm:
    arm.set_angles([90, 90, 90], 1000)
    arm.set_claw(500, 500)
    print(arm.read_xyz())
```

`MaxArm` accepts either a device path or an object that is already open. If you pass a path, it opens the port with `open_uart` as a non-blocking 8N1 port at 115200 baud. If you pass an object, it must have `write`, `read` and `close` methods.

Methods that send commands:

- `set_angles(angles, time)`: takes three joint angles in degrees. Each angle from 0–180 is scaled to 0–1000 before sending.
- `set_xyz(pos, time)`: takes three coordinates.
- `set_pwm_servo(angle, time)`: clamps angles above 180, then scales the angle to a pulse width between 500 and 2500.
- `set_claw(pos, time)`: moves the claw to `pos`.

Methods that read from the arm:

- `read_angles()` sends a request and returns three values in degrees.
- `read_xyz()` sends a request and returns three signed coordinates.

If no data arrives, a read method retries up to `retries` times and waits `retry_delay` seconds between attempts. It raises `ArmProtocolError` in three cases:

- no reply arrives;
- the reply has the wrong length;
- the reply does not parse or its checksum does not match.

Every packet that is sent or received is logged at debug level.

### Packets without hardware

The packet helpers work on plain bytes, so you can use them without an arm attached:

- `build_packet`
- `encode_set_angles`
- `encode_set_xyz`
- `encode_set_pwm_servo`
- `encode_set_claw`
- `encode_read_request`
- `parse_response`
- `decode_angles`
- `decode_xyz`
- `checksum`
- `map_range`

`FunctionCode` lists the function codes.

Every packet has this layout:

```
0xAA 0x55 | function | length | data | checksum
```

Multi-byte values are 16-bit little-endian. The checksum is the low byte of the complement of the sum of the function, length and data bytes.

## FIFO

`Fifo(length)` holds at most `length - 1` items, because one slot is always kept free.

- `put` raises `OverflowError` when the FIFO is full.
- `get` raises `IndexError` when it is empty.
- `empty()`, `full()`, `len()` and `free()` report how full it is.

## Register layouts

`RegisterLayout` is a sequence of `Field`s packed from the least significant bit up.

- `decode(value)` splits a raw value into a dict of fields.
- `encode(**fields)` packs field values into a raw value. Fields you leave out are 0.
- `width()` returns the total number of bits.

`eggbot.mpu6050` and `eggbot.ak8963` each provide:

- a `Register` enum;
- `decode(register, value)`;
- `encode(register, **fields)`.

A register can be given as the enum member, as its address, or as its name. `eggbot.mpu6050` also builds bus transactions:

```python
from eggbot import mpu6050

mpu6050.command_byte(mpu6050.Register.WHO_AM_I, read=True)   # 0xF5
mpu6050.decode("PWR_MGMT_1", 0x40)["SLEEP"]                   # 1
mpu6050.transaction("PWR_MGMT_1", read=False, data=0x00)      # b'\x6b\x00'
```

## What this package does not do

- It does not capture, process or display camera images, and it does not detect objects in them.
- It has no command-line program. It is used as a library only.
- Apart from the MaxArm serial link, it does not talk to hardware. The sensor modules only encode and decode register values; reading them from a bus is left to the caller.