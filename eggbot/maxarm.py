"""Serial protocol for the MaxArm robot arm controller.

Every frame on the wire has the form::

    0xAA 0x55 | func | data_len | data | check

where ``check`` is the low byte of the complement of the sum of
``func``, ``data_len`` and ``data``. Multi-byte values are 16-bit
little-endian.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from time import sleep
from typing import Iterable, Sequence

import serial

logger = logging.getLogger(__name__)

HEADER = bytes((0xAA, 0x55))
DEFAULT_DEVICE = "/dev/ttyUSB0"
DEFAULT_BAUDRATE = 115200
DEFAULT_RETRIES = 10
DEFAULT_RETRY_DELAY = 0.1

READ_PAYLOAD_LENGTH = 6
RESPONSE_LENGTH = len(HEADER) + 2 + READ_PAYLOAD_LENGTH + 1


class FunctionCode(IntEnum):
    """Function codes understood by the arm controller."""

    SET_ANGLE = 0x01
    SET_XYZ = 0x03
    SET_PWM_SERVO = 0x05
    SET_SUCTION_NOZZLE = 0x07
    READ_ANGLE = 0x11
    READ_XYZ = 0x13
    SET_CLAW = 0x15
    READ_CLAW = 0x17


class ArmProtocolError(Exception):
    """Raised when the arm sends no reply or a reply that does not parse."""


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _u16le(value: int) -> bytes:
    return bytes((value & 0xFF, (value >> 8) & 0xFF))


def _s16le(low: int, high: int) -> int:
    return int.from_bytes(bytes((low, high)), "little", signed=True)


def checksum(data: Iterable[int]) -> int:
    """Return the frame check byte for ``data`` (func, length and payload)."""
    return ~sum(data) & 0xFF


def map_range(value: int, from_min: int, from_max: int, to_min: int, to_max: int) -> int:
    """Scale ``value`` linearly from one integer range to another, truncating."""
    return _trunc_div((value - from_min) * (to_max - to_min), from_max - from_min) + to_min


def build_packet(func: int, payload: bytes = b"") -> bytes:
    """Frame ``payload`` with header, function code, length and check byte."""
    payload = bytes(payload)
    if len(payload) > 0xFF:
        raise ValueError("payload longer than 255 bytes")
    body = bytes((int(func), len(payload))) + payload
    return HEADER + body + bytes((checksum(body),))


def _with_time(values: Sequence[int], time: int) -> bytes:
    return b"".join(_u16le(v) for v in values) + _u16le(time)


def encode_set_angles(angles: Sequence[int], time: int) -> bytes:
    """Frame a command moving the three joints to ``angles`` degrees."""
    if len(angles) != 3:
        raise ValueError("exactly three angles are required")
    mapped = [map_range(angle, 0, 180, 0, 1000) for angle in angles]
    return build_packet(FunctionCode.SET_ANGLE, _with_time(mapped, time))


def encode_set_xyz(pos: Sequence[int], time: int) -> bytes:
    """Frame a command moving the tool to cartesian position ``pos``."""
    if len(pos) != 3:
        raise ValueError("exactly three coordinates are required")
    return build_packet(FunctionCode.SET_XYZ, _with_time(pos, time))


def encode_set_pwm_servo(angle: int, time: int) -> bytes:
    """Frame a command setting the PWM servo; angles above 180 are clamped."""
    angle = min(angle, 180)
    pulse = map_range(angle, 0, 180, 500, 2500)
    return build_packet(FunctionCode.SET_PWM_SERVO, _with_time([pulse], time))


def encode_set_claw(pos: int, time: int) -> bytes:
    """Frame a command moving the claw to ``pos``."""
    return build_packet(FunctionCode.SET_CLAW, _with_time([pos], time))


def encode_read_request(func: int) -> bytes:
    """Frame a read request carrying no data."""
    return build_packet(func)


def parse_response(data: bytes, func: int) -> bytes:
    """Extract the six data bytes of the first ``func`` reply frame in ``data``.

    Raises :class:`ArmProtocolError` if no complete frame is found or its
    check byte is wrong.
    """
    func = int(func)
    step = 1
    remaining = 0
    body = bytearray()
    for byte in data:
        if step == 1:
            if byte == HEADER[0]:
                body.clear()
                step = 2
        elif step == 2:
            step = 3 if byte == HEADER[1] else 1
        elif step == 3:
            if byte == func:
                body.append(byte)
                step = 4
            else:
                step = 1
        elif step == 4:
            if byte == READ_PAYLOAD_LENGTH:
                body.append(byte)
                remaining = byte
                step = 5
            else:
                step = 1
        elif step == 5:
            body.append(byte)
            remaining -= 1
            if remaining == 0:
                step = 6
        else:
            if checksum(body) == byte:
                return bytes(body[2:2 + READ_PAYLOAD_LENGTH])
            raise ArmProtocolError("checksum mismatch in reply")
    raise ArmProtocolError("no complete reply frame found")


def _decode_triple(payload: bytes) -> tuple[int, int, int]:
    if len(payload) < READ_PAYLOAD_LENGTH:
        raise ValueError("payload must hold six bytes")
    return tuple(_s16le(payload[i], payload[i + 1]) for i in range(0, 6, 2))  # type: ignore[return-value]


def decode_angles(payload: bytes) -> tuple[int, int, int]:
    """Convert a read-angle payload to degrees."""
    return tuple(_trunc_div(raw * 9, 50) for raw in _decode_triple(payload))  # type: ignore[return-value]


def decode_xyz(payload: bytes) -> tuple[int, int, int]:
    """Convert a read-XYZ payload to signed coordinates."""
    return _decode_triple(payload)


def open_uart(device: str = DEFAULT_DEVICE, baudrate: int = DEFAULT_BAUDRATE) -> serial.Serial:
    """Open ``device`` as a non-blocking 8N1 serial port."""
    return serial.Serial(
        device,
        baudrate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        timeout=0,
    )


class MaxArm:
    """A connection to the arm over a serial port.

    ``port`` is either a device path or an already open object with
    ``write``, ``read`` and ``close`` methods.
    """

    def __init__(self, port=DEFAULT_DEVICE, retries: int = DEFAULT_RETRIES,
                 retry_delay: float = DEFAULT_RETRY_DELAY) -> None:
        self.port = open_uart(port) if isinstance(port, str) else port
        self.retries = retries
        self.retry_delay = retry_delay

    def _send(self, packet: bytes) -> None:
        logger.debug("Sending command: %s", packet.hex(" ").upper())
        self.port.write(packet)

    def set_angles(self, angles: Sequence[int], time: int) -> None:
        """Move the three joints to ``angles`` degrees over ``time`` ms."""
        self._send(encode_set_angles(angles, time))

    def set_xyz(self, pos: Sequence[int], time: int) -> None:
        """Move the tool to ``pos`` over ``time`` ms."""
        self._send(encode_set_xyz(pos, time))

    def set_pwm_servo(self, angle: int, time: int) -> None:
        """Turn the PWM servo to ``angle`` degrees over ``time`` ms."""
        self._send(encode_set_pwm_servo(angle, time))

    def set_claw(self, pos: int, time: int) -> None:
        """Move the claw to ``pos`` over ``time`` ms."""
        self._send(encode_set_claw(pos, time))

    def _request(self, func: FunctionCode) -> bytes:
        self._send(encode_read_request(func))
        sleep(self.retry_delay)
        response = self.port.read(RESPONSE_LENGTH)
        attempts = self.retries
        while not response and attempts > 0:
            logger.debug("No data received, retrying...")
            sleep(self.retry_delay)
            attempts -= 1
            response = self.port.read(RESPONSE_LENGTH)
        if not response:
            raise ArmProtocolError("no data received from arm")
        if len(response) != RESPONSE_LENGTH:
            raise ArmProtocolError(
                f"expected {RESPONSE_LENGTH} bytes, received {len(response)}")
        logger.debug("Received response: %s", bytes(response).hex(" ").upper())
        return parse_response(response, func)

    def read_angles(self) -> tuple[int, int, int]:
        """Query the three joint angles in degrees."""
        return decode_angles(self._request(FunctionCode.READ_ANGLE))

    def read_xyz(self) -> tuple[int, int, int]:
        """Query the tool position."""
        return decode_xyz(self._request(FunctionCode.READ_XYZ))

    def close(self) -> None:
        """Close the underlying port."""
        self.port.close()

    def __enter__(self) -> "MaxArm":
        return self

    def __exit__(self, *args) -> None:
        self.close()