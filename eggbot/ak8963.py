"""Register map of the AK8963 magnetometer inside the MPU-9250.

Every register is eight bits wide. Its fields are packed from the least
significant bit up. A register whose fields cover fewer than eight bits
ignores the uncovered high bits when it is decoded.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from eggbot.bitfields import Field, RegisterLayout

I2C_ADDRESS = 0x0C
REGISTER_BITS = 8


class Register(IntEnum):
    """Addresses of the AK8963 registers."""

    WIA = 0x00
    INFO = 0x01
    ST1 = 0x02
    HXL = 0x03
    HXH = 0x04
    HYL = 0x05
    HYH = 0x06
    HZL = 0x07
    HZH = 0x08
    ST2 = 0x09
    CNTL1 = 0x0A
    CNTL2 = 0x0B
    ASTC = 0x0C
    TS1 = 0x0D
    TS2 = 0x0E
    I2CDIS = 0x0F
    ASAX = 0x10
    ASAY = 0x11
    ASAZ = 0x12


RegisterRef = Union[Register, int, str]


def _fields(*spec: tuple[str, int]) -> tuple[Field, ...]:
    return tuple(Field(name, width) for name, width in spec)


def _byte(name: str) -> tuple[Field, ...]:
    return _fields((name, 8))


def _build_layouts() -> dict[Register, RegisterLayout]:
    spec: dict[str, tuple[Field, ...]] = {
        "WIA": _byte("WIA"),
        "INFO": _byte("INFO"),
        "ST1": _fields(("DRDY", 1), ("reserved", 7)),
        "ST2": _fields(("reserved0", 3), ("HOFL", 1), ("BITM", 1), ("reserved1", 3)),
        "CNTL1": _fields(("MODE", 3), ("BIT", 1), ("reserved", 3)),
        "CNTL2": _fields(("SRST", 1), ("reserved", 7)),
        "ASTC": _fields(("reserved0", 6), ("SELF", 1), ("reserved1", 1)),
        "TS1": _byte("TS1"),
        "TS2": _byte("TS2"),
        "I2CDIS": _byte("I2CDIS"),
    }
    for axis in "XYZ":
        for half in "LH":
            name = f"H{axis}{half}"
            spec[name] = _byte(name)
        spec[f"ASA{axis}"] = _byte(f"COEF{axis}")
    return {Register[name]: RegisterLayout(name, fields) for name, fields in spec.items()}


LAYOUTS: dict[Register, RegisterLayout] = _build_layouts()


def _resolve(register: RegisterRef) -> Register:
    if isinstance(register, str):
        try:
            return Register[register]
        except KeyError:
            raise KeyError(f"unknown AK8963 register {register!r}") from None
    try:
        return Register(register)
    except ValueError:
        raise ValueError(f"unknown AK8963 register address {register!r}") from None


def decode(register: RegisterRef, value: int) -> dict[str, int]:
    """Split a raw byte read from ``register`` into its named fields."""
    layout = LAYOUTS[_resolve(register)]
    if not 0 <= value < 1 << REGISTER_BITS:
        raise ValueError(f"value {value!r} does not fit in one byte")
    return layout.decode(value & ((1 << layout.width()) - 1))


def encode(register: RegisterRef, **kwargs: int) -> int:
    """Pack named field values into a raw byte for ``register``."""
    return LAYOUTS[_resolve(register)].encode(**kwargs)