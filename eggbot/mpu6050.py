"""Register map and bus transactions of the MPU-6050 motion sensor.

A transaction is two bytes: a command byte holding the 7-bit register
address with the read/write flag in its top bit (1 = read), followed by
one data byte. Every register is eight bits wide; its fields are packed
from the least significant bit up.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from eggbot.bitfields import Field, RegisterLayout

I2C_ADDRESS = 0x68
READ_FLAG = 0x80
ADDRESS_MASK = 0x7F


class Register(IntEnum):
    """Addresses of the MPU-6050 registers."""

    SELF_TEST_X = 0x0D
    SELF_TEST_Y = 0x0E
    SELF_TEST_Z = 0x0F
    SELF_TEST_A = 0x10
    SMPLRT_DIV = 0x19
    CONFIG = 0x1A
    GYRO_CONFIG = 0x1B
    ACCEL_CONFIG = 0x1C
    FIFO_EN = 0x23
    I2C_MST_CTRL = 0x24
    I2C_SLV0_ADDR = 0x25
    I2C_SLV0_REG = 0x26
    I2C_SLV0_CTRL = 0x27
    I2C_SLV1_ADDR = 0x28
    I2C_SLV1_REG = 0x29
    I2C_SLV1_CTRL = 0x2A
    I2C_SLV2_ADDR = 0x2B
    I2C_SLV2_REG = 0x2C
    I2C_SLV2_CTRL = 0x2D
    I2C_SLV3_ADDR = 0x2E
    I2C_SLV3_REG = 0x2F
    I2C_SLV3_CTRL = 0x30
    I2C_SLV4_ADDR = 0x31
    I2C_SLV4_REG = 0x32
    I2C_SLV4_DO = 0x33
    I2C_SLV4_CTRL = 0x34
    I2C_SLV4_DI = 0x35
    I2C_MST_STATUS = 0x36
    INT_PIN_CFG = 0x37
    INT_ENABLE = 0x38
    INT_STATUS = 0x3A
    ACCEL_XOUT_H = 0x3B
    ACCEL_XOUT_L = 0x3C
    ACCEL_YOUT_H = 0x3D
    ACCEL_YOUT_L = 0x3E
    ACCEL_ZOUT_H = 0x3F
    ACCEL_ZOUT_L = 0x40
    TEMP_OUT_H = 0x41
    TEMP_OUT_L = 0x42
    GYRO_XOUT_H = 0x43
    GYRO_XOUT_L = 0x44
    GYRO_YOUT_H = 0x45
    GYRO_YOUT_L = 0x46
    GYRO_ZOUT_H = 0x47
    GYRO_ZOUT_L = 0x48
    EXT_SENS_DATA_00 = 0x49
    EXT_SENS_DATA_01 = 0x4A
    EXT_SENS_DATA_02 = 0x4B
    EXT_SENS_DATA_03 = 0x4C
    EXT_SENS_DATA_04 = 0x4D
    EXT_SENS_DATA_05 = 0x4E
    EXT_SENS_DATA_06 = 0x4F
    EXT_SENS_DATA_07 = 0x50
    EXT_SENS_DATA_08 = 0x51
    EXT_SENS_DATA_09 = 0x52
    EXT_SENS_DATA_10 = 0x53
    EXT_SENS_DATA_11 = 0x54
    EXT_SENS_DATA_12 = 0x55
    EXT_SENS_DATA_13 = 0x56
    EXT_SENS_DATA_14 = 0x57
    EXT_SENS_DATA_15 = 0x58
    EXT_SENS_DATA_16 = 0x59
    EXT_SENS_DATA_17 = 0x5A
    EXT_SENS_DATA_18 = 0x5B
    EXT_SENS_DATA_19 = 0x5C
    EXT_SENS_DATA_20 = 0x5D
    EXT_SENS_DATA_21 = 0x5E
    EXT_SENS_DATA_22 = 0x5F
    EXT_SENS_DATA_23 = 0x60
    I2C_SLV0_DO = 0x63
    I2C_SLV1_DO = 0x64
    I2C_SLV2_DO = 0x65
    I2C_SLV3_DO = 0x66
    I2C_MST_DELAY_CTRL = 0x67
    SIGNAL_PATH_RESET = 0x68
    USER_CTRL = 0x6A
    PWR_MGMT_1 = 0x6B
    PWR_MGMT_2 = 0x6C
    FIFO_COUNTH = 0x72
    FIFO_COUNTL = 0x73
    FIFO_R_W = 0x74
    WHO_AM_I = 0x75


RegisterRef = Union[Register, int, str]


def _fields(*spec: tuple[str, int]) -> tuple[Field, ...]:
    return tuple(Field(name, width) for name, width in spec)


def _byte(name: str) -> tuple[Field, ...]:
    return _fields((name, 8))


def _build_layouts() -> dict[Register, RegisterLayout]:
    spec: dict[str, tuple[Field, ...]] = {
        "SELF_TEST_X": _fields(("XG_TEST", 5), ("XA_TEST", 3)),
        "SELF_TEST_Y": _fields(("YG_TEST", 5), ("YA_TEST", 3)),
        "SELF_TEST_Z": _fields(("ZG_TEST", 5), ("ZA_TEST", 3)),
        "SELF_TEST_A": _fields(("ZA_TEST", 2), ("YA_TEST", 2), ("XA_TEST", 2),
                               ("RESERVED", 2)),
        "SMPLRT_DIV": _byte("SMPLRT_DIV"),
        "CONFIG": _fields(("DLPF_CFG", 3), ("EXT_SYNC_SET", 3), ("reserved", 2)),
        "GYRO_CONFIG": _fields(("reserved0", 3), ("FS_SEL", 2), ("reserved1", 3)),
        "ACCEL_CONFIG": _fields(("reserved", 3), ("ACCEL_FS_SEL", 2), ("ZA_ST", 1),
                                ("YA_ST", 1), ("XA_ST", 1)),
        "FIFO_EN": _fields(("SLV0_FIFO_EN", 1), ("SLV1_FIFO_EN", 1), ("SLV2_FIFO_EN", 1),
                           ("ACCEL_FIFO_EN", 1), ("ZG_FIFO_EN", 1), ("YG_FIFO_EN", 1),
                           ("XG_FIFO_EN", 1), ("TEMP_FIFO_EN", 1)),
        "I2C_MST_CTRL": _fields(("I2C_MST_CLK", 4), ("I2C_MST_P_NSR", 1),
                                ("SLV_3_FIFO_EN", 1), ("WAIT_FOR_ES", 1),
                                ("MULT_MST_EN", 1)),
        "I2C_SLV4_DO": _byte("I2C_SLV4_DO"),
        "I2C_SLV4_CTRL": _fields(("I2C_MST_DLY", 5), ("I2C_SLV4_REG_DIS", 1),
                                 ("I2C_SLV4_INT_EN", 1), ("I2C_SLV4_EN", 1)),
        "I2C_SLV4_DI": _byte("I2C_SLV4_DI"),
        "I2C_MST_STATUS": _fields(("I2C_SLV0_NACK", 1), ("I2C_SLV1_NACK", 1),
                                  ("I2C_SLV2_NACK", 1), ("I2C_SLV3_NACK", 1),
                                  ("I2C_SLV4_NACK", 1), ("I2C_LOST_ARB", 1),
                                  ("I2C_SLV4_DONE", 1), ("PASS_THROUGH", 1)),
        "INT_PIN_CFG": _fields(("reserved", 1), ("I2C_BYPASS_EN", 1), ("FSYNC_INT_EN", 1),
                               ("FSYNC_INT_LEVEL", 1), ("INT_RD_CLEAR", 1),
                               ("LATCH_INT_EN", 1), ("INT_OPEN", 1), ("INT_LEVEL", 1)),
        "INT_ENABLE": _fields(("DATA_RDY_EN", 1), ("reserved0", 2), ("I2C_MST_INT_EN", 1),
                              ("FIFO_OFLOW_EN", 1), ("reserved1", 3)),
        "INT_STATUS": _fields(("DATA_RDY_INT", 1), ("reserved0", 2), ("I2C_MST_INT", 1),
                              ("FIFO_OFLOW_INT", 1), ("reserved1", 3)),
        "I2C_MST_DELAY_CTRL": _fields(("I2C_SLV0_DLY_EN", 1), ("I2C_SLV1_DLY_EN", 1),
                                      ("I2C_SLV2_DLY_EN", 1), ("I2C_SLV3_DLY_EN", 1),
                                      ("I2C_SLV4_DLY_EN", 1), ("reserved", 2),
                                      ("DELAY_ES_SHADOW", 1)),
        "SIGNAL_PATH_RESET": _fields(("TEMP_RESET", 1), ("ACCCEL_RESET", 1),
                                     ("GYRO_RESET", 1), ("reserved", 5)),
        "USER_CTRL": _fields(("SIG_COND_RESET", 1), ("I2C_MST_RESET", 1), ("FIFO_RESET", 1),
                             ("reserved0", 1), ("I2C_IF_DIS", 1), ("I2C_MST_EN", 1),
                             ("FIFO_EN", 1), ("reserved1", 1)),
        "PWR_MGMT_1": _fields(("CLKSEL", 3), ("TEMP_DIS", 1), ("reserved", 1), ("CYCLE", 1),
                              ("SLEEP", 1), ("DEVICE_RESET", 1)),
        "PWR_MGMT_2": _fields(("STBY_ZG", 1), ("STBY_YG", 1), ("STBY_XG", 1), ("STBY_ZA", 1),
                              ("STBY_YA", 1), ("STBY_XA", 1), ("LP_WAKE_CTRL", 2)),
        "FIFO_COUNTH": _byte("FIFO_CNT"),
        "FIFO_COUNTL": _byte("FIFO_CNT"),
        "FIFO_R_W": _byte("FIFO_DATA"),
        "WHO_AM_I": _byte("WHOAMI"),
    }
    for n in range(5):
        spec[f"I2C_SLV{n}_ADDR"] = _fields((f"I2C_ID_{n}", 7), (f"I2C_SLV{n}_RW", 1))
        spec[f"I2C_SLV{n}_REG"] = _byte(f"I2C_SLV{n}_REG")
    for n in range(4):
        spec[f"I2C_SLV{n}_CTRL"] = _fields(
            (f"I2C_SLV{n}_LENG", 4), (f"I2C_SLV{n}_GRP", 1), (f"I2C_SLV{n}_REG_DIS", 1),
            (f"I2C_SLV{n}_BYTE_SW", 1), (f"I2C_SLV{n}_EN", 1))
        spec[f"I2C_SLV{n}_DO"] = _byte(f"I2C_SLV{n}_DO")
    for quantity in ("ACCEL_XOUT", "ACCEL_YOUT", "ACCEL_ZOUT", "TEMP_OUT",
                     "GYRO_XOUT", "GYRO_YOUT", "GYRO_ZOUT"):
        spec[f"{quantity}_H"] = _byte(quantity)
        spec[f"{quantity}_L"] = _byte(quantity)
    for n in range(24):
        name = f"EXT_SENS_DATA_{n:02d}"
        spec[name] = _byte(name)
    return {Register[name]: RegisterLayout(name, fields) for name, fields in spec.items()}


LAYOUTS: dict[Register, RegisterLayout] = _build_layouts()


def _resolve(register: RegisterRef) -> Register:
    if isinstance(register, str):
        try:
            return Register[register]
        except KeyError:
            raise KeyError(f"unknown MPU-6050 register {register!r}") from None
    try:
        return Register(register)
    except ValueError:
        raise ValueError(f"unknown MPU-6050 register address {register!r}") from None


def command_byte(register: RegisterRef, read: bool) -> int:
    """Return the command byte addressing ``register`` for a read or a write."""
    address = int(_resolve(register)) & ADDRESS_MASK
    return address | READ_FLAG if read else address


def transaction(register: RegisterRef, read: bool, data: int = 0) -> bytes:
    """Return the two bytes of a transaction: command byte then data byte."""
    if not 0 <= data <= 0xFF:
        raise ValueError("data must fit in one byte")
    return bytes((command_byte(register, read), data))


def decode(register: RegisterRef, value: int) -> dict[str, int]:
    """Split a raw value of ``register`` into its named fields."""
    return LAYOUTS[_resolve(register)].decode(value)


def encode(register: RegisterRef, **kwargs: int) -> int:
    """Pack named field values into a raw value of ``register``."""
    return LAYOUTS[_resolve(register)].encode(**kwargs)