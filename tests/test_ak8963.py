import pytest

from eggbot import ak8963
from eggbot.ak8963 import Register, decode, encode


def test_st1_data_ready_bit():
    assert decode(Register.ST1, 0x01) == {"DRDY": 1, "reserved": 0}


def test_st2_overflow_bit_position():
    fields = decode("ST2", 0x08)
    assert fields["HOFL"] == 1
    assert fields["BITM"] == 0


def test_cntl1_ignores_uncovered_top_bit():
    assert decode(Register.CNTL1, 0x80) == {"MODE": 0, "BIT": 0, "reserved": 0}


@pytest.mark.parametrize("register", list(Register))
def test_every_register_round_trips_all_bytes(register):
    layout = ak8963.LAYOUTS[register]
    limit = 1 << layout.width()
    for value in range(limit):
        assert encode(register, **decode(register, value)) == value


@pytest.mark.parametrize("register", list(Register))
def test_every_register_has_a_layout_within_a_byte(register):
    assert 1 <= ak8963.LAYOUTS[register].width() <= 8


def test_encode_decode_cntl1_fields():
    raw = encode("CNTL1", MODE=6, BIT=1)
    assert decode("CNTL1", raw) == {"MODE": 6, "BIT": 1, "reserved": 0}


def test_register_by_address_matches_by_name():
    assert decode(0x10, 0x9A) == decode("ASAX", 0x9A)
    assert decode(0x10, 0x9A) == {"COEFX": 0x9A}


def test_magnetometer_data_registers_are_whole_bytes():
    for name in ("HXL", "HXH", "HYL", "HYH", "HZL", "HZH"):
        assert decode(name, 0xFF) == {name: 0xFF}


def test_asa_coefficient_names():
    assert set(decode("ASAY", 0)) == {"COEFY"}
    assert set(decode("ASAZ", 0)) == {"COEFZ"}


def test_astc_self_test_bit_round_trip():
    raw = encode(Register.ASTC, SELF=1)
    assert decode(Register.ASTC, raw)["SELF"] == 1
    assert decode(Register.ASTC, raw)["reserved0"] == 0


def test_missing_fields_encode_as_zero():
    assert encode("CNTL2") == 0


def test_unknown_field_rejected():
    with pytest.raises(TypeError):
        encode("CNTL2", MODE=1)


def test_field_overflow_rejected():
    with pytest.raises(ValueError):
        encode("CNTL1", MODE=8)


def test_value_larger_than_a_byte_rejected():
    with pytest.raises(ValueError):
        decode("WIA", 0x100)


def test_negative_value_rejected():
    with pytest.raises(ValueError):
        decode("WIA", -1)


def test_unknown_register_name_rejected():
    with pytest.raises(KeyError):
        decode("NOPE", 0)


def test_unknown_register_address_rejected():
    with pytest.raises(ValueError):
        encode(0x13)