import pytest

from eggbot.maxarm import (
    ArmProtocolError,
    FunctionCode,
    MaxArm,
    build_packet,
    checksum,
    decode_angles,
    decode_xyz,
    encode_read_request,
    encode_set_angles,
    encode_set_claw,
    encode_set_pwm_servo,
    encode_set_xyz,
    map_range,
    parse_response,
)


class FakePort:
    def __init__(self, responses=()):
        self.written = bytearray()
        self.responses = list(responses)
        self.reads = 0
        self.closed = False

    def write(self, data):
        self.written.extend(data)
        return len(data)

    def read(self, size):
        self.reads += 1
        if self.responses:
            return self.responses.pop(0)[:size]
        return b""

    def close(self):
        self.closed = True


def frame_is_valid(packet):
    body = packet[2:-1]
    return packet[:2] == b"\xaa\x55" and checksum(body) == packet[-1] and body[1] == len(body) - 2


def test_read_requests_match_documented_bytes():
    assert encode_read_request(FunctionCode.READ_ANGLE) == bytes([0xAA, 0x55, 0x11, 0x00, 0xEE])
    assert encode_read_request(FunctionCode.READ_XYZ) == bytes([0xAA, 0x55, 0x13, 0x00, 0xEC])


def test_checksum_of_empty_is_all_ones():
    assert checksum(b"") == 0xFF


def test_checksum_complements_sum():
    data = bytes([3, 8, 200, 100])
    assert (sum(data) + checksum(data)) & 0xFF == 0xFF


def test_map_range_endpoints():
    assert map_range(0, 0, 180, 0, 1000) == 0
    assert map_range(180, 0, 180, 0, 1000) == 1000
    assert map_range(0, 0, 180, 500, 2500) == 500


def test_map_range_midpoint():
    assert map_range(90, 0, 180, 500, 2500) == 1500


def test_map_range_truncates_toward_zero():
    assert map_range(-1, 0, 3, 0, 2) == 0


@pytest.mark.parametrize("encoder,args,func,length", [
    (encode_set_angles, ([10, 20, 30], 1000), FunctionCode.SET_ANGLE, 8),
    (encode_set_xyz, ([0, -120, 85], 500), FunctionCode.SET_XYZ, 8),
    (encode_set_pwm_servo, (90, 200), FunctionCode.SET_PWM_SERVO, 4),
    (encode_set_claw, (300, 400), FunctionCode.SET_CLAW, 4),
])
def test_encoded_frames_are_well_formed(encoder, args, func, length):
    packet = encoder(*args)
    assert frame_is_valid(packet)
    assert packet[2] == func
    assert packet[3] == length
    assert len(packet) == length + 5


def test_time_is_little_endian_at_end_of_payload():
    packet = encode_set_claw(7, 0x1234)
    assert packet[-3:-1] == b"\x34\x12"
    assert packet[4:6] == b"\x07\x00"


def test_pwm_servo_clamps_above_180():
    assert encode_set_pwm_servo(250, 100) == encode_set_pwm_servo(180, 100)


def test_set_angles_requires_three():
    with pytest.raises(ValueError):
        encode_set_angles([1, 2], 100)


def test_set_xyz_requires_three():
    with pytest.raises(ValueError):
        encode_set_xyz([1, 2, 3, 4], 100)


def test_angles_round_trip_through_payload():
    packet = encode_set_angles([90, 45, 180], 100)
    assert decode_angles(packet[4:10]) == (90, 45, 180)


def test_xyz_round_trip_with_negatives():
    packet = encode_set_xyz([-100, 50, 200], 100)
    assert decode_xyz(packet[4:10]) == (-100, 50, 200)


def test_parse_response_extracts_payload():
    payload = bytes([1, 2, 3, 4, 5, 6])
    frame = build_packet(FunctionCode.READ_XYZ, payload)
    assert parse_response(frame, FunctionCode.READ_XYZ) == payload


def test_parse_response_skips_leading_noise():
    payload = bytes([9, 0, 8, 0, 7, 0])
    frame = b"\x00\x13\xaa" + build_packet(FunctionCode.READ_ANGLE, payload)
    assert parse_response(frame, FunctionCode.READ_ANGLE) == payload


def test_parse_response_bad_checksum():
    frame = bytearray(build_packet(FunctionCode.READ_XYZ, bytes(6)))
    frame[-1] ^= 0x01
    with pytest.raises(ArmProtocolError):
        parse_response(bytes(frame), FunctionCode.READ_XYZ)


def test_parse_response_wrong_function():
    frame = build_packet(FunctionCode.READ_ANGLE, bytes(6))
    with pytest.raises(ArmProtocolError):
        parse_response(frame, FunctionCode.READ_XYZ)


def test_parse_response_wrong_length():
    frame = build_packet(FunctionCode.READ_XYZ, bytes(4))
    with pytest.raises(ArmProtocolError):
        parse_response(frame, FunctionCode.READ_XYZ)


def test_parse_response_truncated():
    frame = build_packet(FunctionCode.READ_XYZ, bytes(6))
    with pytest.raises(ArmProtocolError):
        parse_response(frame[:-1], FunctionCode.READ_XYZ)


def test_arm_writes_encoded_commands():
    port = FakePort()
    arm = MaxArm(port, retries=0, retry_delay=0)
    arm.set_angles([10, 20, 30], 1000)
    arm.set_xyz([1, 2, 3], 50)
    arm.set_pwm_servo(45, 10)
    arm.set_claw(500, 20)
    expected = (encode_set_angles([10, 20, 30], 1000) + encode_set_xyz([1, 2, 3], 50)
                + encode_set_pwm_servo(45, 10) + encode_set_claw(500, 20))
    assert bytes(port.written) == expected


def test_read_xyz_after_retries():
    reply = build_packet(FunctionCode.READ_XYZ, encode_set_xyz([-5, 60, 120], 0)[4:10])
    port = FakePort([b"", b"", reply])
    arm = MaxArm(port, retries=5, retry_delay=0)
    assert arm.read_xyz() == (-5, 60, 120)
    assert bytes(port.written) == encode_read_request(FunctionCode.READ_XYZ)
    assert port.reads == 3


def test_read_angles_decodes_reply():
    reply = build_packet(FunctionCode.READ_ANGLE, encode_set_angles([90, 45, 180], 0)[4:10])
    arm = MaxArm(FakePort([reply]), retries=0, retry_delay=0)
    assert arm.read_angles() == (90, 45, 180)


def test_read_gives_up_after_retries():
    port = FakePort()
    arm = MaxArm(port, retries=3, retry_delay=0)
    with pytest.raises(ArmProtocolError):
        arm.read_angles()
    assert port.reads == 4


def test_read_rejects_short_reply():
    arm = MaxArm(FakePort([b"\xaa\x55\x13"]), retries=0, retry_delay=0)
    with pytest.raises(ArmProtocolError):
        arm.read_xyz()


def test_context_manager_closes_port():
    port = FakePort()
    with MaxArm(port, retries=0, retry_delay=0) as arm:
        arm.set_claw(1, 1)
    assert port.closed is True