import pytest

from spacebagarre.input import MAX_INPUTS, PlayerInput
from spacebagarre.packet import (
    ConfirmFramePacket,
    DesyncPacket,
    InputPacket,
    PingPacket,
)


def test_ping_encodes_single_byte():
    assert PingPacket(42).encode() == bytes([42])


def test_ping_round_trip():
    packet = PingPacket(200)
    assert PingPacket.decode(packet.encode()) == packet


def test_ping_decode_empty_keeps_default():
    assert PingPacket.decode(b"") == PingPacket()


def test_player_and_frame_packing():
    packet = InputPacket()
    packet.set_player_and_frame(True, 1234)
    assert packet.player_number() == 1
    assert packet.frame() == 1234
    packet.set_player_and_frame(False, 1234)
    assert packet.player_number() == 0
    assert packet.frame() == 1234


def test_frame_is_limited_to_fifteen_bits():
    packet = InputPacket()
    packet.set_player_and_frame(False, 0x8000 | 5)
    assert packet.player_number() == 0
    assert packet.frame() == 5


def test_input_packet_wire_bytes():
    packet = InputPacket(inputs=[PlayerInput(move_x=-1, jump=True)])
    packet.set_player_and_frame(False, 1)
    assert packet.encode() == b"\x01\x00\x01\xff\x00\x01\x00"


def test_input_packet_round_trip():
    inputs = [
        PlayerInput(move_x=1, move_y=-1, jump=True),
        PlayerInput(shockwave=True),
        PlayerInput(move_x=-1),
    ]
    packet = InputPacket(inputs=inputs)
    packet.set_player_and_frame(True, 777)
    encoded = packet.encode()
    assert len(encoded) == 3 + 4 * len(inputs)
    decoded = InputPacket.decode(encoded)
    assert decoded == packet
    assert decoded.input_size == len(inputs)
    assert decoded.frame() == 777


def test_input_packet_full_table_round_trip():
    inputs = [PlayerInput(move_x=(i % 3) - 1, jump=i % 2 == 0) for i in range(MAX_INPUTS)]
    packet = InputPacket(inputs=inputs)
    assert InputPacket.decode(packet.encode()) == packet


def test_input_packet_too_many_inputs():
    packet = InputPacket(inputs=[PlayerInput()] * (MAX_INPUTS + 1))
    with pytest.raises(ValueError):
        packet.encode()


def test_input_packet_decode_short_header():
    assert InputPacket.decode(b"\x01\x00") == InputPacket()


def test_input_packet_decode_truncated_payload():
    full = InputPacket(player_and_frame=9, inputs=[PlayerInput(move_x=1), PlayerInput(jump=True)]).encode()
    decoded = InputPacket.decode(full[:-1])
    assert decoded.player_and_frame == 9
    assert decoded.inputs == [PlayerInput(), PlayerInput()]


def test_confirm_frame_round_trip():
    packet = ConfirmFramePacket(
        confirm_frame=4321,
        confirm_value=0xDEADBEEF,
        inputs=(PlayerInput(move_x=1, jump=True), PlayerInput(move_y=-1, shockwave=True)),
    )
    encoded = packet.encode()
    assert len(encoded) == 6 + 2 * 4
    assert ConfirmFramePacket.decode(encoded) == packet


def test_confirm_frame_decode_short_keeps_default():
    assert ConfirmFramePacket.decode(b"\x00" * 13) == ConfirmFramePacket()


def test_confirm_frame_needs_one_input_per_player():
    with pytest.raises(ValueError):
        ConfirmFramePacket(inputs=(PlayerInput(),)).encode()


def test_desync_round_trip():
    packet = DesyncPacket("frame 12 mismatch")
    assert packet.encode() == "frame 12 mismatch".encode("utf-8")
    assert DesyncPacket.decode(packet.encode()) == packet


def test_desync_message_too_long():
    with pytest.raises(ValueError):
        DesyncPacket("x" * 40000).encode()