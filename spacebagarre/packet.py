"""Network packets exchanged between the two players and their wire format."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from spacebagarre.input import MAX_INPUTS, PlayerInput

_PLAYER_COUNT = 2
_INPUT_WIRE_SIZE = 4
_INPUT_WIRE = struct.Struct("<bbBB")
_INPUT_HEADER = struct.Struct("<HB")
_CONFIRM_HEADER = struct.Struct("<HI")
_CONFIRM_SIZE = _CONFIRM_HEADER.size + _PLAYER_COUNT * _INPUT_WIRE_SIZE
_MAX_PAYLOAD = 0x7FFF


class PacketType(enum.IntEnum):
    START_GAME = 1
    PING = 2
    INPUT = 3
    CONFIRM_FRAME = 4
    DESYNC = 5


def _wrap_int8(value: int) -> int:
    return ((value + 128) & 0xFF) - 128


def _encode_input(player_input: PlayerInput) -> bytes:
    return _INPUT_WIRE.pack(
        _wrap_int8(player_input.move_x),
        _wrap_int8(player_input.move_y),
        int(bool(player_input.jump)),
        int(bool(player_input.shockwave)),
    )


def _decode_input(chunk: bytes) -> PlayerInput:
    move_x, move_y, jump, shockwave = _INPUT_WIRE.unpack(chunk)
    return PlayerInput(move_x, move_y, jump != 0, shockwave != 0)


def _decode_inputs(data: bytes) -> list[PlayerInput]:
    return [
        _decode_input(data[offset:offset + _INPUT_WIRE_SIZE])
        for offset in range(0, len(data), _INPUT_WIRE_SIZE)
    ]


@dataclass
class PingPacket:
    timer: int = 0

    def encode(self) -> bytes:
        return bytes([self.timer])

    @classmethod
    def decode(cls, data: bytes) -> "PingPacket":
        data = bytes(data)
        return cls(data[0]) if data else cls()


@dataclass
class InputPacket:
    """The sender's inputs from its confirmed frame up to the frame it is on."""

    player_and_frame: int = 0  # top bit: player number, low 15 bits: frame
    inputs: list = field(default_factory=list)

    def set_player_and_frame(self, player_number: int, frame: int) -> None:
        self.player_and_frame = (int(bool(player_number)) << 15) | (frame & 0x7FFF)

    def player_number(self) -> int:
        return (self.player_and_frame >> 15) & 0x1

    def frame(self) -> int:
        return self.player_and_frame & 0x7FFF

    @property
    def input_size(self) -> int:
        return len(self.inputs)

    def encode(self) -> bytes:
        if len(self.inputs) > MAX_INPUTS:
            raise ValueError(f"an input packet holds at most {MAX_INPUTS} inputs, got {len(self.inputs)}")
        header = _INPUT_HEADER.pack(self.player_and_frame, len(self.inputs))
        return header + b"".join(_encode_input(value) for value in self.inputs)

    @classmethod
    def decode(cls, data: bytes) -> "InputPacket":
        data = bytes(data)
        if len(data) < _INPUT_HEADER.size:
            return cls()
        player_and_frame, size = _INPUT_HEADER.unpack_from(data)
        if size > MAX_INPUTS:
            raise ValueError(f"an input packet holds at most {MAX_INPUTS} inputs, got {size}")
        payload = data[_INPUT_HEADER.size:_INPUT_HEADER.size + size * _INPUT_WIRE_SIZE]
        if len(payload) < size * _INPUT_WIRE_SIZE:
            return cls(player_and_frame, [PlayerInput() for _ in range(size)])
        return cls(player_and_frame, _decode_inputs(payload))


def _default_confirm_inputs() -> tuple:
    return tuple(PlayerInput() for _ in range(_PLAYER_COUNT))


@dataclass
class ConfirmFramePacket:
    confirm_frame: int = 0
    confirm_value: int = 0
    inputs: tuple = field(default_factory=_default_confirm_inputs)

    def encode(self) -> bytes:
        if len(self.inputs) != _PLAYER_COUNT:
            raise ValueError(f"a confirm frame packet holds {_PLAYER_COUNT} inputs, got {len(self.inputs)}")
        header = _CONFIRM_HEADER.pack(self.confirm_frame, self.confirm_value)
        return header + b"".join(_encode_input(value) for value in self.inputs)

    @classmethod
    def decode(cls, data: bytes) -> "ConfirmFramePacket":
        data = bytes(data)
        if len(data) < _CONFIRM_SIZE:
            return cls()
        confirm_frame, confirm_value = _CONFIRM_HEADER.unpack_from(data)
        inputs = _decode_inputs(data[_CONFIRM_HEADER.size:_CONFIRM_SIZE])
        return cls(confirm_frame, confirm_value, tuple(inputs))


@dataclass
class DesyncPacket:
    message: str = ""

    def encode(self) -> bytes:
        raw = self.message.encode("utf-8")
        if len(raw) > _MAX_PAYLOAD:
            raise ValueError(f"desync message longer than {_MAX_PAYLOAD} bytes")
        return raw

    @classmethod
    def decode(cls, data: bytes) -> "DesyncPacket":
        return cls(bytes(data).decode("utf-8", errors="replace"))