"""Player input values and the mapping from keyboard and gamepad state to them."""

from __future__ import annotations

import enum
from collections.abc import Collection
from dataclasses import dataclass
from typing import Optional

MAX_FRAME_COUNT = 60 * 60 * 2  # two minutes at 60 frames per second
MAX_INPUTS = 30
DEAD_ZONE = 8000.0
_GAMEPAD_SLOTS = 2


@dataclass
class PlayerInput:
    """One frame of a player's input."""

    move_x: int = 0
    move_y: int = 0
    jump: bool = False
    shockwave: bool = False

    def clear(self) -> None:
        self.move_x = 0
        self.move_y = 0
        self.jump = False
        self.shockwave = False


class Key(enum.Enum):
    A = "a"
    D = "d"
    W = "w"
    SPACE = "space"
    LSHIFT = "lshift"
    RSHIFT = "rshift"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"


class GamepadButton(enum.Enum):
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    NORTH = "north"


@dataclass(frozen=True)
class _KeyBinding:
    right: Key
    left: Key
    jump: tuple
    shockwave: tuple


_KEY_BINDINGS = {
    0: _KeyBinding(Key.D, Key.A, (Key.SPACE, Key.W), (Key.LSHIFT,)),
    1: _KeyBinding(Key.RIGHT, Key.LEFT, (Key.UP,), (Key.RSHIFT,)),
}


def input_from_keyboard(pressed: Collection[Key], player_id: int) -> PlayerInput:
    """Build the input of a player without a gamepad from the keys held down."""
    result = PlayerInput()
    binding = _KEY_BINDINGS.get(player_id)
    if binding is None:
        return result
    if binding.right in pressed:
        result.move_x = 1
    if binding.left in pressed:
        result.move_x = -1
    result.jump = any(key in pressed for key in binding.jump)
    result.shockwave = any(key in pressed for key in binding.shockwave)
    return result


def _axis(value: int, scale: float) -> int:
    return int(value / scale) if abs(value) > DEAD_ZONE else 0


def input_from_gamepad(axis_x: int, axis_y: int, buttons: Collection[GamepadButton]) -> PlayerInput:
    """Build a player's input from the left stick axes and the face buttons held down."""
    return PlayerInput(
        move_x=_axis(axis_x, 32767.0),
        move_y=_axis(axis_y, 32768.0),
        jump=GamepadButton.EAST in buttons or GamepadButton.SOUTH in buttons,
        shockwave=GamepadButton.WEST in buttons or GamepadButton.NORTH in buttons,
    )


class GamepadSlots:
    """Assigns connected gamepads to the two players, first come first served."""

    def __init__(self) -> None:
        self._slots: list[Optional[int]] = [None] * _GAMEPAD_SLOTS

    def add(self, gamepad_id: int) -> Optional[int]:
        """Give the gamepad to the first free player; return that player or None if all are taken."""
        for player_id, current in enumerate(self._slots):
            if current is None:
                self._slots[player_id] = gamepad_id
                return player_id
        return None

    def remove(self, gamepad_id: int) -> Optional[int]:
        """Free the slot holding the gamepad; return the player it belonged to, if any."""
        for player_id, current in enumerate(self._slots):
            if current is not None and current == gamepad_id:
                self._slots[player_id] = None
                return player_id
        return None

    def gamepad_for(self, player_id: int) -> Optional[int]:
        if 0 <= player_id < len(self._slots):
            return self._slots[player_id]
        return None

    def is_connected(self, player_id: int) -> bool:
        return self.gamepad_for(player_id) is not None