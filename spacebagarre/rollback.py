"""Rollback netcode state: per-frame inputs, confirmed snapshots and re-simulation."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from spacebagarre.input import MAX_FRAME_COUNT, PlayerInput
from spacebagarre.player import MAX_PLAYERS, PlayerCharacterManager
from spacebagarre.world import PhysicsWorld

_RESIZE_BUFFER = 20


def _check_player(player_id: int) -> None:
    if not 0 <= player_id < MAX_PLAYERS:
        raise IndexError(f"player id {player_id} out of range")


class RollbackManager:
    """Keeps every player's input per frame and rewinds the world when predictions were wrong."""

    def __init__(self, player_manager: PlayerCharacterManager, world: PhysicsWorld) -> None:
        self.player_manager = player_manager
        self.world = world
        self._inputs = [[PlayerInput() for _ in range(MAX_FRAME_COUNT)] for _ in range(MAX_PLAYERS)]
        self._last_inputs = [PlayerInput() for _ in range(MAX_PLAYERS)]
        self._saved: dict[int, tuple[PhysicsWorld, tuple]] = {}
        self._current_frame = 0
        self._confirmed_frame = -1
        self._last_remote_input_frame = -1
        self._frame_to_confirm = 0

    @property
    def current_frame(self) -> int:
        return self._current_frame

    @property
    def confirmed_frame(self) -> int:
        return self._confirmed_frame

    @property
    def last_remote_input_frame(self) -> int:
        return self._last_remote_input_frame

    @property
    def frame_to_confirm(self) -> int:
        return self._frame_to_confirm

    def increase_current_frame(self) -> None:
        self._current_frame += 1

    def deinit(self) -> None:
        """Reset the frame counters and drop all recorded inputs."""
        self._current_frame = 0
        self._confirmed_frame = -1
        self._last_remote_input_frame = -1
        self._frame_to_confirm = 0
        for inputs in self._inputs:
            inputs.clear()
        self._last_inputs = [PlayerInput() for _ in range(MAX_PLAYERS)]

    def set_local_input(self, player_id: int, player_input: PlayerInput) -> None:
        _check_player(player_id)
        self._inputs[player_id][self._current_frame] = replace(player_input)
        self._last_inputs[player_id] = replace(player_input)

    def set_remote_inputs(self, new_inputs: Sequence[PlayerInput], player_id: int) -> None:
        """Store the inputs received for the frames just before the current one.

        Re-simulates from the confirmed frame when any of them differs from what was assumed.
        """
        if not new_inputs:
            return
        _check_player(player_id)
        recorded = self._inputs[player_id]
        first_frame = max(0, self._current_frame - len(new_inputs))
        must_rollback = False
        for frame, new_input in enumerate(new_inputs, start=first_frame):
            if len(recorded) <= frame:
                recorded.extend(PlayerInput() for _ in range(frame + _RESIZE_BUFFER - len(recorded)))
            if recorded[frame] != new_input:
                must_rollback = True
            recorded[frame] = replace(new_input)

        self._last_remote_input_frame = self._current_frame - 1
        self._last_inputs[player_id] = replace(new_inputs[-1])

        if must_rollback:
            self.simulate_until_current_frame()

    def simulate_until_current_frame(self) -> None:
        """Restore the last confirmed snapshot and step again up to the current frame."""
        key = max(self._confirmed_frame, 0)
        try:
            world_state, player_states = self._saved[key]
        except KeyError:
            raise LookupError(f"no state saved for frame {key}") from None
        self.world.copy_from(world_state)
        self.player_manager.load_player_state(player_states)

        for frame in range(self._confirmed_frame + 1, self._current_frame):
            for player_id in range(MAX_PLAYERS):
                self.player_manager.set_player_input(player_id, self._inputs[player_id][frame])
            self.world.step_simulation()

    def confirm_frame(self) -> None:
        """Step the frame to confirm with its inputs and save the resulting state."""
        frame = self._frame_to_confirm
        for player_id in range(MAX_PLAYERS):
            self.player_manager.set_player_input(player_id, self._inputs[player_id][frame])
        self.world.step_simulation()
        self._save(frame)
        self._confirmed_frame += 1
        self._frame_to_confirm += 1

    def save_first_confirmed_frame(self) -> None:
        self._save(0)

    def _save(self, frame: int) -> None:
        snapshot = PhysicsWorld()
        snapshot.copy_from(self.world)
        self._saved[frame] = (snapshot, self.player_manager.save_player_state())

    def last_input(self, player_id: int) -> PlayerInput:
        _check_player(player_id)
        return replace(self._last_inputs[player_id])

    def recent_inputs(self, player_id: int, start: int, end: int) -> list[PlayerInput]:
        """Inputs of the frames after start up to and including end, within the match length."""
        _check_player(player_id)
        recorded = self._inputs[player_id]
        return [replace(recorded[frame]) for frame in range(start + 1, min(end + 1, MAX_FRAME_COUNT))]