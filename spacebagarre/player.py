"""Player ships: their per-frame logic, saved states and scores."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from spacebagarre.input import PlayerInput
from spacebagarre.world import (
    AABB,
    FIXED_TIME_STEP,
    BodyDef,
    BodyHandle,
    BodyType,
    ColliderDef,
    ColliderHandle,
    ObjectType,
    PhysicsWorld,
    Vec2,
)

MAX_PLAYERS = 2
MOVE_SPEED = 100.0
MAX_HORIZONTAL_SPEED = 200.0
JUMP_IMPULSE = 300.0
JUMP_BUFFER_TIME = 0.1
COYOTE_TIME = 0.1
PLAYER_MASS = 0.8
PLAYER_HALF_SIZE = Vec2(36.0, 57.0)
SHOCKWAVE_COOLDOWN = 6.0
PLAYER_POSITIONS = (Vec2(640.0, 360.0), Vec2(1280.0, 360.0))


@dataclass
class PlayerCharacterState:
    """Everything about a player needed to restore it for a rollback."""

    input: PlayerInput = field(default_factory=PlayerInput)
    jump_button_pressed: bool = False
    respawn_timer: float = 0.0
    shockwave_cooldown: float = 0.0
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()


@dataclass
class PlayerCharacter:
    body: Optional[BodyHandle] = None
    collider: Optional[ColliderHandle] = None
    player_index: int = 0
    input: PlayerInput = field(default_factory=PlayerInput)
    jump_button_pressed: bool = False
    respawn_timer: float = 0.0
    shockwave_cooldown: float = 0.0

    def is_respawning(self) -> bool:
        return self.respawn_timer > 0.0

    def can_use_shockwave(self) -> bool:
        return self.shockwave_cooldown <= 0.0

    def save_state(self, world: PhysicsWorld) -> PlayerCharacterState:
        body = world.get_body(self.body)
        return PlayerCharacterState(
            input=replace(self.input),
            jump_button_pressed=self.jump_button_pressed,
            respawn_timer=self.respawn_timer,
            shockwave_cooldown=self.shockwave_cooldown,
            position=body.position,
            velocity=body.velocity,
        )

    def load_state(self, state: PlayerCharacterState, world: PhysicsWorld) -> None:
        self.input = replace(state.input)
        self.jump_button_pressed = state.jump_button_pressed
        self.respawn_timer = state.respawn_timer
        self.shockwave_cooldown = state.shockwave_cooldown
        body = world.get_body(self.body)
        body.position = state.position
        body.velocity = state.velocity


def _check_index(index: int) -> None:
    if not 0 <= index < MAX_PLAYERS:
        raise IndexError(f"player index {index} out of range")


class PlayerCharacterManager:
    """Owns both players and their scores and drives them each frame."""

    def __init__(self, world: PhysicsWorld, listener: Optional[Any] = None) -> None:
        self.world = world
        self.listener = listener
        self._players = [PlayerCharacter() for _ in range(MAX_PLAYERS)]
        self._scores = [0] * MAX_PLAYERS

    def init_players(self) -> None:
        """Create a body and a box collider for each player at its start position."""
        for index, start in enumerate(PLAYER_POSITIONS):
            player = self._players[index]
            player.body = self.world.create_body(
                BodyDef(
                    type=BodyType.DYNAMIC,
                    position=start,
                    velocity=Vec2.zero(),
                    gravity_enabled=True,
                    mass=PLAYER_MASS,
                )
            )
            box = AABB(start - PLAYER_HALF_SIZE, start + PLAYER_HALF_SIZE)
            player.collider = self.world.create_collider(
                player.body, ColliderDef(box, bounciness=1.0, friction=0.0, is_trigger=False)
            )
            if self.listener is not None:
                self.listener.register(ObjectType.PLAYER, player.collider)
            player.player_index = index

    def update(self) -> None:
        """Apply one frame of timers, movement, jump and shockwave for each player."""
        for player in self._players:
            body = self.world.get_body(player.body)

            if player.respawn_timer > 0.0:
                player.respawn_timer -= FIXED_TIME_STEP
                body.velocity = Vec2.zero()
                continue

            if player.shockwave_cooldown > 0.0:
                player.shockwave_cooldown -= FIXED_TIME_STEP

            body.apply_force(Vec2(player.input.move_x * MOVE_SPEED, 0.0))

            velocity = body.velocity
            clamped_x = max(-MAX_HORIZONTAL_SPEED, min(MAX_HORIZONTAL_SPEED, velocity.x))
            body.velocity = Vec2(clamped_x, velocity.y)

            if player.input.jump and not player.jump_button_pressed:
                body.apply_impulse(Vec2(0.0, -JUMP_IMPULSE))
                player.jump_button_pressed = True
            if not player.input.jump:
                player.jump_button_pressed = False

            if player.input.shockwave and player.can_use_shockwave():
                player.shockwave_cooldown = SHOCKWAVE_COOLDOWN

    def deinit(self) -> None:
        self._players = [PlayerCharacter() for _ in range(MAX_PLAYERS)]

    def set_player_input(self, player_id: int, player_input: PlayerInput) -> None:
        """Set a player's input; ids outside the player range are ignored."""
        if 0 <= player_id < MAX_PLAYERS:
            self._players[player_id].input = replace(player_input)

    def save_player_state(self) -> tuple[PlayerCharacterState, ...]:
        return tuple(player.save_state(self.world) for player in self._players)

    def load_player_state(self, states) -> None:
        for player, state in zip(self._players, states):
            player.load_state(state, self.world)

    def get_player(self, index: int) -> PlayerCharacter:
        _check_index(index)
        return self._players[index]

    def copy_from(self, other: "PlayerCharacterManager") -> None:
        """Copy handles, inputs and timers of every player from another manager."""
        for mine, theirs in zip(self._players, other._players):
            mine.player_index = theirs.player_index
            mine.body = theirs.body
            mine.collider = theirs.collider
            mine.input = replace(theirs.input)
            mine.respawn_timer = theirs.respawn_timer
            mine.shockwave_cooldown = theirs.shockwave_cooldown

    def get_body(self, index: int):
        _check_index(index)
        return self.world.get_body(self._players[index].body)

    def player_start_position(self, index: int) -> Vec2:
        _check_index(index)
        return PLAYER_POSITIONS[index]

    def get_score(self, player_index: int) -> int:
        _check_index(player_index)
        return self._scores[player_index]

    def add_score(self, player_index: int, amount: int) -> None:
        _check_index(player_index)
        self._scores[player_index] += amount