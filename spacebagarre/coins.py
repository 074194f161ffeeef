"""Collectable coins that appear one at a time at fixed places in the arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from spacebagarre.world import (
    FIXED_TIME_STEP,
    BodyDef,
    BodyHandle,
    BodyType,
    Circle,
    ColliderDef,
    ColliderHandle,
    ObjectType,
    PhysicsWorld,
    Vec2,
)

COIN_RADIUS = 18.0
COIN_CYCLE_TIME = 9.0

COIN_POSITIONS = (
    Vec2(960.0, 409.0),
    Vec2(1634.0, 579.0),
    Vec2(242.0, 1030.0),
    Vec2(1709.0, 848.0),
    Vec2(1347.0, 453.0),
    Vec2(707.0, 622.0),
    Vec2(1816.0, 217.0),
    Vec2(1602.0, 180.0),
    Vec2(1457.0, 967.0),
    Vec2(1076.0, 89.0),
    Vec2(933.0, 866.0),
    Vec2(71.0, 728.0),
    Vec2(1256.0, 653.0),
    Vec2(337.0, 169.0),
    Vec2(1013.0, 578.0),
    Vec2(558.0, 332.0),
    Vec2(1672.0, 1004.0),
    Vec2(1291.0, 961.0),
    Vec2(456.0, 274.0),
    Vec2(646.0, 980.0),
)


@dataclass
class Coin:
    body: BodyHandle
    collider: ColliderHandle
    active: bool = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False


class CoinManager:
    """Creates one trigger per coin position and cycles the active coin."""

    def __init__(self, world: PhysicsWorld, listener: Optional[Any] = None) -> None:
        self.world = world
        self._coins: list[Coin] = []
        self._current_active_index = 0
        self._coin_timer = 0.0
        self.coin_cycle_time = COIN_CYCLE_TIME

        for position in COIN_POSITIONS:
            body = world.create_body(
                BodyDef(
                    type=BodyType.STATIC,
                    position=position,
                    velocity=Vec2.zero(),
                    gravity_enabled=False,
                    mass=0.0,
                )
            )
            collider = world.create_collider(
                body,
                ColliderDef(Circle(position, COIN_RADIUS), bounciness=0.0, friction=0.0, is_trigger=True),
            )
            if listener is not None:
                listener.register(ObjectType.COIN, collider)
            self._coins.append(Coin(body, collider, False))

    def activate_coin_at(self, index: int) -> None:
        if 0 <= index < len(self._coins):
            self._coins[index].activate()

    def deactivate_coin_at(self, index: int) -> None:
        if 0 <= index < len(self._coins):
            self._coins[index].deactivate()

    def deactivate_all(self) -> None:
        for coin in self._coins:
            coin.deactivate()

    def update(self) -> None:
        """Advance one frame; when the cycle runs out, move on to the next coin."""
        if not self._coins:
            return
        self._coin_timer -= FIXED_TIME_STEP
        if self._coin_timer <= 0.0:
            self.deactivate_coin_at(self._current_active_index)
            self._current_active_index = (self._current_active_index + 1) % len(self._coins)
            self.activate_coin_at(self._current_active_index)
            self._coin_timer = self.coin_cycle_time

    def coins(self) -> list[Coin]:
        return self._coins