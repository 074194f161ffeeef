"""Game reactions to contacts: players hitting walls and picking up coins."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from spacebagarre.player import MAX_PLAYERS
from spacebagarre.world import ColliderHandle, ColliderPair, ObjectType, Vec2

RESPAWN_TIME = 3.0
WALL_PENALTY = 50
COIN_REWARD = 100
MAX_SCORE = 999


def _pair_key(pair: ColliderPair) -> frozenset:
    return frozenset((pair.collider_a.id, pair.collider_b.id))


@dataclass
class GameContactListener:
    """Maps colliders to object types and applies the game rules on contact."""

    player_manager: Optional[Any] = None
    coin_manager: Optional[Any] = None
    _types: dict = field(default_factory=dict, repr=False)
    _collisions: set = field(default_factory=set, repr=False)
    _triggers: set = field(default_factory=set, repr=False)

    def register(self, object_type: ObjectType, handle: ColliderHandle) -> None:
        self._types[handle.id] = object_type

    def _type_of(self, handle: ColliderHandle) -> ObjectType:
        return self._types.get(handle.id, ObjectType.OTHER)

    def _is_colliding(self, pair: ColliderPair) -> bool:
        return _pair_key(pair) in self._collisions

    def _is_triggering(self, pair: ColliderPair) -> bool:
        return _pair_key(pair) in self._triggers

    def on_collision_enter(self, pair: ColliderPair) -> None:
        """A player touching a wall is sent back to its start and loses points."""
        self._collisions.add(_pair_key(pair))
        type_a = self._type_of(pair.collider_a)
        type_b = self._type_of(pair.collider_b)
        if type_a is ObjectType.PLAYER and type_b is ObjectType.WALL:
            self._respawn(pair.collider_a)
        elif type_b is ObjectType.PLAYER and type_a is ObjectType.WALL:
            self._respawn(pair.collider_b)

    def _respawn(self, collider: ColliderHandle) -> None:
        manager = self.player_manager
        if manager is None:
            return
        for index in range(MAX_PLAYERS):
            player = manager.get_player(index)
            if player.collider is None or player.collider.id != collider.id:
                continue
            body = manager.get_body(index)
            body.position = manager.player_start_position(index)
            body.velocity = Vec2.zero()
            player.respawn_timer = RESPAWN_TIME
            score = manager.get_score(index)
            manager.add_score(index, -WALL_PENALTY if score >= WALL_PENALTY else -score)

    def on_collision_stay(self, pair: ColliderPair) -> None:
        """Keep the pair recorded as touching; no game rule applies."""
        self._collisions.add(_pair_key(pair))

    def on_collision_exit(self, pair: ColliderPair) -> None:
        """Forget the pair as touching; no game rule applies."""
        self._collisions.discard(_pair_key(pair))

    def on_trigger_enter(self, pair: ColliderPair) -> None:
        """A player entering an active coin scores it, up to the score cap."""
        self._triggers.add(_pair_key(pair))
        type_a = self._type_of(pair.collider_a)
        type_b = self._type_of(pair.collider_b)
        kinds = {type_a, type_b}
        if kinds != {ObjectType.PLAYER, ObjectType.COIN}:
            return
        coin_id = pair.collider_a.id if type_a is ObjectType.COIN else pair.collider_b.id
        player_id = pair.collider_a.id if type_a is ObjectType.PLAYER else pair.collider_b.id

        players, coins = self.player_manager, self.coin_manager
        if players is None or coins is None:
            return
        for index, coin in enumerate(coins.coins()):
            if coin.collider.id != coin_id or not coin.active:
                continue
            self._award(player_id)
            coins.deactivate_coin_at(index)
            break

    def _award(self, player_collider_id: int) -> None:
        manager = self.player_manager
        for index in range(MAX_PLAYERS):
            player = manager.get_player(index)
            if player.collider is not None and player.collider.id == player_collider_id:
                score = manager.get_score(index)
                gain = COIN_REWARD if score + COIN_REWARD <= MAX_SCORE else MAX_SCORE - score
                manager.add_score(index, gain)
                return

    def on_trigger_stay(self, pair: ColliderPair) -> None:
        """Keep the pair recorded as overlapping; no game rule applies."""
        self._triggers.add(_pair_key(pair))

    def on_trigger_exit(self, pair: ColliderPair) -> None:
        """Forget the pair as overlapping; no game rule applies."""
        self._triggers.discard(_pair_key(pair))