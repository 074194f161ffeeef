"""Static level geometry: the walls around the arena and box obstacles."""

from __future__ import annotations

from typing import Any, Optional

from spacebagarre.world import (
    AABB,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    BodyDef,
    BodyType,
    ColliderDef,
    ColliderHandle,
    ObjectType,
    PhysicsWorld,
    Vec2,
)

WALL_HALF_THICKNESS = 27.0
_HORIZONTAL_OVERHANG = 100.0


def create_level(world: PhysicsWorld, listener: Optional[Any] = None) -> list[ColliderHandle]:
    """Build the four walls on the screen borders: lower, upper, left and right."""
    horizontal = Vec2((WINDOW_WIDTH + _HORIZONTAL_OVERHANG) / 2.0, WALL_HALF_THICKNESS)
    vertical = Vec2(WALL_HALF_THICKNESS, WINDOW_HEIGHT / 2.0)
    placements = (
        (horizontal, Vec2(WINDOW_WIDTH / 2.0, float(WINDOW_HEIGHT))),
        (horizontal, Vec2(WINDOW_WIDTH / 2.0, 0.0)),
        (vertical, Vec2(0.0, WINDOW_HEIGHT / 2.0)),
        (vertical, Vec2(float(WINDOW_WIDTH), WINDOW_HEIGHT / 2.0)),
    )
    return [
        create_outer_wall(world, half_size, position, 0.0, listener)
        for half_size, position in placements
    ]


def create_static_aabb_from_corners(
    world: PhysicsWorld,
    upper_left: Vec2,
    bottom_right: Vec2,
    friction: float,
    listener: Optional[Any] = None,
) -> ColliderHandle:
    """Add a static box spanning two corners; it is not registered with the listener."""
    position = (upper_left + bottom_right) / 2.0
    body = world.create_body(BodyDef(type=BodyType.STATIC, position=position))
    box = AABB(upper_left, bottom_right)
    return world.create_collider(
        body, ColliderDef(box, bounciness=0.0, friction=friction, is_trigger=False)
    )


def create_outer_wall(
    world: PhysicsWorld,
    half_size: Vec2,
    position: Vec2,
    friction: float,
    listener: Optional[Any] = None,
) -> ColliderHandle:
    """Add a static wall box centred on position and register it as a wall."""
    body = world.create_body(BodyDef(type=BodyType.STATIC, position=position))
    box = AABB(position - half_size, position + half_size)
    handle = world.create_collider(
        body, ColliderDef(box, bounciness=0.0, friction=friction, is_trigger=False)
    )
    if listener is not None:
        listener.register(ObjectType.WALL, handle)
    return handle