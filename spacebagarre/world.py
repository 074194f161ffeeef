"""Game constants, 2D vector maths and a small rigid-body world with contact events."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Union

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080
FIXED_TIME_STEP = 1.0 / 60.0


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> "Vec2":
        return cls(0.0, 0.0)

    def __add__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Vec2":
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)


def _dot(a: Vec2, b: Vec2) -> float:
    return a.x * b.x + a.y * b.y


DEFAULT_GRAVITY = Vec2(0.0, 500.0)


@dataclass(frozen=True)
class AABB:
    """An axis-aligned box given by its upper-left and bottom-right corners."""

    min_bound: Vec2
    max_bound: Vec2

    @property
    def center(self) -> Vec2:
        return (self.min_bound + self.max_bound) / 2.0

    @property
    def half_size(self) -> Vec2:
        return (self.max_bound - self.min_bound) / 2.0

    def translated(self, delta: Vec2) -> "AABB":
        return AABB(self.min_bound + delta, self.max_bound + delta)


@dataclass(frozen=True)
class Circle:
    """A circle given by its centre and radius."""

    center: Vec2
    radius: float

    def translated(self, delta: Vec2) -> "Circle":
        return Circle(self.center + delta, self.radius)


Shape = Union[AABB, Circle]


def _overlap(a: Shape, b: Shape) -> bool:
    if isinstance(a, AABB) and isinstance(b, AABB):
        return (
            a.min_bound.x < b.max_bound.x
            and b.min_bound.x < a.max_bound.x
            and a.min_bound.y < b.max_bound.y
            and b.min_bound.y < a.max_bound.y
        )
    if isinstance(a, Circle) and isinstance(b, Circle):
        d = a.center - b.center
        reach = a.radius + b.radius
        return _dot(d, d) < reach * reach
    box, circle = (a, b) if isinstance(a, AABB) else (b, a)
    closest = Vec2(
        min(max(circle.center.x, box.min_bound.x), box.max_bound.x),
        min(max(circle.center.y, box.min_bound.y), box.max_bound.y),
    )
    d = circle.center - closest
    return _dot(d, d) < circle.radius * circle.radius


class BodyType(enum.Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class ObjectType(enum.Enum):
    """What a collider stands for in the game."""

    PLAYER = "player"
    WALL = "wall"
    COIN = "coin"
    OTHER = "other"


@dataclass(frozen=True)
class BodyHandle:
    id: int


@dataclass(frozen=True)
class ColliderHandle:
    id: int


@dataclass(frozen=True)
class ColliderPair:
    collider_a: ColliderHandle
    collider_b: ColliderHandle


@dataclass(frozen=True)
class BodyDef:
    """Initial values for a body created in a world."""

    type: BodyType = BodyType.STATIC
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()
    gravity_enabled: bool = True
    mass: float = 1.0


@dataclass(frozen=True)
class ColliderDef:
    """Shape and surface properties of a collider."""

    shape: Shape
    bounciness: float = 0.0
    friction: float = 0.0
    is_trigger: bool = False


@dataclass
class Body:
    """A point mass moved by the world."""

    type: BodyType = BodyType.STATIC
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()
    gravity_enabled: bool = True
    mass: float = 1.0
    force: Vec2 = Vec2()

    @property
    def inverse_mass(self) -> float:
        if self.type is not BodyType.DYNAMIC or self.mass <= 0.0:
            return 0.0
        return 1.0 / self.mass

    def apply_force(self, force: Vec2) -> None:
        """Accumulate a force applied during the next step."""
        if self.type is BodyType.DYNAMIC:
            self.force = self.force + force

    def apply_impulse(self, impulse: Vec2) -> None:
        """Change the velocity at once by impulse / mass."""
        self.velocity = self.velocity + impulse * self.inverse_mass


@dataclass(frozen=True)
class _Collider:
    handle: ColliderHandle
    body: BodyHandle
    local_shape: Shape
    origin: Vec2
    bounciness: float
    friction: float
    is_trigger: bool


class _ContactListener(Protocol):
    def on_collision_enter(self, pair: ColliderPair) -> None: ...
    def on_collision_stay(self, pair: ColliderPair) -> None: ...
    def on_collision_exit(self, pair: ColliderPair) -> None: ...
    def on_trigger_enter(self, pair: ColliderPair) -> None: ...
    def on_trigger_stay(self, pair: ColliderPair) -> None: ...
    def on_trigger_exit(self, pair: ColliderPair) -> None: ...


@dataclass
class PhysicsWorld:
    """Bodies, their colliders and the contacts between them."""

    gravity: Vec2 = DEFAULT_GRAVITY
    time_step: float = FIXED_TIME_STEP
    listener: Optional[_ContactListener] = None
    _bodies: list = field(default_factory=list, repr=False)
    _colliders: list = field(default_factory=list, repr=False)
    _contacts: dict = field(default_factory=dict, repr=False)

    def create_body(self, body_def: BodyDef) -> BodyHandle:
        handle = BodyHandle(len(self._bodies))
        self._bodies.append(
            Body(
                type=body_def.type,
                position=body_def.position,
                velocity=body_def.velocity,
                gravity_enabled=body_def.gravity_enabled,
                mass=body_def.mass,
            )
        )
        return handle

    def create_collider(self, body_handle: BodyHandle, collider_def: ColliderDef) -> ColliderHandle:
        body = self.get_body(body_handle)
        handle = ColliderHandle(len(self._colliders))
        self._colliders.append(
            _Collider(
                handle=handle,
                body=body_handle,
                local_shape=collider_def.shape,
                origin=body.position,
                bounciness=collider_def.bounciness,
                friction=collider_def.friction,
                is_trigger=collider_def.is_trigger,
            )
        )
        return handle

    def get_body(self, handle: BodyHandle) -> Body:
        if not 0 <= handle.id < len(self._bodies):
            raise KeyError(f"unknown body {handle.id}")
        return self._bodies[handle.id]

    def step_simulation(self) -> None:
        """Advance every dynamic body by one time step and report contacts."""
        dt = self.time_step
        for body in self._bodies:
            if body.type is not BodyType.DYNAMIC:
                continue
            acceleration = body.force * body.inverse_mass
            if body.gravity_enabled:
                acceleration = acceleration + self.gravity
            body.velocity = body.velocity + acceleration * dt
            body.position = body.position + body.velocity * dt
            body.force = Vec2.zero()
        self._update_contacts()

    def copy_from(self, other: "PhysicsWorld") -> None:
        """Take over the whole simulated state of another world, keeping this listener."""
        self.gravity = other.gravity
        self.time_step = other.time_step
        self._bodies = [replace(body) for body in other._bodies]
        self._colliders = list(other._colliders)
        self._contacts = dict(other._contacts)

    def _world_shape(self, collider: _Collider) -> Shape:
        body = self._bodies[collider.body.id]
        return collider.local_shape.translated(body.position - collider.origin)

    def _update_contacts(self) -> None:
        current: dict[tuple[int, int], bool] = {}
        for a, b in itertools.combinations(self._colliders, 2):
            if a.body == b.body:
                continue
            body_a, body_b = self._bodies[a.body.id], self._bodies[b.body.id]
            if body_a.type is BodyType.STATIC and body_b.type is BodyType.STATIC:
                continue
            if not _overlap(self._world_shape(a), self._world_shape(b)):
                continue
            trigger = a.is_trigger or b.is_trigger
            key = (a.handle.id, b.handle.id)
            current[key] = trigger
            pair = ColliderPair(a.handle, b.handle)
            stage = "stay" if key in self._contacts else "enter"
            self._notify(trigger, stage, pair)
            if not trigger:
                self._resolve(a, b)

        for key, trigger in self._contacts.items():
            if key not in current:
                pair = ColliderPair(ColliderHandle(key[0]), ColliderHandle(key[1]))
                self._notify(trigger, "exit", pair)
        self._contacts = current

    def _notify(self, trigger: bool, stage: str, pair: ColliderPair) -> None:
        if self.listener is None:
            return
        kind = "trigger" if trigger else "collision"
        getattr(self.listener, f"on_{kind}_{stage}")(pair)

    def _resolve(self, a: _Collider, b: _Collider) -> None:
        shape_a, shape_b = self._world_shape(a), self._world_shape(b)
        if not (isinstance(shape_a, AABB) and isinstance(shape_b, AABB)):
            return
        depth_x = min(shape_a.max_bound.x, shape_b.max_bound.x) - max(shape_a.min_bound.x, shape_b.min_bound.x)
        depth_y = min(shape_a.max_bound.y, shape_b.max_bound.y) - max(shape_a.min_bound.y, shape_b.min_bound.y)
        if depth_x <= 0.0 or depth_y <= 0.0:
            return
        body_a, body_b = self._bodies[a.body.id], self._bodies[b.body.id]
        inv_a, inv_b = body_a.inverse_mass, body_b.inverse_mass
        total = inv_a + inv_b
        if total == 0.0:
            return

        if depth_x < depth_y:
            sign = 1.0 if shape_b.center.x >= shape_a.center.x else -1.0
            normal, depth = Vec2(sign, 0.0), depth_x
        else:
            sign = 1.0 if shape_b.center.y >= shape_a.center.y else -1.0
            normal, depth = Vec2(0.0, sign), depth_y

        body_a.position = body_a.position - normal * (depth * inv_a / total)
        body_b.position = body_b.position + normal * (depth * inv_b / total)

        approach = _dot(body_b.velocity - body_a.velocity, normal)
        if approach < 0.0:
            restitution = max(a.bounciness, b.bounciness)
            magnitude = -(1.0 + restitution) * approach / total
            body_a.velocity = body_a.velocity - normal * (magnitude * inv_a)
            body_b.velocity = body_b.velocity + normal * (magnitude * inv_b)