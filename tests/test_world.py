import pytest

from spacebagarre.world import (
    AABB,
    Body,
    BodyDef,
    BodyHandle,
    BodyType,
    Circle,
    ColliderDef,
    ColliderPair,
    PhysicsWorld,
    Vec2,
)


class RecordingListener:
    def __init__(self):
        self.events = []

    def on_collision_enter(self, pair):
        self.events.append(("collision_enter", pair))

    def on_collision_stay(self, pair):
        self.events.append(("collision_stay", pair))

    def on_collision_exit(self, pair):
        self.events.append(("collision_exit", pair))

    def on_trigger_enter(self, pair):
        self.events.append(("trigger_enter", pair))

    def on_trigger_stay(self, pair):
        self.events.append(("trigger_stay", pair))

    def on_trigger_exit(self, pair):
        self.events.append(("trigger_exit", pair))


def box_around(center, half):
    return AABB(center - Vec2(half, half), center + Vec2(half, half))


def test_vec2_arithmetic_round_trips():
    a, b = Vec2(2.0, 4.0), Vec2(-1.5, 3.0)
    assert (a + b) - b == a
    assert (a * 3) / 3 == a
    assert 2 * a == a * 2
    assert Vec2.zero() == Vec2()


def test_dynamic_body_falls_under_gravity():
    world = PhysicsWorld()
    start = Vec2(100.0, 100.0)
    handle = world.create_body(BodyDef(BodyType.DYNAMIC, start))
    world.step_simulation()
    body = world.get_body(handle)
    assert body.position.y > start.y
    assert body.velocity.y > 0.0
    assert body.position.x == start.x


def test_gravity_disabled_body_keeps_still():
    world = PhysicsWorld()
    start = Vec2(10.0, 10.0)
    handle = world.create_body(BodyDef(BodyType.DYNAMIC, start, gravity_enabled=False))
    world.step_simulation()
    assert world.get_body(handle).position == start


def test_static_body_does_not_move():
    world = PhysicsWorld()
    start = Vec2(5.0, 5.0)
    handle = world.create_body(BodyDef(BodyType.STATIC, start))
    world.get_body(handle).apply_force(Vec2(1000.0, 0.0))
    world.step_simulation()
    assert world.get_body(handle).position == start


def test_impulse_changes_velocity_by_impulse_over_mass():
    body = Body(type=BodyType.DYNAMIC, mass=1.0)
    body.apply_impulse(Vec2(0.0, -300.0))
    assert body.velocity == Vec2(0.0, -300.0)


def test_impulse_on_static_body_is_ignored():
    body = Body(type=BodyType.STATIC, velocity=Vec2(1.0, 2.0))
    body.apply_impulse(Vec2(50.0, 50.0))
    assert body.velocity == Vec2(1.0, 2.0)


def test_force_is_cleared_after_a_step():
    world = PhysicsWorld()
    handle = world.create_body(BodyDef(BodyType.DYNAMIC, gravity_enabled=False, mass=0.8))
    world.get_body(handle).apply_force(Vec2(100.0, 0.0))
    world.step_simulation()
    first = world.get_body(handle).velocity
    world.step_simulation()
    assert first.x > 0.0
    assert world.get_body(handle).velocity == first
    assert world.get_body(handle).force == Vec2.zero()


def test_trigger_enter_stay_exit():
    listener = RecordingListener()
    world = PhysicsWorld(gravity=Vec2.zero(), listener=listener)
    mover = world.create_body(BodyDef(BodyType.DYNAMIC, Vec2(0.0, 0.0)))
    mover_collider = world.create_collider(mover, ColliderDef(box_around(Vec2(0.0, 0.0), 5.0)))
    coin = world.create_body(BodyDef(BodyType.STATIC, Vec2(3.0, 0.0), gravity_enabled=False))
    coin_collider = world.create_collider(coin, ColliderDef(Circle(Vec2(3.0, 0.0), 2.0), is_trigger=True))
    pair = ColliderPair(mover_collider, coin_collider)

    world.step_simulation()
    world.step_simulation()
    world.get_body(mover).position = Vec2(100.0, 0.0)
    world.step_simulation()

    assert listener.events == [
        ("trigger_enter", pair),
        ("trigger_stay", pair),
        ("trigger_exit", pair),
    ]


def test_dynamic_box_is_pushed_out_of_static_floor():
    listener = RecordingListener()
    world = PhysicsWorld(listener=listener)
    floor = world.create_body(BodyDef(BodyType.STATIC, Vec2(100.0, 110.0)))
    world.create_collider(floor, ColliderDef(AABB(Vec2(0.0, 100.0), Vec2(200.0, 120.0))))
    box = world.create_body(BodyDef(BodyType.DYNAMIC, Vec2(100.0, 95.0)))
    world.create_collider(box, ColliderDef(box_around(Vec2(100.0, 95.0), 10.0)))

    world.step_simulation()

    body = world.get_body(box)
    assert body.position.y + 10.0 <= 100.0 + 1e-9
    assert body.velocity.y <= 1e-9
    assert [name for name, _ in listener.events] == ["collision_enter"]


def test_static_pairs_produce_no_events():
    listener = RecordingListener()
    world = PhysicsWorld(listener=listener)
    for _ in range(2):
        handle = world.create_body(BodyDef(BodyType.STATIC))
        world.create_collider(handle, ColliderDef(box_around(Vec2(), 5.0)))
    world.step_simulation()
    assert listener.events == []


def test_copy_from_is_independent():
    world = PhysicsWorld()
    handle = world.create_body(BodyDef(BodyType.DYNAMIC, Vec2(1.0, 1.0)))
    snapshot = PhysicsWorld()
    snapshot.copy_from(world)

    world.step_simulation()

    assert snapshot.get_body(handle).position == Vec2(1.0, 1.0)
    assert world.get_body(handle).position != snapshot.get_body(handle).position
    world.copy_from(snapshot)
    assert world.get_body(handle).position == Vec2(1.0, 1.0)


def test_copy_from_keeps_own_listener():
    listener = RecordingListener()
    world = PhysicsWorld(listener=listener)
    world.copy_from(PhysicsWorld())
    assert world.listener is listener


def test_unknown_body_raises():
    world = PhysicsWorld()
    with pytest.raises(KeyError):
        world.get_body(BodyHandle(3))
    with pytest.raises(KeyError):
        world.create_collider(BodyHandle(0), ColliderDef(Circle(Vec2(), 1.0)))


def test_aabb_center_and_half_size():
    box = AABB(Vec2(0.0, 0.0), Vec2(4.0, 2.0))
    assert box.center * 2 == box.min_bound + box.max_bound
    assert box.half_size * 2 == box.max_bound - box.min_bound