from spacebagarre.level import (
    WALL_HALF_THICKNESS,
    create_level,
    create_outer_wall,
    create_static_aabb_from_corners,
)
from spacebagarre.world import (
    AABB,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    BodyDef,
    BodyHandle,
    BodyType,
    ColliderDef,
    ObjectType,
    PhysicsWorld,
    Vec2,
)


class _Recorder:
    def __init__(self):
        self.registered = []
        self.entered = []

    def register(self, object_type, handle):
        self.registered.append((object_type, handle))

    def on_collision_enter(self, pair):
        self.entered.append(pair)

    def on_collision_stay(self, pair):
        pass

    def on_collision_exit(self, pair):
        pass

    def on_trigger_enter(self, pair):
        pass

    def on_trigger_stay(self, pair):
        pass

    def on_trigger_exit(self, pair):
        pass


def test_create_level_registers_four_walls():
    world = PhysicsWorld()
    recorder = _Recorder()
    handles = create_level(world, recorder)
    assert len(handles) == 4
    assert recorder.registered == [(ObjectType.WALL, handle) for handle in handles]


def test_create_level_places_walls_on_screen_borders():
    world = PhysicsWorld()
    create_level(world, None)
    positions = [world.get_body(BodyHandle(i)).position for i in range(4)]
    assert positions == [
        Vec2(WINDOW_WIDTH / 2.0, WINDOW_HEIGHT),
        Vec2(WINDOW_WIDTH / 2.0, 0.0),
        Vec2(0.0, WINDOW_HEIGHT / 2.0),
        Vec2(WINDOW_WIDTH, WINDOW_HEIGHT / 2.0),
    ]
    assert all(world.get_body(BodyHandle(i)).type is BodyType.STATIC for i in range(4))


def test_outer_wall_reports_collision_with_falling_box():
    world = PhysicsWorld()
    recorder = _Recorder()
    world.listener = recorder
    wall = create_outer_wall(
        world,
        Vec2(WINDOW_WIDTH / 2.0, WALL_HALF_THICKNESS),
        Vec2(WINDOW_WIDTH / 2.0, WINDOW_HEIGHT),
        0.0,
        recorder,
    )
    start = Vec2(WINDOW_WIDTH / 2.0, WINDOW_HEIGHT - 40.0)
    body = world.create_body(BodyDef(type=BodyType.DYNAMIC, position=start))
    half = Vec2(20.0, 20.0)
    box = world.create_collider(body, ColliderDef(AABB(start - half, start + half)))
    world.step_simulation()
    assert len(recorder.entered) == 1
    pair = recorder.entered[0]
    assert {pair.collider_a, pair.collider_b} == {wall, box}


def test_box_far_from_wall_does_not_collide():
    world = PhysicsWorld()
    recorder = _Recorder()
    world.listener = recorder
    create_level(world, recorder)
    start = Vec2(WINDOW_WIDTH / 2.0, WINDOW_HEIGHT / 2.0)
    body = world.create_body(BodyDef(type=BodyType.DYNAMIC, position=start))
    half = Vec2(20.0, 20.0)
    world.create_collider(body, ColliderDef(AABB(start - half, start + half)))
    world.step_simulation()
    assert recorder.entered == []


def test_static_aabb_from_corners_is_centred_and_not_registered():
    world = PhysicsWorld()
    recorder = _Recorder()
    handle = create_static_aabb_from_corners(world, Vec2(0.0, 0.0), Vec2(100.0, 200.0), 0.5, recorder)
    assert handle.id == 0
    body = world.get_body(BodyHandle(0))
    assert body.position == Vec2(50.0, 100.0)
    assert body.type is BodyType.STATIC
    assert recorder.registered == []