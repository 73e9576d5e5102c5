import pytest

from melradar.mathutil import Vec3
from melradar.missile import Missile, MissilePhase
from melradar.world import Actor, World


def small_missile(**kwargs):
    params = dict(
        target_height=2000.0,
        horizontal_height=1700.0,
        horizontal_distance=500.0,
    )
    params.update(kwargs)
    return Missile(Vec3(3000.0, 0.0, 100.0), **params)


def test_begin_play_climbs_straight_up():
    world = World()
    missile = world.spawn(small_missile())
    assert missile.phase is MissilePhase.ASCENDING
    assert missile.velocity == Vec3(0.0, 0.0, missile.speed)


def test_launch_sound_is_emitted():
    world = World()
    missile = world.spawn(small_missile(launch_sound="launch"))
    assert [(e.kind, e.name) for e in world.events] == [("sound", "launch")]
    assert world.events[0].location == missile.location


def test_ascending_tick_moves_up_by_speed():
    world = World()
    missile = world.spawn(small_missile())
    start = missile.location
    world.advance(0.1)
    assert missile.location.x == start.x
    assert missile.location.z == pytest.approx(start.z + missile.speed * 0.1)


def test_transition_starts_at_target_height():
    world = World()
    missile = world.spawn(small_missile())
    while missile.phase is MissilePhase.ASCENDING:
        world.advance(0.01)
    assert missile.phase is MissilePhase.TRANSITION
    assert missile.location.z >= missile.target_height
    assert missile.target_direction.size() == pytest.approx(1.0)


def test_horizontal_end_point_at_cruise_height():
    world = World()
    missile = world.spawn(small_missile())
    for _ in range(10000):
        if missile.phase is MissilePhase.HORIZONTAL:
            break
        world.advance(0.01)
    assert missile.phase is MissilePhase.HORIZONTAL
    assert missile.horizontal_end.z == missile.horizontal_height
    flat_start = missile.horizontal_start.with_z(0.0)
    flat_end = missile.horizontal_end.with_z(0.0)
    assert flat_end.size() < flat_start.size()


def test_full_flight_visits_phases_in_order_and_explodes():
    world = World()
    missile = world.spawn(small_missile(explosion_sound="bang"))
    seen = [missile.phase]
    for _ in range(20000):
        if missile.world is None:
            break
        world.advance(0.01)
        if missile.phase is not seen[-1]:
            seen.append(missile.phase)
    assert seen == [
        MissilePhase.ASCENDING,
        MissilePhase.TRANSITION,
        MissilePhase.HORIZONTAL,
        MissilePhase.DESCENT,
    ]
    assert missile.world is None
    assert missile not in world.actors
    assert ("sound", "bang") in [(e.kind, e.name) for e in world.events]


def test_update_rotation_converges_nose_up_while_ascending():
    world = World()
    missile = world.spawn(small_missile())
    for _ in range(300):
        missile.update_rotation(0.1)
    assert missile.rotation.pitch == pytest.approx(-90.0, abs=1e-3)


def test_check_target_collision_only_in_descent():
    world = World()
    missile = world.spawn(small_missile())
    missile.location = Vec3(0.0, 0.0, -5.0)
    assert missile.check_target_collision() is False
    missile.phase = MissilePhase.DESCENT
    assert missile.check_target_collision() is True


def test_check_target_collision_clear_air():
    world = World()
    missile = world.spawn(small_missile())
    missile.phase = MissilePhase.DESCENT
    missile.location = Vec3(0.0, 0.0, 5000.0)
    assert missile.check_target_collision() is False


def test_explode_reports_victims_and_removes_missile():
    world = World()
    missile = world.spawn(small_missile(explosion_effect="boom", explosion_sound="bang"))
    near = world.spawn(Actor(missile.location + Vec3(500.0, 0.0, 0.0), collision_radius=10.0))
    world.spawn(Actor(missile.location + Vec3(50000.0, 0.0, 0.0), collision_radius=10.0))
    victims = missile.explode()
    assert victims == [near]
    assert missile.world is None
    assert [(e.kind, e.name) for e in world.events] == [("effect", "boom"), ("sound", "bang")]


def test_explode_outside_world_raises():
    missile = small_missile()
    with pytest.raises(RuntimeError):
        missile.explode()