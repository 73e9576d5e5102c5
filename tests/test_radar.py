import math

import pytest

from melradar.mathutil import Vec3
from melradar.missile import Missile
from melradar.radar import MissileTrack, Radar
from melradar.world import World


@pytest.fixture
def world():
    return World()


@pytest.fixture
def radar(world):
    return world.spawn(Radar(ping_sound="ping"))


def _missile(world, location, velocity=Vec3()):
    missile = world.spawn(Missile(location))
    missile.velocity = velocity
    return missile


def test_height_range_bounds(radar):
    assert radar.is_in_height_range(Vec3(0, 0, 1000.0))
    assert radar.is_in_height_range(Vec3(0, 0, 25000.0))
    assert not radar.is_in_height_range(Vec3(0, 0, 999.0))
    assert not radar.is_in_height_range(Vec3(0, 0, 25001.0))


def test_scan_sector(radar):
    radar.current_scan_angle = 0.0
    assert radar.is_in_scan_sector(Vec3(10000.0, 0.0, 5000.0))
    assert not radar.is_in_scan_sector(Vec3(0.0, 10000.0, 5000.0))
    assert not radar.is_in_scan_sector(Vec3(30000.0, 0.0, 5000.0))


def test_scan_sector_wraps_around(radar):
    radar.current_scan_angle = 355.0
    inside = Vec3(math.cos(math.radians(4.0)) * 1000, math.sin(math.radians(4.0)) * 1000, 0)
    outside = Vec3(math.cos(math.radians(30.0)) * 1000, math.sin(math.radians(30.0)) * 1000, 0)
    assert radar.is_in_scan_sector(inside)
    assert not radar.is_in_scan_sector(outside)


def test_tick_rotates_beam(world, radar):
    world.advance(0.1)
    assert radar.current_scan_angle == pytest.approx(30.0)
    assert len(radar.debug_lines) == 3


def test_beam_angle_wraps(world, radar):
    radar.current_scan_angle = 350.0
    world.advance(0.1)
    assert radar.current_scan_angle == pytest.approx(20.0)
    for _ in range(100):
        world.advance(0.07)
        assert 0.0 <= radar.current_scan_angle < 360.0


def test_first_detection_message_and_ping(world, radar):
    missile = _missile(world, Vec3(5000.0, 0.0, 2000.0))
    track = radar.update_missile_data(missile)
    assert track.detection_count == 1
    assert radar.detected == [track]
    assert radar.messages[-1].text == "Ракета #1 обнаружена! Координаты: X=5000, Y=0, Z=2000"
    pings = [e for e in world.events if e.kind == "sound" and e.name == "ping"]
    assert len(pings) == 1


def test_detections_stop_after_trajectory(world, radar):
    missile = _missile(world, Vec3(5000.0, 0.0, 2000.0), Vec3(-100.0, 0.0, -500.0))
    for _ in range(4):
        track = radar.update_missile_data(missile)
    assert track.detection_count == 4
    assert track.reported_trajectory
    assert "второй раз" in radar.messages[1].text
    assert "третий раз" in radar.messages[2].text
    assert radar.messages[3].text.startswith("Траектория ракеты #1:")
    missile.location = Vec3(4000.0, 0.0, 1500.0)
    radar.update_missile_data(missile)
    assert len(radar.messages) == 4
    assert track.detection_count == 4
    assert track.position == missile.location


def test_update_ignores_missile_outside_world(radar):
    assert radar.update_missile_data(Missile(Vec3(1.0, 2.0, 3.0))) is None
    assert radar.detected == []


def test_predict_without_motion_keeps_prediction(radar):
    track = MissileTrack(position=Vec3(1.0, 2.0, 3000.0))
    radar.predict_trajectory(track)
    assert track.predicted_position == Vec3()


def test_predict_straight_line(radar):
    track = MissileTrack(position=Vec3(0.0, 0.0, 3000.0), velocity=Vec3(100.0, 0.0, 0.0))
    radar.predict_trajectory(track)
    assert track.predicted_position == track.position + track.velocity * radar.prediction_time


def test_predict_stops_at_ground(radar):
    track = MissileTrack(position=Vec3(50.0, 60.0, 1000.0), velocity=Vec3(0.0, 0.0, -1000.0))
    radar.predict_trajectory(track)
    assert track.predicted_position.z == 0.0
    assert track.predicted_position.x == 50.0


def test_time_to_impact_on_ground(radar):
    track = MissileTrack(position=Vec3(0, 0, 0.0), velocity=Vec3(0, 0, -100.0))
    assert radar.time_to_impact(track) == 0.0


def test_time_to_impact_climbing_adds_cruise_time_when_high(radar):
    low = MissileTrack(position=Vec3(0, 0, 10000.0), velocity=Vec3(0, 0, 1500.0))
    high = MissileTrack(position=Vec3(0, 0, 16000.0), velocity=Vec3(0, 0, 1500.0))
    assert radar.time_to_impact(high) - radar.time_to_impact(low) == pytest.approx(5.0)


def test_time_to_impact_descending_is_faster_than_linear(radar):
    track = MissileTrack(position=Vec3(0, 0, 8000.0), velocity=Vec3(300.0, 0, -1000.0))
    t = radar.time_to_impact(track)
    assert 0.0 < t < 8.0


def test_closer_missile_is_more_threatening(world, radar):
    far = radar.update_missile_data(_missile(world, Vec3(20000, 0, 5000), Vec3(-1000, 0, 0)))
    near = radar.update_missile_data(_missile(world, Vec3(2000, 0, 5000), Vec3(-1000, 0, 0)))
    assert near.threat_level > far.threat_level
    radar.sort_by_threat()
    assert radar.detected[0] is near
    assert all(0.0 <= t.threat_level <= 1.0 for t in radar.detected)


def test_heading_towards_radar_is_more_threatening(radar):
    towards = MissileTrack(position=Vec3(5000, 0, 3000), velocity=Vec3(-800, 0, 0), distance=5000)
    away = MissileTrack(position=Vec3(5000, 0, 3000), velocity=Vec3(800, 0, 0), distance=5000)
    assert radar.threat_level(towards) > radar.threat_level(away)


def test_cleanup_removes_stale_tracks(world, radar):
    radar.update_missile_data(_missile(world, Vec3(5000, 0, 2000)))
    world.time_seconds = 5.0
    radar.cleanup_old_detections()
    assert len(radar.detected) == 1
    world.time_seconds = 5.5
    radar.cleanup_old_detections()
    assert radar.detected == []


def test_perform_scan_detects_only_visible(world, radar):
    seen = _missile(world, Vec3(10000, 0, 5000))
    _missile(world, Vec3(0, 10000, 5000))
    _missile(world, Vec3(10000, 0, 500))
    radar.current_scan_angle = 0.0
    radar.perform_scan()
    assert [t.missile for t in radar.detected] == [seen]
    assert radar.messages[-1].text.startswith("РАДАР #1: Ракета обнаружена! Угроза:")
    assert radar.messages[-1].color == "red"


def test_impact_report(world, radar):
    missile = _missile(world, Vec3(0, 0, 1000.0), Vec3(100.0, 0.0, -500.0))
    track = radar.update_missile_data(missile)
    text = radar.impact_report(track)
    assert "Точка падения: X=200.00, Y=0.00, Z=0.00" in text
    assert radar.messages[-1].text == text


@pytest.mark.parametrize(
    "velocity",
    [Vec3(0.0, 0.0, 0.0), Vec3(500.0, 0.0, 0.05), Vec3(0.0, 0.0, 500.0)],
)
def test_impact_report_errors(world, radar, velocity):
    track = radar.update_missile_data(_missile(world, Vec3(0, 0, 1000.0), velocity))
    with pytest.raises(ValueError):
        radar.impact_report(track)


def test_impact_report_needs_live_missile(radar):
    track = MissileTrack(missile=Missile(), velocity=Vec3(0, 0, -100.0), position=Vec3(0, 0, 50.0))
    with pytest.raises(ValueError, match="недействительна"):
        radar.impact_report(track)


def test_play_ping_without_sound(world):
    silent = world.spawn(Radar())
    silent.play_ping()
    assert world.events == []