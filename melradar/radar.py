"""A rotating radar that detects, tracks and ranks incoming missiles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from melradar.mathutil import Rotator, Vec3, clamp
from melradar.missile import Missile
from melradar.world import Actor, Event

_TRACK_TIMEOUT = 5.0
_MAX_REPORTED_DETECTIONS = 4
_RANK_COLORS = ("red", "orange", "yellow")
_REPEAT_SUFFIX = {1: "", 2: " второй раз", 3: " третий раз"}


@dataclass
class MissileTrack:
    """What the radar knows about one missile."""

    missile: Optional[Actor] = None
    position: Vec3 = field(default_factory=Vec3)
    velocity: Vec3 = field(default_factory=Vec3)
    predicted_position: Vec3 = field(default_factory=Vec3)
    distance: float = 0.0
    threat_level: float = 0.0
    last_detection_time: float = 0.0
    detection_count: int = 0
    reported_trajectory: bool = False


@dataclass(frozen=True)
class RadarMessage:
    """A line the radar shows to the operator."""

    time: float
    text: str
    duration: float
    color: str


@dataclass(frozen=True)
class SweepLine:
    """A segment drawn to visualise the radar sweep."""

    start: Vec3
    end: Vec3
    color: str
    thickness: float


def _on_circle(center: Vec3, angle_degrees: float, radius: float) -> Vec3:
    angle = math.radians(angle_degrees)
    return center + Vec3(math.cos(angle), math.sin(angle), 0.0) * radius


class Radar(Actor):
    """Sweeps a sector around itself and keeps tracks of missiles it sees."""

    def __init__(
        self,
        location: Optional[Vec3] = None,
        rotation: Optional[Rotator] = None,
        *,
        scan_radius: float = 25000.0,
        scan_speed: float = 300.0,
        scan_interval: float = 0.05,
        scan_sector_width: float = 20.0,
        min_detection_height: float = 1000.0,
        max_detection_height: float = 25000.0,
        prediction_time: float = 2.0,
        threat_distance_weight: float = 0.4,
        threat_speed_weight: float = 0.3,
        threat_height_weight: float = 0.3,
        ping_sound: Optional[str] = None,
        collision_radius: Optional[float] = None,
    ) -> None:
        super().__init__(location, rotation, collision_radius=collision_radius)
        self.scan_radius = scan_radius
        self.scan_speed = scan_speed
        self.scan_interval = scan_interval
        self.scan_sector_width = scan_sector_width
        self.min_detection_height = min_detection_height
        self.max_detection_height = max_detection_height
        self.prediction_time = prediction_time
        self.threat_distance_weight = threat_distance_weight
        self.threat_speed_weight = threat_speed_weight
        self.threat_height_weight = threat_height_weight
        self.ping_sound = ping_sound

        self.current_scan_angle = 0.0
        self.time_since_last_scan = 0.0
        self.detected: list[MissileTrack] = []
        self.messages: list[RadarMessage] = []
        self.debug_lines: list[SweepLine] = []

    def _say(self, text: str, duration: float, color: str) -> None:
        now = self.world.time_seconds if self.world is not None else 0.0
        self.messages.append(RadarMessage(now, text, duration, color))

    def begin_play(self) -> None:
        """Reset the sweep."""
        self.current_scan_angle = 0.0
        self.time_since_last_scan = 0.0

    def tick(self, delta_time: float) -> None:
        """Rotate the beam, scan when due, drop stale tracks and redraw the sweep."""
        self.current_scan_angle += self.scan_speed * delta_time
        if self.current_scan_angle >= 360.0:
            self.current_scan_angle -= 360.0

        self.time_since_last_scan += delta_time
        if self.time_since_last_scan >= self.scan_interval:
            self.perform_scan()
            self.time_since_last_scan = 0.0

        self.cleanup_old_detections()

        half = self.scan_sector_width * 0.5
        start = self.location
        self.debug_lines = [
            SweepLine(start, _on_circle(start, self.current_scan_angle, self.scan_radius), "green", 2.0),
            SweepLine(start, _on_circle(start, self.current_scan_angle - half, self.scan_radius), "yellow", 1.0),
            SweepLine(start, _on_circle(start, self.current_scan_angle + half, self.scan_radius), "yellow", 1.0),
        ]

    def perform_scan(self) -> None:
        """Look for missiles in the beam, rank tracks and report the top three."""
        world = self._in_world()
        for missile in world.actors_of_type(Missile):
            location = missile.location
            if not self.is_in_height_range(location):
                continue
            if self.is_in_scan_sector(location):
                self.update_missile_data(missile)

        self.sort_by_threat()

        for rank, track in enumerate(self.detected[:3], start=1):
            if track.missile is None or track.missile.world is None:
                continue
            p = track.position
            text = (
                f"РАДАР #{rank}: Ракета обнаружена! Угроза: {track.threat_level:.2f} | "
                f"Координаты: X={p.x:.0f}, Y={p.y:.0f}, Z={p.z:.0f} | "
                f"Скорость: {track.velocity.size():.0f} м/с"
            )
            self._say(text, 0.1, _RANK_COLORS[rank - 1])

    def is_in_scan_sector(self, location: Vec3) -> bool:
        """True if ``location`` is within range and inside the current beam sector."""
        offset = (location - self.location).with_z(0.0)
        if offset.size() > self.scan_radius:
            return False
        missile_angle = math.degrees(math.atan2(offset.y, offset.x))
        if missile_angle < 0.0:
            missile_angle += 360.0
        difference = abs(missile_angle - self.current_scan_angle)
        if difference > 180.0:
            difference = 360.0 - difference
        return difference <= self.scan_sector_width * 0.5

    def is_in_height_range(self, location: Vec3) -> bool:
        """True if ``location`` is at a height the radar can see."""
        return self.min_detection_height <= location.z <= self.max_detection_height

    def _find_track(self, missile: Actor) -> tuple[int, Optional[MissileTrack]]:
        for number, track in enumerate(self.detected, start=1):
            if track.missile is missile:
                return number, track
        return 0, None

    def update_missile_data(self, missile: Optional[Actor]) -> Optional[MissileTrack]:
        """Record a sighting of ``missile`` and report the first four of them."""
        if missile is None or missile.world is None:
            return None

        world = self._in_world()
        position = missile.location
        velocity = missile.velocity
        number, track = self._find_track(missile)

        if track is None:
            track = MissileTrack(
                missile=missile,
                position=position,
                velocity=velocity,
                distance=(position - self.location).size(),
                last_detection_time=world.time_seconds,
                detection_count=1,
            )
            self.predict_trajectory(track)
            track.threat_level = self.threat_level(track)
            self.detected.append(track)
            self._say(
                f"Ракета #{len(self.detected)} обнаружена! "
                f"Координаты: X={position.x:.0f}, Y={position.y:.0f}, Z={position.z:.0f}",
                3.0,
                "yellow",
            )
            self.play_ping()
            return track

        track.position = position
        track.velocity = velocity
        track.distance = (position - self.location).size()
        track.last_detection_time = world.time_seconds
        if track.reported_trajectory:
            return track
        if track.detection_count < _MAX_REPORTED_DETECTIONS:
            track.detection_count += 1
        self.predict_trajectory(track)
        track.threat_level = self.threat_level(track)

        if track.detection_count in _REPEAT_SUFFIX:
            self._say(
                f"Ракета #{number} обнаружена{_REPEAT_SUFFIX[track.detection_count]}! "
                f"Координаты: X={position.x:.0f}, Y={position.y:.0f}, Z={position.z:.0f}",
                3.0,
                "yellow",
            )
            self.play_ping()
        elif track.detection_count == _MAX_REPORTED_DETECTIONS:
            time_to_ground = self.time_to_impact(track)
            impact = position + velocity * time_to_ground
            self._say(
                f"Траектория ракеты #{number}:\n"
                f"Скорость: X={velocity.x:.2f}, Y={velocity.y:.2f}, Z={velocity.z:.2f}\n"
                f"Время до падения: {time_to_ground:.2f} сек\n"
                f"Точка падения: X={impact.x:.0f}, Y={impact.y:.0f}, Z={impact.z:.0f}",
                10.0,
                "red",
            )
            self.play_ping()
            track.reported_trajectory = True
        return track

    def predict_trajectory(self, track: MissileTrack) -> None:
        """Extrapolate the track's position, stopping at the ground when diving."""
        if track.velocity.size_squared() < 1.0:
            return
        track.predicted_position = track.position + track.velocity * self.prediction_time
        if track.velocity.z < -100.0:
            time_to_ground = -track.position.z / track.velocity.z
            if 0.0 < time_to_ground < self.prediction_time:
                track.predicted_position = (
                    track.position + track.velocity * time_to_ground
                ).with_z(0.0)

    def time_to_impact(self, track: MissileTrack) -> float:
        """Estimated seconds until the tracked missile reaches the ground."""
        position = track.position
        velocity = track.velocity
        if position.z <= 0.0:
            return 0.0

        if velocity.z >= 0.0:
            time_to_descent = velocity.z / 1500.0 + 2.0
            if position.z > 15000.0:
                time_to_descent += 5.0
            return time_to_descent

        gravity = 1500.0
        drag_coefficient = 0.1
        effective_gravity = gravity * (1.0 + drag_coefficient * velocity.size() / 1000.0)
        a = -0.5 * effective_gravity
        b = velocity.z
        c = position.z
        discriminant = b * b - 4.0 * a * c
        if discriminant >= 0.0:
            root = math.sqrt(discriminant)
            t1 = (-b + root) / (2.0 * a)
            t2 = (-b - root) / (2.0 * a)
            time_to_ground = t1 if t1 > 0.0 else t2
            if time_to_ground > 0.0:
                return time_to_ground
        return -position.z / velocity.z

    def threat_level(self, track: MissileTrack) -> float:
        """Threat score in [0, 1] from distance, speed, height and heading."""
        distance_factor = clamp(1.0 - track.distance / self.scan_radius, 0.0, 1.0)
        speed_factor = clamp(track.velocity.size() / 2000.0, 0.0, 1.0)
        height_factor = clamp(1.0 - track.position.z / self.max_detection_height, 0.0, 1.0)
        to_radar = (self.location - track.position).safe_normal()
        direction_factor = clamp(track.velocity.safe_normal().dot(to_radar), 0.0, 1.0)
        threat = (
            distance_factor * self.threat_distance_weight
            + speed_factor * self.threat_speed_weight
            + height_factor * self.threat_height_weight
            + direction_factor * 0.2
        )
        return clamp(threat, 0.0, 1.0)

    def cleanup_old_detections(self) -> None:
        """Drop tracks not seen for more than five seconds."""
        now = self._in_world().time_seconds
        self.detected = [
            track for track in self.detected if now - track.last_detection_time <= _TRACK_TIMEOUT
        ]

    def sort_by_threat(self) -> None:
        """Order tracks from most to least threatening."""
        self.detected.sort(key=lambda track: track.threat_level, reverse=True)

    def impact_report(self, track: MissileTrack) -> str:
        """Show and return a trajectory analysis; raise ValueError if none is possible."""
        if track.missile is None or track.missile.world is None:
            raise ValueError("РАДАР: Ошибка - ракета недействительна")
        position = track.position
        velocity = track.velocity
        if velocity.size_squared() < 1.0:
            raise ValueError("РАДАР: Ошибка - ракета не движется")
        if abs(velocity.z) <= 0.1:
            raise ValueError("РАДАР: Ошибка - недостаточная вертикальная скорость")
        time_to_ground = -position.z / velocity.z
        if time_to_ground <= 0.0:
            raise ValueError("РАДАР: Ошибка - ракета уже упала")

        impact = position + velocity * time_to_ground
        text = (
            "РАДАР: Анализ траектории ракеты:\n"
            f"Текущая скорость: X={velocity.x:.2f}, Y={velocity.y:.2f}, Z={velocity.z:.2f}\n"
            f"Время до падения: {time_to_ground:.2f} секунд\n"
            f"Точка падения: X={impact.x:.2f}, Y={impact.y:.2f}, Z={impact.z:.2f}\n"
            f"Уровень угрозы: {track.threat_level:.2f}"
        )
        self._say(text, 10.0, "red")
        return text

    def play_ping(self) -> None:
        """Play the detection ping, if the radar has one."""
        if self.ping_sound and self.world is not None:
            self.world.events.append(
                Event(self.world.time_seconds, "sound", self.ping_sound, self.location)
            )