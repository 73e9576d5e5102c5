"""A missile that climbs, turns, cruises and dives onto its target point."""

from __future__ import annotations

import enum
from typing import Optional

from melradar.mathutil import Rotator, Vec3, rinterp_to, smooth_step
from melradar.world import Actor, Event

_ARRIVAL_DISTANCE = 100.0
_TRACE_LENGTH = 100.0


class MissilePhase(enum.Enum):
    ASCENDING = "ascending"
    TRANSITION = "transition"
    HORIZONTAL = "horizontal"
    DESCENT = "descent"


class Missile(Actor):
    """A missile flying a scripted climb-cruise-dive profile."""

    def __init__(
        self,
        location: Optional[Vec3] = None,
        rotation: Optional[Rotator] = None,
        *,
        target_height: float = 20000.0,
        horizontal_height: float = 17000.0,
        horizontal_distance: float = 5000.0,
        speed: float = 1500.0,
        rotation_speed: float = 2.0,
        transition_time: float = 1.0,
        gravity: float = 1500.0,
        explosion_radius: float = 3000.0,
        min_target_distance: float = 5000.0,
        launch_sound: Optional[str] = None,
        explosion_effect: Optional[str] = None,
        explosion_sound: Optional[str] = None,
        collision_radius: Optional[float] = None,
    ) -> None:
        super().__init__(location, rotation, collision_radius=collision_radius)
        self.target_height = target_height
        self.horizontal_height = horizontal_height
        self.horizontal_distance = horizontal_distance
        self.speed = speed
        self.rotation_speed = rotation_speed
        self.transition_time = transition_time
        self.gravity = gravity
        self.explosion_radius = explosion_radius
        self.min_target_distance = min_target_distance
        self.launch_sound = launch_sound
        self.explosion_effect = explosion_effect
        self.explosion_sound = explosion_sound

        self.phase = MissilePhase.ASCENDING
        self.initial_direction = Vec3(0.0, 0.0, 1.0)
        self.target_direction = Vec3()
        self.target_point = Vec3()
        self.transition_elapsed = 0.0
        self.horizontal_start = Vec3()
        self.horizontal_end = Vec3()

    def _emit(self, kind: str, name: str) -> None:
        world = self._in_world()
        world.events.append(Event(world.time_seconds, kind, name, self.location))

    def begin_play(self) -> None:
        """Start climbing straight up and play the launch sound."""
        self.phase = MissilePhase.ASCENDING
        self.transition_elapsed = 0.0
        self.initial_direction = Vec3(0.0, 0.0, 1.0)
        self.target_point = Vec3()
        self.velocity = self.initial_direction * self.speed
        if self.launch_sound:
            self._emit("sound", self.launch_sound)

    def tick(self, delta_time: float) -> None:
        """Advance the flight profile, move, turn and check for impact."""
        if self.phase is MissilePhase.ASCENDING:
            self.velocity = Vec3(0.0, 0.0, self.speed)
            if self.location.z >= self.target_height:
                self.phase = MissilePhase.TRANSITION
                self.transition_elapsed = 0.0
                self.target_direction = (self.target_point - self.location).safe_normal()

        elif self.phase is MissilePhase.TRANSITION:
            self.transition_elapsed += delta_time
            if self.transition_elapsed >= self.transition_time:
                self.phase = MissilePhase.HORIZONTAL
                self.horizontal_start = self.location
                direction = (self.target_point - self.horizontal_start).safe_normal()
                self.horizontal_end = (
                    self.horizontal_start + direction * self.horizontal_distance
                ).with_z(self.horizontal_height)
            else:
                alpha = smooth_step(0.0, 1.0, self.transition_elapsed / self.transition_time)
                direction = Vec3(0.0, 0.0, 1.0).lerp(self.target_direction, alpha)
                self.velocity = direction * self.speed

        elif self.phase is MissilePhase.HORIZONTAL:
            self.velocity = (self.horizontal_end - self.location).safe_normal() * self.speed
            if self.location.dist(self.horizontal_end) < _ARRIVAL_DISTANCE:
                self.phase = MissilePhase.DESCENT

        else:
            self.velocity = (self.target_point - self.location).safe_normal() * self.speed

        self.location = self.location + self.velocity * delta_time
        self.update_rotation(delta_time)

        if self.check_target_collision():
            self.explode()

    def update_rotation(self, delta_time: float) -> None:
        """Turn the body towards the direction of flight."""
        if self.phase is MissilePhase.ASCENDING:
            target = Rotator(-90.0, 0.0, 0.0)
        else:
            # The mesh points backwards, so flip it to lead with the nose.
            target = self.velocity.rotation() + Rotator(180.0, 0.0, 0.0)
        self.rotation = rinterp_to(self.rotation, target, delta_time, self.rotation_speed)

    def check_target_collision(self) -> bool:
        """True if, while diving, a short trace from the body hits something."""
        if self.phase is not MissilePhase.DESCENT:
            return False
        start = self.location
        end = start + self.forward_vector * _TRACE_LENGTH
        return self._in_world().line_trace(start, end, ignore=self) is not None

    def explode(self) -> list[Actor]:
        """Play effects, find actors in the blast radius and remove the missile."""
        world = self._in_world()
        if self.explosion_effect:
            self._emit("effect", self.explosion_effect)
        if self.explosion_sound:
            self._emit("sound", self.explosion_sound)
        victims = [
            hit.actor
            for hit in world.sweep_sphere(self.location, self.explosion_radius, ignore=self)
            if hit.actor is not None and hit.actor is not self
        ]
        world.destroy(self)
        return victims