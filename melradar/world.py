"""A minimal world holding actors, simulated time and simple collision queries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, TypeVar

from melradar.mathutil import Rotator, Vec3

GROUND_Z = 0.0

A = TypeVar("A", bound="Actor")


@dataclass(frozen=True)
class Hit:
    """Result of a collision query; ``actor`` is None for the ground."""

    actor: Optional["Actor"]
    location: Vec3


@dataclass(frozen=True)
class Event:
    """Something audible or visible that happened in the world."""

    time: float
    kind: str
    name: str
    location: Vec3


class Actor:
    """An object placed in a world that receives ticks."""

    def __init__(
        self,
        location: Optional[Vec3] = None,
        rotation: Optional[Rotator] = None,
        *,
        collision_radius: Optional[float] = None,
    ) -> None:
        self.location = location if location is not None else Vec3()
        self.rotation = rotation if rotation is not None else Rotator()
        self.velocity = Vec3()
        self.collision_radius = collision_radius
        self.world: Optional[World] = None

    @property
    def forward_vector(self) -> Vec3:
        return self.rotation.forward_vector()

    def begin_play(self) -> None:
        """Called once when the actor is spawned."""

    def tick(self, delta_time: float) -> None:
        """Called every time the world advances."""

    def _in_world(self) -> World:
        if self.world is None:
            raise RuntimeError("actor is not in a world")
        return self.world


class World:
    """Owns actors and advances simulated time."""

    def __init__(self) -> None:
        self.time_seconds = 0.0
        self.events: list[Event] = []
        self._actors: list[Actor] = []

    @property
    def actors(self) -> tuple[Actor, ...]:
        return tuple(self._actors)

    def spawn(self, actor: A) -> A:
        """Add an actor, start it and return it."""
        if actor.world is not None:
            raise ValueError("actor is already in a world")
        self._actors.append(actor)
        actor.world = self
        actor.begin_play()
        return actor

    def destroy(self, actor: Actor) -> None:
        """Remove an actor from the world."""
        if actor.world is not self:
            raise ValueError("actor is not in this world")
        self._actors.remove(actor)
        actor.world = None

    def actors_of_type(self, kind: type[A]) -> list[A]:
        """All live actors that are instances of ``kind``."""
        return [actor for actor in self._actors if isinstance(actor, kind)]

    def advance(self, delta_time: float) -> None:
        """Move time forward and tick every actor still in the world."""
        if delta_time < 0.0:
            raise ValueError("delta_time must not be negative")
        self.time_seconds += delta_time
        for actor in list(self._actors):
            if actor.world is self:
                actor.tick(delta_time)

    def _colliders(self, ignore: Optional[Actor]):
        return (
            actor
            for actor in self._actors
            if actor is not ignore and actor.collision_radius is not None
        )

    def line_trace(self, start: Vec3, end: Vec3, ignore: Optional[Actor] = None) -> Optional[Hit]:
        """First thing the segment from ``start`` to ``end`` touches, or None."""
        candidates: list[tuple[float, Hit]] = []

        if start.z <= GROUND_Z:
            candidates.append((0.0, Hit(None, start)))
        elif end.z <= GROUND_Z:
            t = (start.z - GROUND_Z) / (start.z - end.z)
            candidates.append((t, Hit(None, start.lerp(end, t).with_z(GROUND_Z))))

        direction = end - start
        a = direction.size_squared()
        for actor in self._colliders(ignore):
            offset = start - actor.location
            c = offset.size_squared() - actor.collision_radius**2
            if c <= 0.0:
                candidates.append((0.0, Hit(actor, start)))
                continue
            if a == 0.0:
                continue
            b = 2.0 * offset.dot(direction)
            discriminant = b * b - 4.0 * a * c
            if discriminant < 0.0:
                continue
            t = (-b - math.sqrt(discriminant)) / (2.0 * a)
            if 0.0 <= t <= 1.0:
                candidates.append((t, Hit(actor, start + direction * t)))

        if not candidates:
            return None
        return min(candidates, key=lambda pair: pair[0])[1]

    def sweep_sphere(self, center: Vec3, radius: float, ignore: Optional[Actor] = None) -> list[Hit]:
        """Every colliding actor overlapping a sphere, nearest first."""
        hits = [
            (actor.location.dist(center), Hit(actor, actor.location))
            for actor in self._colliders(ignore)
            if actor.location.dist(center) <= radius + actor.collision_radius
        ]
        hits.sort(key=lambda pair: pair[0])
        return [hit for _, hit in hits]