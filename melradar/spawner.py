"""An actor that launches missiles from random points on the map edge."""

from __future__ import annotations

import random
from typing import Callable, Optional

from melradar.mathutil import Rotator, Vec3
from melradar.world import Actor

SPAWN_HEIGHT = 100.0

MissileFactory = Callable[[Vec3, Rotator], Actor]


class MissileSpawner(Actor):
    """Spawns a fixed number of missiles along the edge of a square map."""

    def __init__(
        self,
        location: Optional[Vec3] = None,
        rotation: Optional[Rotator] = None,
        *,
        missile_class: Optional[MissileFactory] = None,
        missile_count: int = 3,
        map_half_size: float = 30000.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(location, rotation)
        self.missile_class = missile_class
        self.missile_count = missile_count
        self.map_half_size = map_half_size
        self.rng = rng if rng is not None else random.Random()

    def begin_play(self) -> None:
        """Launch ``missile_count`` missiles."""
        for _ in range(self.missile_count):
            self.spawn_missile()

    def spawn_missile(self) -> Optional[Actor]:
        """Spawn one missile at a random edge position; None without a missile class."""
        if self.missile_class is None:
            return None
        world = self._in_world()
        location = self.random_edge_position(self.map_half_size)
        return world.spawn(self.missile_class(location, Rotator()))

    def random_edge_position(self, distance: float) -> Vec3:
        """A random point on one of the four edges of a square of half-size ``distance``."""
        edge = self.rng.randint(0, 3)
        along = self.rng.uniform(-distance, distance)
        if edge == 0:
            return Vec3(distance, along, SPAWN_HEIGHT)
        if edge == 1:
            return Vec3(-distance, along, SPAWN_HEIGHT)
        if edge == 2:
            return Vec3(along, distance, SPAWN_HEIGHT)
        return Vec3(along, -distance, SPAWN_HEIGHT)