# melradar

A compact simulation of missiles and a rotating radar that tracks them. Each
missile climbs, turns, cruises at altitude and then dives onto the origin of
the map. The radar sweeps a sector around itself and keeps a track for every
missile it sees. It scores how dangerous each missile is and reports where it
is expected to land.

## What is inside

- `melradar.mathutil`: immutable `Vec3` and `Rotator` values, plus
  `smooth_step`, `rinterp_to` and `clamp`.
- `melradar.world`: a `World` that holds `Actor` objects and simulated time.
  - `World.spawn` adds an actor and calls its `begin_play`.
  - `World.advance(delta_time)` moves time forward and ticks every actor.
  - `World.line_trace` and `World.sweep_sphere` answer simple collision
    queries. These queries test against the ground plane at `z = 0` and
    against actors that have a `collision_radius`.
  - Sounds and effects are recorded as `Event` values in `World.events`.
- `melradar.missile`: a `Missile` whose flight stage is a `MissilePhase`
  (`ASCENDING`, `TRANSITION`, `HORIZONTAL`, `DESCENT`).
  - It climbs straight up to `target_height`, then turns towards its target
    point over `transition_time` seconds.
  - It then flies to a point `horizontal_distance` away at
    `horizontal_height`, and finally dives at the target point.
  - During the dive, a short line trace ahead of the missile is checked every
    tick. When it hits something, `Missile.explode` records the explosion
    events and removes the missile from the world. It returns the actors
    within `explosion_radius`.
- `melradar.spawner`: a `MissileSpawner` that launches `missile_count`
  missiles when it is spawned. Each starts at a random point on the edge of a
  square map of half-size `map_half_size`, at a height of 100. The missiles
  are built with `missile_class`. A `random.Random` can be passed as `rng` to
  make the positions repeatable.
- `melradar.radar`: a `Radar` whose beam turns at `scan_speed` degrees per
  second.
  - Every `scan_interval` seconds it looks for missiles inside the beam
    sector, within `scan_radius` and between `min_detection_height` and
    `max_detection_height`.
  - It keeps a `MissileTrack` for each one, with its predicted position and
    threat level. Tracks are sorted by threat, and a track not seen for more
    than five seconds is dropped.
  - Reports are kept as `RadarMessage` values in `Radar.messages`: the first
    three sightings of a missile, then its trajectory and estimated impact
    point, and a short ranking of the three most threatening tracks at each
    scan.
  - `Radar.impact_report(track)` returns a trajectory analysis and raises
    `ValueError` when none can be made.
  - The lines of the current sweep are kept in `Radar.debug_lines`.

## Installation

```
pip install .
```

Install with the `test` extra to run the test suite:

```
pip install .[test]
pytest
```

## Command line

```
melradar
```

This builds a world that holds a radar, placed at the origin, and a missile
spawner. It then runs the simulation in fixed steps and prints each radar
message with its simulated time. At the end it prints how many missiles are
still in flight and how many are tracked.

Options:

- `--duration SECONDS`: how long to simulate. The default is 60.
- `--dt SECONDS`: the length of one step. The default is 1/60.
- `--missiles N`: how many missiles to launch. The default is 3.
- `--map-half-size DISTANCE`: half the side of the square map. The default is
  30000.
- `--seed N`: the seed for the spawn positions.

## Library use

```python
from melradar.world import World
from melradar.missile import Missile
from melradar.radar import Radar
from melradar.spawner import MissileSpawner

world = World()
radar = world.spawn(Radar())
world.spawn(MissileSpawner(missile_class=Missile))

for _ in range(200):
    world.advance(0.05)

for message in radar.messages:
    print(message.time, message.text)
```

## What it does not do

There is no graphical display and no audio. Sounds, effects and sweep lines
are only recorded as data: `World.events` and `Radar.debug_lines`. An
explosion finds the actors in its radius but does not damage them. The radar
only observes; it does not intercept missiles.