"""Command line entry point that runs the missile and radar simulation."""

from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence

from melradar.missile import Missile
from melradar.radar import Radar
from melradar.spawner import MissileSpawner
from melradar.world import World


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="melradar", description="Simulate incoming missiles and a tracking radar."
    )
    parser.add_argument("--duration", type=float, default=60.0, help="seconds to simulate")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="seconds per step")
    parser.add_argument("--missiles", type=int, default=3, help="number of missiles")
    parser.add_argument(
        "--map-half-size", type=float, default=30000.0, help="half the side of the map"
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation and print what the radar reports."""
    parser = _parser()
    args = parser.parse_args(argv)
    if args.duration < 0.0:
        parser.error("--duration must not be negative")
    if args.dt <= 0.0:
        parser.error("--dt must be positive")
    if args.missiles < 0:
        parser.error("--missiles must not be negative")

    world = World()
    radar = world.spawn(Radar(ping_sound="ping"))
    world.spawn(
        MissileSpawner(
            missile_class=Missile,
            missile_count=args.missiles,
            map_half_size=args.map_half_size,
            rng=random.Random(args.seed),
        )
    )

    printed = 0
    for _ in range(int(round(args.duration / args.dt))):
        world.advance(args.dt)
        for message in radar.messages[printed:]:
            print(f"[{message.time:8.2f}s] {message.text}")
        printed = len(radar.messages)

    in_flight = len(world.actors_of_type(Missile))
    print(f"{in_flight} missile(s) in flight, {len(radar.detected)} tracked")
    return 0