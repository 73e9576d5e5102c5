"""Missile flight and radar tracking simulation: vectors, a world of actors, missiles, a spawner and a radar."""

__version__ = "0.1.0"
__all__ = ["__version__"]