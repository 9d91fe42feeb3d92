"""Collision detection for flat scenes: borders, lines and segments, triangle models, and broad and narrow phases."""

__version__ = "0.1.0"