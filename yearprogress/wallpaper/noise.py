"""Deterministic jitter for cosmetic variation."""

import math
from dataclasses import dataclass


def seeded(seed: float) -> float:
    """Hash a seed to a float in [0, 1). Same seed, same value."""
    x = math.sin(seed * 9999) * 10000
    return x - math.floor(x)


def jitter(seed: float) -> float:
    """Like seeded() but spread over [-1, 1)."""
    return 2 * seeded(seed) - 1


@dataclass(frozen=True)
class Stroke:
    width: int
    height: int
    angle: float


def brushstroke(index: int, base_size: int) -> Stroke:
    """Width, thickness and tilt (degrees) of the index-th brushstroke."""
    t = seeded(index)
    t2 = seeded(index + 101)
    width = math.floor(base_size * (0.7 + 0.6 * t))
    height = max(3, math.floor(base_size * (0.22 + 0.12 * t2)))
    angle = (t - 0.5) * 12
    return Stroke(width=width, height=height, angle=angle)
