#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
Points and vectors are plain (x, y) tuples of floats.

The zero vector has no direction: vec_norm returns (nan, nan) for it so a
degenerate configuration shows up as NaN state instead of an exception.
"""
import math
from typing import Iterable, Tuple

Vec2 = Tuple[float, float]

ORIGIN: Vec2 = (0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def vec_len_sq(a: Vec2) -> float:
    return a[0] * a[0] + a[1] * a[1]


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_norm(a: Vec2) -> Vec2:
    l = vec_len(a)
    if l == 0:
        return (math.nan, math.nan)
    return (a[0] / l, a[1] / l)


def vec_dist_sq(a: Vec2, b: Vec2) -> float:
    return vec_len_sq(vec_sub(b, a))


def vec_from_angle(angle: float) -> Vec2:
    """Unit vector for an angle in radians, measured from the +y axis."""
    return (math.sin(angle), math.cos(angle))


def vec_sum(vectors: Iterable[Vec2]) -> Vec2:
    x, y = 0.0, 0.0
    for v in vectors:
        x += v[0]
        y += v[1]
    return (x, y)
