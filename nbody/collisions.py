#!/usr/bin/env python3
"""
Collision handling for the N-body galaxy simulator.

Touching suns bounce off each other in a perfectly elastic collision: total
momentum and total kinetic energy of the pair are preserved. Bodies are never
merged or removed.

This module exposes the detection test and the resolution law used by the
integration step. Resolution is pure; the caller decides when the new
velocities take effect.
"""
import math
from typing import Tuple

from .data_models import Body
from .vector_utils import Vec2, vec_dist_sq, vec_dot, vec_len_sq, vec_scale, vec_sub


def touching(a: Body, b: Body) -> bool:
    """True when the two circles overlap."""
    reach = a.radius + b.radius
    return vec_dist_sq(a.position, b.position) < reach * reach


def _velocity_afterwards(this: Body, that: Body) -> Vec2:
    """Velocity of ``this`` after an elastic collision with ``that``."""
    offset = vec_sub(this.position, that.position)
    dist_sq = vec_len_sq(offset)
    if dist_sq == 0:
        # Coincident centres have no collision normal.
        return (math.nan, math.nan)
    rel_vel = vec_sub(this.velocity, that.velocity)
    factor = 2.0 * that.mass / (this.mass + that.mass) * vec_dot(rel_vel, offset) / dist_sq
    return vec_sub(this.velocity, vec_scale(offset, factor))


def resolve(a: Body, b: Body) -> Tuple[Vec2, Vec2]:
    """
    Resolve a 2D elastic collision between two bodies.

    Uses the vector form of the elastic collision law along the line of
    centres:

        v_a' = v_a - 2 m_b / (m_a + m_b) * <v_a - v_b, p_a - p_b> / |p_a - p_b|^2 * (p_a - p_b)

    and symmetrically for b. Neither body is modified.

    Args:
        a, b: The colliding bodies (position, velocity and mass are read).

    Returns:
        (velocity_a, velocity_b) after the collision. Both are (nan, nan) when
        the two positions coincide.
    """
    return _velocity_afterwards(a, b), _velocity_afterwards(b, a)
