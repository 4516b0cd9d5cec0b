#!/usr/bin/env python3
"""
Core Physics Engine for the N-body galaxy simulator

Responsibilities
- Apply pairwise Newtonian gravity between every pair of suns.
- Bounce touching suns off each other with an elastic collision.
- Pull every sun weakly towards the origin ("dark matter") so a galaxy does not
  drift apart forever.
- Advance positions with explicit Euler and feed the trace buffers.
- Provide conserved-quantity diagnostics (mass, momentum, kinetic energy).

Units and conventions
- Positions are in world units, velocities in world units per simulated second.
- Time steps are in simulated seconds.
- Gravity and the centering pull are applied as per-tick velocity kicks; only the
  position update is scaled by dt.

Update order
- Every interaction of a tick reads the same pre-tick snapshot. New velocities are
  accumulated in a pending list and committed for all bodies together, after every
  pair has been visited.
- Pairs are visited in ascending (i, j) order. A collision overwrites the pending
  velocities of both bodies, so when a sun touches several others in one tick the
  last processed pair wins. This is a pairwise approximation, not a multi-body
  impulse solve.

Numerical notes
- Complexity: O(N^2) per tick (direct summation). Body counts are small.
- Coincident positions are not guarded against: they resolve to NaN velocities
  which then propagate through later ticks.
"""

import logging
from typing import List, Sequence, Tuple

from .collisions import resolve, touching
from .config import DEFAULT_CONFIG, SimulationConfig
from .data_models import Body
from .vector_utils import (
    ORIGIN,
    Vec2,
    vec_add,
    vec_len_sq,
    vec_norm,
    vec_scale,
    vec_sub,
    vec_sum,
)

logger = logging.getLogger(__name__)


class NBodyPhysics:
    """
    N-body gravitational physics engine with elastic collisions.

    The gravitational force between two bodies is:
    F = G * m1 * m2 / r^2

    Each body receives F / m as a velocity kick along the line of centres, in
    opposite directions. Overlapping bodies collide instead of attracting.
    """

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG):
        self.config = config

    def pending_velocities(self, bodies: Sequence[Body]) -> List[Vec2]:
        """
        Compute the velocities every body will have after this tick.

        Reads positions and velocities only; no body is modified.

        Args:
            bodies: The full body set.

        Returns:
            List of (vx, vy), same order as ``bodies``.
        """
        g = self.config.g
        g_dark = self.config.g_dark
        n = len(bodies)
        positions = [b.position for b in bodies]
        pending = [b.velocity for b in bodies]

        for i in range(n):
            bi = bodies[i]
            for j in range(i + 1, n):
                bj = bodies[j]
                if touching(bi, bj):
                    pending[i], pending[j] = resolve(bi, bj)
                    logger.debug("collision between suns %s and %s", bi.id, bj.id)
                    continue

                delta = vec_sub(positions[j], positions[i])
                dist_sq = vec_len_sq(delta)
                r_unit = vec_norm(delta)
                force = g * bi.mass * bj.mass / dist_sq
                pending[i] = vec_add(pending[i], vec_scale(r_unit, force / bi.mass))
                pending[j] = vec_sub(pending[j], vec_scale(r_unit, force / bj.mass))

        # Add a little dark matter gravity towards the origin to avoid exploding galaxies.
        for i in range(n):
            to_origin = vec_sub(ORIGIN, positions[i])
            pending[i] = vec_add(pending[i], vec_scale(to_origin, g_dark))

        return pending

    def advance(self, bodies: Sequence[Body], dt: float) -> None:
        """
        Perform one fixed-timestep tick.

        Workflow:
        1) accumulate gravity, collisions and the centering pull into pending velocities
        2) commit pending velocities for all bodies at once
        3) move every body by velocity * dt
        4) advance every trace buffer

        Args:
            bodies: Bodies to integrate (modified in place).
            dt: Time step size in simulated seconds (> 0).
        """
        pending = self.pending_velocities(bodies)

        for body, velocity in zip(bodies, pending):
            body.velocity = velocity

        for body in bodies:
            body.position = vec_add(body.position, vec_scale(body.velocity, dt))
            body.record_trace()


def advance(bodies: Sequence[Body], dt: float, config: SimulationConfig = DEFAULT_CONFIG) -> None:
    """Advance ``bodies`` by one tick of length ``dt``."""
    NBodyPhysics(config).advance(bodies, dt)


def total_mass(bodies: Sequence[Body]) -> float:
    return sum(b.mass for b in bodies)


def total_momentum(bodies: Sequence[Body]) -> Vec2:
    return vec_sum(b.momentum for b in bodies)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(b.kinetic_energy for b in bodies)


def center_of_mass(bodies: Sequence[Body]) -> Tuple[float, float]:
    """
    Mass-weighted mean position.

    Returns the origin for an empty body set.
    """
    m = total_mass(bodies)
    if m <= 0:
        return ORIGIN
    weighted = vec_sum(vec_scale(b.position, b.mass) for b in bodies)
    return vec_scale(weighted, 1.0 / m)
