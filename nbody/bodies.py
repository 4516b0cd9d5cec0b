#!/usr/bin/env python3
"""
Body Factory: spawns a population of suns.

Each sun gets a random mass, a random position inside the spawn disk and a
random starting velocity. Positions and velocities use a uniform angle and an
independently drawn magnitude, so samples cluster towards the centre rather
than covering the disk uniformly. Afterwards the bulk drift is removed so the
total momentum of the population is zero and its centre of mass stays put.
"""
import logging
import math
import random
from typing import List, Optional, Set

from .config import DEFAULT_CONFIG, SimulationConfig
from .constants import SPECTRAL_CLASSES
from .data_models import Body, TraceBuffer
from .vector_utils import Vec2, vec_from_angle, vec_scale, vec_sub, vec_sum

logger = logging.getLogger(__name__)


def radius_for_mass(mass: float, density: float) -> float:
    """Radius of a uniform-density sphere of the given mass."""
    return (mass / density * 0.75 / math.pi) ** (1.0 / 3.0)


def color_for_mass(mass: float):
    for upper, color in SPECTRAL_CLASSES:
        if upper is None or mass < upper:
            return color
    return SPECTRAL_CLASSES[-1][1]


def random_vec(rng: random.Random, max_magnitude: float) -> Vec2:
    angle = rng.random() * 2.0 * math.pi
    magnitude = rng.random() * max_magnitude
    return vec_scale(vec_from_angle(angle), magnitude)


def _draw_mass(rng: random.Random, config: SimulationConfig) -> float:
    u = rng.random() ** config.mass_exponent
    return config.min_mass + u * (config.max_mass - config.min_mass)


def _draw_id(rng: random.Random, taken: Set[int]) -> int:
    while True:
        candidate = rng.getrandbits(32)
        if candidate not in taken:
            taken.add(candidate)
            return candidate


def create_bodies(count: int, spawn_radius: float,
                  rng: Optional[random.Random] = None,
                  config: SimulationConfig = DEFAULT_CONFIG) -> List[Body]:
    """
    Spawn ``count`` suns within ``spawn_radius`` of the origin.

    Args:
        count: Number of bodies to create (>= 0).
        spawn_radius: Maximum distance from the origin of a spawn position (> 0).
        rng: Random source; a fresh unseeded ``random.Random`` when omitted.
        config: Mass range, density, starting speed and trace settings.

    Returns:
        List of bodies whose total momentum is zero.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    if spawn_radius <= 0:
        raise ValueError(f"spawn_radius must be positive, got {spawn_radius}")
    if rng is None:
        rng = random.Random()

    taken: Set[int] = set()
    suns: List[Body] = []
    for _ in range(count):
        mass = _draw_mass(rng, config)
        trace = TraceBuffer(config.trace_capacity, config.trace_interval) if config.traces_enabled else None
        suns.append(Body(
            id=_draw_id(rng, taken),
            mass=mass,
            radius=radius_for_mass(mass, config.density),
            position=random_vec(rng, spawn_radius),
            velocity=random_vec(rng, config.max_start_speed),
            color=color_for_mass(mass),
            trace=trace,
        ))

    if not suns:
        return suns

    # Adjust every sun's velocity to keep the center of mass in the origin.
    mass_sum = sum(s.mass for s in suns)
    drift = vec_scale(vec_sum(s.momentum for s in suns), 1.0 / mass_sum)
    for s in suns:
        s.velocity = vec_sub(s.velocity, drift)

    logger.debug("spawned %d suns within radius %.1f (total mass %.2f)", count, spawn_radius, mass_sum)
    return suns
