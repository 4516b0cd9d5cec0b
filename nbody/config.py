#!/usr/bin/env python3
"""
Physics configuration for the N-body galaxy simulator.

A SimulationConfig bundles every knob the Body Factory and the integration
step read. Instances are immutable; derive variants with ``with_overrides``.
"""
from dataclasses import dataclass, replace

from .constants import (
    G,
    G_DARK,
    MASS_SHAPING_EXPONENT,
    SUN_DENSITY,
    SUN_MAX_MASS,
    SUN_MAX_STARTING_VELOCITY,
    SUN_MIN_MASS,
    TRACE_CAPACITY,
    TRACE_INTERVAL,
)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Container for physics and spawn settings.

    Fields:
    - g: pairwise gravitational constant
    - g_dark: constant of the centering force towards the origin
    - min_mass, max_mass: range suns are drawn from
    - mass_exponent: shaping exponent applied to the uniform draw
    - density: converts mass to radius
    - max_start_speed: upper bound of the initial speed of each sun
    - trace_capacity, trace_interval: trace buffer sizing
    - traces_enabled: when False bodies are spawned without a trace
    """
    g: float = G
    g_dark: float = G_DARK
    min_mass: float = SUN_MIN_MASS
    max_mass: float = SUN_MAX_MASS
    mass_exponent: float = MASS_SHAPING_EXPONENT
    density: float = SUN_DENSITY
    max_start_speed: float = SUN_MAX_STARTING_VELOCITY
    trace_capacity: int = TRACE_CAPACITY
    trace_interval: int = TRACE_INTERVAL
    traces_enabled: bool = True

    def __post_init__(self):
        if self.min_mass <= 0:
            raise ValueError(f"min_mass must be positive, got {self.min_mass}")
        if self.max_mass < self.min_mass:
            raise ValueError(f"max_mass ({self.max_mass}) is below min_mass ({self.min_mass})")
        if self.density <= 0:
            raise ValueError(f"density must be positive, got {self.density}")
        if self.mass_exponent <= 0:
            raise ValueError(f"mass_exponent must be positive, got {self.mass_exponent}")
        if self.max_start_speed < 0:
            raise ValueError(f"max_start_speed must not be negative, got {self.max_start_speed}")
        if self.g < 0 or self.g_dark < 0:
            raise ValueError("gravitational constants must not be negative")
        if self.trace_capacity < 1:
            raise ValueError(f"trace_capacity must be at least 1, got {self.trace_capacity}")
        if self.trace_interval < 1:
            raise ValueError(f"trace_interval must be at least 1, got {self.trace_interval}")

    def with_overrides(self, **changes) -> "SimulationConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = SimulationConfig()
