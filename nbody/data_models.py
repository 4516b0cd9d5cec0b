#!/usr/bin/env python3
"""
Data models for the N-body galaxy simulator.

This module defines the Body dataclass shared between physics, rendering, and UI,
and the TraceBuffer that records where a body has been.

Units and usage
- position and velocity are in world units and world units per simulated second.
- mass, radius and color are fixed when the body is spawned.
- trace stores recent positions, newest first, for rendering motion trails;
  the physics never reads it.
- Access to Body instances is coordinated by SimulationController using a lock.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional, Tuple

from .constants import TRACE_CAPACITY, TRACE_INTERVAL


class TraceBuffer:
    """
    Fixed-capacity history of positions sampled every ``interval`` ticks.

    New samples go to the front; once ``capacity`` is reached the oldest
    sample at the back is dropped.
    """

    def __init__(self, capacity: int = TRACE_CAPACITY, interval: int = TRACE_INTERVAL):
        if capacity < 1 or interval < 1:
            raise ValueError("trace capacity and interval must be at least 1")
        self.capacity = capacity
        self.interval = interval
        self.ticks = 0
        self._points: Deque[Tuple[float, float]] = deque(maxlen=capacity)

    def tick(self, position: Tuple[float, float]) -> bool:
        """Count one tick; record ``position`` on every interval-th tick.

        Returns True when a sample was recorded.
        """
        self.ticks += 1
        if self.ticks % self.interval:
            return False
        self._points.appendleft(position)
        return True

    def clear(self) -> None:
        self._points.clear()
        self.ticks = 0

    @property
    def points(self) -> List[Tuple[float, float]]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(self._points)


@dataclass
class Body:
    """
    Represents a sun in the simulation.

    Fields:
    - id: Opaque identifier, unique within a spawned population
    - mass: Positive mass, immutable after spawn
    - radius: Collision/render radius derived from mass
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy)
    - color: RGB tuple derived from mass
    - trace: Recent positions for drawing motion trails, or None when disabled
    """
    id: int
    mass: float
    radius: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    color: Tuple[int, int, int] = (255, 244, 234)
    trace: Optional[TraceBuffer] = field(default_factory=TraceBuffer)

    @property
    def momentum(self) -> Tuple[float, float]:
        return (self.velocity[0] * self.mass, self.velocity[1] * self.mass)

    @property
    def kinetic_energy(self) -> float:
        vx, vy = self.velocity
        return 0.5 * self.mass * (vx * vx + vy * vy)

    def record_trace(self) -> None:
        """Advance the trace by one tick at the current position."""
        if self.trace is not None:
            self.trace.tick(self.position)
