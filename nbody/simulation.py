#!/usr/bin/env python3
"""
Simulation controller: shared state between the viewport and the control window.

What this module does
- Owns the bodies, the physics engine, the random source and the playback settings.
- Turns real elapsed frame time into a whole number of fixed physics ticks
  (fixed-timestep accumulator), so the outcome depends on the tick count only,
  never on the rendering frame rate.
- Guards every access with a re-entrant lock; a tick always completes before a
  reader can look at the bodies.
"""
import logging
import random
import threading
from typing import List, Optional

from .bodies import create_bodies
from .config import DEFAULT_CONFIG, SimulationConfig
from .constants import (
    DEFAULT_BODY_COUNT,
    MAX_SPEED,
    MAX_SUBSTEPS,
    MIN_SPEED,
    SPAWN_SCALE,
    SPEED_FACTOR,
    TICK_RATE,
)
from .data_models import Body, TraceBuffer
from .physics import NBodyPhysics, center_of_mass, kinetic_energy, total_momentum
from .vector_utils import clamp, vec_len

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Shared simulation state.
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, body_count: int = DEFAULT_BODY_COUNT,
                 config: SimulationConfig = DEFAULT_CONFIG,
                 rng: Optional[random.Random] = None,
                 spawn_scale: float = SPAWN_SCALE,
                 speed: float = 1.0):
        self.lock = threading.RLock()
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.spawn_scale = spawn_scale
        self.body_count = body_count
        self.physics = NBodyPhysics(config)
        self.bodies: List[Body] = []
        self.running = True  # app running
        self.playing = True  # simulation running
        self.speed = clamp(float(speed), MIN_SPEED, MAX_SPEED)
        self.show_traces = config.traces_enabled
        self.tick_count = 0

        # Internal accumulator of ticks owed but not yet simulated
        self._accumulator = 0.0

        self.reset(body_count)

    @property
    def dt(self) -> float:
        """Simulated seconds per tick."""
        return self.speed / TICK_RATE

    def reset(self, body_count: Optional[int] = None) -> None:
        """Replace all bodies with a freshly spawned population."""
        with self.lock:
            if body_count is not None:
                if body_count < 0:
                    raise ValueError(f"body count must not be negative, got {body_count}")
                self.body_count = int(body_count)
            spawn_radius = self.spawn_scale * max(self.body_count, 1)
            self.bodies = create_bodies(self.body_count, spawn_radius, self.rng, self.config)
            if not self.show_traces:
                for b in self.bodies:
                    b.trace = None
            self.tick_count = 0
            self._accumulator = 0.0
            logger.info("reset: %d suns, spawn radius %.1f", self.body_count, spawn_radius)

    def set_config(self, config: SimulationConfig) -> None:
        """Swap the physics settings; spawn settings apply from the next reset."""
        with self.lock:
            self.config = config
            self.physics = NBodyPhysics(config)

    def set_speed(self, speed: float) -> None:
        with self.lock:
            self.speed = clamp(float(speed), MIN_SPEED, MAX_SPEED)

    def speed_up(self) -> None:
        self.set_speed(self.speed * SPEED_FACTOR)

    def slow_down(self) -> None:
        self.set_speed(self.speed / SPEED_FACTOR)

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def set_show_traces(self, show: bool) -> None:
        """Enable or disable traces; disabling drops the recorded history."""
        with self.lock:
            self.show_traces = bool(show)
            for b in self.bodies:
                if self.show_traces and b.trace is None:
                    b.trace = TraceBuffer(self.config.trace_capacity, self.config.trace_interval)
                elif not self.show_traces:
                    b.trace = None

    def _tick(self) -> None:
        self.physics.advance(self.bodies, self.dt)
        self.tick_count += 1

    def step_frame(self, dt_real_seconds: float) -> int:
        """
        Run every whole tick that fits into the accumulated real time.

        Returns the number of ticks performed. Paused simulations consume no time.
        """
        with self.lock:
            if not self.playing or dt_real_seconds <= 0:
                return 0
            self._accumulator += dt_real_seconds * TICK_RATE
            steps = 0
            while self._accumulator >= 1.0:
                if steps >= MAX_SUBSTEPS:
                    logger.warning("dropping %.1f ticks of simulation backlog", self._accumulator)
                    self._accumulator = 0.0
                    break
                self._tick()
                self._accumulator -= 1.0
                steps += 1
            return steps

    def step_once(self) -> None:
        """Perform a single tick, whether playing or paused."""
        with self.lock:
            self._tick()

    def snapshot(self) -> List[Body]:
        with self.lock:
            return list(self.bodies)

    def stats(self) -> dict:
        with self.lock:
            return {
                "ticks": self.tick_count,
                "bodies": len(self.bodies),
                "momentum": vec_len(total_momentum(self.bodies)),
                "kinetic_energy": kinetic_energy(self.bodies),
                "center_of_mass": center_of_mass(self.bodies),
                "speed": self.speed,
                "playing": self.playing,
            }
