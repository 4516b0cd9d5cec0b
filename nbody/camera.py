#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World y grows upwards, screen y grows downwards. Zoom is pixels per world
unit. Key presses change a target zoom/centre and ``update`` eases the live
values towards it once per rendered frame.
"""
from typing import Tuple

from .constants import (
    MAX_ZOOM,
    MIN_ZOOM,
    MOVE_DELTA,
    MOVE_SMOOTH,
    SCREEN_H,
    SCREEN_W,
    ZOOM_FACTOR,
    ZOOM_SMOOTH,
)
from .vector_utils import clamp


def zoom_smooth(zoom_current: float, zoom_target: float) -> float:
    return zoom_current + (zoom_target - zoom_current) * ZOOM_SMOOTH


def move_smooth(center_current: Tuple[float, float], center_target: Tuple[float, float]) -> Tuple[float, float]:
    return (center_current[0] + MOVE_SMOOTH * (center_target[0] - center_current[0]),
            center_current[1] + MOVE_SMOOTH * (center_target[1] - center_current[1]))


class Camera2D:
    """
    Simple 2D camera that maps world coordinates to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), zoom=1.0):
        self.center = (float(center[0]), float(center[1]))
        self.center_target = self.center
        self.zoom = zoom
        self.zoom_target = zoom
        self.viewport_size = (SCREEN_W, SCREEN_H)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        cx, cy = self.center
        w, h = self.viewport_size
        px = (pos[0] - cx) * self.zoom + w / 2
        py = -(pos[1] - cy) * self.zoom + h / 2
        return (px, py)

    def screen_to_world(self, screen: Tuple[float, float]) -> Tuple[float, float]:
        cx, cy = self.center
        w, h = self.viewport_size
        wx = (screen[0] - w / 2) / self.zoom + cx
        wy = -(screen[1] - h / 2) / self.zoom + cy
        return (wx, wy)

    def zoom_in(self) -> None:
        self.zoom_target = clamp(self.zoom_target * ZOOM_FACTOR, MIN_ZOOM, MAX_ZOOM)

    def zoom_out(self) -> None:
        self.zoom_target = clamp(self.zoom_target / ZOOM_FACTOR, MIN_ZOOM, MAX_ZOOM)

    def move(self, dx_steps: int, dy_steps: int) -> None:
        """Shift the target centre by whole pan steps (one step = MOVE_DELTA pixels)."""
        tx, ty = self.center_target
        self.center_target = (tx + dx_steps * MOVE_DELTA / self.zoom,
                              ty + dy_steps * MOVE_DELTA / self.zoom)

    def reset(self) -> None:
        self.center_target = (0.0, 0.0)
        self.zoom_target = 1.0

    def update(self) -> None:
        self.zoom = zoom_smooth(self.zoom, self.zoom_target)
        self.center = move_smooth(self.center, self.center_target)
