#!/usr/bin/env python3
"""
N-body galaxy simulator application entry point and UI/renderer coordination.

What this module does
- Parses the command line and builds a shared SimulationController that owns the
  suns and the playback settings; all access is guarded by a re-entrant lock.
- Starts a Pygame rendering thread (viewport) and, unless disabled, the Dear PyGui
  control window on the main thread.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the
  viewport), stepping physics through the fixed-timestep accumulator, and drawing.
  It locks the SimulationController around short critical sections.
- The ControlPanel runs in the main thread via Dear PyGui. It refreshes its readouts
  on a periodic frame callback and calls lock-protected SimulationController methods.
- With --no-controls the viewport runs alone on the main thread.

Viewport keys
- Esc/Q quit, Space pause, +/- speed, I/O zoom, W/A/S/D pan, R respawn,
  T toggle traces, N single tick.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python nbody_sim.py --suns 5`
"""

import argparse
import logging
import random
import threading
import time
from typing import Optional, Sequence

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from nbody.camera import Camera2D
from nbody.config import DEFAULT_CONFIG
from nbody.constants import (
    BACKGROUND_COLOR,
    DEFAULT_BODY_COUNT,
    FPS_LIMIT,
    HUD_COLOR,
    MASS_SHAPING_EXPONENT,
    MAX_SPEED,
    MIN_SPEED,
    SAFE_COORD_LIMIT,
    SCREEN_H,
    SCREEN_W,
)
from nbody.simulation import SimulationController

logger = logging.getLogger("nbody_sim")


# ============================================================
# Pygame Renderer Thread
# ============================================================

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        # NaN or infinite coordinates
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except Exception:
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps the simulation, draws suns, traces and a HUD.
    Handles keyboard camera control and playback keys.
    """

    def __init__(self, sim: SimulationController, daemon: bool = True):
        super().__init__(daemon=daemon)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("nbody!")
        self.surface = pygame.display.set_mode((SCREEN_W, SCREEN_H), pygame.RESIZABLE)
        self.camera.set_viewport_size(*self.surface.get_size())
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.sim.step_frame(real_dt)
            self.draw()

            self.clock.tick(FPS_LIMIT)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.camera.zoom_in()
                elif event.y < 0:
                    self.camera.zoom_out()

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.stop()
        elif key == pygame.K_SPACE:
            self.sim.toggle_play()
        elif key in (pygame.K_PLUS, pygame.K_KP_PLUS, pygame.K_EQUALS):
            self.sim.speed_up()
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.sim.slow_down()
        elif key == pygame.K_i:
            self.camera.zoom_in()
        elif key == pygame.K_o:
            self.camera.zoom_out()
        elif key == pygame.K_a:
            self.camera.move(-1, 0)
        elif key == pygame.K_d:
            self.camera.move(1, 0)
        elif key == pygame.K_s:
            self.camera.move(0, -1)
        elif key == pygame.K_w:
            self.camera.move(0, 1)
        elif key == pygame.K_r:
            self.sim.reset()
            self.camera.reset()
        elif key == pygame.K_t:
            self.sim.set_show_traces(not self.sim.show_traces)
        elif key == pygame.K_n:
            self.sim.step_once()

    def stop(self):
        self.sim.running = False
        self.running = False

    def draw_trace(self, surf, body, points):
        pts = [_safe_point(self.camera.world_to_screen(p)) for p in [body.position] + points]
        pts = [p for p in pts if p]
        if len(pts) > 1:
            pygame.draw.aalines(surf, body.color, False, pts)

    def draw_bodies(self, surf, bodies):
        zoom = self.camera.zoom
        for b in bodies:
            pos = _safe_point(self.camera.world_to_screen(b.position))
            if pos is None:
                continue
            # Radius + 1 keeps far-out zooms visible.
            vis_r = int(min(b.radius * zoom + 1.0, SAFE_COORD_LIMIT))
            gfxdraw.filled_circle(surf, pos[0], pos[1], vis_r, b.color)
            gfxdraw.aacircle(surf, pos[0], pos[1], vis_r, b.color)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.camera.update()

        # Copy bodies snapshot for consistency during draw
        with self.sim.lock:
            bodies = self.sim.snapshot()
            traces = [(b.trace.points if b.trace is not None else None) for b in bodies]
            stats = self.sim.stats()

        for b, pts in zip(bodies, traces):
            if pts is not None and len(pts) > 1:
                self.draw_trace(surf, b, pts)
        self.draw_bodies(surf, bodies)

        draw_text(surf, "Space: Pause | +/-: Speed | I/O: Zoom | WASD: Pan | R: Respawn | T: Traces | N: Step | Q: Quit",
                  10, 10, HUD_COLOR)
        draw_text(surf, f"Suns: {stats['bodies']}  Ticks: {stats['ticks']}  Speed: {stats['speed']:g}x  "
                        f"[{'Playing' if stats['playing'] else 'Paused'}]", 10, 30, HUD_COLOR)
        cx, cy = self.camera.screen_to_world(pygame.mouse.get_pos())
        draw_text(surf, f"Cursor: ({cx:.1f}, {cy:.1f})  Zoom: {self.camera.zoom:.2f}", 10, 50, HUD_COLOR)

        pygame.display.flip()


# ============================================================
# Dear PyGui Control Panel
# ============================================================

class ControlPanel:
    """
    Dear PyGui interface: playback controls, respawn settings and live readouts.
    """

    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer

        self.status_msg_id = None
        self.stats_id = None
        self.count_id = None
        self.exponent_id = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="nbody - Controls", width=420, height=330)

        with dpg.window(label="Controls", width=400, height=310, pos=(10, 10), tag="main_window"):
            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_checkbox(label="Traces", default_value=self.sim.show_traces,
                                 callback=self._toggle_traces, tag="traces_checkbox")
            with dpg.group(horizontal=True):
                dpg.add_text("Speed (x):")
                dpg.add_slider_float(min_value=MIN_SPEED, max_value=MAX_SPEED, default_value=self.sim.speed,
                                     width=250, callback=lambda s, a, u: self.sim.set_speed(a), tag="speed_slider")

            dpg.add_separator()

            dpg.add_text("Respawn")
            self.count_id = dpg.add_input_int(label="Suns", default_value=self.sim.body_count,
                                              min_value=0, min_clamped=True, width=120)
            self.exponent_id = dpg.add_slider_float(label="Mass exponent", min_value=1.0, max_value=10.0,
                                                    default_value=self.sim.config.mass_exponent, width=200)
            dpg.add_button(label="Respawn", callback=self._respawn)

            dpg.add_separator()

            self.stats_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_play(self):
        playing = self.sim.toggle_play()
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        self.sim.step_once()
        self._set_status("Stepped one tick.")

    def _toggle_traces(self, sender, value, user_data=None):
        self.sim.set_show_traces(bool(value))
        self._set_status(f"Traces {'ON' if value else 'OFF'}.")

    def _respawn(self):
        count = int(dpg.get_value(self.count_id))
        exponent = float(dpg.get_value(self.exponent_id))
        try:
            config = self.sim.config.with_overrides(mass_exponent=exponent)
        except ValueError as exc:
            self._set_error(str(exc))
            return
        self.sim.set_config(config)
        self.sim.reset(count)
        self.renderer.camera.reset()
        self._set_status(f"Spawned {count} suns.")

    def _sync_ui_with_sim(self):
        stats = self.sim.stats()
        dpg.set_value(self.stats_id,
                      f"Ticks: {stats['ticks']}   Suns: {stats['bodies']}\n"
                      f"|Momentum|: {stats['momentum']:.3e}\n"
                      f"Kinetic energy: {stats['kinetic_energy']:.3e}\n"
                      f"Centre of mass: ({stats['center_of_mass'][0]:.1f}, {stats['center_of_mass'][1]:.1f})")
        dpg.set_value("speed_slider", stats["speed"])
        dpg.set_value("traces_checkbox", self.sim.show_traces)
        if not self.sim.running:
            dpg.stop_dearpygui()
            return
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="N-body galaxy simulator")
    p.add_argument("--suns", type=int, default=DEFAULT_BODY_COUNT, help="number of suns to spawn")
    p.add_argument("--seed", type=int, default=None, help="seed for a reproducible galaxy")
    p.add_argument("--speed", type=float, default=1.0, help="simulated seconds per real second")
    p.add_argument("--mass-exponent", type=float, default=MASS_SHAPING_EXPONENT,
                   help="shaping exponent of the mass draw (1 = uniform, 10 = mostly light suns)")
    p.add_argument("--no-traces", action="store_true", help="do not record or draw traces")
    p.add_argument("--no-controls", action="store_true", help="run without the Dear PyGui control window")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = p.parse_args(argv)
    if args.suns < 0:
        p.error("--suns must not be negative")
    return args


def build_controller(args: argparse.Namespace) -> SimulationController:
    config = DEFAULT_CONFIG.with_overrides(
        mass_exponent=args.mass_exponent,
        traces_enabled=not args.no_traces,
    )
    rng = random.Random(args.seed)
    return SimulationController(body_count=args.suns, config=config, rng=rng, speed=args.speed)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        sim = build_controller(args)
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        raise SystemExit(2)

    if args.no_controls:
        renderer = PygameRenderer(sim, daemon=False)
        renderer.run()
        return

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ControlPanel(sim, renderer)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
