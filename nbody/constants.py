#!/usr/bin/env python3
"""
Shared constants for the N-body galaxy simulator (dimensionless world units).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants
G = 1.0  # pairwise gravity
G_DARK = G / 1000.0  # pull of every body towards the origin

# Sun generation
SUN_MIN_MASS = 10.0
SUN_MAX_MASS = 50.0
SUN_DENSITY = 0.02  # higher density -> smaller radius
SUN_MAX_STARTING_VELOCITY = 20.0
MASS_SHAPING_EXPONENT = 1.0  # 1.0 = uniform mass draw, larger favours light suns
DEFAULT_BODY_COUNT = 3

# Traces
TRACE_CAPACITY = 600  # positions kept per body
TRACE_INTERVAL = 10  # ticks between two recorded positions

# Frame pacing
TICK_RATE = 60  # fixed physics ticks per simulated second at speed 1.0
MAX_SUBSTEPS = 240  # cap per frame so a stalled frame cannot spiral
SPEED_FACTOR = 2.0
MIN_SPEED = 1.0 / 64.0
MAX_SPEED = 64.0

# Spectral-class-inspired colors, (exclusive upper mass bound, RGB).
# The first matching row wins; None catches everything heavier.
SPECTRAL_CLASSES = (
    (15.0, (255, 180, 107)),  # M
    (20.0, (255, 210, 161)),  # K
    (27.0, (255, 244, 234)),  # G
    (35.0, (248, 247, 255)),  # F
    (42.0, (202, 215, 255)),  # A
    (48.0, (170, 191, 255)),  # B
    (None, (155, 176, 255)),  # O
)

# Rendering (viewport)
SCREEN_W = 1200
SCREEN_H = 800
SPAWN_SCALE = SCREEN_H / 5.0  # spawn radius per body
BACKGROUND_COLOR = (30, 40, 40)
HUD_COLOR = (200, 200, 200)
FPS_LIMIT = 60

# Camera
ZOOM_FACTOR = 1.2
MOVE_DELTA = SCREEN_W / 10.0  # pixels per pan key press
ZOOM_SMOOTH = 0.1
MOVE_SMOOTH = 0.1
MIN_ZOOM = 1e-3
MAX_ZOOM = 1e3

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
