import math
import random

import pytest

from nbody.bodies import create_bodies
from nbody.config import DEFAULT_CONFIG
from nbody.physics import NBodyPhysics, advance, center_of_mass, kinetic_energy, total_mass, total_momentum
from nbody.vector_utils import vec_len

NO_DARK = DEFAULT_CONFIG.with_overrides(g_dark=0.0)
NO_FORCES = DEFAULT_CONFIG.with_overrides(g=0.0, g_dark=0.0)


def test_gravity_kicks_are_equal_and_opposite(make_body):
    a = make_body(position=(-50.0, 0.0), mass=10.0)
    b = make_body(position=(50.0, 0.0), mass=40.0)
    advance([a, b], 1.0, NO_DARK)
    # F = G * 10 * 40 / 100^2 = 0.04
    assert a.velocity == pytest.approx((0.04 / 10.0, 0.0))
    assert b.velocity == pytest.approx((-0.04 / 40.0, 0.0))
    assert total_momentum([a, b]) == pytest.approx((0.0, 0.0), abs=1e-12)


def test_positions_use_committed_velocity(make_body):
    a = make_body(position=(-50.0, 0.0), velocity=(0.0, 2.0), mass=10.0)
    b = make_body(position=(50.0, 0.0), mass=10.0)
    advance([a, b], 0.5, NO_DARK)
    assert a.position == pytest.approx((-50.0 + 0.5 * a.velocity[0], 1.0))


def test_dark_matter_pulls_towards_origin(make_body):
    body = make_body(position=(100.0, -200.0))
    advance([body], 1.0, DEFAULT_CONFIG)
    g_dark = DEFAULT_CONFIG.g_dark
    assert body.velocity == pytest.approx((-100.0 * g_dark, 200.0 * g_dark))


def test_single_body_without_forces_moves_straight(make_body):
    body = make_body(position=(1.0, 1.0), velocity=(2.0, -1.0))
    for _ in range(10):
        advance([body], 0.1, NO_FORCES)
    assert body.position == pytest.approx((3.0, 0.0))
    assert body.velocity == (2.0, -1.0)


def test_overlapping_bodies_collide_instead_of_attracting(make_body):
    a = make_body(position=(0.0, 0.0), velocity=(10.0, 0.0), mass=10.0, radius=100.0)
    b = make_body(position=(150.0, 0.0), velocity=(0.0, 0.0), mass=10.0, radius=100.0)
    advance([a, b], 1.0, NO_DARK)
    assert a.velocity == pytest.approx((0.0, 0.0))
    assert b.velocity == pytest.approx((10.0, 0.0))


def test_bodies_exactly_at_reach_attract_instead_of_colliding(make_body):
    a = make_body(position=(0.0, 0.0), mass=10.0, radius=1.0)
    b = make_body(position=(2.0, 0.0), mass=10.0, radius=1.0)
    pending = NBodyPhysics(NO_DARK).pending_velocities([a, b])
    assert pending[0] == pytest.approx((2.5, 0.0))
    assert pending[1] == pytest.approx((-2.5, 0.0))


def test_later_collision_overwrites_earlier_one(make_body):
    a = make_body(position=(0.0, 0.0), velocity=(1.0, 0.0))
    b = make_body(position=(1.5, 0.0), velocity=(0.0, 0.0))
    c = make_body(position=(3.0, 0.0), velocity=(-1.0, 0.0))
    pending = NBodyPhysics(NO_FORCES).pending_velocities([a, b, c])
    # (a, b) hands b a velocity of (1, 0), then (b, c) replaces it using the pre-tick state.
    assert pending[0] == pytest.approx((0.0, 0.0))
    assert pending[1] == pytest.approx((-1.0, 0.0))
    assert pending[2] == pytest.approx((0.0, 0.0))


def test_pending_velocities_leave_bodies_untouched(make_body):
    bodies = [make_body(position=(float(i * 10), 0.0), velocity=(1.0, 1.0)) for i in range(4)]
    NBodyPhysics().pending_velocities(bodies)
    assert all(b.velocity == (1.0, 1.0) for b in bodies)
    assert [b.position for b in bodies] == [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (30.0, 0.0)]


def test_tick_is_independent_of_body_order():
    forward = create_bodies(6, 400.0, random.Random(7), DEFAULT_CONFIG.with_overrides(traces_enabled=False))
    backward = create_bodies(6, 400.0, random.Random(7), DEFAULT_CONFIG.with_overrides(traces_enabled=False))
    backward.reverse()
    advance(forward, 1 / 60)
    advance(backward, 1 / 60)
    by_id = {b.id: b for b in backward}
    for b in forward:
        assert b.velocity == pytest.approx(by_id[b.id].velocity, rel=1e-9, abs=1e-12)
        assert b.position == pytest.approx(by_id[b.id].position, rel=1e-9, abs=1e-12)


def test_gravity_conserves_momentum_over_many_ticks():
    bodies = create_bodies(5, 2000.0, random.Random(11), NO_DARK)
    for _ in range(300):
        advance(bodies, 1 / 60, NO_DARK)
    assert vec_len(total_momentum(bodies)) < 1e-4


def test_same_seed_same_trajectory():
    def run():
        bodies = create_bodies(4, 500.0, random.Random(42))
        for _ in range(500):
            advance(bodies, 1 / 60)
        return [(b.position, b.velocity, b.trace.points) for b in bodies]

    assert run() == run()


def test_trace_fills_to_capacity_and_stops_growing(make_body):
    from nbody.data_models import TraceBuffer

    body = make_body(velocity=(1.0, 0.0), trace=TraceBuffer(capacity=600, interval=10))
    for _ in range(600 * 10):
        advance([body], 1 / 60, NO_FORCES)
    assert len(body.trace) == 600
    for _ in range(55):
        advance([body], 1 / 60, NO_FORCES)
    assert len(body.trace) == 600
    # Newest sample first, one sample per 10 ticks.
    points = body.trace.points
    assert points[0][0] > points[1][0] > points[-1][0]
    assert points[0][0] - points[1][0] == pytest.approx(10 / 60)


def test_coincident_bodies_produce_nan_without_raising(make_body):
    a = make_body(position=(3.0, 3.0), velocity=(1.0, 0.0))
    b = make_body(position=(3.0, 3.0), velocity=(0.0, 1.0))
    advance([a, b], 1.0)
    assert math.isnan(a.velocity[0]) and math.isnan(b.position[1])
    advance([a, b], 1.0)
    assert math.isnan(a.position[0])


def test_empty_body_set():
    advance([], 1.0)


def test_diagnostics(make_body):
    a = make_body(position=(0.0, 0.0), velocity=(2.0, 0.0), mass=1.0)
    b = make_body(position=(4.0, 0.0), velocity=(0.0, -1.0), mass=3.0)
    assert total_mass([a, b]) == 4.0
    assert total_momentum([a, b]) == (2.0, -3.0)
    assert kinetic_energy([a, b]) == pytest.approx(2.0 + 1.5)
    assert center_of_mass([a, b]) == pytest.approx((3.0, 0.0))
    assert center_of_mass([]) == (0.0, 0.0)
