import random

import pytest

from nbody.config import DEFAULT_CONFIG, SimulationConfig
from nbody.constants import MAX_SPEED, MAX_SUBSTEPS, TICK_RATE
from nbody.physics import center_of_mass
from nbody.simulation import SimulationController


@pytest.fixture
def sim():
    return SimulationController(body_count=4, rng=random.Random(3))


def test_reset_spawns_requested_count(sim):
    assert len(sim.bodies) == 4
    sim.reset(7)
    assert len(sim.bodies) == 7
    assert sim.body_count == 7
    assert sim.tick_count == 0


def test_reset_rejects_negative_count(sim):
    with pytest.raises(ValueError):
        sim.reset(-2)


def test_step_frame_runs_whole_ticks(sim):
    assert sim.step_frame(0.5) == TICK_RATE // 2
    assert sim.tick_count == TICK_RATE // 2


def test_step_frame_carries_leftover_time(sim):
    # 1/32 s is 1.875 ticks at 60 Hz
    assert sim.step_frame(1 / 32) == 1
    assert sim.step_frame(1 / 32) == 2
    assert sim.step_frame(1 / 32) == 2


def test_paused_simulation_does_not_advance(sim):
    sim.toggle_play()
    before = [b.position for b in sim.bodies]
    assert sim.step_frame(1.0) == 0
    assert [b.position for b in sim.bodies] == before


def test_step_once_works_while_paused(sim):
    sim.toggle_play()
    sim.step_once()
    assert sim.tick_count == 1


def test_backlog_is_capped(sim):
    assert sim.step_frame(10.0 * MAX_SUBSTEPS / TICK_RATE) == MAX_SUBSTEPS
    assert sim.step_frame(0.0) == 0


def test_speed_scales_tick_length(sim):
    assert sim.dt == pytest.approx(1.0 / TICK_RATE)
    sim.speed_up()
    assert sim.dt == pytest.approx(2.0 / TICK_RATE)
    sim.slow_down()
    sim.slow_down()
    assert sim.speed == pytest.approx(0.5)
    sim.set_speed(1e9)
    assert sim.speed == MAX_SPEED


def test_tick_count_not_frame_rate_decides_outcome():
    coarse = SimulationController(body_count=5, rng=random.Random(8))
    fine = SimulationController(body_count=5, rng=random.Random(8))
    coarse.step_frame(1.0)
    for _ in range(64):
        fine.step_frame(1 / 64)
    assert coarse.tick_count == fine.tick_count == TICK_RATE
    assert [b.position for b in coarse.bodies] == [b.position for b in fine.bodies]


def test_toggle_traces(sim):
    sim.step_frame(1.0)
    assert all(len(b.trace) > 0 for b in sim.bodies)
    sim.set_show_traces(False)
    assert all(b.trace is None for b in sim.bodies)
    sim.step_frame(0.5)
    sim.set_show_traces(True)
    assert all(b.trace is not None and len(b.trace) == 0 for b in sim.bodies)
    sim.reset()
    assert all(b.trace is not None for b in sim.bodies)


def test_traces_stay_off_across_reset(sim):
    sim.set_show_traces(False)
    sim.reset()
    assert all(b.trace is None for b in sim.bodies)


def test_set_config_applies_to_next_reset(sim):
    sim.set_config(DEFAULT_CONFIG.with_overrides(min_mass=1.0, max_mass=1.0))
    sim.reset()
    assert all(b.mass == 1.0 for b in sim.bodies)


def test_snapshot_is_a_copy_of_the_body_list(sim):
    snap = sim.snapshot()
    assert snap == sim.bodies
    snap.clear()
    assert len(sim.bodies) == 4


def test_stats(sim):
    stats = sim.stats()
    assert stats["bodies"] == 4
    assert stats["ticks"] == 0
    assert stats["momentum"] < 1e-4
    assert stats["kinetic_energy"] >= 0.0
    assert stats["center_of_mass"] == pytest.approx(center_of_mass(sim.bodies))
    assert stats["playing"] is True


@pytest.mark.parametrize("changes", [
    {"min_mass": 0.0},
    {"min_mass": 20.0, "max_mass": 10.0},
    {"density": 0.0},
    {"mass_exponent": 0.0},
    {"max_start_speed": -1.0},
    {"g": -1.0},
    {"trace_capacity": 0},
    {"trace_interval": 0},
])
def test_config_validation(changes):
    with pytest.raises(ValueError):
        SimulationConfig(**changes)
