from __future__ import annotations

import random

import pytest

from honeycomb.config import load_config
from honeycomb.grid import Cell, build_cells
from honeycomb.pitches import assign_pitches
from honeycomb.simulation import Simulation


def _config(**overrides):
    config = load_config()
    config.update(overrides)
    return config


def test_isolated_cell_charges_to_full_and_stays() -> None:
    cells = build_cells(3, 3, 20)
    assign_pitches(cells, random.Random(0), 220.0)
    sim = Simulation(cells, _config(), random.Random(0))
    centre = cells[4]
    assert sim.toggle_at(centre.x, centre.y) is centre

    history = []
    for _ in range(8):
        sim.step(0.25)
        history.append(centre.energy)
    assert history[:5] == [20.0, 40.0, 60.0, 80.0, 100.0]
    assert history[5:] == [100.0, 100.0, 100.0]
    assert all(c.energy == 0 for c in cells if c is not centre)


def test_spill_sounds_the_receiving_cell(voice) -> None:
    src = Cell(row=0, col=0, x=0, y=0, energy=100.0, assigned_pitches=(1.0, 2.0, 3.0, 4.0, 5.0, 6.0))
    dst = Cell(row=0, col=1, x=30, y=0, assigned_pitches=(10.0, 20.0, 30.0, 40.0, 50.0, 60.0))
    src.neighbors = (dst,)
    dst.neighbors = ()
    sim = Simulation([src, dst], _config(spillage_probability=1.0), random.Random(0), voice)
    events = sim.resolve_spillage()
    assert [(e.source, e.target) for e in events] == [(src, dst)]
    assert dst.energy == 50.0
    assert len(voice.played) == 4
    assert {f for f, _ in voice.played} <= set(dst.assigned_pitches)


def test_step_runs_spillage_on_its_own_period() -> None:
    sim = Simulation.for_surface(200, 150, _config(spillage_interval_ms=100), random.Random(1))
    ticks = []
    sim.resolve_spillage = lambda: ticks.append(1) or []
    sim.step(0.05)
    assert ticks == []
    sim.step(0.06)
    assert len(ticks) == 1


def test_frame_stall_runs_one_spill_tick_not_a_backlog() -> None:
    sim = Simulation.for_surface(200, 150, _config(spillage_interval_ms=100), random.Random(1))
    ticks = []
    sim.resolve_spillage = lambda: ticks.append(1) or []
    sim.step(3.05)
    assert len(ticks) == 1
    sim.step(0.02)
    assert len(ticks) == 1
    sim.step(0.06)
    assert len(ticks) == 2


def test_seeded_runs_are_identical() -> None:
    def run(seed):
        sim = Simulation.for_surface(320, 240, _config(spillage_probability=0.5), random.Random(seed))
        for cell in sim.cells[::3]:
            sim.toggle_at(cell.x, cell.y)
        for _ in range(60):
            sim.step(1 / 30)
        return [c.assigned_pitches for c in sim.cells], [c.energy for c in sim.cells]

    assert run(42) == run(42)


def test_energy_bounded_with_spillage(voice) -> None:
    rng = random.Random(7)
    sim = Simulation.for_surface(300, 200, _config(spillage_probability=0.6), random.Random(7), voice)
    for _ in range(600):
        if rng.random() < 0.2:
            cell = rng.choice(sim.cells)
            sim.toggle_at(cell.x, cell.y)
        sim.step(rng.uniform(0.0, 0.3))
        for c in sim.cells:
            assert 0.0 <= c.energy <= 100.0
    assert voice.played


def test_reset_and_stats() -> None:
    sim = Simulation.for_surface(200, 150, _config(), random.Random(2))
    a, b = sim.cells[0], sim.cells[-1]
    a.active = True
    a.energy = 60.0
    b.energy = 20.0
    assert sim.active_count == 1
    assert sim.mean_energy == pytest.approx(80.0 / len(sim.cells))
    sim.reset()
    assert sim.active_count == 0
    assert sim.mean_energy == 0.0


def test_rebuild_regrids_for_new_size() -> None:
    sim = Simulation.for_surface(200, 150, _config(), random.Random(3))
    small = len(sim.cells)
    sim.rebuild(400, 300)
    assert len(sim.cells) > small
    assert all(len(c.assigned_pitches) == 6 for c in sim.cells)
