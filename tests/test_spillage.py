from __future__ import annotations

import random

import pytest

from honeycomb.grid import Cell
from honeycomb.spillage import PeriodicTimer, resolve_spillage


def _cell(col: int, energy: float = 0.0) -> Cell:
    return Cell(row=0, col=col, x=col * 15.0, y=0.0, energy=energy)


def _link(a: Cell, *others: Cell) -> None:
    a.neighbors = tuple(others)


def test_below_threshold_never_spills() -> None:
    src, dst = _cell(0, 29.0), _cell(1)
    _link(src, dst)
    events = resolve_spillage([src], random.Random(0), threshold=30, amount=20, probability=1.0)
    assert events == []
    assert (src.energy, dst.energy) == (29.0, 0.0)


def test_needs_enough_energy_to_pay_the_amount() -> None:
    src, dst = _cell(0, 40.0), _cell(1)
    _link(src, dst)
    assert resolve_spillage([src], random.Random(0), threshold=30, amount=50, probability=1.0) == []
    assert src.energy == 40.0


def test_transfer_moves_exact_amount_and_clamps_target() -> None:
    src, dst = _cell(0, 80.0), _cell(1, 70.0)
    _link(src, dst)
    received = []
    events = resolve_spillage(
        [src], random.Random(0), threshold=30, amount=50, probability=1.0,
        on_transfer=lambda cell: received.append((cell, cell.energy)),
    )
    assert len(events) == 1
    assert events[0].source is src and events[0].target is dst and events[0].amount == 50
    assert src.energy == pytest.approx(30.0)
    assert dst.energy == 100.0
    assert received == [(dst, 100.0)]


def test_first_neighbours_drain_the_source() -> None:
    src = _cell(0, 100.0)
    a, b, c = _cell(1), _cell(2), _cell(3)
    _link(src, a, b, c)
    events = resolve_spillage([src], random.Random(0), threshold=30, amount=50, probability=1.0)
    assert [e.target for e in events] == [a, b]
    assert (a.energy, b.energy, c.energy) == (50.0, 50.0, 0.0)
    assert src.energy == 0.0


def test_energy_received_earlier_in_a_tick_can_spill_again() -> None:
    src, mid, end = _cell(0, 60.0), _cell(1, 0.0), _cell(2, 0.0)
    _link(src, mid)
    _link(mid, end)
    events = resolve_spillage([src, mid, end], random.Random(0), threshold=30, amount=50, probability=1.0)
    assert [(e.source, e.target) for e in events] == [(src, mid), (mid, end)]
    assert end.energy == 50.0


def test_zero_probability_never_spills() -> None:
    src, dst = _cell(0, 100.0), _cell(1)
    _link(src, dst)
    for seed in range(20):
        assert resolve_spillage([src], random.Random(seed), probability=0.0) == []
    assert src.energy == 100.0


def test_spill_rate_tracks_probability() -> None:
    rng = random.Random(123)
    hits = 0
    trials = 4000
    for _ in range(trials):
        src, dst = _cell(0, 100.0), _cell(1)
        _link(src, dst)
        hits += len(resolve_spillage([src], rng, probability=0.2))
    assert hits / trials == pytest.approx(0.2, abs=0.03)


def test_periodic_timer_counts_whole_periods() -> None:
    timer = PeriodicTimer(0.1)
    assert timer.elapse(0.05) == 0
    assert timer.elapse(0.06) == 1
    assert timer.elapse(0.25) == 2
    assert timer.elapse(-1.0) == 0
    timer.reset()
    assert timer.accumulated == 0.0


def test_periodic_timer_rejects_non_positive_period() -> None:
    with pytest.raises(ValueError):
        PeriodicTimer(0)


def test_periodic_timer_caps_catch_up_after_a_stall() -> None:
    timer = PeriodicTimer(0.1, max_catch_up=1)
    assert timer.elapse(3.05) == 1
    assert timer.accumulated == pytest.approx(0.05)
    assert timer.elapse(0.06) == 1
