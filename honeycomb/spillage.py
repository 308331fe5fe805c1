"""Probabilistic energy transfer between neighbouring cells."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from honeycomb.grid import MAX_ENERGY, Cell

SPILLAGE_THRESHOLD = 30.0
SPILLAGE_AMOUNT = 50.0
SPILLAGE_PROBABILITY = 0.2


@dataclass
class SpillEvent:
    source: Cell
    target: Cell
    amount: float


def resolve_spillage(
    cells: Sequence[Cell],
    rng: random.Random,
    threshold: float = SPILLAGE_THRESHOLD,
    amount: float = SPILLAGE_AMOUNT,
    probability: float = SPILLAGE_PROBABILITY,
    on_transfer: Optional[Callable[[Cell], object]] = None,
) -> List[SpillEvent]:
    """Run one spillage tick over ``cells``.

    A cell at or above ``threshold`` rolls once per neighbour, in neighbour order.
    A hit moves ``amount`` only if the source can still pay for it, so a cell
    that empties itself on its first neighbours has nothing left for the rest.
    ``on_transfer`` receives the receiving cell after its energy was raised.
    """
    events: List[SpillEvent] = []
    for cell in cells:
        if cell.energy < threshold:
            continue
        for neighbor in cell.neighbors:
            if rng.random() >= probability:
                continue
            if cell.energy < amount:
                continue
            cell.energy -= amount
            neighbor.energy = min(MAX_ENERGY, neighbor.energy + amount)
            events.append(SpillEvent(cell, neighbor, amount))
            if on_transfer is not None:
                on_transfer(neighbor)
    return events


class PeriodicTimer:
    """Fixed-period tick counter driven by elapsed seconds.

    With ``max_catch_up`` set, a long stall yields at most that many ticks and
    the rest of the missed periods are dropped rather than replayed.
    """

    def __init__(self, period: float, max_catch_up: Optional[int] = None):
        if period <= 0:
            raise ValueError("period must be positive")
        self.period = float(period)
        self.max_catch_up = max_catch_up
        self.accumulated = 0.0

    def elapse(self, dt: float) -> int:
        """Add ``dt`` seconds and return how many whole periods fell due."""
        self.accumulated += max(0.0, dt)
        due = int(self.accumulated // self.period)
        self.accumulated -= due * self.period
        if self.max_catch_up is not None:
            due = min(due, self.max_catch_up)
        return due

    def reset(self) -> None:
        self.accumulated = 0.0
