from typing import Iterable

from honeycomb.geometry import clamp
from honeycomb.grid import MAX_ENERGY, Cell

ACTIVE_RATE = 80.0
DECAY_RATE = 5.0


def update_energy(cell: Cell, dt: float, active_rate: float = ACTIVE_RATE, decay_rate: float = DECAY_RATE) -> float:
    """Charge an active cell or drain an inactive one by ``dt`` seconds."""
    dt = max(0.0, dt)
    if cell.active:
        energy = cell.energy + active_rate * dt
    else:
        energy = cell.energy - decay_rate * dt
    cell.energy = clamp(energy, 0.0, MAX_ENERGY)
    return cell.energy


def advance_energy(cells: Iterable[Cell], dt: float, active_rate: float = ACTIVE_RATE, decay_rate: float = DECAY_RATE) -> None:
    for cell in cells:
        update_energy(cell, dt, active_rate, decay_rate)
