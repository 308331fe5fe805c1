"""Map a cell's energy onto a chord drawn from its pitch palette."""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Protocol

from honeycomb.grid import MAX_ENERGY, Cell
from honeycomb.pitches import sample_without_replacement

LOG = logging.getLogger("honeycomb.sonify")

TONE_DURATION = 0.5

# (lower bound, tone count), checked from the top down.
TONE_BANDS = (
    (MAX_ENERGY, 6),
    (90.0, 5),
    (50.0, 4),
    (10.0, 3),
)


class Voice(Protocol):
    def play(self, frequency: float, duration: float) -> None: ...


def tone_count(energy: float) -> int:
    for lower, count in TONE_BANDS:
        if energy >= lower:
            return count
    return 0


class Sonifier:
    """Plays ``tone_count(energy)`` distinct pitches of a cell through ``voice``."""

    def __init__(self, voice: Optional[Voice] = None, rng: Optional[random.Random] = None, duration: float = TONE_DURATION):
        self.voice = voice
        self.rng = rng or random.Random()
        self.duration = duration

    def choose(self, cell: Cell) -> List[float]:
        count = min(tone_count(cell.energy), len(cell.assigned_pitches))
        if count <= 0:
            return []
        return sample_without_replacement(cell.assigned_pitches, count, self.rng)

    def sonify(self, cell: Cell) -> List[float]:
        tones = self.choose(cell)
        if tones and self.voice is not None:
            LOG.debug("Cell (%d,%d) at %.1f -> %d tones", cell.row, cell.col, cell.energy, len(tones))
            for freq in tones:
                self.voice.play(freq, self.duration)
        return tones
