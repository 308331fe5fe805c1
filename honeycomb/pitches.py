"""Per-cell pitch palettes drawn from a just-intonation scale."""
from __future__ import annotations

import random
from typing import Iterable, List, Sequence, Tuple, TypeVar

from honeycomb.grid import Cell

T = TypeVar("T")

JUST_RATIOS: Tuple[float, ...] = (1.0, 9 / 8, 5 / 4, 45 / 32, 3 / 2, 5 / 3, 15 / 8)
REFERENCE_OCTAVE = 3


def sample_without_replacement(pool: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """Return ``count`` items from distinct positions of ``pool``; ``pool`` is left untouched."""
    if count > len(pool):
        raise ValueError(f"cannot draw {count} items from a pool of {len(pool)}")
    return rng.sample(list(pool), count)


def pitch_palette(
    rng: random.Random,
    base_freq: float,
    ratios: Sequence[float] = JUST_RATIOS,
    count: int = 6,
    octave_range: Tuple[int, int] = (0, 7),
) -> Tuple[float, ...]:
    lo, hi = octave_range
    freqs = []
    for ratio in sample_without_replacement(ratios, count, rng):
        octave = rng.randint(lo, hi)
        freqs.append(base_freq * ratio * 2.0 ** (octave - REFERENCE_OCTAVE))
    return tuple(freqs)


def assign_pitches(
    cells: Iterable[Cell],
    rng: random.Random,
    base_freq: float,
    ratios: Sequence[float] = JUST_RATIOS,
    count: int = 6,
    octave_range: Tuple[int, int] = (0, 7),
) -> None:
    for cell in cells:
        cell.assigned_pitches = pitch_palette(rng, base_freq, ratios, count, octave_range)
