"""The simulation context: one honeycomb, its rules and its clocks."""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from honeycomb.energy import advance_energy
from honeycomb.grid import Cell, build_grid
from honeycomb.pitches import assign_pitches
from honeycomb.pointer import toggle_at
from honeycomb.sonify import Sonifier, Voice
from honeycomb.spillage import PeriodicTimer, SpillEvent, resolve_spillage

# Spill ticks missed during a frame stall are skipped, not replayed.
MAX_SPILL_TICKS_PER_STEP = 1


class Simulation:
    """Owns the cells and applies charge/decay, spillage and pointer toggles.

    Time only moves when the host calls ``advance``/``resolve_spillage`` (or
    ``step`` for both), so tests can drive it with synthetic deltas.
    """

    def __init__(self, cells: List[Cell], config: Dict, rng: Optional[random.Random] = None, voice: Optional[Voice] = None):
        self.cells = cells
        self.config = config
        self.rng = rng or random.Random()
        self.sonifier = Sonifier(voice, self.rng, config["tone_duration"])
        self.spill_timer = PeriodicTimer(config["spillage_interval_ms"] / 1000.0, max_catch_up=MAX_SPILL_TICKS_PER_STEP)

    @classmethod
    def for_surface(
        cls,
        width: float,
        height: float,
        config: Dict,
        rng: Optional[random.Random] = None,
        voice: Optional[Voice] = None,
    ) -> "Simulation":
        sim = cls([], config, rng, voice)
        sim.rebuild(width, height)
        return sim

    def rebuild(self, width: float, height: float) -> None:
        cfg = self.config
        cells = build_grid(width, height, cfg["hex_radius"], cfg["neighbor_distance_factor"])
        assign_pitches(
            cells,
            self.rng,
            cfg["base_freq"],
            cfg["ratio_scale"],
            cfg["pitches_per_cell"],
            tuple(cfg["octave_range"]),
        )
        self.cells = cells
        self.spill_timer.reset()

    def advance(self, dt: float) -> None:
        advance_energy(self.cells, dt, self.config["active_rate"], self.config["decay_rate"])

    def resolve_spillage(self) -> List[SpillEvent]:
        cfg = self.config
        return resolve_spillage(
            self.cells,
            self.rng,
            cfg["spillage_threshold"],
            cfg["spillage_amount"],
            cfg["spillage_probability"],
            on_transfer=self.sonifier.sonify,
        )

    def step(self, dt: float) -> List[SpillEvent]:
        self.advance(dt)
        events: List[SpillEvent] = []
        for _ in range(self.spill_timer.elapse(dt)):
            events.extend(self.resolve_spillage())
        return events

    def toggle_at(self, x: float, y: float) -> Optional[Cell]:
        return toggle_at(self.cells, x, y, self.sonifier)

    def reset(self) -> None:
        for cell in self.cells:
            cell.energy = 0.0
            cell.active = False
        self.spill_timer.reset()

    @property
    def active_count(self) -> int:
        return sum(1 for cell in self.cells if cell.active)

    @property
    def mean_energy(self) -> float:
        if not self.cells:
            return 0.0
        return sum(cell.energy for cell in self.cells) / len(self.cells)
