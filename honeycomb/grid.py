"""Hexagon lattice construction and neighbour discovery."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from honeycomb.geometry import Point, distance, hex_vertices

LOG = logging.getLogger("honeycomb.grid")

MAX_ENERGY = 100.0
NEIGHBOR_DISTANCE_FACTOR = 1.9


@dataclass(eq=False)
class Cell:
    """One hexagon of the honeycomb.

    Position and vertices are fixed at construction; ``energy`` and ``active``
    are the only fields the simulation mutates. Cells compare by identity so they
    can live in sets and be used as dict keys.
    """

    row: int
    col: int
    x: float
    y: float
    vertices: Tuple[Point, ...] = field(default=(), repr=False)
    energy: float = 0.0
    active: bool = False
    assigned_pitches: Tuple[float, ...] = field(default=(), repr=False)
    neighbors: Tuple["Cell", ...] = field(default=(), repr=False)

    @property
    def center(self) -> Point:
        return (self.x, self.y)


class HexLayout:
    """Offset-row geometry for hexagons of a given radius."""

    def __init__(self, radius: float):
        self.radius = float(radius)
        self.width = 2.0 * self.radius
        self.height = math.sqrt(3) * self.radius
        self.stride = 0.75 * self.width
        self.row_step = 0.75 * self.height

    def center(self, row: int, col: int) -> Point:
        x = col * self.stride + (row % 2) * self.stride / 2.0
        y = row * self.row_step
        return (x, y)


def grid_dimensions(width: float, height: float, radius: float) -> Tuple[int, int]:
    """Rows and columns covering the surface plus one spare of each."""
    layout = HexLayout(radius)
    cols = int(math.ceil(width / layout.stride)) + 1
    rows = int(math.ceil(height / layout.row_step)) + 1
    return rows, cols


def build_cells(rows: int, cols: int, radius: float) -> List[Cell]:
    layout = HexLayout(radius)
    cells: List[Cell] = []
    for r in range(rows):
        for c in range(cols):
            x, y = layout.center(r, c)
            cells.append(Cell(row=r, col=c, x=x, y=y, vertices=tuple(hex_vertices((x, y), radius))))
    return cells


def compute_neighbors(cells: Sequence[Cell], max_distance: float) -> None:
    # All-pairs scan; fine for the few hundred cells a window holds.
    for cell in cells:
        cell.neighbors = tuple(
            other
            for other in cells
            if other is not cell and distance(cell.center, other.center) < max_distance
        )


def build_grid(
    width: float,
    height: float,
    radius: float,
    neighbor_factor: float = NEIGHBOR_DISTANCE_FACTOR,
) -> List[Cell]:
    rows, cols = grid_dimensions(width, height, radius)
    cells = build_cells(rows, cols, radius)
    compute_neighbors(cells, neighbor_factor * radius)
    LOG.info("Built %dx%d honeycomb (%d cells, radius %.1f)", rows, cols, len(cells), radius)
    return cells
