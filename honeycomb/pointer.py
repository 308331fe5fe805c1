import logging
from typing import Iterable, Optional

from honeycomb.geometry import point_in_polygon
from honeycomb.grid import Cell
from honeycomb.sonify import Sonifier

LOG = logging.getLogger("honeycomb.pointer")


def cell_at(cells: Iterable[Cell], x: float, y: float) -> Optional[Cell]:
    for cell in cells:
        if point_in_polygon(x, y, cell.vertices):
            return cell
    return None


def toggle_at(cells: Iterable[Cell], x: float, y: float, sonifier: Optional[Sonifier] = None) -> Optional[Cell]:
    """Flip the cell under (x, y) and sound it at its current energy."""
    cell = cell_at(cells, x, y)
    if cell is None:
        return None
    cell.active = not cell.active
    LOG.debug("Cell (%d,%d) %s at energy %.1f", cell.row, cell.col, "on" if cell.active else "off", cell.energy)
    if sonifier is not None:
        sonifier.sonify(cell)
    return cell
