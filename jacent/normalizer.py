"""
Normalizer Module - Rescale tile values to consecutive integers.
"""

import logging
from typing import Dict, Sequence, Union

from .solver.board import Grid
from .solver.cell import Cell, RawCell

logger = logging.getLogger(__name__)


def normalize_values(grid: Union[Grid, Sequence[Sequence[RawCell]]]) -> Grid:
    """
    Map the distinct numeric values of a grid onto 1..k in ascending order.

    Relative order is preserved, empty and wildcard cells are untouched,
    and a grid whose values already are exactly 1..k comes back as is.

    Args:
        grid: Grid or raw rows

    Returns:
        Normalized grid
    """
    grid = Grid.coerce(grid)
    distinct = sorted({cell.value for row in grid.cells for cell in row if cell.is_number})
    mapping: Dict[int, int] = {value: index for index, value in enumerate(distinct, start=1)}

    if all(old == new for old, new in mapping.items()):
        return grid

    logger.debug(f"[Normalizer] Remapping values {distinct} -> 1..{len(distinct)}")
    return Grid(cells=tuple(
        tuple(Cell.number(mapping[cell.value]) if cell.is_number else cell for cell in row)
        for row in grid.cells
    ))
