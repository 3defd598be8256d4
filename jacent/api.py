"""
Public operations consumed by the game runtime and the level editor.

Every function is pure apart from reading config.json for defaults:
grids in, answers out. Grid arguments accept a
Grid or raw rows of None / positive int / "W".
"""

from typing import Optional, Sequence, Union

from .generator import GenerateOptions, generate_level
from .normalizer import normalize_values
from .settings import load_settings
from .solver import Grid, Solution, create_strategy, get_default_strategy_name
from .solver.cell import RawCell

GridLike = Union[Grid, Sequence[Sequence[RawCell]]]


def solve(grid: GridLike, strategy: Optional[str] = None,
          move_limit: Optional[int] = None) -> Solution:
    """
    Run a named search strategy on a grid.

    Args:
        grid: Grid or raw rows
        strategy: "dfs" (existence) or "bfs" (minimal), defaults to the
                  "default_strategy" setting
        move_limit: Search depth override

    Returns:
        Solution with witness moves and metrics
    """
    settings = load_settings()
    name = strategy or get_default_strategy_name(settings)
    return create_strategy(name, settings=settings).solve(grid, move_limit)


def is_solvable(grid: GridLike, move_limit: Optional[int] = None) -> bool:
    """
    True if some sequence of merges leaves exactly one tile.

    A False answer means "not solvable within move_limit".
    """
    return create_strategy("dfs").solve(grid, move_limit).is_solved


def minimal_moves(grid: GridLike, move_limit: Optional[int] = None) -> Optional[int]:
    """
    Fewest merges needed to leave exactly one tile.

    Returns:
        Move count (0 for grids with at most one tile), or None if no
        solution exists within move_limit
    """
    solution = create_strategy("bfs").solve(grid, move_limit)
    return solution.move_count if solution.is_solved else None


__all__ = [
    "GenerateOptions",
    "GridLike",
    "generate_level",
    "is_solvable",
    "minimal_moves",
    "normalize_values",
    "solve",
]
