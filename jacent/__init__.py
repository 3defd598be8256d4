"""
Jacent puzzle core - solvability, par and level generation.

Usage:
    from jacent import is_solvable, minimal_moves, generate_level

    is_solvable([[1, 2], [None, None]])        # True
    minimal_moves([[1, None], [None, 5]])      # None
    grid = generate_level(grid_size=3, tile_count=5, max_value=7, seed=7)
"""

from .api import (
    GenerateOptions,
    generate_level,
    is_solvable,
    minimal_moves,
    normalize_values,
    solve,
)
from .generator import generate_level_with_par
from .levels import (
    LevelDefinition,
    StageDefinition,
    deserialize_grid,
    load_stage,
    serialize_grid,
    validate_stage,
)
from .solver import Cell, CellKind, Grid, Move, Solution, Tile

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "CellKind",
    "GenerateOptions",
    "Grid",
    "LevelDefinition",
    "Move",
    "Solution",
    "StageDefinition",
    "Tile",
    "deserialize_grid",
    "generate_level",
    "generate_level_with_par",
    "is_solvable",
    "load_stage",
    "minimal_moves",
    "normalize_values",
    "serialize_grid",
    "solve",
    "validate_stage",
]
