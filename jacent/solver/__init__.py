"""
Solver Package - Search framework for the Jacent merge puzzle.

A grid is solved when a sequence of merges leaves exactly one tile. A
merge drags a numeric tile onto an adjacent tile (8-neighbourhood) whose
value differs by exactly 1, or onto a wildcard; the dragged tile keeps
its value and takes the target's cell.

Public API:
    - Cell, CellKind: Closed cell value variant
    - Grid, Tile: Immutable grid and tile representation
    - Move: Merge move definition
    - Solution, SolutionMetrics: Search result and statistics
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies

Usage:
    from jacent.solver import create_strategy, Grid

    grid = Grid.from_rows([[1, 2], [None, "W"]])

    solution = create_strategy("bfs").solve(grid)
    for move in solution.moves:
        print(f"Drag {move.from_position} onto {move.to_position}")
"""

# Core data structures
from .cell import Cell, CellKind
from .board import (
    Grid,
    Tile,
    to_tiles,
    to_state,
    canonical_key,
    state_key,
    count_occupied,
)
from .move import Move, are_adjacent, can_merge, apply_move, legal_moves, has_mergeable_pair
from .solution import Solution, SolutionMetrics

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Cell",
    "CellKind",
    "Grid",
    "Tile",
    "Move",
    "Solution",
    "SolutionMetrics",
    # State model and transitions
    "to_tiles",
    "to_state",
    "canonical_key",
    "state_key",
    "count_occupied",
    "are_adjacent",
    "can_merge",
    "apply_move",
    "legal_moves",
    "has_mergeable_pair",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_default_strategy_name",
    "register_strategy",
]
