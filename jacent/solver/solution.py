"""
Solution Module - Result of a search strategy.
"""

from dataclasses import dataclass, field
from typing import List

from .board import Grid, to_state, to_tiles
from .move import Move, apply_move


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a search.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of distinct states expanded
        pruned_branches: Branches cut by the memo table or visited set
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a search.

    Attributes:
        moves: Witness move sequence reducing the grid to one tile
               (empty when unsolved or already solved)
        is_solved: True if a one-tile state was reached within the limit
        move_limit: Depth budget the search ran with
        initial_tiles: Occupied cells in the starting grid
        metrics: Performance statistics
    """
    moves: List[Move] = field(default_factory=list)
    is_solved: bool = False
    move_limit: int = 0
    initial_tiles: int = 0
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.moves)

    def replay(self, grid: Grid) -> List[Grid]:
        """
        Grids seen while playing the solution from the starting grid.

        Args:
            grid: Grid the search started from

        Returns:
            List starting with grid, then the grid after each move
        """
        state = to_state(to_tiles(grid))
        grids = [grid]
        for move in self.moves:
            state = apply_move(state, move)
            grids.append(Grid.from_tiles(grid.size, state))
        return grids
