"""
Base Strategy Module - Abstract base class for search strategies.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..settings import default_move_limit, load_settings
from .board import Grid, State, to_state, to_tiles
from .cell import RawCell
from .move import Move
from .solution import Solution, SolutionMetrics

logger = logging.getLogger(__name__)

# Result of a raw search: (witness path or None, states explored, pruned branches)
SearchResult = Tuple[Optional[List[Move]], int, int]


class SolverStrategy(ABC):
    """
    Abstract base class for all search strategies.

    Subclasses implement _search() over tile-list states and define
    name and description class attributes. The trivial cases (zero or
    one tile) and the move limit are handled here.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        settings: Settings the default move limit is read from
    """
    name: str = "base"
    description: str = "Base strategy"

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Initialize strategy.

        Args:
            settings: Settings dictionary, loaded from config.json when omitted
        """
        self.settings = settings if settings is not None else load_settings()

    def solve(
        self,
        grid: Union[Grid, Sequence[Sequence[RawCell]]],
        move_limit: Optional[int] = None
    ) -> Solution:
        """
        Search for a way to reduce the grid to a single tile.

        Args:
            grid: Grid or raw rows to solve
            move_limit: Maximum search depth, defaults to the configured
                        heuristic min(2 x tiles, 50)

        Returns:
            Solution with witness moves and metrics

        Raises:
            ValueError: If the grid is malformed or move_limit is negative
        """
        start_time = time.perf_counter()

        grid = Grid.coerce(grid)
        state = to_state(to_tiles(grid))
        tile_count = len(state)

        if move_limit is None:
            move_limit = default_move_limit(tile_count, self.settings)
        elif move_limit < 0:
            raise ValueError(f"move_limit must be non-negative, got {move_limit}")

        if tile_count <= 1:
            return self._build_solution([], True, move_limit, tile_count, 0, 0, start_time)

        path, explored, pruned = self._search(state, move_limit)
        solution = self._build_solution(
            path or [], path is not None, move_limit, tile_count,
            explored, pruned, start_time
        )

        logger.debug(
            f"[{self.name.upper()}] {tile_count} tiles, limit {move_limit}: "
            f"solved={solution.is_solved} moves={solution.move_count} "
            f"explored={explored} pruned={pruned} "
            f"({solution.metrics.computation_time_ms:.1f}ms)"
        )
        return solution

    @abstractmethod
    def _search(self, state: State, move_limit: int) -> SearchResult:
        """
        Search from a state holding at least two tiles.

        Args:
            state: Starting tiles in canonical order
            move_limit: Maximum number of moves to explore

        Returns:
            Tuple of (moves to one tile or None, states explored, pruned)
        """
        pass

    def _build_solution(
        self,
        moves: List[Move],
        is_solved: bool,
        move_limit: int,
        initial_tiles: int,
        states_explored: int,
        pruned_branches: int,
        start_time: float
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return Solution(
            moves=moves,
            is_solved=is_solved,
            move_limit=move_limit,
            initial_tiles=initial_tiles,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                pruned_branches=pruned_branches,
                strategy_name=self.name
            )
        )
