"""
Depth-First Strategy - Memoized existence search (the solvability oracle).

Proves that some move sequence reduces the grid to one tile. The path it
returns is a witness, not necessarily the shortest one.
"""

from typing import Dict, List

from ..base import SolverStrategy, SearchResult
from ..board import CanonicalKey, State, state_key
from ..move import Move, apply_move, legal_moves
from ..factory import register_strategy


@register_strategy
class DepthFirstStrategy(SolverStrategy):
    """
    Recursive depth-first search with a memo table keyed by canonical key.

    Algorithm:
        1. A state with one tile is solved
        2. A state reached at depth >= move_limit fails
        3. A state already in the memo returns its cached verdict
        4. Otherwise try every legal merge; the first success is cached
           as True, exhausting all merges caches False

    Every merge removes exactly one tile, so a state is always reached at
    depth initial_tiles - len(state). The remaining budget is therefore
    fixed by the key itself and a cached verdict is valid wherever the
    key shows up again.

    Recursion depth is bounded by move_limit (50 by default).
    """
    name = "dfs"
    description = "Depth-first (fast) - Proves a solution exists"

    def _search(self, state: State, move_limit: int) -> SearchResult:
        memo: Dict[CanonicalKey, bool] = {}
        path: List[Move] = []
        stats = {"explored": 0, "pruned": 0}

        def search(current: State, depth: int) -> bool:
            if len(current) == 1:
                return True
            if depth >= move_limit:
                return False

            key = state_key(current)
            cached = memo.get(key)
            if cached is not None:
                stats["pruned"] += 1
                return cached

            stats["explored"] += 1
            for move in legal_moves(current):
                path.append(move)
                if search(apply_move(current, move), depth + 1):
                    memo[key] = True
                    return True
                path.pop()

            # Dead end or every branch failed
            memo[key] = False
            return False

        solved = search(state, 0)
        return (path if solved else None), stats["explored"], stats["pruned"]
