"""
Breadth-First Strategy - Minimal move count search.

Expands states level by level, so the first one-tile state produced is
reached with the fewest possible moves. This is a separate traversal from
the depth-first oracle because level order is what makes the count minimal.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from ..base import SolverStrategy, SearchResult
from ..board import CanonicalKey, State, state_key
from ..move import Move, apply_move, legal_moves
from ..factory import register_strategy

logger = logging.getLogger(__name__)


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    FIFO search over canonical keys with parent links for path recovery.

    Algorithm:
        1. Seed the queue with (initial state, 0 moves) and mark it visited
        2. Pop the front; stop expanding once a child would exceed move_limit
        3. For each legal merge: a one-tile child ends the search at
           moves_so_far + 1, otherwise unseen children are enqueued
        4. An empty queue means no solution within the limit

    The queue and visited set grow with the number of distinct reachable
    states, which is the memory cost of guaranteed minimality.
    """
    name = "bfs"
    description = "Breadth-first (thorough) - Finds the minimal move count"

    def _search(self, state: State, move_limit: int) -> SearchResult:
        root_key = state_key(state)
        visited = {root_key}
        parents: Dict[CanonicalKey, Tuple[CanonicalKey, Move]] = {}
        queue: Deque[Tuple[State, CanonicalKey, int]] = deque([(state, root_key, 0)])
        explored = 0
        pruned = 0

        while queue:
            current, current_key, moves_so_far = queue.popleft()

            # Queue is in level order: everything behind this is at least as deep
            if moves_so_far + 1 > move_limit:
                logger.debug(f"[BFS] Move limit {move_limit} reached after {explored} states")
                break

            explored += 1
            for move in legal_moves(current):
                child = apply_move(current, move)
                if len(child) == 1:
                    path = self._reconstruct_path(parents, current_key)
                    path.append(move)
                    return path, explored, pruned

                child_key = state_key(child)
                if child_key in visited:
                    pruned += 1
                    continue
                visited.add(child_key)
                parents[child_key] = (current_key, move)
                queue.append((child, child_key, moves_so_far + 1))

        return None, explored, pruned

    @staticmethod
    def _reconstruct_path(
        parents: Dict[CanonicalKey, Tuple[CanonicalKey, Move]],
        key: Optional[CanonicalKey]
    ) -> List[Move]:
        """Walk parent links back to the root and return the moves in order."""
        path: List[Move] = []
        while key in parents:
            key, move = parents[key]
            path.append(move)
        path.reverse()
        return path
