"""
Move Module - Merge moves and the transition rules between states.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .board import State, Tile


@dataclass(frozen=True)
class Move:
    """
    Drag of one tile onto an adjacent tile.

    The surviving tile keeps the source's value and ends up in the
    target's cell; the target is consumed.

    Attributes:
        source: Tile being dragged
        target: Tile being merged into
    """
    source: Tile
    target: Tile

    @property
    def from_position(self) -> Tuple[int, int]:
        return self.source.position

    @property
    def to_position(self) -> Tuple[int, int]:
        return self.target.position

    @property
    def result(self) -> Tile:
        """Tile left on the board after the merge."""
        return self.source.moved_to(self.target.row, self.target.col)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


def are_adjacent(a: Tile, b: Tile) -> bool:
    """True if the tiles are at Chebyshev distance exactly 1."""
    return max(abs(a.row - b.row), abs(a.col - b.col)) == 1


def can_merge(source: Tile, target: Tile) -> bool:
    """
    Check whether source may be dragged onto target.

    Rules:
        - Tiles must be adjacent (8-neighbourhood)
        - Wildcards can only be merged into, never dragged
        - A number can always be dragged onto a wildcard
        - Two numbers merge only if they differ by exactly 1
    """
    if not are_adjacent(source, target):
        return False
    if not source.cell.is_number:
        return False
    if target.cell.is_wildcard:
        return True
    if target.cell.is_number:
        return abs(source.cell.value - target.cell.value) == 1
    return False


def apply_move(state: State, move: Move) -> State:
    """
    Apply a merge to a state.

    Removes source and target and places the source's value on the
    target's cell. Positions are unique within a state, so writing the
    result into the target's slot keeps canonical order.

    Args:
        state: Tiles in canonical order
        move: Merge to apply

    Returns:
        New state with exactly one tile fewer
    """
    source_pos = move.source.position
    target_pos = move.target.position
    merged = move.result

    next_state = []
    for tile in state:
        position = tile.position
        if position == source_pos:
            continue
        next_state.append(merged if position == target_pos else tile)
    return tuple(next_state)


def legal_moves(state: State) -> List[Move]:
    """
    Enumerate every legal merge in a state.

    Returns:
        All ordered (source, target) pairs of distinct tiles that
        satisfy can_merge, in canonical tile order
    """
    moves = []
    for source in state:
        if not source.cell.is_number:
            continue
        for target in state:
            if target is not source and can_merge(source, target):
                moves.append(Move(source=source, target=target))
    return moves


def has_mergeable_pair(state: State) -> bool:
    """True if at least one legal merge exists."""
    for source in state:
        if not source.cell.is_number:
            continue
        for target in state:
            if target is not source and can_merge(source, target):
                return True
    return False
