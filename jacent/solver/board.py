"""
Board Module - Immutable grid and tile-list state representation.

The search never works on full grids: a state is the sorted tuple of
occupied tiles, and empty cells carry no information.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from .cell import Cell, RawCell

# (row, col, value code) per tile, sorted
CanonicalKey = Tuple[Tuple[int, int, int], ...]


@dataclass(frozen=True)
class Tile:
    """
    Occupied cell taken out of a grid.

    Attributes:
        row: Row index
        col: Column index
        cell: Number or wildcard value (never empty)
    """
    row: int
    col: int
    cell: Cell

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Row, then column, then value."""
        return (self.row, self.col, self.cell.code)

    def moved_to(self, row: int, col: int) -> 'Tile':
        """Copy of this tile at another position."""
        return Tile(row=row, col=col, cell=self.cell)

    def __str__(self) -> str:
        return f"{self.cell}@({self.row},{self.col})"


# Search state: tiles in canonical order
State = Tuple[Tile, ...]


@dataclass(frozen=True)
class Grid:
    """
    Immutable square grid of cells.

    Uses tuple-of-tuples for hashability and immutability. Every row has
    exactly as many entries as there are rows.

    Attributes:
        cells: Tuple of rows, each a tuple of Cell
    """
    cells: Tuple[Tuple[Cell, ...], ...]

    def __post_init__(self):
        size = len(self.cells)
        for index, row in enumerate(self.cells):
            if len(row) != size:
                raise ValueError(
                    f"Grid must be square: row {index} has {len(row)} cells, "
                    f"expected {size}"
                )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[RawCell, Cell]]]) -> 'Grid':
        """
        Create Grid from a 2D list in the raw interchange format.

        Args:
            rows: 2D list of None, positive ints, "W" or Cell values

        Returns:
            Grid instance

        Raises:
            ValueError: If the rows are not square or a cell is invalid
        """
        cells = tuple(tuple(Cell.parse(raw) for raw in row) for row in rows)
        return cls(cells=cells)

    @classmethod
    def coerce(cls, grid: Union['Grid', Sequence[Sequence[RawCell]]]) -> 'Grid':
        """Accept either a Grid or raw rows."""
        if isinstance(grid, Grid):
            return grid
        return cls.from_rows(grid)

    @classmethod
    def empty(cls, size: int) -> 'Grid':
        """Create an all-empty size x size grid."""
        if size < 0:
            raise ValueError(f"Grid size must be non-negative, got {size}")
        row = tuple(Cell.empty() for _ in range(size))
        return cls(cells=tuple(row for _ in range(size)))

    @classmethod
    def from_tiles(cls, size: int, tiles: Iterable[Tile]) -> 'Grid':
        """
        Rebuild a grid from a tile list.

        Raises:
            ValueError: If a tile lies outside the grid
        """
        rows = [[Cell.empty()] * size for _ in range(size)]
        for tile in tiles:
            if not (0 <= tile.row < size and 0 <= tile.col < size):
                raise ValueError(f"Tile {tile} outside {size}x{size} grid")
            rows[tile.row][tile.col] = tile.cell
        return cls(cells=tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        """Side length of the grid."""
        return len(self.cells)

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at a position.

        Returns:
            Cell at (row, col), or an empty cell when out of bounds
        """
        if 0 <= row < self.size and 0 <= col < self.size:
            return self.cells[row][col]
        return Cell.empty()

    def to_rows(self) -> List[List[RawCell]]:
        """Convert to the raw 2D list format (None / int / "W")."""
        return [[cell.to_raw() for cell in row] for row in self.cells]

    def __str__(self) -> str:
        return "\n".join(" ".join(str(cell) for cell in row) for row in self.cells)


def to_tiles(grid: Grid) -> List[Tile]:
    """Scan the grid row-major and return its occupied cells as tiles."""
    return [
        Tile(row=r, col=c, cell=cell)
        for r, row in enumerate(grid.cells)
        for c, cell in enumerate(row)
        if not cell.is_empty
    ]


def to_state(tiles: Iterable[Tile]) -> State:
    """Sort tiles into canonical order."""
    return tuple(sorted(tiles, key=lambda t: t.sort_key))


def canonical_key(tiles: Iterable[Tile]) -> CanonicalKey:
    """
    Order-independent key for a tile multiset.

    Two tile lists produce the same key iff they hold the same
    (value, position) pairs.
    """
    return tuple(sorted(t.sort_key for t in tiles))


def state_key(state: State) -> CanonicalKey:
    """
    Canonical key of a state already in canonical order.

    to_state and apply_move keep states sorted, so the key is read off
    without sorting. Equal to canonical_key(state).
    """
    return tuple(t.sort_key for t in state)


def count_occupied(grid: Grid) -> int:
    """Number of non-empty cells on the grid."""
    return sum(1 for row in grid.cells for cell in row if not cell.is_empty)
