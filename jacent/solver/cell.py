"""
Cell Module - Closed set of values a grid cell can hold.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Raw interchange format used by level files and the editor
RawCell = Union[None, int, str]

WILDCARD_TOKEN = "W"
EMPTY_TOKENS = frozenset({".", "-", "null", ""})


class CellKind(Enum):
    """Kind of occupant of a single cell."""
    EMPTY = "empty"
    NUMBER = "number"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class Cell:
    """
    Immutable cell value.

    Exactly one of Empty, Number(n) with n >= 1, or Wildcard. Use the
    classmethod constructors instead of building instances directly.

    Attributes:
        kind: Which variant this cell is
        value: Numeric value for NUMBER cells, 0 otherwise
    """
    kind: CellKind
    value: int = 0

    @classmethod
    def empty(cls) -> 'Cell':
        return _EMPTY

    @classmethod
    def wildcard(cls) -> 'Cell':
        return _WILDCARD

    @classmethod
    def number(cls, value: int) -> 'Cell':
        """
        Create a numeric cell.

        Raises:
            ValueError: If value is not a positive integer
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"Tile value must be an integer, got {value!r}")
        value = int(value)
        if value < 1:
            raise ValueError(f"Tile value must be positive, got {value}")
        return cls(kind=CellKind.NUMBER, value=value)

    @classmethod
    def parse(cls, raw: Union[RawCell, 'Cell']) -> 'Cell':
        """
        Convert a raw cell (None, int or "W") into a Cell.

        Strings are accepted too, so text imports can be fed straight in:
        ".", "-", "null" and "" mean empty, digit strings are numbers.

        Args:
            raw: Raw cell value or an existing Cell

        Returns:
            Cell instance

        Raises:
            ValueError: If raw is not a recognised cell value
        """
        if isinstance(raw, Cell):
            return raw
        if raw is None:
            return _EMPTY
        if isinstance(raw, str):
            token = raw.strip()
            if token.upper() == WILDCARD_TOKEN:
                return _WILDCARD
            if token in EMPTY_TOKENS:
                return _EMPTY
            if token.isdigit():
                return cls.number(int(token))
            raise ValueError(f"Unrecognised cell token: {raw!r}")
        return cls.number(raw)

    def to_raw(self) -> RawCell:
        """Convert back to the raw interchange format."""
        if self.kind is CellKind.NUMBER:
            return self.value
        if self.kind is CellKind.WILDCARD:
            return WILDCARD_TOKEN
        return None

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER

    @property
    def is_wildcard(self) -> bool:
        return self.kind is CellKind.WILDCARD

    @property
    def number_value(self) -> Optional[int]:
        """Numeric value, or None for empty and wildcard cells."""
        return self.value if self.kind is CellKind.NUMBER else None

    @property
    def code(self) -> int:
        """
        Compact integer used in canonical keys.

        Numbers map to themselves and the wildcard to 0, so codes never
        collide. Empty cells never appear in a key.
        """
        return self.value

    def __str__(self) -> str:
        if self.kind is CellKind.NUMBER:
            return str(self.value)
        if self.kind is CellKind.WILDCARD:
            return WILDCARD_TOKEN
        return "."


_EMPTY = Cell(kind=CellKind.EMPTY)
_WILDCARD = Cell(kind=CellKind.WILDCARD)
