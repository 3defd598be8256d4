"""
Levels Module - Level records, stage files and the plain-text grid format.

Level records pair a layout with its grid size and par (minimal move
count). The core never writes these on its own; authoring tools call
into this module to read, format and validate them.

JSON level format:
    {
      "gridSize": 3,
      "par": 4,
      "layout": [
        [1, 2, null],
        [null, "W", 3],
        [null, null, 2]
      ]
    }

Text grid format (one row per line, space separated, "." for empty):
    1 2 .
    . W 3
    . . 2
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .settings import load_settings
from .solver import Grid, count_occupied, create_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelDefinition:
    """
    A single authored level.

    Attributes:
        grid_size: Side length of the layout
        par: Expected minimal move count
        layout: Starting grid
    """
    grid_size: int
    par: int
    layout: Grid

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LevelDefinition':
        """
        Create LevelDefinition from a decoded JSON object.

        Raises:
            ValueError: If the record is not an object, a key is missing or
                        malformed, or gridSize does not match the layout
        """
        if not isinstance(data, dict):
            raise ValueError(f"Level must be a JSON object, got {type(data).__name__}")

        try:
            layout = Grid.from_rows(data["layout"])
            grid_size = int(data.get("gridSize", layout.size))
            par = int(data["par"])
        except KeyError as e:
            raise ValueError(f"Level is missing required key {e}") from e
        except TypeError as e:
            raise ValueError(f"Level has a malformed field: {e}") from e

        if grid_size != layout.size:
            raise ValueError(
                f"gridSize {grid_size} does not match {layout.size}x{layout.size} layout"
            )
        return cls(grid_size=grid_size, par=par, layout=layout)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON object layout used by stage files."""
        return {
            "gridSize": self.grid_size,
            "par": self.par,
            "layout": self.layout.to_rows(),
        }

    @property
    def tile_count(self) -> int:
        return count_occupied(self.layout)


@dataclass
class StageDefinition:
    """
    A named group of levels, stored as one JSON file.

    Attributes:
        name: Display name of the stage
        levels: Levels in play order
    """
    name: str
    levels: List[LevelDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StageDefinition':
        """
        Create StageDefinition from a decoded JSON object.

        Raises:
            ValueError: If the stage or one of its levels is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Stage must be a JSON object, got {type(data).__name__}")

        raw_levels = data.get("levels", [])
        if not isinstance(raw_levels, list):
            raise ValueError(f"Stage levels must be a list, got {type(raw_levels).__name__}")

        levels = []
        for index, level in enumerate(raw_levels):
            try:
                levels.append(LevelDefinition.from_dict(level))
            except ValueError as e:
                raise ValueError(f"Level {index + 1}: {e}") from e
        return cls(name=str(data.get("name", "")), levels=levels)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "levels": [level.to_dict() for level in self.levels],
        }


@dataclass
class LevelReport:
    """
    Validation outcome for one level.

    Attributes:
        index: Position of the level in its stage (0-based)
        solvable: Oracle verdict
        min_moves: Minimal move count, None if unsolvable
        par: Par stored in the level record
        tile_count: Occupied cells in the layout
        grid_size: Side length of the layout
    """
    index: int
    solvable: bool
    min_moves: Optional[int]
    par: int
    tile_count: int
    grid_size: int

    @property
    def par_matches(self) -> bool:
        return self.solvable and self.min_moves == self.par

    def __str__(self) -> str:
        status = "OK" if self.solvable else "UNSOLVABLE"
        if self.par_matches:
            par_note = "match"
        elif self.solvable:
            par_note = f"mismatch (actual: {self.min_moves})"
        else:
            par_note = "n/a"
        return (f"Level {self.index + 1}: {status} | Par: {self.par} {par_note} | "
                f"Tiles: {self.tile_count} | Grid: {self.grid_size}x{self.grid_size}")


@dataclass
class StageReport:
    """Validation outcome for a whole stage."""
    name: str
    levels: List[LevelReport] = field(default_factory=list)

    @property
    def all_solvable(self) -> bool:
        return all(report.solvable for report in self.levels)

    @property
    def all_pars_match(self) -> bool:
        return all(report.par_matches for report in self.levels)

    def __str__(self) -> str:
        lines = [f"=== {self.name} Validation ==="]
        lines.extend(str(report) for report in self.levels)
        overall = "All levels solvable" if self.all_solvable else "Some levels unsolvable"
        lines.append(f"Overall: {overall}")
        return "\n".join(lines)


def validate_level(level: LevelDefinition, index: int = 0) -> LevelReport:
    """Check one level for solvability and par."""
    settings = load_settings()
    solvable = create_strategy("dfs", settings=settings).solve(level.layout).is_solved
    min_moves = None
    if solvable:
        solution = create_strategy("bfs", settings=settings).solve(level.layout)
        min_moves = solution.move_count if solution.is_solved else None

    return LevelReport(
        index=index,
        solvable=solvable,
        min_moves=min_moves,
        par=level.par,
        tile_count=level.tile_count,
        grid_size=level.grid_size,
    )


def validate_stage(stage: StageDefinition) -> StageReport:
    """
    Check every level of a stage for solvability and par.

    Returns:
        StageReport with one LevelReport per level
    """
    report = StageReport(name=stage.name)
    for index, level in enumerate(stage.levels):
        level_report = validate_level(level, index)
        if not level_report.par_matches:
            logger.warning(f"[Levels] {stage.name}: {level_report}")
        report.levels.append(level_report)
    return report


def load_stage(path: Union[str, Path]) -> StageDefinition:
    """
    Load a stage from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a valid stage
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    stage = StageDefinition.from_dict(data)
    logger.debug(f"Loaded stage {stage.name!r} with {len(stage.levels)} levels from {path}")
    return stage


def level_to_json(level: LevelDefinition) -> str:
    """
    Format a level as JSON with each layout row on a single line.
    """
    layout_lines = [f"    {json.dumps(row)}" for row in level.layout.to_rows()]
    lines = [
        "{",
        f'  "gridSize": {level.grid_size},',
        f'  "par": {level.par},',
        '  "layout": [',
        ",\n".join(layout_lines),
        "  ]",
        "}",
    ]
    return "\n".join(lines)


def stage_to_json(stage: StageDefinition) -> str:
    """Format a stage the way stage files are stored."""
    return json.dumps(stage.to_dict(), indent=2)


def serialize_grid(grid: Grid) -> str:
    """Render a grid in the plain-text format."""
    return "\n".join(" ".join(str(cell) for cell in row) for row in grid.cells)


def deserialize_grid(text: str) -> Grid:
    """
    Parse the plain-text format.

    Tokens ".", "-" and "null" are empty, "W" is a wildcard, anything
    else must be a positive integer.

    Raises:
        ValueError: If the grid is not square or a token is invalid
    """
    rows = [line.split() for line in text.strip().splitlines() if line.strip()]
    size = len(rows)
    for row in rows:
        if len(row) != size:
            raise ValueError("Grid must be square when importing")
    return Grid.from_rows(rows)
