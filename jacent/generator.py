"""
Generator Module - Random solvable level generation.

Samples random grids under placement constraints and accepts the first
one the depth-first oracle proves solvable. The random source is always
injected (a numpy Generator or a seed), so generation is reproducible.
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .normalizer import normalize_values
from .levels import LevelDefinition
from .settings import DEFAULT_SETTINGS, load_settings
from .solver import Cell, Grid, count_occupied, create_strategy, has_mergeable_pair, to_state, to_tiles

logger = logging.getLogger(__name__)


@dataclass
class GenerateOptions:
    """
    Constraints for a generated level.

    Attributes:
        grid_size: Side length N of the grid
        tile_count: Occupied cells, 1 <= tile_count <= N*N
        min_value: Smallest numeric tile value (inclusive)
        max_value: Largest numeric tile value (inclusive)
        max_attempts: Random grids to try before giving up
        wildcard_count: How many of the tiles are wildcards
        normalize: Rescale accepted grids to values 1..k
    """
    grid_size: int
    tile_count: int
    min_value: int = DEFAULT_SETTINGS["min_value"]
    max_value: int = DEFAULT_SETTINGS["max_value"]
    max_attempts: int = DEFAULT_SETTINGS["max_attempts"]
    wildcard_count: int = 0
    normalize: bool = True

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], **kwargs) -> "GenerateOptions":
        """
        Build options whose value range and attempt budget default to the
        given settings. Explicit keyword arguments win.
        """
        for field in ("min_value", "max_value", "max_attempts"):
            kwargs.setdefault(field, settings.get(field, DEFAULT_SETTINGS[field]))
        return cls(**kwargs)

    def validate(self) -> Optional[str]:
        """
        Check the options for consistency.

        Returns:
            Reason the options are invalid, or None if they are usable
        """
        if self.grid_size < 1:
            return f"grid_size must be at least 1, got {self.grid_size}"
        if self.tile_count <= 0 or self.tile_count > self.grid_size * self.grid_size:
            return (f"tile_count must be in [1, {self.grid_size * self.grid_size}], "
                    f"got {self.tile_count}")
        if self.wildcard_count < 0 or self.wildcard_count > self.tile_count:
            return (f"wildcard_count must be in [0, {self.tile_count}], "
                    f"got {self.wildcard_count}")
        if self.min_value < 1 or self.min_value > self.max_value:
            return f"value range [{self.min_value}, {self.max_value}] is invalid"
        if self.max_attempts < 0:
            return f"max_attempts must be non-negative, got {self.max_attempts}"
        return None


def _sample_grid(options: GenerateOptions, rng: np.random.Generator) -> Grid:
    """
    Place tile_count tiles on distinct random cells.

    The first wildcard_count sampled cells hold wildcards, the rest get a
    uniform value in [min_value, max_value].
    """
    size = options.grid_size
    positions = rng.choice(size * size, size=options.tile_count, replace=False)
    values = rng.integers(options.min_value, options.max_value, size=options.tile_count,
                          endpoint=True)

    rows: List[List[Cell]] = [[Cell.empty()] * size for _ in range(size)]
    for index, (flat, value) in enumerate(zip(positions, values)):
        r, c = divmod(int(flat), size)
        if index < options.wildcard_count:
            rows[r][c] = Cell.wildcard()
        else:
            rows[r][c] = Cell.number(int(value))

    return Grid(cells=tuple(tuple(row) for row in rows))


def generate_level(
    options: Optional[GenerateOptions] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    move_limit: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    settings: Optional[Dict[str, Any]] = None,
    **kwargs
) -> Optional[Grid]:
    """
    Generate a random grid that is provably solvable.

    Options can be passed as a GenerateOptions or as keyword arguments:

        generate_level(grid_size=3, tile_count=5, max_value=7, seed=42)

    Args:
        options: Generation constraints
        rng: Random source, takes precedence over seed
        seed: Seed for a fresh numpy Generator when rng is not given
        move_limit: Oracle depth override, defaults to the move limit heuristic
        progress_callback: Called with (attempt, max_attempts) before each attempt
        settings: Settings for option defaults and the oracle, loaded
                  from config.json when omitted
        **kwargs: GenerateOptions fields when options is None

    Returns:
        Accepted grid, or None if the options are invalid or every
        attempt failed
    """
    if settings is None:
        settings = load_settings()

    if options is None:
        options = GenerateOptions.from_settings(settings, **kwargs)
    elif kwargs:
        raise TypeError("Pass either a GenerateOptions or keyword options, not both")

    problem = options.validate()
    if problem is not None:
        logger.warning(f"[Generator] Invalid options: {problem}")
        return None

    if rng is None:
        rng = np.random.default_rng(seed)

    oracle = create_strategy("dfs", settings=settings)
    start_time = time.perf_counter()
    prefilter_rejects = 0
    oracle_rejects = 0

    for attempt in range(options.max_attempts):
        if progress_callback:
            progress_callback(attempt, options.max_attempts)

        candidate = _sample_grid(options, rng)

        # Cheap necessary condition before running the oracle; a lone tile is already solved
        if options.tile_count > 1 and not has_mergeable_pair(to_state(to_tiles(candidate))):
            prefilter_rejects += 1
            continue

        if count_occupied(candidate) != options.tile_count:
            continue

        if not oracle.solve(candidate, move_limit).is_solved:
            oracle_rejects += 1
            continue

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"[Generator] Accepted {options.grid_size}x{options.grid_size} grid with "
            f"{options.tile_count} tiles after {attempt + 1} attempts ({elapsed_ms:.1f}ms)"
        )
        return normalize_values(candidate) if options.normalize else candidate

    logger.info(
        f"[Generator] No solvable grid in {options.max_attempts} attempts "
        f"({prefilter_rejects} without a mergeable pair, {oracle_rejects} unsolvable)"
    )
    return None


def generate_level_with_par(
    options: Optional[GenerateOptions] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    settings: Optional[Dict[str, Any]] = None,
    **kwargs
) -> Optional[LevelDefinition]:
    """
    Generate a level and pair it with its minimal move count.

    Returns:
        LevelDefinition with par from the breadth-first search, or None
        if generation failed
    """
    if settings is None:
        settings = load_settings()

    grid = generate_level(options, rng=rng, seed=seed, settings=settings, **kwargs)
    if grid is None:
        return None

    solution = create_strategy("bfs", settings=settings).solve(grid)
    if not solution.is_solved:
        logger.warning("[Generator] Minimal-move search found no path for an accepted grid")
        return None
    return LevelDefinition(grid_size=grid.size, par=solution.move_count, layout=grid)
