"""
Solver performance benchmark.

Times is_solvable and minimal_moves on every level of the given stage
files and checks each stored par against the minimal move count.

Usage:
    python tools/benchmark.py levels/stage1.json levels/stage2.json
    python tools/benchmark.py --generate 20 --grid-size 4 --tiles 8
"""

import sys
import time
import logging
import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from jacent import is_solvable, minimal_moves, generate_level_with_par, load_stage
from jacent.levels import LevelDefinition

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    level: str
    grid_size: int
    tile_count: int
    solvable: bool
    solvable_ms: float
    min_moves_ms: float
    min_moves: Optional[int]
    expected_par: int


def run_level(name: str, level: LevelDefinition) -> BenchmarkResult:
    """Time both searches on one level."""
    start = time.perf_counter()
    solvable = is_solvable(level.layout)
    solvable_ms = (time.perf_counter() - start) * 1000

    start = time.perf_counter()
    min_moves = minimal_moves(level.layout)
    min_moves_ms = (time.perf_counter() - start) * 1000

    return BenchmarkResult(
        level=name,
        grid_size=level.grid_size,
        tile_count=level.tile_count,
        solvable=solvable,
        solvable_ms=solvable_ms,
        min_moves_ms=min_moves_ms,
        min_moves=min_moves,
        expected_par=level.par,
    )


def print_result(result: BenchmarkResult):
    par_match = "OK" if result.min_moves == result.expected_par else "MISMATCH"
    print(f"  {result.level} ({result.grid_size}x{result.grid_size}, {result.tile_count} tiles)")
    print(f"    Solvable: {result.solvable} ({result.solvable_ms:.2f}ms)")
    print(f"    Min moves: {result.min_moves} | Expected: {result.expected_par} {par_match} "
          f"({result.min_moves_ms:.2f}ms)")


def print_summary(results: List[BenchmarkResult]):
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")

    if not results:
        print("  No levels benchmarked")
        return

    avg_solvable = sum(r.solvable_ms for r in results) / len(results)
    avg_min_moves = sum(r.min_moves_ms for r in results) / len(results)
    correct = sum(1 for r in results if r.min_moves == r.expected_par)

    print(f"  Total levels tested: {len(results)}")
    print(f"  Correct par values: {correct}/{len(results)}")
    print(f"  Average is_solvable time: {avg_solvable:.2f}ms")
    print(f"  Average minimal_moves time: {avg_min_moves:.2f}ms")

    print("\n  Slowest levels:")
    slowest = sorted(results, key=lambda r: r.min_moves_ms, reverse=True)[:5]
    for r in slowest:
        print(f"    {r.level}: {r.min_moves_ms:.2f}ms "
              f"({r.grid_size}x{r.grid_size}, {r.tile_count} tiles)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark the Jacent solver")
    parser.add_argument("stages", nargs="*", type=Path, help="Stage JSON files")
    parser.add_argument("--generate", type=int, default=0,
                        help="Also benchmark this many generated levels")
    parser.add_argument("--grid-size", type=int, default=4, help="Generated grid size")
    parser.add_argument("--tiles", type=int, default=8, help="Generated tile count")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated levels")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    results: List[BenchmarkResult] = []

    for path in args.stages:
        try:
            stage = load_stage(path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {path}: {e}")
            return 1

        print(f"\n{stage.name}")
        print("-" * 60)
        for index, level in enumerate(stage.levels):
            result = run_level(f"{stage.name} Level {index + 1}", level)
            print_result(result)
            results.append(result)

    if args.generate:
        print(f"\nGenerated ({args.grid_size}x{args.grid_size}, {args.tiles} tiles)")
        print("-" * 60)
        for index in range(args.generate):
            seed = None if args.seed is None else args.seed + index
            level = generate_level_with_par(grid_size=args.grid_size, tile_count=args.tiles,
                                            seed=seed)
            if level is None:
                print(f"  Generated {index + 1}: no solvable grid found")
                continue
            result = run_level(f"Generated {index + 1}", level)
            print_result(result)
            results.append(result)

    print_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
