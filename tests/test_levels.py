"""
Test script for level records and settings

Covers:
1. Level/stage JSON conversion and loading
2. Plain-text grid import/export
3. Stage validation reports
4. Settings persistence and move limit defaults
5. config.json driving the searches and the generator

Usage:
    python tests/test_levels.py
"""

import json
import os
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from jacent import (
    GenerateOptions,
    Grid,
    LevelDefinition,
    StageDefinition,
    deserialize_grid,
    generate_level,
    is_solvable,
    load_stage,
    serialize_grid,
    solve,
    validate_stage,
)
from jacent.levels import level_to_json, stage_to_json
from jacent.settings import DEFAULT_SETTINGS, default_move_limit, load_settings, save_settings


STAGE_DATA = {
    "name": "Stage 1",
    "levels": [
        {"gridSize": 2, "par": 1, "layout": [[1, 2], [None, None]]},
        {"gridSize": 2, "par": 1, "layout": [[1, "W"], [None, None]]},
        {"gridSize": 3, "par": 3, "layout": [[1, 2, None], [None, 3, None], [None, None, None]]},
        {"gridSize": 2, "par": 1, "layout": [[1, None], [None, 5]]},
    ],
}


def banner(title: str):
    print("\n" + "="*60)
    print(f"TEST: {title}")
    print("="*60)


def test_level_records():
    """Levels convert to and from the stage file layout."""
    banner("Level Records")

    stage = StageDefinition.from_dict(STAGE_DATA)
    assert stage.name == "Stage 1"
    assert len(stage.levels) == 4
    assert stage.levels[1].layout.get_cell(0, 1).is_wildcard
    assert stage.levels[2].tile_count == 3
    assert stage.to_dict() == STAGE_DATA

    level = stage.levels[0]
    text = level_to_json(level)
    print(text)
    assert json.loads(text) == STAGE_DATA["levels"][0]
    assert '    [1, 2],' in text
    assert json.loads(stage_to_json(stage)) == STAGE_DATA

    for bad in (
        {"gridSize": 3, "par": 1, "layout": [[1, 2], [None, None]]},
        {"gridSize": 2, "layout": [[1, 2], [None, None]]},
        {"gridSize": 2, "par": 1},
        {"gridSize": 2, "par": 1, "layout": [[1, 2], [None]]},
    ):
        try:
            LevelDefinition.from_dict(bad)
        except ValueError as e:
            print(f"  Rejected: {e}")
            continue
        raise AssertionError(f"Malformed level accepted: {bad}")

    print("  [PASS] Level record tests")


def test_load_stage():
    """Stage files load from disk."""
    banner("Load Stage")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "stage1.json"
        path.write_text(json.dumps(STAGE_DATA), encoding="utf-8")
        stage = load_stage(path)

    assert stage == StageDefinition.from_dict(STAGE_DATA)
    print("  [PASS] Load stage tests")


def test_malformed_stage_files():
    """Well-formed JSON with the wrong shape is rejected as ValueError."""
    banner("Malformed Stage Files")

    level = STAGE_DATA["levels"][0]
    malformed = [
        [1, 2],
        "stage",
        {"name": "Bad", "levels": {"first": level}},
        {"name": "Bad", "levels": [level, [1, 2]]},
        {"name": "Bad", "levels": [dict(level, par=None)]},
        {"name": "Bad", "levels": [dict(level, gridSize=None)]},
        {"name": "Bad", "levels": [dict(level, layout=5)]},
        {"name": "Bad", "levels": [dict(level, layout=[1, 2])]},
    ]

    with tempfile.TemporaryDirectory() as tmp:
        for index, data in enumerate(malformed):
            path = Path(tmp) / f"bad{index}.json"
            path.write_text(json.dumps(data), encoding="utf-8")
            try:
                load_stage(path)
            except ValueError as e:
                print(f"  Rejected {data!r}: {e}")
                continue
            raise AssertionError(f"Malformed stage accepted: {data!r}")

        broken = Path(tmp) / "broken.json"
        broken.write_text("{\"name\": ", encoding="utf-8")
        try:
            load_stage(broken)
        except ValueError:
            pass
        else:
            raise AssertionError("Truncated stage file accepted")

    print("  [PASS] Malformed stage tests")


def test_text_grid_format():
    """Plain-text import and export."""
    banner("Text Grid Format")

    grid = Grid.from_rows([[1, None, "W"], [None, 12, None], [3, None, None]])
    text = serialize_grid(grid)
    print(text)
    assert text == "1 . W\n. 12 .\n3 . ."
    assert deserialize_grid(text) == grid

    imported = deserialize_grid("\n  4 - \n null W \n\n")
    assert imported.to_rows() == [[4, None], [None, "W"]]

    for bad in ("1 2\n3", "1 2 3\n4 5 6", "1 x\n. ."):
        try:
            deserialize_grid(bad)
        except ValueError:
            continue
        raise AssertionError(f"Malformed text accepted: {bad!r}")

    print("  [PASS] Text format tests")


def test_validate_stage():
    """Validation flags unsolvable levels and wrong pars."""
    banner("Validate Stage")

    stage = StageDefinition.from_dict(STAGE_DATA)
    report = validate_stage(stage)
    print(report)

    solvable = [r.solvable for r in report.levels]
    assert solvable == [True, True, True, False]
    assert [r.min_moves for r in report.levels] == [1, 1, 2, None]
    assert [r.par_matches for r in report.levels] == [True, True, False, False]
    assert not report.all_solvable
    assert not report.all_pars_match
    assert "mismatch (actual: 2)" in str(report.levels[2])

    good = StageDefinition(name="Good", levels=stage.levels[:2])
    good_report = validate_stage(good)
    assert good_report.all_solvable
    assert good_report.all_pars_match

    print("  [PASS] Stage validation tests")


def test_settings():
    """Settings fall back to defaults and merge saved overrides."""
    banner("Settings")

    assert default_move_limit(1) == 2
    assert default_move_limit(5) == 10
    assert default_move_limit(25) == 50
    assert default_move_limit(40) == 50
    assert default_move_limit(40, {"move_limit_cap": 100}) == 80
    assert default_move_limit(4, {"move_limit_multiplier": 3}) == 12

    with tempfile.TemporaryDirectory() as tmp:
        missing = Path(tmp) / "missing.json"
        assert load_settings(missing) == DEFAULT_SETTINGS

        broken = Path(tmp) / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        assert load_settings(broken) == DEFAULT_SETTINGS

        not_object = Path(tmp) / "list.json"
        not_object.write_text("[1, 2]", encoding="utf-8")
        assert load_settings(not_object) == DEFAULT_SETTINGS

        saved = Path(tmp) / "config.json"
        save_settings({"move_limit_cap": 30}, saved)
        loaded = load_settings(saved)
        assert loaded["move_limit_cap"] == 30
        assert loaded["max_attempts"] == DEFAULT_SETTINGS["max_attempts"]
        assert default_move_limit(20, loaded) == 30

    print("  [PASS] Settings tests")



def test_config_file_drives_defaults():
    """A config.json in the working directory changes limits, strategy and generator ranges."""
    banner("Config File Defaults")

    rows = [
        [1, 2, None],
        [None, 3, None],
        [None, None, None],
    ]
    assert solve(rows).move_limit == 6
    assert solve(rows).metrics.strategy_name == "dfs"

    previous = os.getcwd()
    with tempfile.TemporaryDirectory() as tmp:
        os.chdir(tmp)
        try:
            save_settings({
                "move_limit_cap": 1,
                "default_strategy": "bfs",
                "min_value": 2,
                "max_value": 3,
            })

            solution = solve(rows)
            print(f"  limit={solution.move_limit} strategy={solution.metrics.strategy_name}")
            assert solution.move_limit == 1
            assert solution.metrics.strategy_name == "bfs"
            assert not solution.is_solved
            assert not is_solvable(rows)
            assert is_solvable(rows, move_limit=2)

            options = GenerateOptions.from_settings(load_settings(), grid_size=2, tile_count=2)
            assert (options.min_value, options.max_value) == (2, 3)
            assert options.max_attempts == DEFAULT_SETTINGS["max_attempts"]
            assert GenerateOptions.from_settings(
                load_settings(), grid_size=2, tile_count=2, max_value=9
            ).max_value == 9

            grid = generate_level(grid_size=2, tile_count=2, seed=5, normalize=False)
            assert grid is not None
            values = sorted(cell.value for row in grid.cells for cell in row if cell.is_number)
            assert values == [2, 3]

            # Unregistered strategy names fall back to the oracle
            save_settings({"default_strategy": "greedy"})
            assert solve(rows).metrics.strategy_name == "dfs"
        finally:
            os.chdir(previous)

    print("  [PASS] Config file tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# LEVEL AND SETTINGS TESTS")
    print("#"*60)

    tests = [
        ("Level Records", test_level_records),
        ("Load Stage", test_load_stage),
        ("Malformed Stage Files", test_malformed_stage_files),
        ("Text Grid Format", test_text_grid_format),
        ("Validate Stage", test_validate_stage),
        ("Settings", test_settings),
        ("Config File Defaults", test_config_file_drives_defaults),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
