"""Tests for the `nodal check` and `nodal inspect` CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from nodal import __version__
from nodal.cli import main

if TYPE_CHECKING:
    from pathlib import Path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command where no stray config.yml can be picked up."""
    monkeypatch.chdir(tmp_path)


def _write_lines(tmp_path: Path, lines: list[list[int]], name: str = "attempt.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(lines), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "inspect" in result.output


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheck:
    def test_solved_json(self, puzzle_file: Path, solution_file: Path) -> None:
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["solved"] is True
        assert data["summary"]["failed"] == 0

    def test_piped_output_defaults_to_porcelain(
        self, puzzle_file: Path, solution_file: Path
    ) -> None:
        result = CliRunner().invoke(main, ["check", str(puzzle_file), str(solution_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "node:0:0:ok" in lines
        assert all(line.endswith(":ok") for line in lines)

    def test_rich_format(self, puzzle_file: Path, solution_file: Path) -> None:
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--format", "rich"]
        )
        assert result.exit_code == 0
        assert "Solved" in result.output

    def test_unsolved_without_strict(self, puzzle_file: Path, tmp_path: Path) -> None:
        attempt = _write_lines(tmp_path, [[0, 1]])
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(attempt), "--format", "porcelain"]
        )
        assert result.exit_code == 0
        assert "node:2:0:fail" in result.output.splitlines()

    def test_unsolved_with_strict(self, puzzle_file: Path, tmp_path: Path) -> None:
        attempt = _write_lines(tmp_path, [[0, 1]])
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(attempt), "--strict", "--format", "json"]
        )
        assert result.exit_code == 1
        assert '"solved": false' in result.output

    def test_solved_with_strict(self, puzzle_file: Path, solution_file: Path) -> None:
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--strict"]
        )
        assert result.exit_code == 0

    def test_malformed_solution(self, puzzle_file: Path, tmp_path: Path) -> None:
        attempt = _write_lines(tmp_path, [[3, 3]])
        result = CliRunner().invoke(main, ["check", str(puzzle_file), str(attempt)])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_malformed_puzzle(self, solution_file: Path, tmp_path: Path) -> None:
        puzzle = tmp_path / "puzzle.yml"
        puzzle.write_text("uuid: p\nwidth: 0\nheight: 2\nnodes: []\n", encoding="utf-8")
        result = CliRunner().invoke(main, ["check", str(puzzle), str(solution_file)])
        assert result.exit_code == 2
        assert "width" in result.output

    def test_missing_file(self, puzzle_file: Path, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(tmp_path / "nope.json")]
        )
        assert result.exit_code == 2

    def test_config_default_format(
        self, puzzle_file: Path, solution_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "nodal.yml"
        config.write_text("nodal:\n  default_format: json\n", encoding="utf-8")
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--config", str(config)]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["solved"] is True

    def test_config_in_working_directory(
        self, puzzle_file: Path, solution_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "config.yml").write_text(
            "nodal:\n  default_format: json\n", encoding="utf-8"
        )
        result = CliRunner().invoke(main, ["check", str(puzzle_file), str(solution_file)])
        assert result.exit_code == 0
        assert json.loads(result.output)["puzzle_id"]

    def test_flag_overrides_config(
        self, puzzle_file: Path, solution_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "nodal.yml"
        config.write_text("nodal:\n  default_format: json\n", encoding="utf-8")
        result = CliRunner().invoke(
            main,
            [
                "check",
                str(puzzle_file),
                str(solution_file),
                "--config",
                str(config),
                "--format",
                "porcelain",
            ],
        )
        assert result.exit_code == 0
        assert result.output.startswith("connected_condition:")

    def test_invalid_config(self, puzzle_file: Path, solution_file: Path, tmp_path: Path) -> None:
        config = tmp_path / "nodal.yml"
        config.write_text("nodal:\n  isomorphism_search_limit: -1\n", encoding="utf-8")
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--config", str(config)]
        )
        assert result.exit_code == 2
        assert "isomorphism_search_limit" in result.output

    def test_missing_config_path(
        self, puzzle_file: Path, solution_file: Path, tmp_path: Path
    ) -> None:
        missing = tmp_path / "nope.yml"
        result = CliRunner().invoke(
            main, ["check", str(puzzle_file), str(solution_file), "--config", str(missing)]
        )
        assert result.exit_code == 2
        assert "nope.yml" in result.output

    def test_puzzle_not_utf8(self, solution_file: Path, tmp_path: Path) -> None:
        puzzle = tmp_path / "puzzle.json"
        puzzle.write_bytes(b'{"uuid": "\xff\xfe", "width": 2, "height": 2, "nodes": []}')
        result = CliRunner().invoke(main, ["check", str(puzzle), str(solution_file)])
        assert result.exit_code == 2
        assert "not valid UTF-8" in result.output


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspect:
    def test_json(self, puzzle_file: Path) -> None:
        result = CliRunner().invoke(main, ["inspect", str(puzzle_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["width"] == 2
        assert len(data["nodes"]) == 4
        assert data["connected_condition_groups"] == {
            "DegreeEqual(Blue)": [0, 2],
            "DistanceEqual(Green)": [1, 3],
        }
        assert data["connected_rule_groups"] == {"Homomorphic(Yellow)": [0, 1]}

    def test_rich(self, puzzle_file: Path) -> None:
        result = CliRunner().invoke(main, ["inspect", str(puzzle_file)])
        assert result.exit_code == 0
        assert "Puzzle" in result.output
        assert "Homomorphic(Yellow)" in result.output

    def test_malformed_puzzle(self, tmp_path: Path) -> None:
        puzzle = tmp_path / "puzzle.json"
        puzzle.write_text("[]", encoding="utf-8")
        result = CliRunner().invoke(main, ["inspect", str(puzzle)])
        assert result.exit_code == 2
        assert "Error:" in result.output
