"""Check orchestrator: load a puzzle and a solution, evaluate, format results."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nodal.config import NodalConfig
from nodal.grid import is_drawable_line
from nodal.loader import load_puzzle, load_solution
from nodal.verdict import SatisfactionVerdict, evaluate_puzzle

if TYPE_CHECKING:
    from pathlib import Path

    from nodal.model import Edge, Puzzle, Solution


@dataclass
class CheckResult:
    """Result of checking one solution against one puzzle."""

    puzzle_id: str
    verdict: SatisfactionVerdict = field(default_factory=SatisfactionVerdict)
    line_count: int = 0
    undrawable_lines: list[Edge] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def is_solved(self) -> bool:
        return self.verdict.is_solved


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------


def check_solution(
    puzzle: Puzzle,
    solution: Solution,
    *,
    config: NodalConfig | None = None,
) -> CheckResult:
    """Evaluate *solution* against *puzzle* and collect drawability warnings."""
    if config is None:
        config = NodalConfig()
    start = time.monotonic()

    verdict = evaluate_puzzle(
        puzzle, solution, search_limit=config.isomorphism_search_limit
    )

    undrawable: list[Edge] = []
    if config.warn_undrawable_lines:
        undrawable = [edge for edge in solution if not is_drawable_line(puzzle, edge.a, edge.b)]

    elapsed = (time.monotonic() - start) * 1000
    return CheckResult(
        puzzle_id=puzzle.id,
        verdict=verdict,
        line_count=len(solution),
        undrawable_lines=undrawable,
        elapsed_ms=elapsed,
    )


def check_files(
    puzzle_path: Path,
    solution_path: Path,
    *,
    config: NodalConfig | None = None,
) -> CheckResult:
    """Load both files and run :func:`check_solution`.

    Raises
    ------
    PuzzleDefinitionError
        When the puzzle file is unreadable or malformed.
    SolutionFormatError
        When the solution file is unreadable or malformed.
    """
    puzzle = load_puzzle(puzzle_path)
    solution = load_solution(solution_path)
    return check_solution(puzzle, solution, config=config)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(result: CheckResult) -> str:
    """Format a CheckResult as human-readable text.

    Example output::

        Puzzle: 3f1c... (6 lines)

        ✗ node_condition:4:0
        ✗ set_rule:1:0

        Unsolved: 2 of 14 checks failing (0.4ms)
    """
    lines: list[str] = []
    lines.append(f"Puzzle: {result.puzzle_id} ({result.line_count} lines)")
    lines.append("")

    for edge in result.undrawable_lines:
        lines.append(f"! line {edge} does not join neighbouring grid nodes")
    if result.undrawable_lines:
        lines.append("")

    failed = result.verdict.failed()
    for key in failed:
        lines.append(f"✗ {key}")
    if failed:
        lines.append("")

    elapsed_str = f"{result.elapsed_ms:.1f}ms"
    total = len(result.verdict)
    if result.is_solved:
        lines.append(f"✓ Solved ({total} checks satisfied, {elapsed_str})")
    else:
        lines.append(f"Unsolved: {len(failed)} of {total} checks failing ({elapsed_str})")

    return "\n".join(lines)


def format_json(result: CheckResult) -> str:
    """Format a CheckResult as structured JSON."""
    output: dict[str, object] = {
        "puzzle_id": result.puzzle_id,
        "solved": result.is_solved,
        "verdict": result.verdict.to_dict(),
        "summary": {
            "checks": len(result.verdict),
            "failed": len(result.verdict.failed()),
            "lines": result.line_count,
            "undrawable_lines": [[edge.a, edge.b] for edge in result.undrawable_lines],
            "elapsed_ms": result.elapsed_ms,
        },
    }
    return json.dumps(output, indent=2)


def format_porcelain(result: CheckResult) -> str:
    """Format a CheckResult as one ``kind:owner:index:ok|fail`` line per entity."""
    lines: list[str] = []
    for key in result.verdict:
        state = "ok" if result.verdict[key] else "fail"
        lines.append(f"{key}:{state}")
    return "\n".join(lines)
