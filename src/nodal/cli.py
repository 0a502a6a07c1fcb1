"""Nodal CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from nodal import __version__


@click.group()
@click.version_option(version=__version__, prog_name="nodal")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """Nodal - check puzzle solutions against their rules."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("nodal").setLevel(level)


@main.command()
@click.argument("puzzle_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("solution_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option("--strict", is_flag=True, help="Exit with code 1 when the puzzle is unsolved.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.yml (default: ./config.yml if present).",
)
def check(
    *,
    puzzle_file: Path,
    solution_file: Path,
    fmt: str | None,
    strict: bool,
    config_path: Path | None,
) -> None:
    """Check SOLUTION_FILE against the rules of PUZZLE_FILE.

    Exit codes: 0 = solved, or unsolved without --strict,
    1 = unsolved with --strict, 2 = invalid input or configuration.
    """
    from nodal.checker import check_files, format_json, format_porcelain, format_rich
    from nodal.config import load_config
    from nodal.errors import NodalError

    try:
        config = load_config(config_path or Path.cwd() / "config.yml")
        result = check_files(puzzle_file, solution_file, config=config)
    except NodalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    # Explicit flag > config > TTY detection.
    if fmt is None:
        fmt = config.default_format
    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)

    if strict and not result.is_solved:
        sys.exit(1)


@main.command()
@click.argument("puzzle_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
def inspect(*, puzzle_file: Path, output_json: bool) -> None:
    """Summarize the nodes, sets, and connected groups of PUZZLE_FILE."""
    from nodal.errors import NodalError
    from nodal.loader import load_puzzle
    from nodal.verdict import group_connected_conditions, group_connected_rules

    try:
        puzzle = load_puzzle(puzzle_file)
    except NodalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    condition_groups = {
        str(condition): sorted({node.id for node, _ in members})
        for condition, members in group_connected_conditions(puzzle).items()
    }
    rule_groups = {
        str(rule): sorted({game_set.id for game_set, _ in members})
        for rule, members in group_connected_rules(puzzle).items()
    }

    if output_json:
        data = {
            "id": puzzle.id,
            "width": puzzle.width,
            "height": puzzle.height,
            "nodes": [
                {
                    "id": node.id,
                    "conditions": [c.value for c in node.conditions],
                    "connected_conditions": [str(c) for c in node.connected_conditions],
                }
                for node in puzzle.nodes
            ],
            "sets": [
                {
                    "id": game_set.id,
                    "nodes": list(game_set.nodes),
                    "rules": [r.value for r in game_set.rules],
                    "connected_rules": [str(r) for r in game_set.connected_rules],
                }
                for game_set in puzzle.sets
            ],
            "connected_condition_groups": condition_groups,
            "connected_rule_groups": rule_groups,
        }
        click.echo(json.dumps(data, indent=2))
        return

    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    console = Console()
    console.print(
        Panel(
            f"{puzzle.width} x {puzzle.height} grid, "
            f"{len(puzzle.nodes)} nodes, {len(puzzle.sets)} sets",
            title=f"Puzzle {puzzle.id}",
            border_style="blue",
        )
    )

    node_table = Table(title="Nodes")
    node_table.add_column("id", justify="right", style="cyan")
    node_table.add_column("conditions")
    node_table.add_column("connected")
    for node in puzzle.nodes:
        if not node.conditions and not node.connected_conditions:
            continue
        node_table.add_row(
            str(node.id),
            ", ".join(c.value for c in node.conditions),
            ", ".join(str(c) for c in node.connected_conditions),
        )
    console.print(node_table)

    if puzzle.sets:
        set_table = Table(title="Sets")
        set_table.add_column("id", justify="right", style="cyan")
        set_table.add_column("nodes")
        set_table.add_column("rules")
        set_table.add_column("connected")
        for game_set in puzzle.sets:
            set_table.add_row(
                str(game_set.id),
                " ".join(str(n) for n in game_set.nodes),
                ", ".join(r.value for r in game_set.rules),
                ", ".join(str(r) for r in game_set.connected_rules),
            )
        console.print(set_table)

    if condition_groups or rule_groups:
        group_table = Table(title="Connected groups")
        group_table.add_column("group", style="magenta")
        group_table.add_column("members")
        for name, ids in {**condition_groups, **rule_groups}.items():
            group_table.add_row(name, " ".join(str(i) for i in ids))
        console.print(group_table)
