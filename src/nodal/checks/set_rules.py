"""Set rule checks: Disconnected and Leaf."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nodal.model import SetRule

if TYPE_CHECKING:
    from nodal.model import Edge, GameSet, Solution


def internal_lines(game_set: GameSet, solution: Solution) -> list[Edge]:
    """Lines with both endpoints inside *game_set*."""
    members = game_set.members
    return [edge for edge in solution if edge.a in members and edge.b in members]


def boundary_lines(game_set: GameSet, solution: Solution) -> list[Edge]:
    """Lines with exactly one endpoint inside *game_set*."""
    members = game_set.members
    return [edge for edge in solution if (edge.a in members) != (edge.b in members)]


def is_disconnected(game_set: GameSet, solution: Solution) -> bool:
    """Return True if no line joins two members of *game_set*.

    An empty solution fails: nothing drawn yet never counts as meeting the rule.
    """
    if not solution:
        return False
    return not internal_lines(game_set, solution)


def is_leaf(game_set: GameSet, solution: Solution) -> bool:
    """Return True if exactly one line crosses the boundary of *game_set*."""
    return len(boundary_lines(game_set, solution)) == 1


def evaluate_set_rule(rule: SetRule, game_set: GameSet, solution: Solution) -> bool:
    """Dispatch *rule* to its check."""
    if rule is SetRule.DISCONNECTED:
        return is_disconnected(game_set, solution)
    if rule is SetRule.LEAF:
        return is_leaf(game_set, solution)

    msg = f"Unknown set rule: {rule!r}"
    raise ValueError(msg)
