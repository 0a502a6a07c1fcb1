"""Puzzle satisfaction aggregator: evaluate every node, set, and group at once."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nodal.checks.connected_conditions import evaluate_connected_condition
from nodal.checks.connected_rules import DEFAULT_SEARCH_LIMIT, evaluate_connected_rule
from nodal.checks.node_conditions import evaluate_node_condition, is_in_single_network
from nodal.checks.set_rules import evaluate_set_rule
from nodal.graph.adjacency import to_adjacency

if TYPE_CHECKING:
    from collections.abc import Iterator

    from nodal.model import (
        ConnectedNodeCondition,
        ConnectedSetRule,
        GameNode,
        GameSet,
        Puzzle,
        Solution,
    )

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

NODE = "node"
NODE_CONDITION = "node_condition"
CONNECTED_CONDITION = "connected_condition"
SET = "set"
SET_RULE = "set_rule"
CONNECTED_RULE = "connected_rule"

ENTITY_KINDS: frozenset[str] = frozenset(
    {NODE, NODE_CONDITION, CONNECTED_CONDITION, SET, SET_RULE, CONNECTED_RULE}
)


@dataclass(frozen=True, order=True)
class EntityKey:
    """Stable identifier of one satisfiable entity in a puzzle.

    *owner* is the node or set id; *index* is the position of the condition
    or rule in its owner's list (always 0 for nodes and sets themselves).
    """

    kind: str
    owner: int
    index: int = 0

    def __post_init__(self) -> None:
        if self.kind not in ENTITY_KINDS:
            msg = f"Invalid entity kind '{self.kind}', must be one of {sorted(ENTITY_KINDS)}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.kind}:{self.owner}:{self.index}"


@dataclass
class SatisfactionVerdict:
    """Satisfied/unsatisfied state for every entity of a puzzle."""

    states: dict[EntityKey, bool] = field(default_factory=dict)

    @property
    def is_solved(self) -> bool:
        return all(self.states.values())

    def failed(self) -> list[EntityKey]:
        return sorted(key for key, satisfied in self.states.items() if not satisfied)

    def to_dict(self) -> dict[str, bool]:
        return {str(key): self.states[key] for key in sorted(self.states)}

    def __getitem__(self, key: EntityKey) -> bool:
        return self.states[key]

    def __contains__(self, key: object) -> bool:
        return key in self.states

    def __iter__(self) -> Iterator[EntityKey]:
        return iter(sorted(self.states))

    def __len__(self) -> int:
        return len(self.states)


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def group_connected_conditions(
    puzzle: Puzzle,
) -> dict[ConnectedNodeCondition, list[tuple[GameNode, int]]]:
    """Map each connected condition (kind + class) to the nodes carrying it.

    Each entry is ``(node, index)`` where *index* locates the condition in the
    node's ``connected_conditions``.
    """
    groups: dict[ConnectedNodeCondition, list[tuple[GameNode, int]]] = {}
    for node in puzzle.nodes:
        for idx, condition in enumerate(node.connected_conditions):
            groups.setdefault(condition, []).append((node, idx))
    return groups


def group_connected_rules(
    puzzle: Puzzle,
) -> dict[ConnectedSetRule, list[tuple[GameSet, int]]]:
    """Map each connected set rule (kind + class) to the sets carrying it."""
    groups: dict[ConnectedSetRule, list[tuple[GameSet, int]]] = {}
    for game_set in puzzle.sets:
        for idx, rule in enumerate(game_set.connected_rules):
            groups.setdefault(rule, []).append((game_set, idx))
    return groups


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def evaluate_puzzle(
    puzzle: Puzzle,
    solution: Solution,
    *,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> SatisfactionVerdict:
    """Evaluate every node, condition, set, and rule of *puzzle* against *solution*.

    The adjacency map is built once and shared by all node-level checks.
    Connected conditions and connected rules are evaluated once per
    (kind, class) group and the result is copied to every member.
    """
    verdict = SatisfactionVerdict()
    adj = to_adjacency(solution)

    unknown = solution.node_ids() - puzzle.node_ids
    if unknown:
        logger.warning(
            "Solution for puzzle %s references unknown node ids %s",
            puzzle.id,
            sorted(unknown),
        )

    # Nodes and their own conditions.
    for node in puzzle.nodes:
        verdict.states[EntityKey(NODE, node.id)] = is_in_single_network(node, solution, adj=adj)
        for idx, condition in enumerate(node.conditions):
            verdict.states[EntityKey(NODE_CONDITION, node.id, idx)] = evaluate_node_condition(
                condition, node, solution, adj=adj
            )

    # Connected node conditions, once per group.
    for condition, members in group_connected_conditions(puzzle).items():
        satisfied = evaluate_connected_condition(
            condition, [node for node, _ in members], solution, adj=adj
        )
        for node, idx in members:
            verdict.states[EntityKey(CONNECTED_CONDITION, node.id, idx)] = satisfied

    # Sets and their own rules.
    for game_set in puzzle.sets:
        rule_results: list[bool] = []
        for idx, rule in enumerate(game_set.rules):
            satisfied = evaluate_set_rule(rule, game_set, solution)
            verdict.states[EntityKey(SET_RULE, game_set.id, idx)] = satisfied
            rule_results.append(satisfied)
        verdict.states[EntityKey(SET, game_set.id)] = all(rule_results)

    # Connected set rules, once per group.
    for rule, members in group_connected_rules(puzzle).items():
        unique_sets = list({game_set.id: game_set for game_set, _ in members}.values())
        satisfied = evaluate_connected_rule(
            rule, unique_sets, solution, search_limit=search_limit
        )
        for game_set, idx in members:
            verdict.states[EntityKey(CONNECTED_RULE, game_set.id, idx)] = satisfied

    logger.debug(
        "Puzzle %s: %d entities evaluated, %d unsatisfied",
        puzzle.id,
        len(verdict),
        len(verdict.failed()),
    )
    return verdict


def is_puzzle_solved(
    puzzle: Puzzle,
    solution: Solution,
    *,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> bool:
    """Return True if every entity of *puzzle* is satisfied by *solution*."""
    return evaluate_puzzle(puzzle, solution, search_limit=search_limit).is_solved
