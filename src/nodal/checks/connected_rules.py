"""Connected set rules: checks shared by every set of one kind and class.

Homomorphic sets must draw the same shape: the lines inside each set, viewed
as a graph over the set's members, must be isomorphic.  Sets are compared in a
chain (first with second, second with third, ...) since the relation is an
equivalence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nodal.checks.set_rules import internal_lines
from nodal.model import ConnectedRuleKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nodal.model import ConnectedSetRule, GameSet, NodeId, Solution

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 100_000


class _SearchBudgetExceeded(Exception):
    """Internal signal: the mapping search ran out of steps."""


@dataclass
class _InducedGraph:
    """Lines of a solution restricted to the members of one set."""

    members: list[NodeId]
    adj: dict[NodeId, set[NodeId]]
    line_count: int

    def degree(self, node_id: NodeId) -> int:
        return len(self.adj[node_id])

    def degree_sequence(self) -> list[int]:
        return sorted(self.degree(n) for n in self.members)


def _induced_graph(game_set: GameSet, solution: Solution) -> _InducedGraph:
    members = sorted(game_set.members)
    adj: dict[NodeId, set[NodeId]] = {node_id: set() for node_id in members}
    lines = internal_lines(game_set, solution)
    for edge in lines:
        adj[edge.a].add(edge.b)
        adj[edge.b].add(edge.a)
    return _InducedGraph(members=members, adj=adj, line_count=len(lines))


def _find_isomorphism(
    source: _InducedGraph, target: _InducedGraph, *, search_limit: int
) -> dict[NodeId, NodeId] | None:
    """Backtracking search for an adjacency-preserving bijection.

    Source nodes are placed highest degree first; a candidate must have the
    same degree and agree on adjacency with every node already placed.
    Raises :class:`_SearchBudgetExceeded` after *search_limit* candidate tries.
    """
    order = sorted(source.members, key=lambda n: (-source.degree(n), n))
    mapping: dict[NodeId, NodeId] = {}
    used: set[NodeId] = set()
    steps = 0

    def place(index: int) -> bool:
        nonlocal steps
        if index == len(order):
            return True
        node = order[index]
        for candidate in target.members:
            if candidate in used or target.degree(candidate) != source.degree(node):
                continue
            steps += 1
            if steps > search_limit:
                raise _SearchBudgetExceeded
            consistent = all(
                (placed in source.adj[node]) == (image in target.adj[candidate])
                for placed, image in mapping.items()
            )
            if not consistent:
                continue
            mapping[node] = candidate
            used.add(candidate)
            if place(index + 1):
                return True
            del mapping[node]
            used.discard(candidate)
        return False

    if place(0):
        return dict(mapping)
    return None


def _is_isomorphic_pair(
    set_i: GameSet, set_j: GameSet, solution: Solution, *, search_limit: int
) -> bool:
    # Unsatisfiable by construction, whatever is drawn.
    if len(set_i.members) != len(set_j.members):
        return False

    graph_i = _induced_graph(set_i, solution)
    graph_j = _induced_graph(set_j, solution)

    if graph_i.line_count == 0 or graph_j.line_count == 0:
        return False
    if graph_i.line_count != graph_j.line_count:
        return False
    if graph_i.degree_sequence() != graph_j.degree_sequence():
        return False

    try:
        mapping = _find_isomorphism(graph_i, graph_j, search_limit=search_limit)
    except _SearchBudgetExceeded:
        logger.debug(
            "Isomorphism search between sets %s and %s exceeded %d steps",
            set_i.id,
            set_j.id,
            search_limit,
        )
        return False

    if mapping is not None:
        logger.debug("Sets %s and %s are homomorphic via %s", set_i.id, set_j.id, mapping)
    return mapping is not None


def are_homomorphic(
    sets: Sequence[GameSet],
    solution: Solution,
    *,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> bool:
    """Return True if every set in the group draws the same shape.

    A group of one has nothing to match against and is always satisfied.
    An empty group is never satisfied.
    """
    if not sets:
        return False

    for set_i, set_j in zip(sets, sets[1:]):
        if not _is_isomorphic_pair(set_i, set_j, solution, search_limit=search_limit):
            return False
    return True


def evaluate_connected_rule(
    rule: ConnectedSetRule,
    sets: Sequence[GameSet],
    solution: Solution,
    *,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> bool:
    """Evaluate *rule* jointly for the group of *sets* that carry it."""
    if rule.kind is ConnectedRuleKind.HOMOMORPHIC:
        result = are_homomorphic(sets, solution, search_limit=search_limit)
    else:
        msg = f"Unknown connected set rule: {rule!r}"
        raise ValueError(msg)

    logger.debug("Connected rule %s over sets %s: %s", rule, [s.id for s in sets], result)
    return result
