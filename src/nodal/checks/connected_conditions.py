"""Connected node conditions: checks shared by every node of one kind and class.

The verdict belongs to the whole group, so it is the same for every member and
independent of the order the members are listed in.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nodal.graph.adjacency import (
    UNREACHABLE,
    all_pairs_shortest_path,
    degree,
    to_adjacency,
)
from nodal.model import ConnectedConditionKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nodal.graph.adjacency import AdjacencyMap
    from nodal.model import ConnectedNodeCondition, GameNode, NodeId, Solution

logger = logging.getLogger(__name__)


def _unique_ids(nodes: Sequence[GameNode]) -> list[NodeId]:
    """Node ids in first-seen order, without repeats."""
    return list(dict.fromkeys(node.id for node in nodes))


def is_degree_equal(
    nodes: Sequence[GameNode], solution: Solution, *, adj: AdjacencyMap | None = None
) -> bool:
    """Return True if every node in the group has the same, non-zero degree."""
    ids = _unique_ids(nodes)
    if not ids:
        return False
    if adj is None:
        adj = to_adjacency(solution)

    degrees = {degree(adj, node_id) for node_id in ids}
    return len(degrees) == 1 and 0 not in degrees


def is_distance_equal(
    nodes: Sequence[GameNode], solution: Solution, *, adj: AdjacencyMap | None = None
) -> bool:
    """Return True if every pair in the group is the same finite distance apart.

    A lone node only needs at least one line.  Distances are shortest paths
    over the whole solution graph.
    """
    ids = _unique_ids(nodes)
    if not ids:
        return False
    if adj is None:
        adj = to_adjacency(solution)

    if len(ids) == 1:
        return degree(adj, ids[0]) > 0

    dist = all_pairs_shortest_path(adj, ids)
    expected: float | None = None
    for i, node_a in enumerate(ids):
        for node_b in ids[i + 1 :]:
            d = dist[node_a][node_b]
            if d == UNREACHABLE:
                return False
            if expected is None:
                expected = d
            elif d != expected:
                return False
    return True


def evaluate_connected_condition(
    condition: ConnectedNodeCondition,
    nodes: Sequence[GameNode],
    solution: Solution,
    *,
    adj: AdjacencyMap | None = None,
) -> bool:
    """Evaluate *condition* jointly for the group of *nodes* that carry it."""
    if condition.kind is ConnectedConditionKind.DEGREE_EQUAL:
        result = is_degree_equal(nodes, solution, adj=adj)
    elif condition.kind is ConnectedConditionKind.DISTANCE_EQUAL:
        result = is_distance_equal(nodes, solution, adj=adj)
    else:
        msg = f"Unknown connected node condition: {condition!r}"
        raise ValueError(msg)

    logger.debug(
        "Connected condition %s over nodes %s: %s",
        condition,
        _unique_ids(nodes),
        result,
    )
    return result
