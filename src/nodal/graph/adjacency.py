"""Adjacency construction and traversal over a solution's lines.

Every evaluator rebuilds its adjacency map from the solution it is handed;
the maps are small and never cached between evaluations.
"""

from __future__ import annotations

import math
from collections import deque
from typing import TYPE_CHECKING

from nodal.model import Edge, NodeId, Solution

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

AdjacencyMap = dict[NodeId, list[NodeId]]
DistanceTable = dict[NodeId, dict[NodeId, float]]

# Distance between nodes with no connecting path.  ``inf + x`` stays ``inf``,
# so sums involving it can never wrap into a finite distance.
UNREACHABLE: float = math.inf


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def to_adjacency(solution: Solution) -> AdjacencyMap:
    """Convert a solution into a symmetric node -> neighbours map.

    A line ``0-1`` produces ``{0: [1], 1: [0]}``.  Nodes without lines get no
    entry; use :func:`neighbors` to read the map safely.
    """
    adj: AdjacencyMap = {}
    for edge in sorted(solution.edges):
        adj.setdefault(edge.a, []).append(edge.b)
        adj.setdefault(edge.b, []).append(edge.a)
    return adj


def edges_from_adjacency(adj: AdjacencyMap) -> Solution:
    """Rebuild the deduplicated set of lines described by *adj*."""
    edges: set[Edge] = set()
    for node, node_neighbors in adj.items():
        for neighbor in node_neighbors:
            if neighbor != node:
                edges.add(Edge(node, neighbor))
    return Solution(frozenset(edges))


def neighbors(adj: AdjacencyMap, node: NodeId) -> list[NodeId]:
    """Return the neighbours of *node*; an absent entry means no neighbours."""
    return adj.get(node, [])


def degree(adj: AdjacencyMap, node: NodeId) -> int:
    return len(neighbors(adj, node))


# ---------------------------------------------------------------------------
# Reachability
# ---------------------------------------------------------------------------


def reachable_from(adj: AdjacencyMap, start: NodeId) -> set[NodeId]:
    """Breadth-first search returning every node reachable from *start* (inclusive)."""
    visited: set[NodeId] = {start}
    queue: deque[NodeId] = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in neighbors(adj, current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def is_connected_component(
    adj: AdjacencyMap, start: NodeId, targets: Iterable[NodeId]
) -> bool:
    """Return True if every node in *targets* is reachable from *start*."""
    visited = reachable_from(adj, start)
    return all(target in visited for target in targets)


def connected_components(adj: AdjacencyMap) -> list[set[NodeId]]:
    """Split the nodes present in *adj* into connected components.

    Components are ordered by their smallest node id.
    """
    components: list[set[NodeId]] = []
    seen: set[NodeId] = set()
    for node in sorted(adj):
        if node in seen:
            continue
        component = reachable_from(adj, node)
        seen |= component
        components.append(component)
    return components


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


def _iter_cycles(adj: AdjacencyMap, start: NodeId) -> Iterator[list[NodeId]]:
    """Yield one cycle per back-edge found by an iterative DFS from *start*.

    Each cycle is materialized by walking the parent chain from the lower end
    of the back-edge up to the ancestor it reaches.  The edge back to a node's
    own parent is a tree edge and is skipped.
    """
    parent: dict[NodeId, NodeId | None] = {start: None}
    on_path: set[NodeId] = {start}
    stack: list[tuple[NodeId, Iterator[NodeId]]] = [(start, iter(neighbors(adj, start)))]

    while stack:
        current, pending = stack[-1]
        descended = False
        for neighbor in pending:
            if neighbor == parent[current]:
                continue
            if neighbor in on_path:
                cycle = [current]
                walk = current
                while walk != neighbor:
                    up = parent[walk]
                    if up is None:
                        break
                    walk = up
                    cycle.append(walk)
                yield cycle
            elif neighbor not in parent:
                parent[neighbor] = current
                on_path.add(neighbor)
                stack.append((neighbor, iter(neighbors(adj, neighbor))))
                descended = True
                break
            # Otherwise the neighbour is a finished descendant whose back-edge
            # was already reported from its lower end.
        if not descended:
            stack.pop()
            on_path.discard(current)


def find_cycle_containing(adj: AdjacencyMap, node: NodeId) -> bool:
    """Return True if *node* lies on at least one cycle of the graph."""
    if not neighbors(adj, node):
        return False
    return any(node in cycle for cycle in _iter_cycles(adj, node))


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


def all_pairs_shortest_path(
    adj: AdjacencyMap, nodes_of_interest: Iterable[NodeId]
) -> DistanceTable:
    """Floyd-Warshall over unit-weight lines.

    The vertex set is *nodes_of_interest* plus everything reachable from them.
    Pairs with no path map to :data:`UNREACHABLE`.
    """
    vertices: set[NodeId] = set()
    for node in nodes_of_interest:
        vertices |= reachable_from(adj, node)
    ordered = sorted(vertices)

    dist: DistanceTable = {i: {j: UNREACHABLE for j in ordered} for i in ordered}
    for i in ordered:
        dist[i][i] = 0
        for j in neighbors(adj, i):
            if j in vertices:
                dist[i][j] = 1

    for k in ordered:
        row_k = dist[k]
        for i in ordered:
            d_ik = dist[i][k]
            if d_ik == UNREACHABLE:
                continue
            row_i = dist[i]
            for j in ordered:
                d_kj = row_k[j]
                if d_kj == UNREACHABLE:
                    continue
                if d_ik + d_kj < row_i[j]:
                    row_i[j] = d_ik + d_kj
    return dist
