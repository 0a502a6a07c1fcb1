"""Single-node condition checks: BranchEqual, Leaf, Internal, Cycle.

Each check is a pure function of a node and a solution.  Callers that check
many nodes against the same solution may pass a prebuilt ``adj`` map.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nodal.graph.adjacency import (
    degree,
    find_cycle_containing,
    neighbors,
    reachable_from,
    to_adjacency,
)
from nodal.model import NodeCondition

if TYPE_CHECKING:
    from nodal.graph.adjacency import AdjacencyMap
    from nodal.model import GameNode, NodeId, Solution


def is_branch_equal(
    node: GameNode, solution: Solution, *, adj: AdjacencyMap | None = None
) -> bool:
    """Return True if every branch leaving *node* ends at the same depth.

    Walks the tree rooted at *node* depth-first.  Every leaf (a degree-1 node
    other than the root) must sit at the same depth, and meeting an already
    visited node that is not the current node's parent means a cycle, which
    fails the check.  An isolated node has no branches and fails.
    """
    if adj is None:
        adj = to_adjacency(solution)

    root = node.id
    if not neighbors(adj, root):
        return False

    visited: set[NodeId] = {root}
    stack: list[tuple[NodeId, NodeId | None, int]] = [(root, None, 0)]
    leaf_depth: int | None = None

    while stack:
        current, parent, depth = stack.pop()
        current_neighbors = neighbors(adj, current)

        if current != root and len(current_neighbors) == 1:
            if leaf_depth is None:
                leaf_depth = depth
            elif depth != leaf_depth:
                return False

        for neighbor in current_neighbors:
            if neighbor in visited:
                if neighbor != parent:
                    return False
            else:
                visited.add(neighbor)
                stack.append((neighbor, current, depth + 1))

    return True


def is_leaf(node: GameNode, solution: Solution, *, adj: AdjacencyMap | None = None) -> bool:
    """Return True if exactly one line touches *node*."""
    if adj is None:
        adj = to_adjacency(solution)
    return degree(adj, node.id) == 1


def is_internal(
    node: GameNode, solution: Solution, *, adj: AdjacencyMap | None = None
) -> bool:
    """Return True if two or more lines touch *node*."""
    if adj is None:
        adj = to_adjacency(solution)
    return degree(adj, node.id) > 1


def is_cycle(node: GameNode, solution: Solution, *, adj: AdjacencyMap | None = None) -> bool:
    """Return True if *node* lies on a cycle of the solution graph."""
    if adj is None:
        adj = to_adjacency(solution)
    return find_cycle_containing(adj, node.id)


def is_in_single_network(
    node: GameNode, solution: Solution, *, adj: AdjacencyMap | None = None
) -> bool:
    """Return True if *node* has a line and the whole solution is one network.

    Any second, disjoint group of lines fails every node in the puzzle.
    """
    if adj is None:
        adj = to_adjacency(solution)
    if not neighbors(adj, node.id):
        return False
    network = reachable_from(adj, node.id)
    return all(other in network for other in adj)


def evaluate_node_condition(
    condition: NodeCondition,
    node: GameNode,
    solution: Solution,
    *,
    adj: AdjacencyMap | None = None,
) -> bool:
    """Dispatch *condition* to its check."""
    if adj is None:
        adj = to_adjacency(solution)

    if condition is NodeCondition.BRANCH_EQUAL:
        return is_branch_equal(node, solution, adj=adj)
    if condition is NodeCondition.LEAF:
        return is_leaf(node, solution, adj=adj)
    if condition is NodeCondition.INTERNAL:
        return is_internal(node, solution, adj=adj)
    if condition is NodeCondition.CYCLE:
        return is_cycle(node, solution, adj=adj)

    msg = f"Unknown node condition: {condition!r}"
    raise ValueError(msg)
