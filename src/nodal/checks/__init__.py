"""Rule and condition evaluators for nodes, sets, and their connected groups."""

from nodal.checks.connected_conditions import (
    evaluate_connected_condition,
    is_degree_equal,
    is_distance_equal,
)
from nodal.checks.connected_rules import (
    DEFAULT_SEARCH_LIMIT,
    are_homomorphic,
    evaluate_connected_rule,
)
from nodal.checks.node_conditions import (
    evaluate_node_condition,
    is_branch_equal,
    is_cycle,
    is_in_single_network,
    is_internal,
    is_leaf,
)
from nodal.checks.set_rules import (
    boundary_lines,
    evaluate_set_rule,
    internal_lines,
    is_disconnected,
)
from nodal.checks.set_rules import is_leaf as is_set_leaf

__all__ = [
    "DEFAULT_SEARCH_LIMIT",
    "are_homomorphic",
    "boundary_lines",
    "evaluate_connected_condition",
    "evaluate_connected_rule",
    "evaluate_node_condition",
    "evaluate_set_rule",
    "internal_lines",
    "is_branch_equal",
    "is_cycle",
    "is_degree_equal",
    "is_disconnected",
    "is_distance_equal",
    "is_in_single_network",
    "is_internal",
    "is_leaf",
    "is_set_leaf",
]
