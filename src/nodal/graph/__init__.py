"""Graph utilities over puzzle solutions: adjacency, reachability, cycles, distances."""

from nodal.graph.adjacency import (
    UNREACHABLE,
    AdjacencyMap,
    DistanceTable,
    all_pairs_shortest_path,
    connected_components,
    degree,
    edges_from_adjacency,
    find_cycle_containing,
    is_connected_component,
    neighbors,
    reachable_from,
    to_adjacency,
)

__all__ = [
    "UNREACHABLE",
    "AdjacencyMap",
    "DistanceTable",
    "all_pairs_shortest_path",
    "connected_components",
    "degree",
    "edges_from_adjacency",
    "find_cycle_containing",
    "is_connected_component",
    "neighbors",
    "reachable_from",
    "to_adjacency",
]
