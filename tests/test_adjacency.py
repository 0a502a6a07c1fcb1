"""Tests for nodal.graph.adjacency: adjacency maps, reachability, cycles, distances."""

from __future__ import annotations

from nodal.graph import (
    UNREACHABLE,
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
from nodal.model import Solution


def _adj(*pairs: tuple[int, int]) -> dict[int, list[int]]:
    return to_adjacency(Solution.from_pairs(pairs))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestToAdjacency:
    def test_single_line_is_symmetric(self) -> None:
        assert _adj((0, 1)) == {0: [1], 1: [0]}

    def test_path(self) -> None:
        assert _adj((0, 1), (1, 2)) == {0: [1], 1: [0, 2], 2: [1]}

    def test_empty_solution(self) -> None:
        assert to_adjacency(Solution()) == {}

    def test_absent_node_has_no_neighbors(self) -> None:
        adj = _adj((0, 1))
        assert neighbors(adj, 9) == []
        assert degree(adj, 9) == 0

    def test_degree(self) -> None:
        adj = _adj((0, 1), (0, 2), (0, 3))
        assert degree(adj, 0) == 3
        assert degree(adj, 2) == 1

    def test_round_trip(self) -> None:
        solution = Solution.from_pairs([(0, 1), (1, 2), (2, 0), (5, 6)])
        assert edges_from_adjacency(to_adjacency(solution)) == solution


# ---------------------------------------------------------------------------
# Reachability
# ---------------------------------------------------------------------------


class TestReachability:
    def test_reachable_includes_start(self) -> None:
        assert reachable_from({}, 4) == {4}

    def test_reachable_stays_in_component(self) -> None:
        adj = _adj((0, 1), (1, 2), (5, 6))
        assert reachable_from(adj, 0) == {0, 1, 2}

    def test_is_connected_component(self) -> None:
        adj = _adj((0, 1), (1, 2), (5, 6))
        assert is_connected_component(adj, 0, [1, 2])
        assert not is_connected_component(adj, 0, [1, 5])

    def test_connected_components(self) -> None:
        adj = _adj((5, 6), (0, 1), (1, 2))
        assert connected_components(adj) == [{0, 1, 2}, {5, 6}]

    def test_connected_components_empty(self) -> None:
        assert connected_components({}) == []


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


class TestFindCycleContaining:
    def test_square_with_tail(self) -> None:
        adj = _adj((0, 1), (1, 2), (2, 3), (3, 0), (3, 4))
        for node in (0, 1, 2, 3):
            assert find_cycle_containing(adj, node)
        assert not find_cycle_containing(adj, 4)

    def test_isolated_node(self) -> None:
        adj = _adj((0, 1))
        assert not find_cycle_containing(adj, 7)

    def test_single_line_is_not_a_cycle(self) -> None:
        adj = _adj((0, 1))
        assert not find_cycle_containing(adj, 0)

    def test_tree(self) -> None:
        adj = _adj((0, 1), (0, 2), (2, 3), (2, 4))
        assert not any(find_cycle_containing(adj, n) for n in range(5))

    def test_node_between_two_cycles(self) -> None:
        # Two triangles joined by a bridge 2-3; the bridge ends sit on cycles,
        # the bridge itself does not make one.
        adj = _adj((0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3))
        assert find_cycle_containing(adj, 2)
        assert find_cycle_containing(adj, 3)
        assert find_cycle_containing(adj, 5)

    def test_pendant_reached_through_cycle(self) -> None:
        adj = _adj((0, 1), (1, 2), (2, 0), (2, 3), (3, 4))
        assert not find_cycle_containing(adj, 4)
        assert not find_cycle_containing(adj, 3)


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


class TestAllPairsShortestPath:
    def test_star(self) -> None:
        adj = _adj((0, 3), (1, 3), (2, 3))
        dist = all_pairs_shortest_path(adj, [0, 1, 2])
        assert dist[0][1] == 2
        assert dist[1][2] == 2
        assert dist[0][3] == 1
        assert dist[0][0] == 0

    def test_shortest_of_two_routes(self) -> None:
        adj = _adj((0, 1), (1, 2), (2, 3), (3, 4), (0, 4))
        dist = all_pairs_shortest_path(adj, [0, 3])
        assert dist[0][3] == 2

    def test_unreachable_pair(self) -> None:
        adj = _adj((0, 1), (2, 3))
        dist = all_pairs_shortest_path(adj, [0, 2])
        assert dist[0][2] == UNREACHABLE
        assert dist[0][1] == 1

    def test_isolated_node_of_interest(self) -> None:
        assert all_pairs_shortest_path({}, [5]) == {5: {5: 0}}
