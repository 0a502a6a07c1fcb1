"""Grid geometry for column-major node numbering.

Node ids count up each column from the bottom row, then move one column
right: on a grid of height 3, ids 0-2 form the first column and id 3 sits
at column 1, row 0.  Rule evaluation never depends on this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nodal.model import NodeId, Puzzle


def node_position(node_id: NodeId, height: int) -> tuple[int, int]:
    """Return ``(column, row)`` of *node_id*."""
    return node_id // height, node_id % height


def is_left_edge(node_id: NodeId, height: int) -> bool:
    return node_id < height


def is_right_edge(node_id: NodeId, width: int, height: int) -> bool:
    return node_id + height >= width * height


def is_top_edge(node_id: NodeId, height: int) -> bool:
    return (node_id + 1) % height == 0


def is_bottom_edge(node_id: NodeId, height: int) -> bool:
    return node_id % height == 0


def adjacent_nodes(node_id: NodeId, width: int, height: int) -> list[NodeId]:
    """Return the grid neighbours of *node_id*, diagonals included.

    Order: left, up-left, up, up-right, right, down-right, down, down-left.
    """
    left = is_left_edge(node_id, height)
    right = is_right_edge(node_id, width, height)
    top = is_top_edge(node_id, height)
    bottom = is_bottom_edge(node_id, height)

    adjacent: list[NodeId] = []
    if not left:
        adjacent.append(node_id - height)
    if not left and not top:
        adjacent.append(node_id - height + 1)
    if not top:
        adjacent.append(node_id + 1)
    if not top and not right:
        adjacent.append(node_id + height + 1)
    if not right:
        adjacent.append(node_id + height)
    if not right and not bottom:
        adjacent.append(node_id + height - 1)
    if not bottom:
        adjacent.append(node_id - 1)
    if not bottom and not left:
        adjacent.append(node_id - height - 1)
    return adjacent


def is_drawable_line(puzzle: Puzzle, a: NodeId, b: NodeId) -> bool:
    """Return True if a player could draw a line between *a* and *b*."""
    size = puzzle.width * puzzle.height
    if a == b or not (0 <= a < size and 0 <= b < size):
        return False
    return b in adjacent_nodes(a, puzzle.width, puzzle.height)
