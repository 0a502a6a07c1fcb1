"""Puzzle data model: nodes, lines, sets, and the rule/condition taxonomy."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

NodeId = int

# ---------------------------------------------------------------------------
# Rule and condition taxonomy
# ---------------------------------------------------------------------------


class NodeCondition(enum.Enum):
    """Condition attached to a single node."""

    BRANCH_EQUAL = "BranchEqual"  # every branch from the node has equal length, no cycles
    LEAF = "Leaf"  # exactly one line
    INTERNAL = "Internal"  # two or more lines
    CYCLE = "Cycle"  # node lies on a cycle


class ConditionClass(enum.Enum):
    """Comparison group for connected node conditions."""

    BLUE = "Blue"
    PURPLE = "Purple"
    GREEN = "Green"


class ConnectedConditionKind(enum.Enum):
    """Variant of a connected node condition."""

    DEGREE_EQUAL = "DegreeEqual"
    DISTANCE_EQUAL = "DistanceEqual"


@dataclass(frozen=True)
class ConnectedNodeCondition:
    """Condition that must hold jointly for every node sharing kind and class."""

    kind: ConnectedConditionKind
    condition_class: ConditionClass

    def __str__(self) -> str:
        return f"{self.kind.value}({self.condition_class.value})"


class SetRule(enum.Enum):
    """Rule attached to a set of nodes."""

    DISCONNECTED = "Disconnected"  # no line joins two members of the set
    LEAF = "Leaf"  # exactly one line crosses the set boundary


class RuleClass(enum.Enum):
    """Comparison group for connected set rules."""

    YELLOW = "Yellow"
    ORANGE = "Orange"
    RED = "Red"


class ConnectedRuleKind(enum.Enum):
    """Variant of a connected set rule."""

    HOMOMORPHIC = "Homomorphic"


@dataclass(frozen=True)
class ConnectedSetRule:
    """Rule that must hold jointly for every set sharing kind and class."""

    kind: ConnectedRuleKind
    rule_class: RuleClass

    def __str__(self) -> str:
        return f"{self.kind.value}({self.rule_class.value})"


# ---------------------------------------------------------------------------
# Lines and solutions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Edge:
    """Undirected line between two distinct nodes.

    Endpoints are stored smallest first, so ``Edge(1, 0) == Edge(0, 1)`` and
    both hash identically.
    """

    a: NodeId
    b: NodeId

    def __post_init__(self) -> None:
        if self.a == self.b:
            msg = f"A line must join two different nodes, got {self.a}-{self.b}"
            raise ValueError(msg)
        if self.a > self.b:
            lo, hi = self.b, self.a
            object.__setattr__(self, "a", lo)
            object.__setattr__(self, "b", hi)

    def touches(self, node_id: NodeId) -> bool:
        return node_id in (self.a, self.b)

    def other(self, node_id: NodeId) -> NodeId:
        """Return the endpoint opposite *node_id*."""
        if node_id == self.a:
            return self.b
        if node_id == self.b:
            return self.a
        msg = f"Node {node_id} is not an endpoint of line {self}"
        raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.a}-{self.b}"


@dataclass(frozen=True)
class Solution:
    """A set of player-drawn lines.

    Immutable: editing helpers return a new ``Solution`` so a snapshot handed
    to the evaluators can never change underneath them.
    """

    edges: frozenset[Edge] = field(default_factory=frozenset)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[NodeId, NodeId]]) -> Solution:
        """Build a solution from ``(a, b)`` pairs, collapsing duplicates."""
        return cls(frozenset(Edge(a, b) for a, b in pairs))

    def with_line(self, a: NodeId, b: NodeId) -> Solution:
        return Solution(self.edges | {Edge(a, b)})

    def without_line(self, a: NodeId, b: NodeId) -> Solution:
        return Solution(self.edges - {Edge(a, b)})

    def cleared(self) -> Solution:
        return Solution()

    def node_ids(self) -> set[NodeId]:
        """Return every node touched by at least one line."""
        ids: set[NodeId] = set()
        for edge in self.edges:
            ids.add(edge.a)
            ids.add(edge.b)
        return ids

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(sorted(self.edges))

    def __contains__(self, item: object) -> bool:
        return item in self.edges

    def __bool__(self) -> bool:
        return bool(self.edges)


# ---------------------------------------------------------------------------
# Puzzle entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameNode:
    """A puzzle-authored node and the conditions it carries."""

    id: NodeId
    conditions: tuple[NodeCondition, ...] = ()
    connected_conditions: tuple[ConnectedNodeCondition, ...] = ()


@dataclass(frozen=True)
class GameSet:
    """A puzzle-authored group of nodes and the rules applied to it.

    ``bounded`` is carried through from puzzle files for display purposes and
    has no effect on rule evaluation.
    """

    id: int
    nodes: tuple[NodeId, ...]
    rules: tuple[SetRule, ...] = ()
    connected_rules: tuple[ConnectedSetRule, ...] = ()
    bounded: bool = False

    @property
    def members(self) -> frozenset[NodeId]:
        return frozenset(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes


@dataclass(frozen=True)
class Puzzle:
    """A complete puzzle definition. Never mutated after loading."""

    id: str
    width: int
    height: int
    nodes: tuple[GameNode, ...] = ()
    sets: tuple[GameSet, ...] = ()

    @property
    def node_ids(self) -> frozenset[NodeId]:
        return frozenset(node.id for node in self.nodes)

    def get_node(self, node_id: NodeId) -> GameNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_set(self, set_id: int) -> GameSet | None:
        for game_set in self.sets:
            if game_set.id == set_id:
                return game_set
        return None
