"""Puzzle definition and solution loading.

Puzzle files use the externally tagged layout written by the game's level
editor::

    {"uuid": "...", "width": 3, "height": 3,
     "nodes": [{"id": 0, "conditions": ["BranchEqual"],
                "connected_conditions": [{"DegreeEqual": "Blue"}]}],
     "sets": [{"id": 0, "nodes": [0, 1], "rules": ["Leaf"],
               "connected_rules": [{"Homomorphic": "Yellow"}], "bounded": false}]}

Files are read with ``yaml.safe_load``, so both JSON and YAML are accepted.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, TypeVar

import yaml

from nodal.errors import PuzzleDefinitionError, SolutionFormatError
from nodal.model import (
    ConditionClass,
    ConnectedConditionKind,
    ConnectedNodeCondition,
    ConnectedRuleKind,
    ConnectedSetRule,
    Edge,
    GameNode,
    GameSet,
    NodeCondition,
    Puzzle,
    RuleClass,
    SetRule,
    Solution,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=enum.Enum)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_data(path: Path, error_cls: type[ValueError]) -> object:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as exc:
        msg = f"Cannot read {path}: {exc}"
        raise error_cls(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path}: not valid UTF-8: {exc}"
        raise error_cls(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid JSON/YAML: {exc}"
        raise error_cls(msg) from exc


def _parse_enum(enum_cls: type[_E], raw: object, context: str) -> _E:
    """Look up an enum member by its serialized value (e.g. ``"BranchEqual"``)."""
    try:
        return enum_cls(str(raw))
    except ValueError:
        valid = sorted(str(member.value) for member in enum_cls)
        msg = f"{context}: invalid value '{raw}', must be one of {valid}"
        raise PuzzleDefinitionError(msg) from None


def _parse_id(raw: object, context: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        msg = f"{context}: id must be an integer, got {raw!r}"
        raise PuzzleDefinitionError(msg)
    if raw < 0:
        msg = f"{context}: id must be non-negative, got {raw}"
        raise PuzzleDefinitionError(msg)
    return raw


def _as_list(data: dict[str, Any], key: str, context: str) -> list[Any]:
    raw = data.get(key, [])
    if raw is None:
        return []
    if not isinstance(raw, list):
        msg = f"{context}: '{key}' must be a list"
        raise PuzzleDefinitionError(msg)
    return raw


def _split_tagged(raw: object, context: str) -> tuple[object, object]:
    """Split ``{"Kind": "Class"}`` or ``{"kind": ..., "class": ...}`` into a pair."""
    if not isinstance(raw, dict):
        msg = f"{context}: must be a mapping like {{\"Kind\": \"Class\"}}"
        raise PuzzleDefinitionError(msg)
    if "kind" in raw and "class" in raw:
        return raw["kind"], raw["class"]
    if len(raw) != 1:
        msg = f"{context}: must have exactly one kind, got {sorted(map(str, raw))}"
        raise PuzzleDefinitionError(msg)
    ((kind, cls),) = raw.items()
    return kind, cls


# ---------------------------------------------------------------------------
# Puzzle parsing
# ---------------------------------------------------------------------------


def _parse_connected_condition(raw: object, context: str) -> ConnectedNodeCondition:
    kind, cls = _split_tagged(raw, context)
    return ConnectedNodeCondition(
        kind=_parse_enum(ConnectedConditionKind, kind, context),
        condition_class=_parse_enum(ConditionClass, cls, context),
    )


def _parse_connected_rule(raw: object, context: str) -> ConnectedSetRule:
    kind, cls = _split_tagged(raw, context)
    return ConnectedSetRule(
        kind=_parse_enum(ConnectedRuleKind, kind, context),
        rule_class=_parse_enum(RuleClass, cls, context),
    )


def _parse_node(data: object, idx: int) -> GameNode:
    if not isinstance(data, dict):
        msg = f"Node at index {idx} must be a mapping"
        raise PuzzleDefinitionError(msg)
    node_id = _parse_id(data.get("id"), f"Node at index {idx}")
    context = f"Node {node_id}"

    conditions = tuple(
        _parse_enum(NodeCondition, raw, f"{context} conditions")
        for raw in _as_list(data, "conditions", context)
    )
    connected = tuple(
        _parse_connected_condition(raw, f"{context} connected_conditions")
        for raw in _as_list(data, "connected_conditions", context)
    )
    return GameNode(id=node_id, conditions=conditions, connected_conditions=connected)


def _parse_set(data: object, idx: int, known_nodes: frozenset[int]) -> GameSet:
    if not isinstance(data, dict):
        msg = f"Set at index {idx} must be a mapping"
        raise PuzzleDefinitionError(msg)
    set_id = _parse_id(data.get("id"), f"Set at index {idx}")
    context = f"Set {set_id}"

    node_ids: list[int] = []
    for raw in _as_list(data, "nodes", context):
        node_id = _parse_id(raw, f"{context} nodes")
        if node_id in node_ids:
            msg = f"{context}: node {node_id} listed more than once"
            raise PuzzleDefinitionError(msg)
        node_ids.append(node_id)

    unknown = sorted(set(node_ids) - known_nodes)
    if unknown:
        logger.warning("%s references unknown node ids %s", context, unknown)

    rules = tuple(
        _parse_enum(SetRule, raw, f"{context} rules")
        for raw in _as_list(data, "rules", context)
    )
    connected = tuple(
        _parse_connected_rule(raw, f"{context} connected_rules")
        for raw in _as_list(data, "connected_rules", context)
    )
    bounded = data.get("bounded", False)
    if not isinstance(bounded, bool):
        msg = f"{context}: 'bounded' must be true or false, got {bounded!r}"
        raise PuzzleDefinitionError(msg)

    return GameSet(
        id=set_id,
        nodes=tuple(node_ids),
        rules=rules,
        connected_rules=connected,
        bounded=bounded,
    )


def parse_puzzle(data: object) -> Puzzle:
    """Build a :class:`Puzzle` from already-decoded JSON/YAML data.

    Raises :class:`PuzzleDefinitionError` on schema errors.
    """
    if not isinstance(data, dict):
        msg = "Puzzle definition must be a mapping"
        raise PuzzleDefinitionError(msg)

    puzzle_id = data.get("uuid", data.get("id"))
    if puzzle_id is None or not str(puzzle_id).strip():
        msg = "Puzzle definition: missing required 'uuid' (or 'id') field"
        raise PuzzleDefinitionError(msg)

    dims: dict[str, int] = {}
    for key in ("width", "height"):
        raw = data.get(key)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
            msg = f"Puzzle definition: '{key}' must be a positive integer, got {raw!r}"
            raise PuzzleDefinitionError(msg)
        dims[key] = raw

    if "nodes" not in data:
        msg = "Puzzle definition: missing required 'nodes' field"
        raise PuzzleDefinitionError(msg)

    nodes: list[GameNode] = []
    seen_nodes: set[int] = set()
    for idx, raw_node in enumerate(_as_list(data, "nodes", "Puzzle definition")):
        node = _parse_node(raw_node, idx)
        if node.id in seen_nodes:
            msg = f"Puzzle definition: duplicate node id {node.id}"
            raise PuzzleDefinitionError(msg)
        seen_nodes.add(node.id)
        nodes.append(node)

    known_nodes = frozenset(seen_nodes)
    sets: list[GameSet] = []
    seen_sets: set[int] = set()
    for idx, raw_set in enumerate(_as_list(data, "sets", "Puzzle definition")):
        game_set = _parse_set(raw_set, idx, known_nodes)
        if game_set.id in seen_sets:
            msg = f"Puzzle definition: duplicate set id {game_set.id}"
            raise PuzzleDefinitionError(msg)
        seen_sets.add(game_set.id)
        sets.append(game_set)

    return Puzzle(
        id=str(puzzle_id),
        width=dims["width"],
        height=dims["height"],
        nodes=tuple(nodes),
        sets=tuple(sets),
    )


def load_puzzle(path: Path) -> Puzzle:
    """Read and parse a puzzle definition file (JSON or YAML)."""
    return parse_puzzle(_read_data(path, PuzzleDefinitionError))


# ---------------------------------------------------------------------------
# Solution parsing
# ---------------------------------------------------------------------------


def _parse_edge(raw: object, idx: int) -> Edge:
    pair: tuple[object, object]
    if isinstance(raw, dict):
        pair = (raw.get("node_a_id"), raw.get("node_b_id"))
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        pair = (raw[0], raw[1])
    else:
        msg = f"Line at index {idx} must be [a, b] or {{node_a_id, node_b_id}}, got {raw!r}"
        raise SolutionFormatError(msg)

    ends: list[int] = []
    for end in pair:
        if isinstance(end, bool) or not isinstance(end, int) or end < 0:
            msg = f"Line at index {idx}: node ids must be non-negative integers, got {raw!r}"
            raise SolutionFormatError(msg)
        ends.append(end)

    try:
        return Edge(ends[0], ends[1])
    except ValueError as exc:
        msg = f"Line at index {idx}: {exc}"
        raise SolutionFormatError(msg) from exc


def parse_solution(data: object) -> Solution:
    """Build a :class:`Solution` from a list of lines or a saved progress record.

    A progress record looks like ``{"puzzle_id": ..., "solution": [...],
    "solved": false}``; only ``solution`` is read.
    """
    if data is None:
        return Solution()
    if isinstance(data, dict):
        if "solution" not in data:
            msg = "Solution record: missing required 'solution' field"
            raise SolutionFormatError(msg)
        data = data["solution"] or []
    if not isinstance(data, list):
        msg = "Solution must be a list of lines"
        raise SolutionFormatError(msg)

    return Solution(frozenset(_parse_edge(raw, idx) for idx, raw in enumerate(data)))


def load_solution(path: Path) -> Solution:
    """Read and parse a solution file (JSON or YAML)."""
    return parse_solution(_read_data(path, SolutionFormatError))
