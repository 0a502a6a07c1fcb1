"""Shared test fixtures for Nodal."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def puzzle_data() -> dict[str, Any]:
    """A 2x2 puzzle whose path solution 0-1, 1-3, 3-2 satisfies every rule.

    Layout (column-major, height 2)::

        1 3
        0 2
    """
    return {
        "uuid": "0b7a8f43-5d1e-4a56-9d55-5c3f1a2b9e10",
        "width": 2,
        "height": 2,
        "nodes": [
            {
                "id": 0,
                "conditions": ["Leaf"],
                "connected_conditions": [{"DegreeEqual": "Blue"}],
            },
            {
                "id": 1,
                "conditions": ["Internal"],
                "connected_conditions": [{"DistanceEqual": "Green"}],
            },
            {
                "id": 2,
                "conditions": [],
                "connected_conditions": [{"DegreeEqual": "Blue"}],
            },
            {
                "id": 3,
                "conditions": ["Internal"],
                "connected_conditions": [{"DistanceEqual": "Green"}],
            },
        ],
        "sets": [
            {
                "id": 0,
                "nodes": [0, 1],
                "rules": ["Leaf"],
                "connected_rules": [{"Homomorphic": "Yellow"}],
                "bounded": False,
            },
            {
                "id": 1,
                "nodes": [2, 3],
                "rules": ["Leaf"],
                "connected_rules": [{"Homomorphic": "Yellow"}],
                "bounded": True,
            },
        ],
    }


@pytest.fixture()
def solved_lines() -> list[list[int]]:
    return [[0, 1], [1, 3], [3, 2]]


@pytest.fixture()
def puzzle_file(tmp_path: Path, puzzle_data: dict[str, Any]) -> Path:
    path = tmp_path / "puzzle.json"
    path.write_text(json.dumps(puzzle_data), encoding="utf-8")
    return path


@pytest.fixture()
def solution_file(tmp_path: Path, solved_lines: list[list[int]]) -> Path:
    path = tmp_path / "solution.json"
    path.write_text(json.dumps(solved_lines), encoding="utf-8")
    return path
