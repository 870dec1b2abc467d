"""Deterministic object generators for performance benchmarks.

All generators produce fixed, reproducible objects. No random values.
Three tiers: 10-key flat, 100-key nested, 1000-element keyed array.
Each tier provides both "similar" and "dissimilar" pair generators.
"""

from __future__ import annotations

from typing import Any

import pytest


def _make_flat(num_keys: int, changed_every: int = 0) -> tuple[dict[str, Any], dict[str, Any]]:
    """Flat pair; every ``changed_every``-th value differs (0: none)."""
    left = {f"key_{i}": f"value_{i}" for i in range(num_keys)}
    right = dict(left)
    if changed_every:
        for i in range(0, num_keys, changed_every):
            right[f"key_{i}"] = f"other_{i}"
    return left, right


def _make_nested_100(dissimilar: bool = False) -> tuple[dict[str, Any], dict[str, Any]]:
    """10 sections x 9 leaf keys, plus the section keys themselves."""
    left: dict[str, Any] = {}
    right: dict[str, Any] = {}
    for i in range(10):
        left[f"section_{i}"] = {f"field_{i}_{j}": j for j in range(9)}
        right[f"section_{i}"] = {
            f"field_{i}_{j}": (str(j) if dissimilar else j) for j in range(9)
        }
    return left, right


def _make_keyed_records(count: int, dissimilar: bool = False) -> tuple[dict[str, Any], dict[str, Any]]:
    """``count`` records keyed by id; the second array is reversed."""
    records = [
        {"id": i, "name": f"item_{i}", "tags": [f"t{i % 7}", f"t{i % 3}"]} for i in range(count)
    ]
    mirrored = [dict(r) for r in reversed(records)]
    if dissimilar:
        for record in mirrored[::10]:
            record["name"] = "changed"
    return {"items": records}, {"items": mirrored}


@pytest.fixture
def pair_10key_similar() -> tuple[dict[str, Any], dict[str, Any]]:
    """10-key flat identical pair."""
    return _make_flat(10)


@pytest.fixture
def pair_10key_dissimilar() -> tuple[dict[str, Any], dict[str, Any]]:
    """10-key flat pair with every second value changed."""
    return _make_flat(10, changed_every=2)


@pytest.fixture
def pair_100key_similar() -> tuple[dict[str, Any], dict[str, Any]]:
    """100-key nested identical pair."""
    return _make_nested_100()


@pytest.fixture
def pair_100key_dissimilar() -> tuple[dict[str, Any], dict[str, Any]]:
    """100-key nested pair where every leaf differs in type."""
    return _make_nested_100(dissimilar=True)


@pytest.fixture
def pair_keyed_similar() -> tuple[dict[str, Any], dict[str, Any]]:
    """1000 keyed records, reversed order."""
    return _make_keyed_records(1000)


@pytest.fixture
def pair_keyed_dissimilar() -> tuple[dict[str, Any], dict[str, Any]]:
    """1000 keyed records, reversed order, every tenth name changed."""
    return _make_keyed_records(1000, dissimilar=True)
