"""Tests for ComparisonEngine dispatch, object walks and leaf comparison.

Tests cover:
- Object walk in both directions (matched keys, unmatched keys and messages)
- ignored_keys at any depth and ignore_extra_keys
- Leaf rules: equivalence groups, type mismatch, strict and loose equality
- Null, array-vs-object and date handling
- Invalid KEY strategy fallback to exact comparison
- numpy inputs
- max_depth guard
"""

from __future__ import annotations

import datetime as dt
from typing import Any

import numpy as np
import pytest

from json_deep_compare.accumulator import ResultAccumulator
from json_deep_compare.algorithm.config import CompareOptions
from json_deep_compare.algorithm.engine import ComparisonEngine
from json_deep_compare.exceptions import MaxDepthExceededError
from json_deep_compare.result import ComparisonResult
from json_deep_compare.validator import PatternValidator

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(value1: Any, value2: Any, **options: Any) -> ComparisonResult:
    """Run one engine walk from the root and return the snapshot."""
    resolved = CompareOptions(**options)
    result = ResultAccumulator(strict_types=resolved.strict_types)
    engine = ComparisonEngine(resolved, result, PatternValidator(resolved, result))
    engine.compare_node(value1, value2, "")
    result.update_summary()
    return result.snapshot()


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


class TestObjects:
    """Key walk over two objects."""

    def test_identical_objects(self) -> None:
        result = _run({"a": 1, "b": {"c": "x"}}, {"a": 1, "b": {"c": "x"}})
        assert result.matched_keys == ("a", "b", "b.c")
        assert [m.path for m in result.matched_values] == ["a", "b.c"]
        assert result.summary.match_percentage == 100.0

    def test_key_missing_from_second(self) -> None:
        result = _run({"a": 1, "b": 2}, {"a": 1})
        (record,) = result.unmatched_keys
        assert record.path == "b"
        assert record.value == 2
        assert record.message == "Key exists in object 1 but not in object 2"

    def test_key_missing_from_first(self) -> None:
        result = _run({"a": 1}, {"a": 1, "z": [1]})
        (record,) = result.unmatched_keys
        assert record.path == "z"
        assert record.value == [1]
        assert record.message == "Key exists in object 2 but not in object 1"

    def test_ignore_extra_keys(self) -> None:
        result = _run({"a": 1}, {"a": 1, "z": 2}, ignore_extra_keys=True)
        assert result.unmatched_keys == ()
        assert result.is_match

    def test_ignore_extra_keys_still_reports_missing(self) -> None:
        result = _run({"a": 1, "b": 2}, {"a": 1}, ignore_extra_keys=True)
        assert [k.path for k in result.unmatched_keys] == ["b"]

    def test_ignored_keys_at_any_depth(self) -> None:
        result = _run(
            {"ts": 1, "nested": {"ts": 2, "v": 1}},
            {"ts": 9, "nested": {"v": 1, "extra": 0}, "x": None},
            ignored_keys=frozenset({"ts", "extra", "x"}),
        )
        assert result.matched_keys == ("nested", "nested.v")
        assert result.unmatched_keys == ()
        assert result.unmatched_values == ()


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


class TestLeaves:
    """Leaf comparison rules."""

    def test_equal_leaf_records_type(self) -> None:
        result = _run({"a": "x"}, {"a": "x"})
        (record,) = result.matched_values
        assert record.value == "x"
        assert record.type == "string"

    def test_unequal_leaf(self) -> None:
        result = _run({"b": 2}, {"b": 3})
        (record,) = result.unmatched_values
        assert (record.path, record.expected, record.actual) == ("b", 2, 3)
        assert record.message == "Values do not match"
        assert (record.expected_type, record.actual_type) == ("number", "number")

    def test_strict_type_mismatch_stops(self) -> None:
        result = _run({"v": 1}, {"v": "1"})
        (record,) = result.unmatched_types
        assert (record.expected, record.actual) == ("number", "string")
        assert record.message == "Types do not match: expected 'number', got 'string'"
        assert result.unmatched_values == ()
        assert result.matched_values == ()

    def test_loose_type_mismatch_matches(self) -> None:
        result = _run({"v": 1}, {"v": "1"}, strict_types=False)
        assert len(result.unmatched_types) == 1
        assert result.unmatched_values == ()
        assert len(result.matched_values) == 1
        assert result.summary.total_unmatched == 0

    def test_loose_mismatch_still_unmatched(self) -> None:
        result = _run({"v": 1}, {"v": "2"}, strict_types=False)
        assert len(result.unmatched_values) == 1

    def test_equivalence_group(self) -> None:
        result = _run(
            {"v": None},
            {"v": ""},
            equivalent_values={"empty": [None, ""]},
        )
        (record,) = result.matched_values
        assert record.value == "null ≈ "
        assert record.message == 'Values considered equivalent by rule "empty"'
        assert (record.type1, record.type2) == ("null", "string")
        assert result.unmatched_types == ()

    def test_null_against_object(self) -> None:
        result = _run({"v": None}, {"v": {"a": 1}})
        (record,) = result.unmatched_types
        assert (record.expected, record.actual) == ("null", "object")

    def test_array_against_object_is_type_mismatch(self) -> None:
        result = _run({"v": [1]}, {"v": {"0": 1}})
        (record,) = result.unmatched_types
        assert (record.expected, record.actual) == ("array", "object")
        assert result.unmatched_keys == ()

    def test_dates_are_leaves(self) -> None:
        day = dt.date(2024, 5, 1)
        assert _run({"d": day}, {"d": dt.date(2024, 5, 1)}).is_match
        result = _run({"d": day}, {"d": dt.date(2024, 5, 2)})
        assert result.unmatched_values[0].expected_type == "date"

    def test_root_leaves(self) -> None:
        result = _run(1, 2)
        assert result.unmatched_values[0].path == ""
        assert result.summary.total_keys_compared == 1

    def test_numpy_values(self) -> None:
        result = _run({"v": np.array([1, 2]), "s": np.float64(0.5)}, {"v": [1, 2], "s": 0.5})
        assert result.is_match
        assert result.unmatched_types == ()


# ---------------------------------------------------------------------------
# Array dispatch
# ---------------------------------------------------------------------------


class TestArrayDispatch:
    """Strategy lookup and invalid-strategy fallback."""

    def test_default_is_exact(self) -> None:
        result = _run([1, 2], [2, 1])
        assert [r.path for r in result.unmatched_values] == ["[0]", "[1]"]

    def test_invalid_key_strategy_falls_back(self) -> None:
        result = _run(
            {"items": [1, 2]},
            {"items": [1, 2]},
            array_strategies={"items": {"type": "key"}},
        )
        (record,) = result.unmatched_values
        assert record.path == "items"
        assert record.expected == "Valid keyName string"
        assert record.actual is None
        assert "Falling back to exact comparison" in record.message
        assert [m.path for m in result.matched_values] == ["items[0]", "items[1]"]


# ---------------------------------------------------------------------------
# Depth guard
# ---------------------------------------------------------------------------


def _nested(depth: int) -> dict[str, Any]:
    value: dict[str, Any] = {}
    for _ in range(depth):
        value = {"n": value}
    return value


class TestMaxDepth:
    """max_depth guard."""

    def test_within_limit(self) -> None:
        assert _run(_nested(5), _nested(5), max_depth=5).is_match

    def test_exceeds_limit(self) -> None:
        with pytest.raises(MaxDepthExceededError) as info:
            _run(_nested(6), _nested(6), max_depth=5)
        assert info.value.max_depth == 5
        assert info.value.path == "n.n.n.n.n.n"

    def test_is_recursion_error(self) -> None:
        with pytest.raises(RecursionError):
            _run(_nested(3), _nested(3), max_depth=2)

    def test_none_disables_guard(self) -> None:
        assert _run(_nested(300), _nested(300), max_depth=None).is_match
