"""Tests for the EXACT, SET and KEY array strategies.

Tests cover:
- EXACT: positional pairs, length mismatch and surplus elements on either side
- SET: order-insensitive multiset equality, count differences, canonical keys
- KEY: pairing by key field, missing elements, unkeyable elements, duplicate keys
"""

from __future__ import annotations

from typing import Any

from json_deep_compare.algorithm.config import ArrayStrategy, ArrayStrategyType
from json_deep_compare.comparator import JSONComparator
from json_deep_compare.result import ComparisonResult


def _compare(value1: Any, value2: Any, strategy: Any = None, **options: Any) -> ComparisonResult:
    """Compare with ``strategy`` configured for the array under key "a"."""
    strategies = {"a": strategy} if strategy is not None else {}
    return JSONComparator(array_strategies=strategies, **options).compare(
        {"a": value1}, {"a": value2}
    )


BY_ID = ArrayStrategy(ArrayStrategyType.KEY, "id")


# ---------------------------------------------------------------------------
# EXACT
# ---------------------------------------------------------------------------


class TestExact:
    """Positional comparison."""

    def test_equal_arrays(self) -> None:
        result = _compare([1, "x", None], [1, "x", None])
        assert result.is_match
        assert [m.path for m in result.matched_values] == ["a[0]", "a[1]", "a[2]"]

    def test_order_matters(self) -> None:
        result = _compare([1, 2], [2, 1])
        assert [(r.path, r.expected, r.actual) for r in result.unmatched_values] == [
            ("a[0]", 1, 2),
            ("a[1]", 2, 1),
        ]

    def test_first_longer(self) -> None:
        result = _compare([1, 2, 3], [1])
        length, *extras = result.unmatched_values
        assert length.path == "a"
        assert length.expected == "Array of length 3"
        assert length.actual == "Array of length 1"
        assert length.message == "Array lengths do not match (exact comparison)"
        assert [(r.path, r.expected, r.actual) for r in extras] == [
            ("a[1]", 2, None),
            ("a[2]", 3, None),
        ]
        assert extras[0].message == "Extra element in first array (exact comparison)"

    def test_second_longer(self) -> None:
        result = _compare([], [{"k": 1}])
        _, extra = result.unmatched_values
        assert (extra.path, extra.expected, extra.actual) == ("a[0]", None, {"k": 1})
        assert extra.message == "Extra element in second array (exact comparison)"

    def test_nested_objects_recurse(self) -> None:
        result = _compare([{"k": 1}], [{"k": 2}])
        assert "a[0].k" in result.matched_keys
        assert result.unmatched_values[0].path == "a[0].k"


# ---------------------------------------------------------------------------
# SET
# ---------------------------------------------------------------------------


class TestSet:
    """Multiset comparison."""

    def test_reordered_arrays_match(self) -> None:
        result = _compare([1, 2, 3], [3, 2, 1], "set")
        assert result.is_match
        assert result.summary.match_percentage == 100.0
        (record,) = result.matched_values
        assert record.path == "a"
        assert (record.type1, record.type2) == ("array", "array")
        assert record.message == "Arrays at path 'a' are equivalent when compared as sets."

    def test_length_mismatch_stops(self) -> None:
        result = _compare([1, 2], [1], "set")
        (record,) = result.unmatched_values
        assert record.message == "Array lengths do not match for set comparison"

    def test_count_difference(self) -> None:
        result = _compare([1, 1, 2], [1, 2, 2], "set")
        messages = [r.message for r in result.unmatched_values]
        assert messages == [
            "Set comparison failed for array at path 'a': Element '1' has count 2 "
            "in first array and count 1 in second array.",
            "Set comparison failed for array at path 'a': Element '2' has count 1 "
            "in first array and count 2 in second array.",
        ]
        assert result.matched_values == ()

    def test_element_only_in_second(self) -> None:
        result = _compare([1, 2], [1, 3], "set")
        first, second = result.unmatched_values
        assert first.expected == "Element '2' count: 1"
        assert first.actual == "Element '2' count: 0"
        assert second.expected == "Element '3' count: 0 (not present in first array)"
        assert second.actual == "Element '3' count: 1 (present in second array)"

    def test_type_distinct_members(self) -> None:
        assert not _compare([1, True], [True, True], "set").is_match
        assert not _compare([1], ["1"], "set").is_match

    def test_objects_by_serialization(self) -> None:
        assert _compare([{"x": 1}, {"y": 2}], [{"y": 2}, {"x": 1}], "set").is_match

    def test_object_key_order(self) -> None:
        left = [{"x": 1, "y": 2}]
        right = [{"y": 2, "x": 1}]
        assert not _compare(left, right, "set").is_match
        assert _compare(left, right, "set", canonical_set_keys=True).is_match

    def test_mixed_key_types_canonical(self) -> None:
        left = [{1: "x", "b": 2}]
        right = [{"b": 2, 1: "x"}]
        assert _compare(left, right, "set", canonical_set_keys=True).is_match

    def test_empty_arrays(self) -> None:
        assert _compare([], [], "set").is_match


# ---------------------------------------------------------------------------
# KEY
# ---------------------------------------------------------------------------


class TestKey:
    """Pairing by key field."""

    def test_reordered_objects_match(self) -> None:
        left = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]
        right = [{"id": 2, "v": "b"}, {"id": 1, "v": "a"}]
        result = _compare(left, right, BY_ID)
        assert result.is_match
        assert "a[id=1].v" in result.matched_keys
        assert "a[id=2].v" in result.matched_keys
        success = result.matched_values[-1]
        assert success.path == "a"
        assert success.value == "Arrays at path 'a' successfully compared by key 'id' (items: 2)"

    def test_record_form(self) -> None:
        result = _compare(
            [{"id": "x"}], [{"id": "x"}], {"type": "key", "keyName": "id"}
        )
        assert result.is_match

    def test_paired_differences_use_keyed_path(self) -> None:
        result = _compare([{"id": 1, "v": "a"}], [{"id": 1, "v": "b"}], BY_ID)
        (record,) = result.unmatched_values
        assert record.path == "a[id=1].v"
        # Pairing itself succeeded; the difference is reported on the pair.
        assert result.matched_values[-1].path == "a"

    def test_removed_element(self) -> None:
        left = [{"id": 1}, {"id": 2}, {"id": 3}]
        right = [{"id": 1}, {"id": 3}]
        result = _compare(left, right, BY_ID)
        (record,) = result.unmatched_values
        assert record.path == "a[id=2]"
        assert record.expected == {"id": 2}
        assert record.actual is None
        assert record.message == (
            "Element with key '2' exists in first array at path 'a' but not in second "
            "(key-based comparison)."
        )

    def test_added_element(self) -> None:
        result = _compare([{"id": 1}], [{"id": 1}, {"id": 4}], BY_ID)
        (record,) = result.unmatched_values
        assert (record.path, record.expected, record.actual) == ("a[id=4]", None, {"id": 4})

    def test_unkeyable_elements(self) -> None:
        result = _compare([{"id": 1}, "loose"], [{"id": 1}, {"name": "n"}], BY_ID)
        first, second = result.unmatched_values
        assert first.path == "a[1]"
        assert (first.expected, first.actual) == ("loose", "Unkeyable (key: 'id')")
        assert second.path == "a[1]"
        assert (second.expected, second.actual) == ("Unkeyable (key: 'id')", {"name": "n"})
        assert "second array" in second.message

    def test_null_key_is_unkeyable(self) -> None:
        result = _compare([{"id": None}], [{"id": None}], BY_ID)
        assert len(result.unmatched_values) == 2

    def test_duplicate_keys(self) -> None:
        result = _compare([{"id": 1, "v": 1}, {"id": 1, "v": 2}], [{"id": 1, "v": 2}], BY_ID)
        (record,) = result.unmatched_values
        assert record.path == "a"
        assert record.expected == "Key '1' to be unique in first array"
        assert record.actual == "Key '1' is duplicated in first array"
        # Last duplicate wins the pairing.
        assert any(m.path == "a[id=1].v" for m in result.matched_values)

    def test_key_field_read_even_when_ignored(self) -> None:
        result = _compare(
            [{"id": 1, "v": 1}],
            [{"id": 1, "v": 1}],
            BY_ID,
            ignored_keys=frozenset({"id"}),
        )
        assert result.is_match
        assert "a[id=1].id" not in result.matched_keys
        assert "a[id=1].v" in result.matched_keys
