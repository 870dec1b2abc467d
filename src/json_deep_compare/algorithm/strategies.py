"""Array comparison strategies: EXACT, SET and KEY.

Each strategy receives the engine so that it can recurse into element pairs
through ``ComparisonEngine.compare_node`` and record findings on
``engine.result``.

- EXACT: positional.  A length mismatch is reported at the array path, the
  common prefix is compared pairwise and every surplus element is reported
  at its own index path.
- SET:   multiset equality.  A length mismatch is reported once and ends the
  comparison; otherwise every element whose multiplicity differs is
  reported once at the array path.
- KEY:   objects paired by the value of a key field and compared at the
  synthetic path ``array[keyName=value]``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from json_deep_compare.algorithm.equality import describe_member, member_key
from json_deep_compare.result import MatchedValue, UnmatchedValue
from json_deep_compare.tree.kinds import unwrap
from json_deep_compare.tree.paths import append_index, append_keyed, stringify_key

if TYPE_CHECKING:
    from json_deep_compare.algorithm.engine import ComparisonEngine

__all__ = ["compare_as_set", "compare_by_key", "compare_exact"]

_ORDINALS = ("first", "second")


# ----------------------------------------------------------------------
# EXACT
# ----------------------------------------------------------------------


def compare_exact(
    engine: ComparisonEngine,
    left: Sequence[Any],
    right: Sequence[Any],
    path: str,
    depth: int,
) -> None:
    """Compare two arrays element by element in order."""
    result = engine.result
    if len(left) != len(right):
        result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Array of length {len(left)}",
                actual=f"Array of length {len(right)}",
                message="Array lengths do not match (exact comparison)",
            )
        )

    shared = min(len(left), len(right))
    for idx in range(shared):
        engine.compare_node(left[idx], right[idx], append_index(path, idx), depth + 1)

    for idx in range(shared, len(left)):
        result.add_unmatched_value(
            UnmatchedValue(
                path=append_index(path, idx),
                expected=left[idx],
                actual=None,
                message="Extra element in first array (exact comparison)",
            )
        )
    for idx in range(shared, len(right)):
        result.add_unmatched_value(
            UnmatchedValue(
                path=append_index(path, idx),
                expected=None,
                actual=right[idx],
                message="Extra element in second array (exact comparison)",
            )
        )


# ----------------------------------------------------------------------
# SET
# ----------------------------------------------------------------------


def compare_as_set(
    engine: ComparisonEngine,
    left: Sequence[Any],
    right: Sequence[Any],
    path: str,
) -> None:
    """Compare two arrays as multisets; element order is irrelevant."""
    result = engine.result
    if len(left) != len(right):
        result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Array of length {len(left)}",
                actual=f"Array of length {len(right)}",
                message="Array lengths do not match for set comparison",
            )
        )
        return

    canonical = engine.options.canonical_set_keys
    counts_left = Counter(member_key(el, canonical) for el in left)
    counts_right = Counter(member_key(el, canonical) for el in right)

    all_match = True
    for key, count_left in counts_left.items():
        count_right = counts_right.get(key, 0)
        if count_left == count_right:
            continue
        all_match = False
        shown = describe_member(key)
        result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Element '{shown}' count: {count_left}",
                actual=f"Element '{shown}' count: {count_right}",
                message=(
                    f"Set comparison failed for array at path '{path}': Element "
                    f"'{shown}' has count {count_left} in first array and count "
                    f"{count_right} in second array."
                ),
            )
        )

    for key, count_right in counts_right.items():
        if key in counts_left:
            continue
        all_match = False
        shown = describe_member(key)
        result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Element '{shown}' count: 0 (not present in first array)",
                actual=f"Element '{shown}' count: {count_right} (present in second array)",
                message=(
                    f"Set comparison failed for array at path '{path}': Element "
                    f"'{shown}' is present in second array (count {count_right}) "
                    f"but not in first."
                ),
            )
        )

    if all_match:
        result.add_matched_value(
            MatchedValue(
                path=path,
                value=(
                    f"Arrays at path '{path}' successfully compared as sets "
                    f"(length {len(left)})"
                ),
                type1="array",
                type2="array",
                message=f"Arrays at path '{path}' are equivalent when compared as sets.",
            )
        )


# ----------------------------------------------------------------------
# KEY
# ----------------------------------------------------------------------


@dataclass(slots=True)
class _KeyIndex:
    """One array partitioned for key-based pairing.

    Attributes:
        total:      Length of the array.
        elements:   member_key(key value) -> (key value, element); the last
                    element wins when a key value repeats.
        unkeyable:  (index, element) for non-objects and objects whose key
                    field is missing or None.
        duplicates: Key values seen more than once, in first-seen order.
    """

    total: int
    elements: dict[Hashable, tuple[Any, Mapping[str, Any]]] = field(default_factory=dict)
    unkeyable: list[tuple[int, Any]] = field(default_factory=list)
    duplicates: list[Any] = field(default_factory=list)

    @property
    def keyable_count(self) -> int:
        return self.total - len(self.unkeyable)


def _index_by_key(array: Sequence[Any], key_name: str) -> _KeyIndex:
    index = _KeyIndex(total=len(array))
    seen_duplicates: set[Hashable] = set()
    for position, element in enumerate(array):
        element = unwrap(element)
        if not isinstance(element, Mapping) or element.get(key_name) is None:
            index.unkeyable.append((position, element))
            continue
        key_value = unwrap(element[key_name])
        key = member_key(key_value)
        if key in index.elements and key not in seen_duplicates:
            seen_duplicates.add(key)
            index.duplicates.append(key_value)
        index.elements[key] = (key_value, element)
    return index


def _report_unkeyable(
    engine: ComparisonEngine,
    index: _KeyIndex,
    side: int,
    path: str,
    key_name: str,
) -> None:
    sentinel = f"Unkeyable (key: '{key_name}')"
    for position, element in index.unkeyable:
        expected, actual = (element, sentinel) if side == 0 else (sentinel, element)
        engine.result.add_unmatched_value(
            UnmatchedValue(
                path=append_index(path, position),
                expected=expected,
                actual=actual,
                message=(
                    f"Element at index {position} in {_ORDINALS[side]} array at path "
                    f"'{path}' is not an object or is missing the key '{key_name}', "
                    f"cannot be used in key-based comparison."
                ),
            )
        )


def _report_duplicates(
    engine: ComparisonEngine,
    index: _KeyIndex,
    side: int,
    path: str,
) -> None:
    ordinal = _ORDINALS[side]
    for key_value in index.duplicates:
        shown = stringify_key(key_value)
        engine.result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Key '{shown}' to be unique in {ordinal} array",
                actual=f"Key '{shown}' is duplicated in {ordinal} array",
                message=(
                    f"Duplicate key '{shown}' found in {ordinal} array during "
                    f"key-based comparison at path '{path}'."
                ),
            )
        )


def compare_by_key(
    engine: ComparisonEngine,
    left: Sequence[Any],
    right: Sequence[Any],
    path: str,
    depth: int,
    key_name: str,
) -> None:
    """Pair objects of two arrays by ``key_name`` and compare each pair.

    The key field itself is read before ``ignored_keys`` applies; the ignore
    rule still holds inside each paired object comparison.
    """
    result = engine.result
    index_left = _index_by_key(left, key_name)
    index_right = _index_by_key(right, key_name)

    _report_unkeyable(engine, index_left, 0, path, key_name)
    _report_unkeyable(engine, index_right, 1, path, key_name)
    _report_duplicates(engine, index_left, 0, path)
    _report_duplicates(engine, index_right, 1, path)

    successful = not (
        index_left.unkeyable
        or index_right.unkeyable
        or index_left.duplicates
        or index_right.duplicates
    )

    all_keys = list(index_left.elements)
    all_keys.extend(k for k in index_right.elements if k not in index_left.elements)

    paired = 0
    for key in all_keys:
        entry_left = index_left.elements.get(key)
        entry_right = index_right.elements.get(key)
        key_value = (entry_left or entry_right)[0]  # type: ignore[index]
        keyed_path = append_keyed(path, key_name, key_value)
        shown = stringify_key(key_value)

        if entry_left is not None and entry_right is not None:
            engine.compare_node(entry_left[1], entry_right[1], keyed_path, depth + 1)
            paired += 1
        elif entry_left is not None:
            successful = False
            result.add_unmatched_value(
                UnmatchedValue(
                    path=keyed_path,
                    expected=entry_left[1],
                    actual=None,
                    message=(
                        f"Element with key '{shown}' exists in first array at path "
                        f"'{path}' but not in second (key-based comparison)."
                    ),
                )
            )
        else:
            successful = False
            result.add_unmatched_value(
                UnmatchedValue(
                    path=keyed_path,
                    expected=None,
                    actual=entry_right[1],  # type: ignore[index]
                    message=(
                        f"Element with key '{shown}' exists in second array at path "
                        f"'{path}' but not in first (key-based comparison)."
                    ),
                )
            )

    keyable_left = index_left.keyable_count
    keyable_right = index_right.keyable_count
    if keyable_left != keyable_right and successful:
        successful = False
        result.add_unmatched_value(
            UnmatchedValue(
                path=path,
                expected=f"Array of {keyable_left} keyable items (using key '{key_name}')",
                actual=f"Array of {keyable_right} keyable items (using key '{key_name}')",
                message=(
                    f"Effective array lengths (after filtering unkeyable items) do not "
                    f"match at path '{path}' for key-based comparison."
                ),
            )
        )

    if successful:
        result.add_matched_value(
            MatchedValue(
                path=path,
                value=(
                    f"Arrays at path '{path}' successfully compared by key "
                    f"'{key_name}' (items: {paired})"
                ),
                type1="array",
                type2="array",
                message=(
                    f"Arrays at path '{path}' are equivalent when compared by key "
                    f"'{key_name}'."
                ),
            )
        )
