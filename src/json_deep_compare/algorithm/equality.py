"""Equality rules used by the comparison engine.

- ``find_equivalence``: equivalence-group lookup (type-aware membership).
- ``strictly_equal`` / ``loosely_equal``: the two leaf equality modes.
- ``member_key``: hashable multiset key for SET-strategy elements.

Loose equality coerces between numbers, booleans and numeric strings only
when at least one side is a number or a boolean, so ``1 == "1"`` and
``True == 1`` hold while ``"1.0" == "1"`` does not.  ``None`` is loosely
equal to ``None`` only.
"""

from __future__ import annotations

import json
import math
from collections.abc import Hashable, Mapping
from typing import Any

from json_deep_compare.tree.kinds import type_tag, unwrap
from json_deep_compare.tree.paths import stringify_key

__all__ = [
    "describe_member",
    "find_equivalence",
    "loosely_equal",
    "member_key",
    "strictly_equal",
]

_NAN_KEY = "NaN"


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _same_value(a: Any, b: Any) -> bool:
    """Same type tag and equal, with NaN equal to NaN."""
    if type_tag(a) != type_tag(b):
        return False
    if _is_nan(a) and _is_nan(b):
        return True
    return bool(a == b)


def find_equivalence(
    groups: Mapping[str, tuple[Any, ...]],
    value1: Any,
    value2: Any,
) -> str | None:
    """Return the name of the first group holding both values, else None."""
    for rule, members in groups.items():
        if any(_same_value(m, value1) for m in members) and any(
            _same_value(m, value2) for m in members
        ):
            return rule
    return None


def strictly_equal(value1: Any, value2: Any) -> bool:
    """Equality for values whose type tags already agree."""
    return bool(value1 == value2)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def loosely_equal(value1: Any, value2: Any) -> bool:
    """Type-coercing equality used when strict typing is off."""
    if value1 is None or value2 is None:
        return value1 is None and value2 is None
    if value1 == value2:
        return True
    if not any(isinstance(v, (bool, int, float)) for v in (value1, value2)):
        return False
    number1 = _to_number(value1)
    number2 = _to_number(value2)
    if number1 is None or number2 is None:
        return False
    return number1 == number2


def _as_pairs(value: Any, canonical: bool) -> Any:
    """Rewrite objects as ``[str(key), value]`` pairs, recursively."""
    value = unwrap(value)
    if isinstance(value, Mapping):
        pairs = [[str(key), _as_pairs(item, canonical)] for key, item in value.items()]
        if canonical:
            pairs.sort(key=lambda pair: pair[0])
        return pairs
    if isinstance(value, (list, tuple)):
        return [_as_pairs(item, canonical) for item in value]
    return value


def _serialize(value: Any, canonical: bool) -> str:
    try:
        return json.dumps(value, sort_keys=canonical, default=str)
    except TypeError:
        # Keys json cannot encode or cannot sort (tuples, mixed int/str).
        return json.dumps(_as_pairs(value, canonical), default=str)


def member_key(value: Any, canonical: bool = False) -> Hashable:
    """Return the multiset key of one array element.

    Containers are keyed by their JSON serialization (sorted keys when
    ``canonical``); leaves by ``(type tag, value)`` so that ``1`` and
    ``True`` stay distinct.  Objects whose keys JSON cannot encode or sort
    are serialized as key/value pairs instead.
    """
    value = unwrap(value)
    tag = type_tag(value)
    if tag in ("object", "array"):
        return (tag, _serialize(value, canonical))
    if _is_nan(value):
        return (tag, _NAN_KEY)
    try:
        hash(value)
    except TypeError:
        return (tag, repr(value))
    return (tag, value)


def describe_member(key: Hashable) -> str:
    """Render a ``member_key`` result for report messages."""
    tag, payload = key  # type: ignore[misc]
    if isinstance(payload, str) and tag in ("object", "array"):
        return payload
    return stringify_key(payload)
