"""Path addressing for nested values.

A path is a plain string that names one location inside a tree:

- Root is "" (empty string).
- Object children append ``.key`` (children of the root have no leading dot).
- Array elements append ``[index]``.
- Elements paired by the ``key`` array strategy append ``[keyName=value]``.

Example::

    append_key("", "user")            # "user"
    append_key("user", "email")       # "user.email"
    append_index("user.tags", 0)      # "user.tags[0]"
    append_keyed("items", "id", 7)    # "items[id=7]"

Keys that themselves contain ``.``, ``[`` or ``]`` cannot be told apart from
separators once written into a path; ``value_at`` resolves such paths on a
best-effort basis.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, Final

from json_deep_compare.tree.kinds import ValueKind, classify, unwrap

__all__ = [
    "MISSING",
    "Segment",
    "SegmentKind",
    "all_paths",
    "append_index",
    "append_key",
    "append_keyed",
    "key_name_of",
    "split_path",
    "stringify_key",
    "value_at",
]

# Bracketed segment or a bare key; the dots between keys are never captured.
_SEGMENT = re.compile(r"\[(?P<bracket>[^\]]*)\]|(?P<key>[^.\[]+)")


class _Missing:
    """Sentinel type for "no value at this path"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class SegmentKind(StrEnum):
    """The three kinds of path segment."""

    KEY = auto()
    INDEX = auto()
    KEYED = auto()


@dataclass(frozen=True, slots=True)
class Segment:
    """One parsed path segment.

    Attributes:
        kind:  Which segment form this is.
        name:  Object key for KEY segments; key field name for KEYED segments.
        index: Array index for INDEX segments.
        value: Stringified key field value for KEYED segments.
    """

    kind: SegmentKind
    name: str = ""
    index: int = -1
    value: str = ""


def stringify_key(value: Any) -> str:
    """Render a key-field value the way it appears inside ``[keyName=value]``."""
    value = unwrap(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def append_key(path: str, key: Any) -> str:
    """Return the path of object member ``key`` under ``path``."""
    return f"{path}.{key}" if path else str(key)


def append_index(path: str, index: int) -> str:
    """Return the path of array element ``index`` under ``path``."""
    return f"{path}[{index}]"


def append_keyed(path: str, key_name: str, key_value: Any) -> str:
    """Return the synthetic path of a key-matched array element."""
    return f"{path}[{key_name}={stringify_key(key_value)}]"


def key_name_of(path: str) -> str:
    """Return the trailing key name of ``path``.

    That is the text after the last ``.`` and before the first ``[`` that
    follows it: ``"user.tags[0]"`` -> ``"tags"``, ``"[0]"`` -> ``""``.
    """
    return path.rsplit(".", 1)[-1].split("[", 1)[0]


def split_path(path: str) -> list[Segment]:
    """Parse ``path`` into its segments."""
    segments: list[Segment] = []
    for match in _SEGMENT.finditer(path):
        bracket = match.group("bracket")
        if bracket is None:
            segments.append(Segment(SegmentKind.KEY, name=match.group("key")))
        elif bracket.isdigit():
            segments.append(Segment(SegmentKind.INDEX, index=int(bracket)))
        elif "=" in bracket:
            name, _, value = bracket.partition("=")
            segments.append(Segment(SegmentKind.KEYED, name=name, value=value))
        else:
            segments.append(Segment(SegmentKind.KEY, name=bracket))
    return segments


def _lookup(mapping: Mapping[Any, Any], name: str) -> Any:
    """Find the member whose key is, or renders as, ``name``."""
    if name in mapping:
        return mapping[name]
    for key, item in mapping.items():
        if str(key) == name:
            return item
    return MISSING


def _step(current: Any, segment: Segment) -> Any:
    kind = classify(current)
    if kind is ValueKind.OBJECT:
        if segment.kind is SegmentKind.INDEX:
            return _lookup(current, str(segment.index))
        if segment.kind is SegmentKind.KEY:
            return _lookup(current, segment.name)
        return MISSING
    if kind is ValueKind.ARRAY:
        if segment.kind is SegmentKind.INDEX:
            return current[segment.index] if segment.index < len(current) else MISSING
        if segment.kind is SegmentKind.KEYED:
            for element in current:
                element = unwrap(element)
                if (
                    isinstance(element, Mapping)
                    and element.get(segment.name) is not None
                    and stringify_key(element[segment.name]) == segment.value
                ):
                    return element
        return MISSING
    return MISSING


def value_at(value: Any, path: str) -> Any:
    """Resolve ``path`` inside ``value``.

    Object segments match a key by equality first and then by its string
    form, so paths built from non-string keys (``{1: "a"}`` -> ``"1"``)
    resolve too.

    Returns:
        The value at ``path``, or ``MISSING`` when a segment is absent or the
        walk reaches a leaf before the path is exhausted.
    """
    current = unwrap(value)
    for segment in split_path(path):
        current = unwrap(_step(current, segment))
        if current is MISSING:
            return MISSING
    return current


def all_paths(
    value: Any,
    path: str = "",
    key_fields: Mapping[str, str] | None = None,
) -> list[str]:
    """Return every terminal path in ``value``.

    Leaves and empty containers are terminal; an empty object or array
    contributes its own path.  Paths are listed in traversal order.

    Args:
        value:      The tree to enumerate.
        path:       Path of ``value`` itself; "" for a root.
        key_fields: Array path -> key field name.  Object elements of those
                    arrays whose key field is set are enumerated at
                    ``array[keyName=value]`` instead of ``array[index]``,
                    matching the paths the key strategy compares at.
    """
    paths: list[str] = []
    _collect_paths(unwrap(value), path, paths, key_fields or {})
    return paths


def _element_path(path: str, idx: int, item: Any, key_name: str | None) -> str:
    if key_name is not None and isinstance(item, Mapping) and item.get(key_name) is not None:
        return append_keyed(path, key_name, item[key_name])
    return append_index(path, idx)


def _collect_paths(
    value: Any,
    path: str,
    paths: list[str],
    key_fields: Mapping[str, str],
) -> None:
    kind = classify(value)
    if kind is ValueKind.ARRAY and len(value) > 0:
        key_name = key_fields.get(path)
        for idx, item in enumerate(value):
            item = unwrap(item)
            child_path = _element_path(path, idx, item, key_name)
            _collect_paths(item, child_path, paths, key_fields)
    elif kind is ValueKind.OBJECT and len(value) > 0:
        for key, item in value.items():
            _collect_paths(unwrap(item), append_key(path, key), paths, key_fields)
    else:
        paths.append(path)
