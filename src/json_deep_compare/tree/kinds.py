"""ValueKind StrEnum and value classification for tree comparison.

Every value the engine visits is classified exactly once into a
``ValueKind`` and the engine branches on that tag.  A second, finer
classification (``type_tag``) produces the human-readable type names that
appear in type-mismatch reports.

numpy inputs are accepted: numpy scalars are unwrapped to the equivalent
Python scalar and ``numpy.ndarray`` values are treated as arrays.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Any

import numpy as np

__all__ = ["ValueKind", "classify", "is_container", "type_tag", "unwrap"]


class ValueKind(StrEnum):
    """Enumeration of the six value shapes the engine dispatches on.

    - NULL      -> "null"      : None
    - ARRAY     -> "array"     : list, tuple, numpy.ndarray
    - OBJECT    -> "object"    : dict or any other Mapping
    - DATE      -> "date"      : datetime.date / datetime.datetime
    - PATTERN   -> "pattern"   : compiled regular expression
    - PRIMITIVE -> "primitive" : everything else (str, numbers, bool, ...)
    """

    NULL = auto()
    ARRAY = auto()
    OBJECT = auto()
    DATE = auto()
    PATTERN = auto()
    PRIMITIVE = auto()


def unwrap(value: Any) -> Any:
    """Convert numpy values to their plain Python equivalents.

    ``numpy.generic`` scalars become Python scalars via ``.item()``;
    ``numpy.ndarray`` becomes a (nested) list.  Other values are returned
    unchanged.
    """
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    return value


def classify(value: Any) -> ValueKind:
    """Return the ``ValueKind`` of ``value``.

    ``str`` and ``bytes`` are sequences in Python but are leaves here, so
    arrays are recognised by concrete type rather than by the Sequence ABC.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (list, tuple, np.ndarray)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, dt.date):
        return ValueKind.DATE
    if isinstance(value, re.Pattern):
        return ValueKind.PATTERN
    return ValueKind.PRIMITIVE


def is_container(value: Any) -> bool:
    """True for objects and arrays."""
    return classify(value) in (ValueKind.ARRAY, ValueKind.OBJECT)


def type_tag(value: Any) -> str:
    """Return the detailed type name of ``value`` used in reports.

    bool MUST be checked before int: bool subclasses int in Python.
    """
    value = unwrap(value)
    kind = classify(value)
    if kind is ValueKind.PATTERN:
        return "regex"
    if kind is not ValueKind.PRIMITIVE:
        return str(kind)
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__.lower()
