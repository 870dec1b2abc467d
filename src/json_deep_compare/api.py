"""Public API functions for json-deep-compare.

This module provides the user-facing functions: compare,
compare_and_validate, validate, match_percentage and is_match.  Each call
creates a fresh JSONComparator to guarantee zero state shared between calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from json_deep_compare.algorithm.config import CompareOptions
from json_deep_compare.comparator import JSONComparator
from json_deep_compare.result import ComparisonResult

__all__ = [
    "compare",
    "compare_and_validate",
    "is_match",
    "match_percentage",
    "validate",
]

OptionsLike = CompareOptions | Mapping[str, Any] | None


def compare(
    value1: Any,
    value2: Any,
    options: OptionsLike = None,
    **overrides: Any,
) -> ComparisonResult:
    """Compare two values and return a ComparisonResult.

    Args:
        value1:    Expected value (dict, list, str, int, float, bool, None, ...).
        value2:    Actual value.
        options:   ``CompareOptions``, a configuration record, or None.
        overrides: Individual ``CompareOptions`` fields.

    Returns:
        A ``ComparisonResult`` with every finding and the summary.
    """
    return JSONComparator(options, **overrides).compare(value1, value2)


def compare_and_validate(
    value1: Any,
    value2: Any,
    options: OptionsLike = None,
    **overrides: Any,
) -> ComparisonResult:
    """Compare two values, then apply name-matched pattern checks to ``value2``."""
    return JSONComparator(options, **overrides).compare_and_validate(value1, value2)


def validate(value: Any, options: OptionsLike = None, **overrides: Any) -> ComparisonResult:
    """Apply the configured pattern checks to ``value`` alone."""
    return JSONComparator(options, **overrides).validate(value)


def match_percentage(
    value1: Any,
    value2: Any,
    options: OptionsLike = None,
    **overrides: Any,
) -> float:
    """Return ``summary.match_percentage`` for the two values.

    Returns:
        A float in [0.0, 100.0].  100.0 when every compared key matched or
        nothing was compared.
    """
    return compare(value1, value2, options, **overrides).summary.match_percentage


def is_match(
    value1: Any,
    value2: Any,
    options: OptionsLike = None,
    **overrides: Any,
) -> bool:
    """Return True if the comparison found no mismatch and no failed pattern check."""
    return compare(value1, value2, options, **overrides).is_match
