"""JSON deep compare - path-addressed structural comparison of JSON-like values."""

from __future__ import annotations

from json_deep_compare.algorithm.config import (
    ArrayStrategy,
    ArrayStrategyType,
    CompareOptions,
)
from json_deep_compare.api import (
    compare,
    compare_and_validate,
    is_match,
    match_percentage,
    validate,
)
from json_deep_compare.comparator import JSONComparator
from json_deep_compare.exceptions import (
    ConfigurationError,
    JSONCompareError,
    MaxDepthExceededError,
)
from json_deep_compare.result import ComparisonResult, Summary

__version__: str = "0.1.0"
__all__: list[str] = [
    "ArrayStrategy",
    "ArrayStrategyType",
    "CompareOptions",
    "ComparisonResult",
    "ConfigurationError",
    "JSONCompareError",
    "JSONComparator",
    "MaxDepthExceededError",
    "Summary",
    "compare",
    "compare_and_validate",
    "is_match",
    "match_percentage",
    "validate",
]
