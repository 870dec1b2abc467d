"""algorithm subpackage: public API for the comparison engine.

Provides the recursive engine, its configuration, and per-path array
strategy control.  Import from this module (not from sub-modules directly)
to stay on the stable public interface.

Example::

    from json_deep_compare.algorithm import ArrayStrategy, CompareOptions

    options = CompareOptions(array_strategies={"items": ArrayStrategy("key", "id")})
"""

from __future__ import annotations

from json_deep_compare.algorithm.config import (
    ArrayStrategy,
    ArrayStrategyType,
    CompareOptions,
)
from json_deep_compare.algorithm.engine import ComparisonEngine

__all__ = ["ArrayStrategy", "ArrayStrategyType", "CompareOptions", "ComparisonEngine"]
