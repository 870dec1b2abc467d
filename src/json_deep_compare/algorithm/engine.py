"""ComparisonEngine: recursive lockstep walk over two value trees.

Architecture:
- compare_node():   classifies both values once and dispatches on the pair
                    of ``ValueKind`` tags.
- OBJECT/OBJECT:    key walk in both directions, honouring ``ignored_keys``
                    and ``ignore_extra_keys``.
- ARRAY/ARRAY:      the strategy configured for the array path (see
                    ``strategies``); EXACT when none is configured, and as the
                    fallback for an unusable KEY strategy.
- everything else:  leaf comparison (equivalence groups, type tags, strict or
                    loose equality), followed by pattern checks on the second
                    value.

Findings are appended to the shared ``ResultAccumulator``; nothing is
raised for differences.  The only exception is ``MaxDepthExceededError``
when the input nests deeper than ``CompareOptions.max_depth``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from json_deep_compare.accumulator import ResultAccumulator
from json_deep_compare.algorithm.config import ArrayStrategyType, CompareOptions
from json_deep_compare.algorithm.equality import (
    find_equivalence,
    loosely_equal,
    strictly_equal,
)
from json_deep_compare.algorithm.strategies import (
    compare_as_set,
    compare_by_key,
    compare_exact,
)
from json_deep_compare.exceptions import MaxDepthExceededError
from json_deep_compare.result import (
    MatchedValue,
    UnmatchedKey,
    UnmatchedType,
    UnmatchedValue,
)
from json_deep_compare.tree.kinds import ValueKind, classify, type_tag, unwrap
from json_deep_compare.tree.paths import append_key, stringify_key

if TYPE_CHECKING:
    from json_deep_compare.validator import PatternValidator

__all__ = ["ComparisonEngine"]

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """Recursive comparison core.

    The engine holds no state of its own between calls; everything it finds
    goes to ``result``.  One engine serves one comparator.

    Example::

        options = CompareOptions()
        result = ResultAccumulator(strict_types=options.strict_types)
        engine = ComparisonEngine(options, result, PatternValidator(options, result))
        engine.compare_node({"a": 1}, {"a": 2}, "")
        result.update_summary()
        result.snapshot().unmatched_values[0].path   # "a"
    """

    def __init__(
        self,
        options: CompareOptions,
        result: ResultAccumulator,
        validator: PatternValidator,
    ) -> None:
        self._options = options
        self._result = result
        self._validator = validator

    @property
    def options(self) -> CompareOptions:
        return self._options

    @property
    def result(self) -> ResultAccumulator:
        return self._result

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def compare_node(self, value1: Any, value2: Any, path: str, depth: int = 0) -> None:
        """Compare ``value1`` (expected) with ``value2`` (actual) at ``path``.

        Args:
            value1: Value from the first tree.
            value2: Value from the second tree.
            path:   Path of both values; "" for the roots.
            depth:  Nesting level of ``path``; 0 for the roots.

        Raises:
            MaxDepthExceededError: If ``depth`` exceeds ``options.max_depth``.
        """
        max_depth = self._options.max_depth
        if max_depth is not None and depth > max_depth:
            raise MaxDepthExceededError(path, max_depth)

        value1 = unwrap(value1)
        value2 = unwrap(value2)
        kind1 = classify(value1)
        kind2 = classify(value2)

        if ValueKind.NULL in (kind1, kind2):
            self.compare_leaf(value1, value2, path)
        elif kind1 is ValueKind.ARRAY and kind2 is ValueKind.ARRAY:
            self._compare_arrays(value1, value2, path, depth)
        elif kind1 is ValueKind.OBJECT and kind2 is ValueKind.OBJECT:
            self._compare_objects(value1, value2, path, depth)
        else:
            # Leaves, and containers of different kinds (array vs object).
            self.compare_leaf(value1, value2, path)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _compare_objects(
        self,
        obj1: Mapping[Any, Any],
        obj2: Mapping[Any, Any],
        path: str,
        depth: int,
    ) -> None:
        options = self._options
        for key, value1 in obj1.items():
            if options.is_ignored(key):
                continue
            child_path = append_key(path, key)
            if key in obj2:
                self._result.add_matched_key(child_path)
                self.compare_node(value1, obj2[key], child_path, depth + 1)
            else:
                self._result.add_unmatched_key(
                    UnmatchedKey(
                        path=child_path,
                        value=value1,
                        message="Key exists in object 1 but not in object 2",
                    )
                )

        if options.ignore_extra_keys:
            return
        for key, value2 in obj2.items():
            if options.is_ignored(key) or key in obj1:
                continue
            self._result.add_unmatched_key(
                UnmatchedKey(
                    path=append_key(path, key),
                    value=value2,
                    message="Key exists in object 2 but not in object 1",
                )
            )

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _compare_arrays(
        self,
        arr1: Sequence[Any],
        arr2: Sequence[Any],
        path: str,
        depth: int,
    ) -> None:
        strategy = self._options.strategy_for(path)

        if not strategy.is_valid:
            logger.debug(
                "Invalid key strategy at %r (key_name=%r); using exact comparison",
                path,
                strategy.key_name,
            )
            self._result.add_unmatched_value(
                UnmatchedValue(
                    path=path,
                    expected="Valid keyName string",
                    actual=strategy.key_name,
                    message=(
                        f"Invalid keyName '{strategy.key_name}' for array key "
                        f"comparison. Falling back to exact comparison."
                    ),
                )
            )
            compare_exact(self, arr1, arr2, path, depth)
        elif strategy.type is ArrayStrategyType.SET:
            compare_as_set(self, arr1, arr2, path)
        elif strategy.type is ArrayStrategyType.KEY:
            compare_by_key(self, arr1, arr2, path, depth, strategy.key_name)
        else:
            compare_exact(self, arr1, arr2, path, depth)

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def compare_leaf(self, value1: Any, value2: Any, path: str) -> None:
        """Compare two values that are not both objects or both arrays.

        Order of rules:
        1. An equivalence group holding both values -> matched, stop.
        2. Differing type tags -> unmatched type; stop under strict typing.
        3. Strict (``==`` on equal tags) or loose equality -> matched or
           unmatched value.
        4. Pattern checks on ``value2``.
        """
        options = self._options
        type1 = type_tag(value1)
        type2 = type_tag(value2)

        rule = find_equivalence(options.equivalent_values, value1, value2)
        if rule is not None:
            self._result.add_matched_value(
                MatchedValue(
                    path=path,
                    value=f"{stringify_key(value1)} ≈ {stringify_key(value2)}",
                    type1=type1,
                    type2=type2,
                    message=f'Values considered equivalent by rule "{rule}"',
                )
            )
            return

        if type1 != type2:
            self._result.add_unmatched_type(
                UnmatchedType(
                    path=path,
                    expected=type1,
                    actual=type2,
                    message=f"Types do not match: expected '{type1}', got '{type2}'",
                )
            )
            if options.strict_types:
                return

        equal = strictly_equal if options.strict_types else loosely_equal
        if equal(value1, value2):
            self._result.add_matched_value(
                MatchedValue(path=path, value=value1, type=type1)
            )
        else:
            self._result.add_unmatched_value(
                UnmatchedValue(
                    path=path,
                    expected=value1,
                    actual=value2,
                    message="Values do not match",
                    expected_type=type1,
                    actual_type=type2,
                )
            )

        self._validator.check_value(value2, path)
