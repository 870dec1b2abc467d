"""JSONComparator: orchestrator that wires options, accumulator, validator and engine.

This is the central wiring layer between the recursive engine and the
public API.  It owns one of each collaborator:

- ``CompareOptions``    frozen settings, shared read-only by all others.
- ``ResultAccumulator`` the findings of the current run.
- ``PatternValidator``  pattern checks, writing into the accumulator.
- ``ComparisonEngine``  the recursive walk, writing into the accumulator.

Every public operation resets the accumulator first, so one comparator may
be reused sequentially.  It is not safe to share one comparator between
threads; build one per thread (construction is cheap, compiled patterns are
cached process-wide).
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from json_deep_compare.accumulator import ResultAccumulator
from json_deep_compare.algorithm.config import CompareOptions
from json_deep_compare.algorithm.engine import ComparisonEngine
from json_deep_compare.result import ComparisonResult
from json_deep_compare.tree.kinds import ValueKind, classify, unwrap
from json_deep_compare.validator import PatternValidator

__all__ = ["JSONComparator"]

logger = logging.getLogger(__name__)


class JSONComparator:
    """Structural, path-addressed comparison of two tree-shaped values.

    Example::

        from json_deep_compare import JSONComparator

        cmp = JSONComparator(ignored_keys={"updated_at"})
        result = cmp.compare({"a": 1, "b": 2}, {"a": 1, "b": 3})
        result.summary.match_percentage        # 66.67: 2 matched keys of 3 findings
        result.unmatched_values[0].path        # "b"
    """

    def __init__(
        self,
        options: CompareOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        """Initialise the comparator.

        Args:
            options:   A ``CompareOptions`` instance, a configuration record
                       (camelCase or snake_case names, see
                       ``CompareOptions.from_mapping``), or None for defaults.
            overrides: Individual ``CompareOptions`` fields applied on top of
                       ``options``.

        Raises:
            ConfigurationError: If the options are invalid, e.g. a pattern
                string does not compile.
        """
        if isinstance(options, CompareOptions):
            resolved = dataclasses.replace(options, **overrides) if overrides else options
        else:
            resolved = CompareOptions.from_mapping({**(options or {}), **overrides})
        self._options: CompareOptions = resolved
        self._result = ResultAccumulator(strict_types=resolved.strict_types)
        self._validator = PatternValidator(resolved, self._result)
        self._engine = ComparisonEngine(resolved, self._result, self._validator)

    @property
    def options(self) -> CompareOptions:
        """The frozen options used by every comparison of this instance."""
        return self._options

    def get_options(self) -> CompareOptions:
        """Return the frozen options (read-only view)."""
        return self._options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, value1: Any, value2: Any) -> ComparisonResult:
        """Compare ``value1`` (expected) with ``value2`` (actual).

        Args:
            value1: First value (dict, list, str, int, float, bool, None, ...).
            value2: Second value.

        Returns:
            A ``ComparisonResult`` snapshot with every finding and the summary.

        Raises:
            MaxDepthExceededError: If either value nests deeper than
                ``options.max_depth``.
        """
        self._result.reset()
        self._engine.compare_node(value1, value2, "")
        summary = self._result.update_summary()
        logger.debug(
            "Compared %d keys: %d matched, %d unmatched (%.1f%%), %d pattern checks",
            summary.total_keys_compared,
            summary.total_matched,
            summary.total_unmatched,
            summary.match_percentage,
            summary.total_regex_checks,
        )
        return self._result.snapshot()

    def compare_and_validate(self, value1: Any, value2: Any) -> ComparisonResult:
        """Compare, then scan ``value2`` for every key named by a pattern check.

        The scan only runs with ``match_keys_by_name`` and never re-checks a
        path already checked during the comparison.
        """
        self.compare(value1, value2)
        self._validator.check_all_by_key_name(value2)
        self._result.update_summary()
        return self._result.snapshot()

    def validate(self, value: Any) -> ComparisonResult:
        """Apply the pattern checks to ``value`` without a comparison baseline.

        ``value`` is compared against an empty container of the same kind
        (an empty dict for leaves), then every pattern keyed by an exact path
        present in ``value`` and, with ``match_keys_by_name``, every pattern
        keyed by a trailing key name is applied.
        """
        value = unwrap(value)
        empty: Any = [] if classify(value) is ValueKind.ARRAY else {}
        self.compare(value, empty)
        self._validator.check_all_by_path(value)
        self._validator.check_all_by_key_name(value)
        self._result.update_summary()
        return self._result.snapshot()
