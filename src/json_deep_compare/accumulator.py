"""ResultAccumulator: append-only sink for the findings of one run.

The engine and the pattern validator share one accumulator per comparator.
Findings are appended in traversal order with no deduplication;
``update_summary`` recomputes the derived counts from whatever has been
appended so far and ``snapshot`` freezes the current state into a
``ComparisonResult``.
"""

from __future__ import annotations

from json_deep_compare.result import (
    ComparisonResult,
    MatchedValue,
    PatternCheck,
    Summary,
    UnmatchedKey,
    UnmatchedType,
    UnmatchedValue,
)

__all__ = ["ResultAccumulator"]


class ResultAccumulator:
    """Mutable collector behind a ``ComparisonResult``.

    Args:
        strict_types: Whether unmatched types count towards
            ``Summary.total_unmatched``.  Mirrors ``CompareOptions.strict_types``.
    """

    def __init__(self, strict_types: bool = True) -> None:
        self._strict_types = strict_types
        self.reset()

    def reset(self) -> None:
        """Empty every category and restore the default summary."""
        self._matched_keys: list[str] = []
        self._matched_values: list[MatchedValue] = []
        self._unmatched_keys: list[UnmatchedKey] = []
        self._unmatched_values: list[UnmatchedValue] = []
        self._unmatched_types: list[UnmatchedType] = []
        self._passed_checks: list[PatternCheck] = []
        self._failed_checks: list[PatternCheck] = []
        self._checked_paths: set[str] = set()
        self._summary = Summary()

    # ------------------------------------------------------------------
    # Appenders
    # ------------------------------------------------------------------

    def add_matched_key(self, path: str) -> None:
        self._matched_keys.append(path)

    def add_matched_value(self, record: MatchedValue) -> None:
        self._matched_values.append(record)

    def add_unmatched_key(self, record: UnmatchedKey) -> None:
        self._unmatched_keys.append(record)

    def add_unmatched_value(self, record: UnmatchedValue) -> None:
        self._unmatched_values.append(record)

    def add_unmatched_type(self, record: UnmatchedType) -> None:
        self._unmatched_types.append(record)

    def add_passed_check(self, record: PatternCheck) -> None:
        self._passed_checks.append(record)
        self._checked_paths.add(record.path)

    def add_failed_check(self, record: PatternCheck) -> None:
        self._failed_checks.append(record)
        self._checked_paths.add(record.path)

    def has_pattern_check(self, path: str) -> bool:
        """True when any pattern check, passed or failed, was recorded at ``path``."""
        return path in self._checked_paths

    # ------------------------------------------------------------------
    # Summary and snapshot
    # ------------------------------------------------------------------

    def update_summary(self) -> Summary:
        """Recompute the summary from the current findings and return it."""
        total_matched = len(self._matched_keys)
        unmatched_types = len(self._unmatched_types) if self._strict_types else 0
        total_unmatched = (
            len(self._unmatched_keys) + len(self._unmatched_values) + unmatched_types
        )
        total_compared = total_matched + total_unmatched
        self._summary = Summary(
            match_percentage=(
                total_matched / total_compared * 100 if total_compared > 0 else 100.0
            ),
            total_keys_compared=total_compared,
            total_matched=total_matched,
            total_unmatched=total_unmatched,
            total_regex_checks=len(self._passed_checks) + len(self._failed_checks),
        )
        return self._summary

    def snapshot(self) -> ComparisonResult:
        """Freeze the current state.

        The summary is whatever ``update_summary`` last computed.
        """
        return ComparisonResult(
            matched_keys=tuple(self._matched_keys),
            matched_values=tuple(self._matched_values),
            unmatched_keys=tuple(self._unmatched_keys),
            unmatched_values=tuple(self._unmatched_values),
            unmatched_types=tuple(self._unmatched_types),
            passed_checks=tuple(self._passed_checks),
            failed_checks=tuple(self._failed_checks),
            summary=self._summary,
        )
