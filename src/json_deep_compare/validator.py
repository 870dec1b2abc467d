"""PatternValidator: applies configured pattern checks to string values.

A pattern key applies to a path when it equals the path exactly, or, with
``match_keys_by_name``, when it equals the path's trailing key name.  Only
``str`` values are ever tested.  Outcomes go to the shared
``ResultAccumulator``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_deep_compare.accumulator import ResultAccumulator
from json_deep_compare.patterns import pattern_matches, pattern_source
from json_deep_compare.protocols import PatternMatcher
from json_deep_compare.result import PatternCheck
from json_deep_compare.tree.paths import MISSING, all_paths, key_name_of, value_at

if TYPE_CHECKING:
    from json_deep_compare.algorithm.config import CompareOptions

__all__ = ["PatternValidator"]

_FAILURE_MESSAGE = "Value does not match regex pattern"


class PatternValidator:
    """Runs pattern checks for one comparator.

    Args:
        options: The frozen options whose ``pattern_checks`` are applied.
        result:  Accumulator receiving passed / failed checks.
    """

    def __init__(self, options: CompareOptions, result: ResultAccumulator) -> None:
        self._options = options
        self._result = result

    def check_value(self, value: Any, path: str) -> None:
        """Test ``value`` against every pattern that applies to ``path``.

        Non-string values are ignored.  Several patterns may apply to the
        same path; each produces its own record.
        """
        if not isinstance(value, str):
            return
        key_name = key_name_of(path)
        for key, matcher in self._options.pattern_checks.items():
            if key == path or (self._options.match_keys_by_name and key == key_name):
                self._record(value, path, matcher, matched_by_name=False)

    def check_all_by_key_name(self, root: Any) -> None:
        """Scan ``root`` for every path whose trailing key names a pattern.

        Runs only with ``match_keys_by_name``.  Elements of key-strategy
        arrays are visited at their ``array[keyName=value]`` paths, the same
        paths the comparison used, and paths that already carry a
        pattern-check record are skipped so that nothing is reported twice.
        """
        if not self._options.match_keys_by_name:
            return
        paths = all_paths(root, key_fields=self._options.key_fields())
        for key, matcher in self._options.pattern_checks.items():
            for path in paths:
                if key_name_of(path) != key:
                    continue
                self._check_unrecorded(root, path, matcher, matched_by_name=True)

    def check_all_by_path(self, root: Any) -> None:
        """Test every pattern whose key is an exact path present in ``root``.

        Used when there is no second value to drive ``check_value``.  Paths
        that already carry a pattern-check record are skipped.
        """
        for key, matcher in self._options.pattern_checks.items():
            self._check_unrecorded(root, key, matcher, matched_by_name=False)

    def _check_unrecorded(
        self,
        root: Any,
        path: str,
        matcher: PatternMatcher,
        matched_by_name: bool,
    ) -> None:
        if self._result.has_pattern_check(path):
            return
        value = value_at(root, path)
        if value is MISSING or not isinstance(value, str):
            return
        self._record(value, path, matcher, matched_by_name=matched_by_name)

    def _record(
        self,
        value: str,
        path: str,
        matcher: PatternMatcher,
        matched_by_name: bool,
    ) -> None:
        source = pattern_source(matcher)
        if pattern_matches(matcher, value):
            self._result.add_passed_check(
                PatternCheck(
                    path=path,
                    value=value,
                    pattern=source,
                    matched_by_name=matched_by_name,
                )
            )
        else:
            self._result.add_failed_check(
                PatternCheck(
                    path=path,
                    value=value,
                    pattern=source,
                    message=_FAILURE_MESSAGE,
                    matched_by_name=matched_by_name,
                )
            )
