"""Finding records, Summary and the ComparisonResult snapshot.

Every finding the engine produces is a small frozen record tagged with the
path it concerns.  ``ComparisonResult`` bundles the seven finding lists and
the summary; ``ComparisonResult.to_dict()`` renders the stable camelCase
shape consumed by test frameworks::

    {
      "matched":     {"keys": [...], "values": [...]},
      "unmatched":   {"keys": [...], "values": [...], "types": [...]},
      "regexChecks": {"passed": [...], "failed": [...]},
      "summary":     {"matchPercentage": ..., "totalKeysCompared": ..., ...},
    }
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

__all__ = [
    "ComparisonResult",
    "MatchedValue",
    "PatternCheck",
    "Summary",
    "UnmatchedKey",
    "UnmatchedType",
    "UnmatchedValue",
]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _as_dict(record: Any, optional: tuple[str, ...] = ()) -> dict[str, Any]:
    """Render a record with camelCase keys, dropping unset optional fields."""
    out: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if f.name in optional and (value is None or value is False):
            continue
        out[_camel(f.name)] = value
    return out


@dataclass(frozen=True, slots=True)
class MatchedValue:
    """A value (or whole array) judged equal on both sides.

    ``type`` is set for plain equal leaves; ``type1``/``type2`` for matches
    justified by an equivalence rule or an array strategy.
    """

    path: str
    value: Any
    type: str | None = None
    type1: str | None = None
    type2: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self, optional=("type", "type1", "type2", "message"))


@dataclass(frozen=True, slots=True)
class UnmatchedKey:
    """An object key present on one side only."""

    path: str
    value: Any
    message: str

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True, slots=True)
class UnmatchedValue:
    """A value-level or array-structure mismatch.

    ``expected`` comes from the first value and ``actual`` from the second.
    For structural findings both hold short descriptions instead of values.
    """

    path: str
    expected: Any
    actual: Any
    message: str
    expected_type: str | None = None
    actual_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self, optional=("expected_type", "actual_type"))


@dataclass(frozen=True, slots=True)
class UnmatchedType:
    """Differing type tags at one path."""

    path: str
    expected: str
    actual: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True, slots=True)
class PatternCheck:
    """Outcome of testing one string value against one pattern.

    ``message`` is only set on failures.  ``matched_by_name`` marks checks
    found by the key-name scan rather than during comparison.
    """

    path: str
    value: str
    pattern: str
    message: str | None = None
    matched_by_name: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self, optional=("message", "matched_by_name"))


@dataclass(frozen=True, slots=True)
class Summary:
    """Aggregate counts derived from the finding lists.

    Attributes:
        match_percentage: ``total_matched / total_keys_compared * 100``, or
            100.0 when nothing was compared.
        total_keys_compared: ``total_matched + total_unmatched``.
        total_matched: Number of matched keys.
        total_unmatched: Unmatched keys + unmatched values, plus unmatched
            types when strict typing is on.
        total_regex_checks: Passed + failed pattern checks.
    """

    match_percentage: float = 100.0
    total_keys_compared: int = 0
    total_matched: int = 0
    total_unmatched: int = 0
    total_regex_checks: int = 0

    def to_dict(self) -> dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Immutable snapshot of one comparison run.

    Attributes:
        matched_keys: Paths of object keys present on both sides.
        matched_values: Values, equivalences and arrays judged equal.
        unmatched_keys: Keys present on one side only.
        unmatched_values: Value and array-structure mismatches.
        unmatched_types: Type-tag mismatches.
        passed_checks: Pattern checks that matched.
        failed_checks: Pattern checks that did not match.
        summary: Counts derived from the lists above.
    """

    matched_keys: tuple[str, ...] = ()
    matched_values: tuple[MatchedValue, ...] = ()
    unmatched_keys: tuple[UnmatchedKey, ...] = ()
    unmatched_values: tuple[UnmatchedValue, ...] = ()
    unmatched_types: tuple[UnmatchedType, ...] = ()
    passed_checks: tuple[PatternCheck, ...] = ()
    failed_checks: tuple[PatternCheck, ...] = ()
    summary: Summary = Summary()

    @property
    def match_percentage(self) -> float:
        """Shortcut for ``summary.match_percentage``."""
        return self.summary.match_percentage

    @property
    def is_match(self) -> bool:
        """True when the summary counts nothing unmatched and no pattern check failed.

        Type mismatches only count under strict typing, as in the summary.
        """
        return self.summary.total_unmatched == 0 and not self.failed_checks

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase result shape as plain dicts and lists."""
        return {
            "matched": {
                "keys": list(self.matched_keys),
                "values": [r.to_dict() for r in self.matched_values],
            },
            "unmatched": {
                "keys": [r.to_dict() for r in self.unmatched_keys],
                "values": [r.to_dict() for r in self.unmatched_values],
                "types": [r.to_dict() for r in self.unmatched_types],
            },
            "regexChecks": {
                "passed": [r.to_dict() for r in self.passed_checks],
                "failed": [r.to_dict() for r in self.failed_checks],
            },
            "summary": self.summary.to_dict(),
        }
