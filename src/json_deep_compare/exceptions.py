"""Exception hierarchy for json-deep-compare.

Only configuration problems and runaway nesting are exceptions.  Everything
the engine finds while walking two values is recorded as data in the
``ComparisonResult``.
"""

from __future__ import annotations

__all__ = ["ConfigurationError", "JSONCompareError", "MaxDepthExceededError"]


class JSONCompareError(Exception):
    """Base class for all errors raised by json-deep-compare."""


class ConfigurationError(JSONCompareError, ValueError):
    """Raised when ``CompareOptions`` cannot be built from the given settings.

    Covers malformed pattern strings, unknown option names, unknown array
    strategy types and option values of the wrong type.
    """


class MaxDepthExceededError(JSONCompareError, RecursionError):
    """Raised when an input nests deeper than ``CompareOptions.max_depth``."""

    def __init__(self, path: str, max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"Nesting depth exceeds max_depth={max_depth} at path {path!r}"
        )
