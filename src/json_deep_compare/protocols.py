"""PatternMatcher Protocol for the pattern-check extension point.

The engine never implements pattern matching itself.  It calls ``search``
on whatever matcher the options hold.  ``re.Pattern`` objects conform, and
so does any other object with a ``pattern`` attribute and a ``search``
method (for example patterns from the third-party ``regex`` module).

Example::

    from json_deep_compare.protocols import PatternMatcher

    class Prefix:
        def __init__(self, prefix: str) -> None:
            self.pattern = f"{prefix}*"
            self._prefix = prefix

        def search(self, string: str) -> bool:
            return string.startswith(self._prefix)

    assert isinstance(Prefix("USER-"), PatternMatcher)  # True
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["PatternMatcher"]


@runtime_checkable
class PatternMatcher(Protocol):
    """Structural protocol for compiled string patterns.

    - ``pattern`` is the source text, reported in pattern-check records.
    - ``search(string)`` returns a truthy value when the string matches
      anywhere, and ``None`` or another falsy value otherwise.
    """

    pattern: Any

    def search(self, string: str) -> Any: ...
