"""Compilation and evaluation of pattern checks.

String patterns are compiled with ``re`` and memoised in a process-wide,
lock-protected ``cachetools.LRUCache`` so that many short-lived
``CompareOptions`` built from the same configuration compile each distinct
source only once.  Compilation failures are never cached.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any

from cachetools import LRUCache, cached

from json_deep_compare.exceptions import ConfigurationError
from json_deep_compare.protocols import PatternMatcher

__all__ = ["compile_pattern", "pattern_matches", "pattern_source"]

logger = logging.getLogger(__name__)

MAX_CACHED_PATTERNS = 256


@cached(cache=LRUCache(maxsize=MAX_CACHED_PATTERNS), lock=threading.Lock())
def _compile(source: str) -> re.Pattern[str]:
    logger.debug("Compiling pattern %r", source)
    return re.compile(source)


def compile_pattern(source: Any, name: str = "") -> PatternMatcher:
    """Return a matcher for ``source``.

    Args:
        source: A pattern string, a compiled ``re.Pattern``, or any object
            satisfying ``PatternMatcher``.
        name:   The pattern-check key, used in error messages only.

    Raises:
        ConfigurationError: If ``source`` is not valid regular-expression
            syntax, or is neither a string nor a matcher.
    """
    if isinstance(source, str):
        try:
            return _compile(source)
        except re.error as exc:
            msg = f"Invalid pattern for {name!r}: {source!r} ({exc})"
            raise ConfigurationError(msg) from exc
    if isinstance(source, PatternMatcher):
        return source
    msg = (
        f"Pattern for {name!r} must be a string or a compiled pattern, "
        f"got {type(source).__name__}"
    )
    raise ConfigurationError(msg)


# Inline letters for the flags a compiled pattern can carry.
_FLAG_LETTERS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)
_LEADING_FLAGS = re.compile(r"\(\?([aiLmsux]+)\)")


def _inline_flags(source: str) -> set[str]:
    letters: set[str] = set()
    pos = 0
    while match := _LEADING_FLAGS.match(source, pos):
        letters.update(match.group(1))
        pos = match.end()
    return letters


def pattern_source(matcher: PatternMatcher) -> str:
    """Return the source text of ``matcher`` as reported in results.

    Flags a compiled ``re.Pattern`` carries beyond its source text are
    prefixed inline, e.g. ``re.compile("abc", re.I)`` -> ``"(?i)abc"``.
    """
    source = matcher.pattern
    if isinstance(source, bytes):
        source = source.decode("utf-8", errors="replace")
    source = str(source)
    if not isinstance(matcher, re.Pattern):
        return source
    present = _inline_flags(source)
    missing = "".join(
        letter
        for flag, letter in _FLAG_LETTERS
        if matcher.flags & flag and letter not in present
    )
    return f"(?{missing}){source}" if missing else source


def pattern_matches(matcher: PatternMatcher, value: str) -> bool:
    """True when ``matcher`` finds a match anywhere in ``value``."""
    return bool(matcher.search(value))
