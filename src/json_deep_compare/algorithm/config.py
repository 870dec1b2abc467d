"""CompareOptions, ArrayStrategy and ArrayStrategyType for comparison runs.

CompareOptions is a frozen (immutable) dataclass holding every setting the
engine consults.  Collections passed in are copied into read-only
containers (``frozenset``, ``tuple``, ``MappingProxyType``) so that later
mutation of the caller's objects cannot leak into a comparison.

ArrayStrategyType selects how the array at one specific path is compared:
exact (positional), set (order-insensitive multiset) or key (objects paired
by the value of a key field).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any, ClassVar

from json_deep_compare.exceptions import ConfigurationError
from json_deep_compare.patterns import compile_pattern, pattern_source
from json_deep_compare.protocols import PatternMatcher

__all__ = ["ArrayStrategy", "ArrayStrategyType", "CompareOptions"]


class ArrayStrategyType(StrEnum):
    """How to compare the two arrays found at one path.

    - EXACT: Same length, element i compared with element i.
    - SET:   Same elements with the same multiplicities, any order.
    - KEY:   Objects paired by the value of ``ArrayStrategy.key_name``.
    """

    EXACT = auto()
    SET = auto()
    KEY = auto()


@dataclass(frozen=True, slots=True)
class ArrayStrategy:
    """Strategy for one array path.

    Attributes:
        type:     The comparison algorithm.  Plain strings are accepted and
                  converted; unknown names raise ``ConfigurationError``.
        key_name: Field used to pair objects under the KEY strategy.  A KEY
                  strategy without a usable ``key_name`` is accepted here and
                  reported (with a fallback to EXACT) when the array is
                  compared.
    """

    type: ArrayStrategyType = ArrayStrategyType.EXACT
    key_name: Any = None

    def __post_init__(self) -> None:
        try:
            strategy_type = ArrayStrategyType(self.type)
        except ValueError as exc:
            allowed = ", ".join(member.value for member in ArrayStrategyType)
            msg = f"Unknown array strategy type {self.type!r} (expected one of: {allowed})"
            raise ConfigurationError(msg) from exc
        object.__setattr__(self, "type", strategy_type)

    @property
    def is_valid(self) -> bool:
        """False for a KEY strategy whose ``key_name`` is not a non-empty string."""
        if self.type is not ArrayStrategyType.KEY:
            return True
        return isinstance(self.key_name, str) and bool(self.key_name)

    @classmethod
    def parse(cls, raw: Any, path: str = "") -> ArrayStrategy:
        """Build a strategy from an instance, a type name or a mapping.

        Mappings use the record form ``{"type": "key", "keyName": "id"}``;
        ``key_name`` is accepted as well.
        """
        if isinstance(raw, ArrayStrategy):
            return raw
        if isinstance(raw, str):
            return cls(type=raw)  # type: ignore[arg-type]
        if isinstance(raw, Mapping):
            key_name = raw.get("keyName", raw.get("key_name"))
            return cls(type=raw.get("type", ArrayStrategyType.EXACT), key_name=key_name)
        msg = (
            f"Array strategy for {path!r} must be a strategy, a type name or a "
            f"mapping, got {type(raw).__name__}"
        )
        raise ConfigurationError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Return the record form of this strategy."""
        record: dict[str, Any] = {"type": self.type.value}
        if self.key_name is not None:
            record["keyName"] = self.key_name
        return record


EXACT_STRATEGY = ArrayStrategy()


@dataclass(frozen=True, slots=True)
class CompareOptions:
    """Immutable configuration for one comparison run.

    Attributes:
        ignored_keys: Object keys skipped in both directions, at any depth.
        equivalent_values: Named groups of values that compare equal to each
            other regardless of type, e.g. ``{"empty": [None, "", 0]}``.
        pattern_checks: Path or key name -> pattern.  Strings are compiled
            with ``re``; compiled patterns and other ``PatternMatcher``
            objects are used as given.
        strict_types: When True (default) a type mismatch is final for that
            node.  When False, values are compared with loose equality after
            the mismatch is recorded.
        ignore_extra_keys: When True, keys found only in the second value
            are not reported.
        match_keys_by_name: When True, a pattern check also applies to every
            path whose trailing key name equals the pattern key.
        array_strategies: Array path -> ``ArrayStrategy`` (or its record
            form).  Arrays without an entry use EXACT.
        canonical_set_keys: When True, the SET strategy serializes object
            elements with sorted keys so that key order does not matter.
            Default False.
        max_depth: Deepest nesting level the engine descends to before
            raising ``MaxDepthExceededError``.  None disables the guard.
    """

    ignored_keys: frozenset[str] = frozenset()
    equivalent_values: Mapping[str, tuple[Any, ...]] = field(default_factory=dict)
    pattern_checks: Mapping[str, PatternMatcher] = field(default_factory=dict)
    strict_types: bool = True
    ignore_extra_keys: bool = False
    match_keys_by_name: bool = False
    array_strategies: Mapping[str, ArrayStrategy] = field(default_factory=dict)
    canonical_set_keys: bool = False
    max_depth: int | None = 256

    # camelCase record names accepted by from_mapping().
    _ALIASES: ClassVar[dict[str, str]] = {
        "ignoredKeys": "ignored_keys",
        "equivalentValues": "equivalent_values",
        "regexChecks": "pattern_checks",
        "patternChecks": "pattern_checks",
        "strictTypes": "strict_types",
        "ignoreExtraKeys": "ignore_extra_keys",
        "matchKeysByName": "match_keys_by_name",
        "arrayComparisonStrategies": "array_strategies",
        "canonicalSetKeys": "canonical_set_keys",
        "maxDepth": "max_depth",
    }

    def __post_init__(self) -> None:
        for name in (
            "strict_types",
            "ignore_extra_keys",
            "match_keys_by_name",
            "canonical_set_keys",
        ):
            value = getattr(self, name)
            if not isinstance(value, bool):
                msg = f"{name} must be a bool, got {type(value).__name__}"
                raise ConfigurationError(msg)

        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            msg = f"max_depth must be a positive int or None, got {self.max_depth!r}"
            raise ConfigurationError(msg)

        if isinstance(self.ignored_keys, str) or not isinstance(
            self.ignored_keys, Iterable
        ):
            msg = f"ignored_keys must be a collection of key names, got {self.ignored_keys!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "ignored_keys", frozenset(self.ignored_keys))

        groups: dict[str, tuple[Any, ...]] = {}
        for rule, values in self._mapping("equivalent_values").items():
            if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
                msg = f"Equivalence group {rule!r} must be a list of values, got {values!r}"
                raise ConfigurationError(msg)
            groups[str(rule)] = tuple(values)
        object.__setattr__(self, "equivalent_values", MappingProxyType(groups))

        patterns = {
            str(key): compile_pattern(source, name=str(key))
            for key, source in self._mapping("pattern_checks").items()
        }
        object.__setattr__(self, "pattern_checks", MappingProxyType(patterns))

        strategies = {
            str(path): ArrayStrategy.parse(raw, path=str(path))
            for path, raw in self._mapping("array_strategies").items()
        }
        object.__setattr__(self, "array_strategies", MappingProxyType(strategies))

    def _mapping(self, name: str) -> Mapping[str, Any]:
        value = getattr(self, name)
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            msg = f"{name} must be a mapping, got {type(value).__name__}"
            raise ConfigurationError(msg)
        return value

    # ------------------------------------------------------------------
    # Construction from a configuration record
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any] | None = None) -> CompareOptions:
        """Build options from a configuration record.

        Both the camelCase record names (``ignoredKeys``, ``regexChecks``,
        ``arrayComparisonStrategies``, ...) and the attribute names are
        accepted.  Every field is optional.

        Raises:
            ConfigurationError: On unknown or repeated option names, or any
                invalid value.
        """
        field_names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (record or {}).items():
            name = cls._ALIASES.get(key, key)
            if name not in field_names:
                msg = f"Unknown option {key!r}"
                raise ConfigurationError(msg)
            if name in kwargs:
                msg = f"Option {name!r} given more than once"
                raise ConfigurationError(msg)
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return a detached camelCase record of these options."""
        return {
            "ignoredKeys": sorted(self.ignored_keys),
            "equivalentValues": {
                rule: list(values) for rule, values in self.equivalent_values.items()
            },
            "regexChecks": {
                key: pattern_source(matcher)
                for key, matcher in self.pattern_checks.items()
            },
            "strictTypes": self.strict_types,
            "ignoreExtraKeys": self.ignore_extra_keys,
            "matchKeysByName": self.match_keys_by_name,
            "arrayComparisonStrategies": {
                path: strategy.to_dict()
                for path, strategy in self.array_strategies.items()
            },
            "canonicalSetKeys": self.canonical_set_keys,
            "maxDepth": self.max_depth,
        }

    # ------------------------------------------------------------------
    # Lookups used by the engine
    # ------------------------------------------------------------------

    def is_ignored(self, key: Any) -> bool:
        """True when object key ``key`` is excluded from comparison."""
        return key in self.ignored_keys

    def strategy_for(self, path: str) -> ArrayStrategy:
        """Return the strategy configured for the array at ``path``."""
        return self.array_strategies.get(path, EXACT_STRATEGY)

    def key_fields(self) -> dict[str, str]:
        """Return array path -> key field for every usable KEY strategy."""
        return {
            path: strategy.key_name
            for path, strategy in self.array_strategies.items()
            if strategy.type is ArrayStrategyType.KEY and strategy.is_valid
        }
