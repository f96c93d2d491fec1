"""
Type maps - named value types for :name@Type and *name@Type captures.

A type map pairs a pattern fragment with a validate-and-convert callable.
The registry holds all type maps known to a compiler; a shared instance
seeded with the numeric built-ins is available via default_registry().
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chuk_mcp_grammar.constants import ErrorMessages
from chuk_mcp_grammar.core.fragments import as_fragment, embedded_groups, quoted_variants

if TYPE_CHECKING:
    from chuk_mcp_grammar.core.compiler import CompiledPattern

logger = logging.getLogger(__name__)

# validate(compiled_pattern, raw_value) -> converted value
# May raise ValidationFailure to reject the value.
Validator = Callable[["CompiledPattern", str], Any]


@dataclass(frozen=True)
class TypeMap:
    """
    A named value type.

    The pattern MUST NOT contain capturing groups, it is embedded inside
    the generated pattern. For grouping use (?:...).

    Example:
        def ip(pattern, value):
            parts = [int(p) for p in value.split(".")]
            if not all(0 <= p <= 255 for p in parts):
                raise ValidationFailure(value)
            return parts

        TypeMap("IP", r"\\d{1,3}(?:\\.\\d{1,3}){3}", ip)
    """

    name: str
    pattern: str
    validate: Validator | None = None

    def convert(self, compiled: CompiledPattern | None, value: str) -> Any:
        """Validate and convert a matched value; may raise ValidationFailure."""
        if self.validate is None:
            return value
        return self.validate(compiled, value)


def _to_int(compiled: CompiledPattern | None, value: str) -> int:
    return int(value)


def _to_float(compiled: CompiledPattern | None, value: str) -> float:
    return float(value)


# name, numeric fragment, conversion
BUILTIN_TYPES: list[tuple[str, str, Validator]] = [
    ("Integer", r"[+-]?\d+", _to_int),
    ("+Integer", r"\+?\d+", _to_int),
    ("-Integer", r"-\d+", _to_int),
    ("Float", r"[+-]?\d+(?:\.\d+)?", _to_float),
    ("+Float", r"\+?\d+(?:\.\d+)?", _to_float),
    ("-Float", r"-\d+(?:\.\d+)?", _to_float),
]


class TypeMapRegistry:
    """
    Table of named type maps.

    Register type maps during startup, before matching begins. Lookups
    are read-only and safe to share; concurrent registration must be
    synchronized by the caller.
    """

    def __init__(self, builtins: bool = True):
        """
        Initialize the registry.

        Args:
            builtins: Seed with Integer, +Integer, -Integer, Float, +Float, -Float
        """
        self._types: dict[str, TypeMap] = {}
        self._version = 0
        if builtins:
            self._seed()

    @property
    def version(self) -> int:
        """Counter bumped on every mutation (used to invalidate compile caches)."""
        return self._version

    def register(
        self,
        name: str,
        pattern: str | re.Pattern[str],
        validate: Validator | None = None,
    ) -> TypeMap:
        """
        Add or replace a type map.

        Args:
            name: Type name, referenced as @name in expressions
            pattern: Non-capturing pattern fragment (str or compiled)
            validate: Optional validate-and-convert callable

        Returns:
            The registered TypeMap

        Raises:
            ValueError: If the pattern is invalid, carries global inline flags
                or contains capturing groups
        """
        fragment = as_fragment(pattern)
        try:
            groups = embedded_groups(fragment)
        except re.error as e:
            raise ValueError(ErrorMessages.INVALID_FRAGMENT.format(name=name, error=e)) from e
        if groups:
            raise ValueError(ErrorMessages.CAPTURING_FRAGMENT.format(name=name))

        if name in self._types:
            logger.warning(f"Redefining type map '{name}'")

        typemap = TypeMap(name=name, pattern=fragment, validate=validate)
        self._types[name] = typemap
        self._version += 1
        return typemap

    def type_map(self, name: str, pattern: str | re.Pattern[str]) -> Callable[[Validator], Validator]:
        """
        Decorator form of register().

        Example:
            @registry.type_map("Percent", r"\\d{1,3}%")
            def percent(pattern, value):
                return int(value[:-1]) / 100
        """

        def decorator(func: Validator) -> Validator:
            self.register(name, pattern, func)
            return func

        return decorator

    def lookup(self, name: str) -> TypeMap | None:
        """Get a type map by name, or None if not registered."""
        return self._types.get(name)

    def unregister(self, name: str) -> bool:
        """Remove a type map. Returns True if it existed."""
        if self._types.pop(name, None) is None:
            return False
        self._version += 1
        return True

    def names(self) -> list[str]:
        """Registered type names, sorted."""
        return sorted(self._types)

    def reset(self) -> None:
        """Drop all registrations and re-seed the built-ins."""
        self._types.clear()
        self._seed()
        self._version += 1

    def copy(self) -> TypeMapRegistry:
        """Independent registry with the same type maps."""
        clone = TypeMapRegistry(builtins=False)
        clone._types = dict(self._types)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeMap]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def _seed(self) -> None:
        for name, fragment, validate in BUILTIN_TYPES:
            self._types[name] = TypeMap(name, quoted_variants(fragment), validate)


_default_registry: TypeMapRegistry | None = None


def default_registry() -> TypeMapRegistry:
    """The process-wide shared registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = TypeMapRegistry()
    return _default_registry
