"""
Pattern Compiler - compiles grammar expressions to anchored patterns.

The compiler structures the expression into segments and optional
groups, compiles every segment with the variable compiler, and records
one capture spec per capturing group.

    "go [to :place]"  ->  ^go(?:\\s+to\\s+(<argument>))??\\s*$
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any

from chuk_mcp_grammar.core.match import MatchResult
from chuk_mcp_grammar.core.structure import Group, Node, structure
from chuk_mcp_grammar.core.typemap import TypeMapRegistry, default_registry
from chuk_mcp_grammar.core.variables import CaptureSpec, VariableCompiler, tokenize
from chuk_mcp_grammar.errors import ValidationFailure

logger = logging.getLogger(__name__)

_LEADING_SEPARATOR = re.compile(r"^\^\\s\+")


class CompiledPattern:
    """
    A compiled grammar expression.

    Immutable and safe to share; two compiled patterns are equal iff
    their source expressions are equal.
    """

    __slots__ = ("_expression", "_pattern", "_regex", "_captures")

    def __init__(self, expression: str, pattern: str, captures: list[CaptureSpec]):
        self._expression = expression
        self._pattern = pattern
        self._regex = re.compile(pattern)
        self._captures = tuple(captures)

    @property
    def expression(self) -> str:
        """Source expression."""
        return self._expression

    @property
    def pattern(self) -> str:
        """Generated pattern source."""
        return self._pattern

    @property
    def regex(self) -> re.Pattern[str]:
        return self._regex

    @property
    def captures(self) -> tuple[CaptureSpec, ...]:
        return self._captures

    @property
    def names(self) -> list[str]:
        """Capture names in order (may repeat)."""
        return [c.name for c in self._captures]

    def match(self, string: str) -> MatchResult | None:
        """
        Match a line of input.

        Args:
            string: Input line

        Returns:
            MatchResult, or None when the input does not match or a type
            map rejects one of the values
        """
        m = self._regex.match(string)
        if m is None:
            return None
        try:
            return MatchResult(self, m, self._captures)
        except ValidationFailure as e:
            logger.debug(f"Validation rejected {string!r} for {self._expression!r}: {e}")
            return None

    def matches(self, string: str) -> bool:
        """Return True if the input matches."""
        return self.match(string) is not None

    def describe(self) -> dict[str, Any]:
        """JSON-ready description."""
        return {
            "expression": self._expression,
            "pattern": self._pattern,
            "captures": [c.to_dict() for c in self._captures],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return self._expression == other._expression

    def __hash__(self) -> int:
        return hash(self._expression)

    def __repr__(self) -> str:
        return f"CompiledPattern({self._expression!r}, /{self._pattern}/)"

    def __str__(self) -> str:
        return self._expression


class PatternCompiler:
    """
    Compiles expressions to CompiledPatterns.

    Results are cached by expression text; the cache is dropped whenever
    the registry changes.
    """

    def __init__(self, registry: TypeMapRegistry | None = None):
        """
        Initialize the compiler.

        Args:
            registry: Type maps for @Type references (defaults to the shared registry)
        """
        self.registry = registry if registry is not None else default_registry()
        self._variables = VariableCompiler(self.registry)
        self._cache: dict[str, CompiledPattern] = {}
        self._cache_version = self.registry.version

    def compile(self, expression: str) -> CompiledPattern:
        """
        Compile an expression.

        Args:
            expression: Grammar expression

        Returns:
            The compiled pattern

        Raises:
            StructureError: Malformed brackets
            UnknownTypeReference: @Type is not registered
        """
        if self._cache_version != self.registry.version:
            self._cache.clear()
            self._cache_version = self.registry.version

        if expression in self._cache:
            return self._cache[expression]

        captures: list[CaptureSpec] = []
        body = self._compile_tree(structure(expression), captures)

        pattern = _LEADING_SEPARATOR.sub("^", "^" + body + r"\s*$")
        compiled = CompiledPattern(expression, pattern, captures)
        logger.debug(f"Compiled {expression!r} -> {pattern}")

        self._cache[expression] = compiled
        return compiled

    def _compile_tree(self, root: Group, captures: list[CaptureSpec]) -> str:
        """Depth-first walk with an explicit stack."""
        parts: list[str] = []
        stack: list[Iterator[Node]] = [iter(root.children)]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                if stack:
                    parts.append(")??")
            elif isinstance(node, Group):
                parts.append("(?:")
                stack.append(iter(node.children))
            else:
                parts.append(self._variables.compile(node.text, captures))

        return "".join(parts)


_default_compiler: PatternCompiler | None = None


def compile_expression(expression: str, registry: TypeMapRegistry | None = None) -> CompiledPattern:
    """
    Convenience function to compile an expression.

    Args:
        expression: Grammar expression
        registry: Optional registry (defaults to the shared registry)

    Returns:
        The compiled pattern
    """
    global _default_compiler
    if registry is not None:
        return PatternCompiler(registry).compile(expression)
    if _default_compiler is None:
        _default_compiler = PatternCompiler()
    return _default_compiler.compile(expression)


def explain(expression: str) -> dict[str, Any]:
    """
    Break an expression down into its structure and tokens.

    Does not resolve type references, so it works for expressions whose
    types are not registered yet.
    """
    root = structure(expression)

    def describe(group: Group) -> list[dict[str, Any]]:
        nodes: list[dict[str, Any]] = []
        for child in group.children:
            if isinstance(child, Group):
                nodes.append({"optional": describe(child)})
            else:
                nodes.append(
                    {"segment": child.text, "tokens": [t.to_dict() for t in tokenize(child.text)]}
                )
        return nodes

    return {"expression": expression, "nodes": describe(root)}
