"""
Variable compiler - turns one literal segment into pattern text and
capture specs.

Token grammar inside a segment:
- word           keyword, matched verbatim (case-sensitive)
- +name          free text, as short as possible
- :name          one argument
- *name          one or more arguments, comma and/or whitespace separated
- @Type          constrain :name / *name to a registered type map
- {a,b,c}        constrain :name / *name to literal alternatives (case-insensitive)
- <...>          annotation after a name, reserved (stored, no effect)
- anything else  non-whitespace literal, e.g. punctuation
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from chuk_mcp_grammar.constants import SIGIL_KINDS, TokenKind
from chuk_mcp_grammar.core.fragments import (
    ARGUMENT,
    FREE_TEXT,
    LIST_ARGUMENT,
    SEPARATOR,
    VARIABLE,
    list_element,
    one_of,
    one_or_more_of,
)
from chuk_mcp_grammar.core.typemap import TypeMap, TypeMapRegistry
from chuk_mcp_grammar.errors import MissingSigilError, UnknownTypeReference


@dataclass(frozen=True)
class VariableToken:
    """One unit scanned from a literal segment."""

    kind: TokenKind
    name: str
    annotation: str | None = None
    type_ref: str | None = None
    choices: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Dict representation (for introspection)."""
        result: dict[str, Any] = {"kind": self.kind.value, "name": self.name}
        if self.annotation is not None:
            result["annotation"] = self.annotation
        if self.type_ref is not None:
            result["type"] = self.type_ref
        if self.choices is not None:
            result["choices"] = list(self.choices)
        return result


@dataclass(frozen=True)
class CaptureSpec:
    """
    A named value slot populated by a successful match.

    element_pattern is set for list captures only and splits the list
    back into its elements.
    """

    name: str
    kind: TokenKind
    element_pattern: re.Pattern[str] | None = None
    typemap: TypeMap | None = None

    @property
    def is_list(self) -> bool:
        return self.element_pattern is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "type": self.typemap.name if self.typemap else None,
            "list": self.is_list,
        }


def tokenize(segment: str) -> list[VariableToken]:
    """
    Scan a literal segment into tokens.

    Raises:
        MissingSigilError: A bare word carries @Type or {choices}
    """
    tokens: list[VariableToken] = []

    for m in VARIABLE.finditer(segment):
        sigil, name, annotation, type_ref, choices, literal = m.groups()

        if literal is not None:
            tokens.append(VariableToken(TokenKind.SYMBOL, literal))
            continue

        if sigil is None:
            if type_ref is not None or choices is not None:
                raise MissingSigilError(name, segment)
            tokens.append(VariableToken(TokenKind.WORD, name, annotation))
            continue

        kind = SIGIL_KINDS[sigil]
        if kind == TokenKind.FREE_TEXT:
            # Free text takes no constraints
            type_ref = choices = None

        tokens.append(
            VariableToken(
                kind=kind,
                name=name,
                annotation=annotation,
                type_ref=type_ref,
                choices=tuple(c for c in re.split(r",\s*", choices) if c) if choices else None,
            )
        )

    return tokens


class VariableCompiler:
    """
    Compiles literal segments into pattern text.

    Capture specs are appended to a shared list in the order their
    capturing groups appear in the generated pattern.
    """

    def __init__(self, registry: TypeMapRegistry):
        """
        Initialize the compiler.

        Args:
            registry: Type maps available to @Type references
        """
        self.registry = registry

    def compile(self, segment: str, captures: list[CaptureSpec]) -> str:
        """
        Compile one segment.

        Args:
            segment: Literal segment text
            captures: Capture list to append to

        Returns:
            Pattern text for the segment

        Raises:
            UnknownTypeReference: @Type is not registered
            MissingSigilError: A bare word carries a constraint
        """
        parts: list[str] = []
        for token in tokenize(segment):
            parts.append(self.compile_token(token, captures))
        return "".join(parts)

    def compile_token(self, token: VariableToken, captures: list[CaptureSpec]) -> str:
        """Compile a single token."""
        if token.kind == TokenKind.SYMBOL:
            return re.escape(token.name)

        if token.kind == TokenKind.WORD:
            return SEPARATOR + re.escape(token.name)

        if token.kind == TokenKind.FREE_TEXT:
            captures.append(CaptureSpec(token.name, token.kind))
            return f"{SEPARATOR}({FREE_TEXT})"

        typemap = self._resolve(token.type_ref)
        element = self._element_fragment(token, typemap)

        if token.kind == TokenKind.ARGUMENT:
            captures.append(CaptureSpec(token.name, token.kind, typemap=typemap))
            return f"{SEPARATOR}({element})"

        # ARGUMENT_LIST
        splitter = re.compile(list_element(element))
        captures.append(CaptureSpec(token.name, token.kind, element_pattern=splitter, typemap=typemap))
        return f"{SEPARATOR}({one_or_more_of(element)})"

    def _resolve(self, type_ref: str | None) -> TypeMap | None:
        if type_ref is None:
            return None
        typemap = self.registry.lookup(type_ref)
        if typemap is None:
            raise UnknownTypeReference(type_ref)
        return typemap

    def _element_fragment(self, token: VariableToken, typemap: TypeMap | None) -> str:
        """Pattern for one element: choices win over the type map's pattern."""
        if token.choices:
            return one_of(token.choices)
        if typemap is not None:
            return typemap.pattern
        if token.kind == TokenKind.ARGUMENT_LIST:
            return LIST_ARGUMENT
        return ARGUMENT
