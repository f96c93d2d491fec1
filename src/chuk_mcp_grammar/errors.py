"""
Error taxonomy for the grammar system.

- StructureError: malformed brackets in an expression (compile time)
- UnknownTypeReference: @Type names an unregistered type map (compile time)
- ValidationFailure: a type map rejects a matched value (match time, recoverable)
"""

from __future__ import annotations

from chuk_mcp_grammar.constants import ErrorMessages


class GrammarError(Exception):
    """Base class for all grammar errors."""


class StructureError(GrammarError, ValueError):
    """An expression has malformed structure."""

    def __init__(self, message: str, expression: str | None = None, position: int | None = None):
        self.expression = expression
        self.position = position

        full_message = message
        if position is not None:
            full_message += f" (at position {position})"
        if expression is not None:
            full_message += f" in {expression!r}"

        super().__init__(full_message)


class MissingSigilError(StructureError):
    """A bare word carries a @Type or {choices} constraint."""

    def __init__(self, name: str, expression: str | None = None):
        self.name = name
        super().__init__(ErrorMessages.MISSING_SIGIL.format(name=name), expression)


class UnknownTypeReference(GrammarError, LookupError):
    """An expression references a type map that is not registered."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(ErrorMessages.UNKNOWN_TYPE.format(name=type_name))

    def __str__(self) -> str:
        return ErrorMessages.UNKNOWN_TYPE.format(name=self.type_name)


class ValidationFailure(GrammarError):
    """
    Raised by a type map validator to reject a value.

    The value matched the type map's pattern but is semantically invalid,
    e.g. an IP address component above 255. Not a ValueError, so that
    genuine bugs in validators are never folded into "no match".
    """


class CommandNotFoundError(GrammarError, LookupError):
    """A command name is not known to the command registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(ErrorMessages.COMMAND_NOT_FOUND.format(name=name))

    def __str__(self) -> str:
        return ErrorMessages.COMMAND_NOT_FOUND.format(name=self.name)
