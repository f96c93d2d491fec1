"""
Constants and enums for the grammar system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Sigil(str, Enum):
    """Leading character selecting the capture kind of a variable token."""

    FREE_TEXT = "+"  # +name
    ARGUMENT = ":"  # :name
    ARGUMENT_LIST = "*"  # *name


class TokenKind(str, Enum):
    """Kinds of tokens found in a literal segment of an expression."""

    WORD = "word"  # Keyword, matched verbatim
    SYMBOL = "symbol"  # Non-word literal, e.g. punctuation
    FREE_TEXT = "free_text"
    ARGUMENT = "argument"
    ARGUMENT_LIST = "argument_list"


SIGIL_KINDS: dict[str, TokenKind] = {
    Sigil.FREE_TEXT.value: TokenKind.FREE_TEXT,
    Sigil.ARGUMENT.value: TokenKind.ARGUMENT,
    Sigil.ARGUMENT_LIST.value: TokenKind.ARGUMENT_LIST,
}

# Schema versions - frozen for v1
SchemaVersion = Literal[
    "commands/v1",
    "typemaps/v1",
]

# Conversions available to YAML-declared type maps
ConvertKind = Literal["str", "int", "float"]


class ErrorMessages:
    """Standardized error messages."""

    ORPHAN_CLOSE = "Unmatched ']' with no open optional group"
    ORPHAN_OPEN = "Unclosed '[' at end of expression"
    MISSING_SIGIL = "Constraint on '{name}' without a capture sigil (forgot :, * or +?)"
    UNKNOWN_TYPE = "Unknown type '{name}'"
    CAPTURING_FRAGMENT = (
        "Pattern for type map '{name}' must not contain capturing groups; use (?:...)"
    )
    INVALID_FRAGMENT = "Pattern for type map '{name}' cannot be embedded: {error}"
    RANGE_NEEDS_NUMBER = "Type map '{name}' has minimum/maximum but converts to str; use int or float"
    COMMAND_NOT_FOUND = "Command '{name}' not found."
    NO_PROJECT_PATH = "No project path configured"


class SuccessMessages:
    """Standardized success messages."""

    TYPE_REGISTERED = "Registered type map '{name}'."
    COMMAND_ADDED = "Added command '{name}'."
