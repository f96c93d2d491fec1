"""
Pattern fragments - the building blocks of generated patterns.

Every fragment here is non-capturing, so fragments can be embedded
anywhere in a generated pattern without shifting capture indices.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# A single argument: bare run, "double quoted" or 'single quoted'
ARGUMENT = r"""(?:(?:\\.|[^\\"'\s])+|"(?:\\.|[^\\"])*"|'(?:\\.|[^\\'])*')"""

# One element of an argument list: a bare run also stops at commas
LIST_ARGUMENT = r"""(?:(?:\\.|[^\\"'\s,])+|"(?:\\.|[^\\"])*"|'(?:\\.|[^\\'])*')"""

# An arbitrary string, as short as possible
FREE_TEXT = r"(?:.*?)"

# Separator between elements of a list
LIST_SEPARATOR = r"(?:,\s*|\s+)"

# Whitespace required before every word and capture
SEPARATOR = r"\s+"

# A variable definition inside a literal segment of an expression
VARIABLE = re.compile(r"([+:*])?(\w+)(?:<([^>]+)>)?(?:@([\w+-]+))?(?:\{([\w,]+)\})?|(\S+)")


def one_or_more_of(single: str) -> str:
    """Multiple items of a fragment, comma and/or whitespace separated."""
    return f"(?:{single}(?:{LIST_SEPARATOR}{single})*?)"


def list_element(single: str) -> str:
    """One list item, only where it ends at a separator or the end of the list."""
    return f"(?:{single})(?={LIST_SEPARATOR}|\\Z)"


def one_of(items: Iterable[str]) -> str:
    """Any of the given literal words, case-insensitive."""
    return "(?i:" + "|".join(re.escape(item) for item in items) + ")"


def quoted_variants(fragment: str) -> str:
    """A fragment bare, double-quoted or single-quoted."""
    return f"(?:{fragment}|\"{fragment}\"|'{fragment}')"


_ESCAPE = re.compile(r"\\([\"' ,])")
_QUOTES = ('"', "'")


def unwrap(value: str) -> str:
    """
    Remove surrounding quotes and unescape.

    Outer quotes are stripped only when the value starts and ends with
    the same quote character. Afterwards the sequences \\", \\', \\,
    and backslash-space become the plain character; any other backslash
    sequence is left untouched.
    """
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return _ESCAPE.sub(r"\1", value)


# Flags a compiled pattern keeps when embedded as a scoped (?flags:...) group
_SCOPED_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def as_fragment(pattern: str | re.Pattern[str]) -> str:
    """Source of a pattern; a compiled pattern's flags become a scoped group."""
    if not isinstance(pattern, re.Pattern):
        return pattern
    letters = "".join(letter for flag, letter in _SCOPED_FLAGS if pattern.flags & flag)
    return f"(?{letters}:{pattern.pattern})" if letters else pattern.pattern


def embedded_groups(fragment: str) -> int:
    """
    Number of capturing groups a fragment adds when embedded mid-pattern.

    Raises:
        re.error: The fragment is invalid or cannot be embedded, e.g. it
            starts with a global flag such as (?i)
    """
    return re.compile(f"x(?:{fragment})").groups
