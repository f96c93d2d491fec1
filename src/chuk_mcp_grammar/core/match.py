"""
Match results - typed, named values extracted from a successful match.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from chuk_mcp_grammar.core.fragments import unwrap
from chuk_mcp_grammar.core.variables import CaptureSpec

if TYPE_CHECKING:
    from chuk_mcp_grammar.core.compiler import CompiledPattern


class MatchResult:
    """
    Converted values of one successful match.

    Values are available by name (result["place"]), by position over the
    captures (result[0], result[1:]) and as the ordered captures list,
    which keeps None for optional captures that did not participate and
    keeps every entry when names repeat. When names repeat, the last
    capture wins for name lookup.

    Building a MatchResult runs the type map validators, so it may raise
    ValidationFailure; CompiledPattern.match() turns that into None.
    """

    def __init__(
        self,
        compiled: CompiledPattern | None,
        match: re.Match[str],
        captures: tuple[CaptureSpec, ...] | list[CaptureSpec],
    ):
        """
        Initialize from a raw match.

        Args:
            compiled: Owning compiled pattern, handed to validators
            match: The underlying regex match
            captures: Capture specs, index-aligned with the match's groups
        """
        self._compiled = compiled
        self._match = match
        self._params: dict[str, Any] = {}
        self._captures: list[Any] = []

        for capture, value in zip(captures, match.groups()):
            processed = None if value is None else self._process(capture, value)
            self._params[capture.name] = processed
            self._captures.append(processed)

    def _process(self, capture: CaptureSpec, value: str) -> Any:
        if capture.element_pattern is not None:
            return [self._convert(capture, element) for element in capture.element_pattern.findall(value)]
        return self._convert(capture, value)

    def _convert(self, capture: CaptureSpec, value: str) -> Any:
        value = unwrap(value)
        if capture.typemap is None:
            return value
        return capture.typemap.convert(self._compiled, value)

    # --- Converted values ---

    def __getitem__(self, key: str | int | slice) -> Any:
        """
        Look up a value.

        A name returns the converted capture with that name, falling back
        to the raw match's group lookup for names no capture carries. An
        int or slice indexes the ordered captures.
        """
        if isinstance(key, (int, slice)):
            return self._captures[key]
        if key in self._params:
            return self._params[key]
        return self._match[key]

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __iter__(self):
        return iter(self._captures)

    def __len__(self) -> int:
        return len(self._captures)

    def get(self, name: str, default: Any = None) -> Any:
        """Value of a named capture, or default when absent or unknown."""
        value = self._params.get(name)
        return default if value is None else value

    def values_at(self, *keys: str | int) -> list[Any]:
        """Values for several keys at once."""
        return [self[key] for key in keys]

    @property
    def captures(self) -> list[Any]:
        """Converted values in capture order, None for absent captures."""
        return list(self._captures)

    @property
    def named(self) -> dict[str, Any]:
        """Converted values by name (last capture wins on duplicates)."""
        return dict(self._params)

    @property
    def compiled(self) -> CompiledPattern | None:
        return self._compiled

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "match": self._match.group(0),
            "named": self.named,
            "captures": self.captures,
        }

    # --- Raw match passthrough ---

    @property
    def raw(self) -> re.Match[str]:
        """The underlying regex match."""
        return self._match

    @property
    def string(self) -> str:
        return self._match.string

    @property
    def pre_match(self) -> str:
        return self._match.string[: self._match.start()]

    @property
    def post_match(self) -> str:
        return self._match.string[self._match.end() :]

    def group(self, *args: int | str) -> Any:
        return self._match.group(*args)

    def start(self, group: int = 0) -> int:
        return self._match.start(group)

    def end(self, group: int = 0) -> int:
        return self._match.end(group)

    def span(self, group: int = 0) -> tuple[int, int]:
        return self._match.span(group)

    def __repr__(self) -> str:
        return f"MatchResult({self._params!r})"
