"""
Bracket structuring - splits an expression into literal segments and
optional groups.

    "go [to :place [now]]"  ->  Group[Segment("go"), Group[Segment("to :place"), Group[Segment("now")]]]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from chuk_mcp_grammar.constants import ErrorMessages
from chuk_mcp_grammar.errors import StructureError


@dataclass
class Segment:
    """A run of literal expression text between brackets."""

    text: str

    def __repr__(self) -> str:
        return f"Segment({self.text!r})"


@dataclass
class Group:
    """
    A sequence of nodes.

    The root of a structure tree is a non-optional group; every [...]
    span is an optional group.
    """

    children: list[Node] = field(default_factory=list)
    optional: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Nested dict representation (for introspection)."""
        return {
            "optional": self.optional,
            "children": [
                child.to_dict() if isinstance(child, Group) else {"segment": child.text}
                for child in self.children
            ],
        }


Node = Union[Segment, Group]


def structure(expression: str) -> Group:
    """
    Parse the optional parts of an expression into a tree.

    Args:
        expression: Grammar expression

    Returns:
        Root group (not optional)

    Raises:
        StructureError: On an unmatched ']' or an unclosed '['
    """
    root = Group(optional=False)
    stack: list[tuple[Group, int]] = [(root, -1)]
    offset = 0

    while True:
        opening = expression.find("[", offset)
        closing = expression.find("]", offset)
        if opening == -1 and closing == -1:
            break

        current = stack[-1][0]
        if opening != -1 and (closing == -1 or opening < closing):
            _append_segment(current, expression[offset:opening])
            group = Group()
            current.children.append(group)
            stack.append((group, opening))
            offset = opening + 1
        else:
            if len(stack) == 1:
                raise StructureError(ErrorMessages.ORPHAN_CLOSE, expression, closing)
            _append_segment(current, expression[offset:closing])
            stack.pop()
            offset = closing + 1

    if len(stack) > 1:
        raise StructureError(ErrorMessages.ORPHAN_OPEN, expression, stack[-1][1])

    _append_segment(root, expression[offset:])
    return root


def _append_segment(group: Group, text: str) -> None:
    text = text.strip()
    if text:
        group.children.append(Segment(text))
