"""
Command system - named grammars dispatched against input lines.

Command sets are copyable, ownable YAML documents: the library ships a
few, projects add or override their own.
"""

from chuk_mcp_grammar.commands.registry import CommandMatch, CommandRegistry

__all__ = [
    "CommandMatch",
    "CommandRegistry",
]
