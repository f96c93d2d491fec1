"""
MCP tool implementations.

Tools are organized by domain:
- expressions - Compile, match and explain grammar expressions
- types - Type map discovery and registration
- commands - Command discovery and dispatch
"""

from chuk_mcp_grammar.tools.commands import register_command_tools
from chuk_mcp_grammar.tools.expressions import register_expression_tools
from chuk_mcp_grammar.tools.types import register_type_tools

__all__ = [
    "register_command_tools",
    "register_expression_tools",
    "register_type_tools",
]
