"""
Pydantic models for the grammar system.

This module provides:
- CommandDefinition: Named grammar expression with aliases
- CommandSet: YAML document of commands
- CommandMetadata: Lightweight listing entry
- TypeMapDefinition: Type map declared in configuration
- TypeMapSet: YAML document of type maps
"""

from chuk_mcp_grammar.models.command import CommandDefinition, CommandMetadata, CommandSet
from chuk_mcp_grammar.models.typemap import TypeMapDefinition, TypeMapSet

__all__ = [
    "CommandDefinition",
    "CommandMetadata",
    "CommandSet",
    "TypeMapDefinition",
    "TypeMapSet",
]
