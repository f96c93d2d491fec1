"""
Type map configuration - type maps declared in YAML.
"""

from chuk_mcp_grammar.typemaps.loader import TypeMapLoader, dump_definitions

__all__ = [
    "TypeMapLoader",
    "dump_definitions",
]
