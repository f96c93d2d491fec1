"""
Core grammar compiler - the Radix layer.

These are the pieces everything else composes on:
- structure: Bracket parsing into segments and optional groups
- VariableCompiler: Segment text to pattern text and capture specs
- TypeMap / TypeMapRegistry: Named value types with validators
- PatternCompiler / CompiledPattern: The compiled artifact
- MatchResult: Typed values extracted from a match
"""

from chuk_mcp_grammar.core.compiler import (
    CompiledPattern,
    PatternCompiler,
    compile_expression,
    explain,
)
from chuk_mcp_grammar.core.fragments import unwrap
from chuk_mcp_grammar.core.match import MatchResult
from chuk_mcp_grammar.core.structure import Group, Segment, structure
from chuk_mcp_grammar.core.typemap import TypeMap, TypeMapRegistry, default_registry
from chuk_mcp_grammar.core.variables import CaptureSpec, VariableCompiler, VariableToken, tokenize

__all__ = [
    # Structure
    "Group",
    "Segment",
    "structure",
    # Variables
    "CaptureSpec",
    "VariableCompiler",
    "VariableToken",
    "tokenize",
    "unwrap",
    # Type maps
    "TypeMap",
    "TypeMapRegistry",
    "default_registry",
    # Compilation
    "CompiledPattern",
    "PatternCompiler",
    "compile_expression",
    "explain",
    # Matching
    "MatchResult",
]
