"""
CHUK Grammar - typed command grammars for free-form text input.

Compile an expression once, match lines against it:

    >>> pattern = compile_expression("go [to :place] [with *items]")
    >>> pattern.match("go to kitchen with knife, fork")["items"]
    ['knife', 'fork']
"""

from chuk_mcp_grammar.core import (
    CompiledPattern,
    MatchResult,
    PatternCompiler,
    TypeMap,
    TypeMapRegistry,
    compile_expression,
    default_registry,
)
from chuk_mcp_grammar.errors import (
    GrammarError,
    MissingSigilError,
    StructureError,
    UnknownTypeReference,
    ValidationFailure,
)

__version__ = "0.1.0"

__all__ = [
    "CompiledPattern",
    "GrammarError",
    "MatchResult",
    "MissingSigilError",
    "PatternCompiler",
    "StructureError",
    "TypeMap",
    "TypeMapRegistry",
    "UnknownTypeReference",
    "ValidationFailure",
    "compile_expression",
    "default_registry",
]
