"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_grammar.core import PatternCompiler, TypeMapRegistry


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry() -> TypeMapRegistry:
    """A fresh registry with only the built-in types."""
    return TypeMapRegistry()


@pytest.fixture
def compiler(registry: TypeMapRegistry) -> PatternCompiler:
    """A compiler bound to the fresh registry."""
    return PatternCompiler(registry)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in command library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_grammar" / "commands" / "library"
