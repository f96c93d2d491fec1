#!/usr/bin/env python3
"""
Async Grammar MCP Server using chuk-mcp-server

This server provides MCP tools for parsing free-form command input with
typed grammars. Commands are defined in YAML command sets - the library
ships a few, and your project can add or override its own.

The server provides tools for:
- Compiling and explaining grammar expressions
- Matching input lines and extracting typed values
- Registering type maps usable as @Type in expressions
- Dispatching input to the command whose grammar matches
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_grammar.commands import CommandRegistry
from chuk_mcp_grammar.core import PatternCompiler, default_registry
from chuk_mcp_grammar.tools import (
    register_command_tools,
    register_expression_tools,
    register_type_tools,
)
from chuk_mcp_grammar.typemaps import TypeMapLoader

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-grammar")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
COMMANDS_DIR = BASE_PATH / "commands"
TYPEMAPS_DIR = BASE_PATH / "typemaps"
LIBRARY_PATH = Path(__file__).parent / "commands" / "library"

# Type maps must be registered before any command grammar is compiled
type_registry = default_registry()
project_types = TypeMapLoader(type_registry).load_directory(TYPEMAPS_DIR)

# Create managers
compiler = PatternCompiler(type_registry)
command_registry = CommandRegistry(
    library_path=LIBRARY_PATH,
    project_path=COMMANDS_DIR,
    registry=type_registry,
)

# Register all tools
expression_tools = register_expression_tools(mcp, compiler)
type_tools = register_type_tools(mcp, type_registry)
command_tools = register_command_tools(mcp, command_registry)

# Export tool functions for direct access
grammar_compile = expression_tools["grammar_compile"]
grammar_match = expression_tools["grammar_match"]
grammar_explain = expression_tools["grammar_explain"]

grammar_list_types = type_tools["grammar_list_types"]
grammar_register_type = type_tools["grammar_register_type"]

grammar_list_commands = command_tools["grammar_list_commands"]
grammar_describe_command = command_tools["grammar_describe_command"]
grammar_add_command = command_tools["grammar_add_command"]
grammar_dispatch = command_tools["grammar_dispatch"]

logger.info("CHUK Grammar MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Commands dir: {COMMANDS_DIR}")
logger.info(f"  Project type maps: {len(project_types)}")
