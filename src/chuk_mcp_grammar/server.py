#!/usr/bin/env python3
"""
Entry point for the CHUK Grammar MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http) and a --check mode
that compiles every known command grammar and exits.
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def check_commands() -> int:
    """Compile every command grammar; return the number of failures."""
    from chuk_mcp_grammar.async_server import command_registry
    from chuk_mcp_grammar.errors import GrammarError

    failures = 0
    for metadata in command_registry.list_commands():
        try:
            command_registry.compiled(metadata.name)
        except GrammarError as e:
            failures += 1
            logger.error(f"Command '{metadata.name}' ({metadata.path or 'registered'}): {e}")
        else:
            logger.info(f"Command '{metadata.name}' OK")
    return failures


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Grammar MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compile all command grammars and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.check:
        sys.exit(1 if check_commands() else 0)

    # Import after argument parsing to avoid issues
    from chuk_mcp_grammar.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Grammar MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Grammar MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
