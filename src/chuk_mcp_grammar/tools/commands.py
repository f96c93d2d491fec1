"""
Command tools - MCP tools for command discovery and dispatch.

Tools for listing and describing commands, adding new ones, and
dispatching a line of input to the command whose grammar matches.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_grammar.commands import CommandRegistry
from chuk_mcp_grammar.constants import ErrorMessages, SuccessMessages
from chuk_mcp_grammar.errors import GrammarError
from chuk_mcp_grammar.models.command import CommandDefinition

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_command_tools(
    mcp: ChukMCPServer,
    commands: CommandRegistry,
) -> dict[str, Any]:
    """
    Register command tools with the MCP server.

    Args:
        mcp: The MCP server instance
        commands: The command registry

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_list_commands() -> str:
        """
        List available commands in dispatch order.

        Returns:
            JSON string with command summaries

        Example:
            grammar_list_commands()
        """
        try:
            listing = commands.list_commands()
            return json.dumps(
                {
                    "status": "success",
                    "commands": [
                        {
                            "name": c.name,
                            "expression": c.expression,
                            "description": c.description,
                            "aliases": c.alias_count,
                        }
                        for c in listing
                    ],
                    "count": len(listing),
                }
            )
        except Exception as e:
            logger.exception("Failed to list commands")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_list_commands"] = grammar_list_commands

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_describe_command(name: str) -> str:
        """
        Get detailed information about a command.

        Returns the command's expressions, their compiled patterns and
        captures, and usage examples.

        Args:
            name: Command name

        Returns:
            JSON string with command details

        Example:
            grammar_describe_command(name="roll")
        """
        try:
            command = commands.get_command(name)
            if command is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.COMMAND_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "command": {
                        "name": command.name,
                        "description": command.description,
                        "examples": command.examples,
                        "expressions": [c.describe() for c in commands.compiled(name)],
                    },
                }
            )
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to describe command")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_describe_command"] = grammar_describe_command

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_add_command(
        name: str,
        expression: str,
        description: str = "",
        aliases: list[str] | None = None,
    ) -> str:
        """
        Add a command (or replace one with the same name).

        The grammar is compiled immediately so mistakes are reported here.

        Args:
            name: Command name
            expression: Grammar expression
            description: Human-readable description
            aliases: Alternative expressions

        Returns:
            JSON string with confirmation

        Example:
            grammar_add_command(name="move", expression="go [to :place]")
        """
        try:
            command = CommandDefinition(
                name=name,
                expression=expression,
                description=description,
                aliases=aliases or [],
            )
            commands.register_command(command)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.COMMAND_ADDED.format(name=name),
                }
            )
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to add command")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_add_command"] = grammar_add_command

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_dispatch(text: str, all_matches: bool = False) -> str:
        """
        Find the command matching a line of input.

        Args:
            text: Input line
            all_matches: Return every matching command instead of the first

        Returns:
            JSON string with the matching command(s) and extracted values

        Example:
            grammar_dispatch(text="roll 3 dice with 6 sides")
        """
        try:
            if all_matches:
                matches = commands.dispatch_all(text)
                return json.dumps(
                    {
                        "status": "success",
                        "matches": [m.to_dict() for m in matches],
                        "count": len(matches),
                    },
                    default=str,
                )

            match = commands.dispatch(text)
            if match is None:
                return json.dumps({"status": "success", "matched": False})
            return json.dumps({"status": "success", "matched": True, **match.to_dict()}, default=str)
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to dispatch input")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_dispatch"] = grammar_dispatch

    return tools
