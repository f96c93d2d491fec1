"""
Type tools - MCP tools for type map discovery and registration.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chuk_mcp_grammar.constants import SuccessMessages
from chuk_mcp_grammar.core import TypeMapRegistry
from chuk_mcp_grammar.models.typemap import TypeMapDefinition
from chuk_mcp_grammar.typemaps import TypeMapLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_type_tools(
    mcp: ChukMCPServer,
    registry: TypeMapRegistry,
) -> dict[str, Any]:
    """
    Register type map tools with the MCP server.

    Args:
        mcp: The MCP server instance
        registry: The type map registry

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    loader = TypeMapLoader(registry)

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_list_types() -> str:
        """
        List registered type maps.

        Returns:
            JSON string with type names and their patterns

        Example:
            grammar_list_types()
        """
        try:
            types = [{"name": t.name, "pattern": t.pattern} for t in registry]
            types.sort(key=lambda t: t["name"])
            return json.dumps({"status": "success", "types": types, "count": len(types)})
        except Exception as e:
            logger.exception("Failed to list types")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_list_types"] = grammar_list_types

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_register_type(
        name: str,
        pattern: str | None = None,
        convert: str = "str",
        choices: list[str] | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
        quoted: bool = True,
    ) -> str:
        """
        Register a type map usable as @name in expressions.

        Args:
            name: Type name
            pattern: Non-capturing pattern fragment (optional when choices are given)
            convert: Conversion: 'str', 'int' or 'float'
            choices: Accepted values (case-insensitive)
            minimum: Smallest accepted value
            maximum: Largest accepted value
            quoted: Also accept double- and single-quoted values

        Returns:
            JSON string with the registered type

        Example:
            grammar_register_type(name="Percent", pattern="\\\\d{1,3}", convert="int", maximum=100)
        """
        try:
            definition = TypeMapDefinition(
                name=name,
                pattern=pattern,
                convert=convert,  # type: ignore[arg-type]
                choices=choices,
                minimum=minimum,
                maximum=maximum,
                quoted=quoted,
            )
            typemap = loader.register(definition)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.TYPE_REGISTERED.format(name=name),
                    "type": {"name": typemap.name, "pattern": typemap.pattern},
                }
            )
        except ValidationError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to register type")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_register_type"] = grammar_register_type

    return tools
