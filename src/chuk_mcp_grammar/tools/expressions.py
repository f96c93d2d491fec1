"""
Expression tools - MCP tools for compiling and matching grammars.

Tools for compiling an expression, matching input against it, and
explaining how an expression is structured.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_grammar.core import PatternCompiler, explain
from chuk_mcp_grammar.errors import GrammarError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_expression_tools(
    mcp: ChukMCPServer,
    compiler: PatternCompiler,
) -> dict[str, Any]:
    """
    Register expression tools with the MCP server.

    Args:
        mcp: The MCP server instance
        compiler: The pattern compiler

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_compile(expression: str) -> str:
        """
        Compile a grammar expression.

        Returns the generated pattern and the captures it records.

        Args:
            expression: Grammar expression, e.g. 'go [to :place]'

        Returns:
            JSON string with the compiled pattern

        Example:
            grammar_compile(expression="roll :count@Integer [dice]")
        """
        try:
            compiled = compiler.compile(expression)
            return json.dumps({"status": "success", **compiled.describe()})
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compile expression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_compile"] = grammar_compile

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_match(expression: str, text: str) -> str:
        """
        Match a line of input against a grammar expression.

        Args:
            expression: Grammar expression
            text: Input line

        Returns:
            JSON string with the extracted values, or matched=false

        Example:
            grammar_match(expression="go [to :place]", text="go to kitchen")
        """
        try:
            compiled = compiler.compile(expression)
            result = compiled.match(text)
            if result is None:
                return json.dumps({"status": "success", "matched": False})

            return json.dumps(
                {"status": "success", "matched": True, **result.to_dict()},
                default=str,
            )
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to match input")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_match"] = grammar_match

    @mcp.tool  # type: ignore[arg-type]
    async def grammar_explain(expression: str) -> str:
        """
        Explain the structure of a grammar expression.

        Lists the optional groups and the tokens of every literal segment
        without resolving type references.

        Args:
            expression: Grammar expression

        Returns:
            JSON string with the nested structure

        Example:
            grammar_explain(expression="invite *users [to :channel]")
        """
        try:
            return json.dumps({"status": "success", **explain(expression)})
        except GrammarError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to explain expression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["grammar_explain"] = grammar_explain

    return tools
