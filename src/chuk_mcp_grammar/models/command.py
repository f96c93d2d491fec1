"""
Command model - named grammar expressions.

Commands are copyable, ownable definitions: a name, the expression that
parses the command's input, and optional alias expressions.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommandDefinition(BaseModel):
    """
    A command and the grammar for its input.

    Example:
        CommandDefinition(
            name="move",
            expression="go [to :place]",
            aliases=["walk [to :place]"],
        )
    """

    name: str = Field(..., min_length=1, description="Command name")
    expression: str = Field(..., description="Grammar expression")
    description: str = Field("", description="Human-readable description")
    aliases: list[str] = Field(default_factory=list, description="Alternative expressions")
    examples: list[str] = Field(default_factory=list, description="Example input lines")

    model_config = {"frozen": True}

    @property
    def expressions(self) -> list[str]:
        """Main expression followed by the aliases."""
        return [self.expression, *self.aliases]


class CommandSet(BaseModel):
    """A YAML document of command definitions."""

    schema_version: str = Field("commands/v1", alias="schema", description="Schema version")
    name: str = Field("", description="Command set name")
    description: str = Field("", description="Human-readable description")
    commands: list[CommandDefinition] = Field(default_factory=list, description="Commands")

    model_config = {"populate_by_name": True}


class CommandMetadata(BaseModel):
    """
    Lightweight command metadata for listing/discovery.
    """

    name: str = Field(..., description="Command name")
    expression: str = Field(..., description="Grammar expression")
    description: str = Field("", description="Human-readable description")
    alias_count: int = Field(0, description="Number of alias expressions")
    path: str | None = Field(None, description="Path to the command set file")

    @classmethod
    def from_command(cls, command: CommandDefinition, path: str | None = None) -> CommandMetadata:
        """Create metadata from a full definition."""
        return cls(
            name=command.name,
            expression=command.expression,
            description=command.description,
            alias_count=len(command.aliases),
            path=path,
        )
