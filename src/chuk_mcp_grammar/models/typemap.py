"""
Type map definition model - type maps declared in YAML.

A definition describes a pattern fragment plus a conversion, so simple
types can live in configuration instead of code:

    schema: typemaps/v1
    types:
      - name: Percent
        pattern: '\\d{1,3}'
        convert: int
        maximum: 100
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from chuk_mcp_grammar.constants import ConvertKind, ErrorMessages
from chuk_mcp_grammar.core.fragments import embedded_groups


class TypeMapDefinition(BaseModel):
    """
    A declarative type map.

    The converted value is checked against minimum/maximum (numeric
    conversions) and choices; failing checks reject the match.
    """

    name: str = Field(..., min_length=1, description="Type name, used as @name")
    pattern: str | None = Field(
        None, description="Non-capturing pattern fragment (derived from choices if omitted)"
    )
    convert: ConvertKind = Field("str", description="Conversion applied to the matched text")
    description: str = Field("", description="Human-readable description")

    # Semantic checks
    minimum: float | None = Field(None, description="Smallest accepted value")
    maximum: float | None = Field(None, description="Largest accepted value")
    choices: list[str] | None = Field(None, description="Accepted values (case-insensitive)")

    # Also accept "value" and 'value'
    quoted: bool = Field(True, description="Accept double- and single-quoted variants")

    model_config = {"frozen": True}

    @field_validator("pattern")
    @classmethod
    def _non_capturing(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        try:
            groups = embedded_groups(value)
        except re.error as e:
            raise ValueError(f"Invalid pattern: {e}") from e
        if groups:
            name = info.data.get("name", "?")
            raise ValueError(ErrorMessages.CAPTURING_FRAGMENT.format(name=name))
        return value

    @model_validator(mode="after")
    def _pattern_or_choices(self) -> TypeMapDefinition:
        if self.pattern is None and not self.choices:
            raise ValueError(f"Type map '{self.name}' needs a pattern or choices")
        return self

    @model_validator(mode="after")
    def _numeric_range(self) -> TypeMapDefinition:
        if self.has_range() and self.convert == "str":
            raise ValueError(ErrorMessages.RANGE_NEEDS_NUMBER.format(name=self.name))
        return self

    def has_range(self) -> bool:
        """Whether a numeric range check applies."""
        return self.minimum is not None or self.maximum is not None


class TypeMapSet(BaseModel):
    """A YAML document of type map definitions."""

    schema_version: str = Field("typemaps/v1", alias="schema", description="Schema version")
    types: list[TypeMapDefinition] = Field(default_factory=list, description="Definitions")

    model_config = {"populate_by_name": True}
