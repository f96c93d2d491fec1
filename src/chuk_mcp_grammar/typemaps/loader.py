"""
Type map loader - builds type maps from YAML definitions.

Type maps can come from:
1. Code (TypeMapRegistry.register / the type_map decorator)
2. YAML files declaring TypeMapDefinitions (typemaps/v1)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_grammar.core.fragments import one_of, quoted_variants
from chuk_mcp_grammar.core.typemap import TypeMap, TypeMapRegistry, Validator
from chuk_mcp_grammar.errors import ValidationFailure
from chuk_mcp_grammar.models.typemap import TypeMapDefinition, TypeMapSet

logger = logging.getLogger(__name__)

_CONVERTERS: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
}


class TypeMapLoader:
    """
    Turns TypeMapDefinitions into registered type maps.

    Definitions are loaded from YAML files and registered into the
    given registry; later files override earlier ones.
    """

    def __init__(self, registry: TypeMapRegistry):
        """
        Initialize the loader.

        Args:
            registry: Registry that receives the type maps
        """
        self.registry = registry

    @staticmethod
    def build_validator(definition: TypeMapDefinition) -> Validator:
        """Create the validate-and-convert callable for a definition."""
        convert = _CONVERTERS[definition.convert]
        canonical = {c.lower(): c for c in definition.choices} if definition.choices else None

        def validate(pattern: Any, value: str) -> Any:
            if canonical is not None:
                if value.lower() not in canonical:
                    raise ValidationFailure(f"{value!r} is not one of {definition.choices}")
                value = canonical[value.lower()]

            result = convert(value)

            if definition.minimum is not None and result < definition.minimum:
                raise ValidationFailure(f"{result} is below {definition.minimum}")
            if definition.maximum is not None and result > definition.maximum:
                raise ValidationFailure(f"{result} is above {definition.maximum}")

            return result

        return validate

    @staticmethod
    def build_pattern(definition: TypeMapDefinition) -> str:
        """Pattern fragment for a definition."""
        fragment = definition.pattern if definition.pattern is not None else one_of(definition.choices or [])
        return quoted_variants(fragment) if definition.quoted else fragment

    def register(self, definition: TypeMapDefinition) -> TypeMap:
        """Build and register a single definition."""
        return self.registry.register(
            definition.name,
            self.build_pattern(definition),
            self.build_validator(definition),
        )

    def load_file(self, path: Path) -> list[str]:
        """
        Register every type map defined in a YAML file.

        Args:
            path: typemaps/v1 YAML file

        Returns:
            Names of the registered type maps
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        typemap_set = TypeMapSet.model_validate(data)
        names = []
        for definition in typemap_set.types:
            self.register(definition)
            names.append(definition.name)

        logger.debug(f"Loaded {len(names)} type maps from {path}")
        return names

    def load_directory(self, path: Path) -> list[str]:
        """
        Register type maps from every *.yaml file in a directory.

        Files are processed in name order. Missing directories are ignored.

        Returns:
            Names of the registered type maps
        """
        names: list[str] = []
        if not path.exists():
            return names

        for file in sorted(path.glob("*.yaml")):
            names.extend(self.load_file(file))

        return names


def dump_definitions(definitions: list[TypeMapDefinition], path: Path) -> Path:
    """
    Write type map definitions to a YAML file.

    Args:
        definitions: Definitions to write
        path: Target file

    Returns:
        The written path
    """
    data = {
        "schema": "typemaps/v1",
        "types": [d.model_dump(exclude_defaults=True) for d in definitions],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    return path
