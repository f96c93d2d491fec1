"""
Tests for type maps and the type map registry.

Tests cover:
- Built-in numeric types
- Registration, overwrite warnings and the decorator form
- Registry copies, resets and versioning
- YAML-declared type maps
"""

import logging
import re
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chuk_mcp_grammar.core import PatternCompiler, TypeMap, TypeMapRegistry, default_registry
from chuk_mcp_grammar.errors import ValidationFailure
from chuk_mcp_grammar.models import TypeMapDefinition
from chuk_mcp_grammar.typemaps import TypeMapLoader, dump_definitions


class TestBuiltins:
    """Tests for the built-in numeric type maps."""

    def test_builtin_names(self, registry: TypeMapRegistry) -> None:
        """The six numeric types are registered."""
        assert registry.names() == sorted(
            ["Integer", "+Integer", "-Integer", "Float", "+Float", "-Float"]
        )

    @pytest.mark.parametrize(
        "name,text,expected",
        [
            ("Integer", "42", 42),
            ("Integer", "-7", -7),
            ("Integer", '"42"', 42),
            ("+Integer", "+5", 5),
            ("-Integer", "-5", -5),
            ("Float", "1.5", 1.5),
            ("Float", "'2'", 2.0),
            ("+Float", "3.25", 3.25),
            ("-Float", "-0.5", -0.5),
        ],
    )
    def test_builtin_conversion(
        self, compiler: PatternCompiler, name: str, text: str, expected: object
    ) -> None:
        """Built-ins accept bare and quoted values and convert them."""
        result = compiler.compile(f":n@{name}").match(text)
        assert result is not None
        assert result["n"] == expected
        assert type(result["n"]) is type(expected)

    @pytest.mark.parametrize(
        "name,text",
        [
            ("Integer", "abc"),
            ("Integer", "1.5"),
            ("+Integer", "-5"),
            ("-Integer", "5"),
            ("-Float", "0.5"),
            ("Float", '"1.5'),
        ],
    )
    def test_builtin_rejection(self, compiler: PatternCompiler, name: str, text: str) -> None:
        """Values outside a type's shape do not match."""
        assert compiler.compile(f":n@{name}").match(text) is None

    def test_default_registry_is_shared(self) -> None:
        """default_registry() returns the same instance."""
        assert default_registry() is default_registry()
        assert "Integer" in default_registry()


class TestRegistry:
    """Tests for TypeMapRegistry."""

    def test_register_and_lookup(self, registry: TypeMapRegistry) -> None:
        """Registered type maps can be looked up."""
        typemap = registry.register("Word", r"[a-z]+")
        assert isinstance(typemap, TypeMap)
        assert registry.lookup("Word") is typemap
        assert registry.lookup("Missing") is None

    def test_register_compiled_pattern(self, registry: TypeMapRegistry) -> None:
        """A compiled pattern contributes its source."""
        registry.register("Hex", re.compile(r"0x[0-9a-f]+"))
        typemap = registry.lookup("Hex")
        assert typemap is not None
        assert typemap.pattern == r"0x[0-9a-f]+"

    def test_capturing_pattern_rejected(self, registry: TypeMapRegistry) -> None:
        """Fragments with capturing groups would shift captures."""
        with pytest.raises(ValueError):
            registry.register("Bad", r"(a|b)")

    def test_compiled_pattern_keeps_flags(self, registry: TypeMapRegistry) -> None:
        """Flags of a compiled pattern apply only inside the type's fragment."""
        typemap = registry.register("Yes", re.compile(r"yes", re.IGNORECASE))
        assert typemap.pattern == r"(?i:yes)"

        compiled = PatternCompiler(registry).compile("say :x@Yes")
        result = compiled.match("say YES")
        assert result is not None
        assert result["x"] == "YES"
        assert compiled.match("SAY yes") is None

    @pytest.mark.parametrize("pattern", [r"(?i)yes", r"[0-9", r"a)b"])
    def test_unembeddable_pattern_rejected(self, registry: TypeMapRegistry, pattern: str) -> None:
        """Global inline flags and broken patterns are refused at registration."""
        with pytest.raises(ValueError):
            registry.register("Bad", pattern)
        assert "Bad" not in registry

    def test_scoped_flags_accepted(self, registry: TypeMapRegistry) -> None:
        """Scoped inline flags embed cleanly."""
        registry.register("Yes", r"(?i:yes|y)")
        result = PatternCompiler(registry).compile("confirm :x@Yes").match("confirm Y")
        assert result is not None
        assert result["x"] == "Y"

    def test_overwrite_warns(
        self, registry: TypeMapRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Redefining a type map is allowed but logged."""
        with caplog.at_level(logging.WARNING):
            registry.register("Integer", r"\d+", lambda p, v: int(v) * 2)
        assert "Redefining type map 'Integer'" in caplog.text
        typemap = registry.lookup("Integer")
        assert typemap is not None
        assert typemap.convert(None, "4") == 8

    def test_decorator(self, registry: TypeMapRegistry) -> None:
        """type_map() registers the decorated validator."""

        @registry.type_map("Percent", r"\d{1,3}%")
        def percent(pattern, value):  # type: ignore[no-untyped-def]
            return int(value[:-1]) / 100

        compiled = PatternCompiler(registry).compile("set :level@Percent")
        result = compiled.match("set 50%")
        assert result is not None
        assert result["level"] == 0.5

    def test_validator_receives_compiled_pattern(self, registry: TypeMapRegistry) -> None:
        """Validators get the owning compiled pattern as context."""
        seen = []
        registry.register("Any", r"\S+", lambda pattern, value: seen.append(pattern) or value)
        compiled = PatternCompiler(registry).compile(":x@Any")
        assert compiled.match("hello") is not None
        assert seen == [compiled]

    def test_typemap_without_validator(self, registry: TypeMapRegistry) -> None:
        """A type map without a validator passes values through."""
        registry.register("Word", r"[a-z]+")
        result = PatternCompiler(registry).compile(":w@Word").match("abc")
        assert result is not None
        assert result["w"] == "abc"

    def test_version_bumps(self, registry: TypeMapRegistry) -> None:
        """Every mutation bumps the version."""
        start = registry.version
        registry.register("A", r"a")
        registry.unregister("A")
        registry.reset()
        assert registry.version == start + 3

    def test_unregister(self, registry: TypeMapRegistry) -> None:
        """Unregistering removes the type map."""
        assert registry.unregister("Float")
        assert "Float" not in registry
        assert not registry.unregister("Float")

    def test_reset(self, registry: TypeMapRegistry) -> None:
        """reset() restores just the built-ins."""
        registry.register("Word", r"[a-z]+")
        registry.unregister("Integer")
        registry.reset()
        assert "Word" not in registry
        assert "Integer" in registry
        assert len(registry) == 6

    def test_copy_is_independent(self, registry: TypeMapRegistry) -> None:
        """Copies do not share later registrations."""
        clone = registry.copy()
        clone.register("Word", r"[a-z]+")
        assert "Word" in clone
        assert "Word" not in registry

    def test_empty_registry(self) -> None:
        """Built-ins can be left out."""
        assert len(TypeMapRegistry(builtins=False)) == 0


class TestTypeMapDefinitions:
    """Tests for YAML-declared type maps."""

    def test_definition_requires_pattern_or_choices(self) -> None:
        """A definition needs something to match."""
        with pytest.raises(ValidationError):
            TypeMapDefinition(name="Empty")

    def test_definition_rejects_capturing_pattern(self) -> None:
        """Capturing groups are rejected at validation time."""
        with pytest.raises(ValidationError):
            TypeMapDefinition(name="Bad", pattern=r"(\d+)")

    def test_definition_rejects_invalid_pattern(self) -> None:
        """Broken patterns are rejected at validation time."""
        with pytest.raises(ValidationError):
            TypeMapDefinition(name="Bad", pattern=r"[0-9")

    def test_definition_rejects_global_flags(self) -> None:
        """Global inline flags cannot be embedded and are rejected."""
        with pytest.raises(ValidationError):
            TypeMapDefinition(name="Yes", pattern=r"(?i)yes")

    @pytest.mark.parametrize("bound", [{"minimum": 1}, {"maximum": 10}])
    def test_range_needs_numeric_conversion(self, bound: dict) -> None:
        """A range on a str conversion is rejected up front."""
        with pytest.raises(ValidationError):
            TypeMapDefinition(name="Word", pattern="[a-z]+", **bound)

    def test_range_with_float_conversion(self, registry: TypeMapRegistry) -> None:
        """A float conversion may carry a range."""
        TypeMapLoader(registry).register(
            TypeMapDefinition(
                name="Ratio", pattern=r"\d+(?:\.\d+)?", convert="float", minimum=0.5
            )
        )
        compiled = PatternCompiler(registry).compile(":r@Ratio")
        result = compiled.match("0.75")
        assert result is not None
        assert result["r"] == 0.75
        assert compiled.match("0.25") is None

    def test_range_check(self, registry: TypeMapRegistry) -> None:
        """Values outside minimum/maximum do not match."""
        TypeMapLoader(registry).register(
            TypeMapDefinition(name="Percent", pattern=r"\d{1,3}", convert="int", maximum=100)
        )
        compiled = PatternCompiler(registry).compile("volume :level@Percent")

        result = compiled.match("volume 80")
        assert result is not None
        assert result["level"] == 80
        assert compiled.match("volume 150") is None

    def test_choices_are_canonicalised(self, registry: TypeMapRegistry) -> None:
        """Choices match case-insensitively and return the declared spelling."""
        TypeMapLoader(registry).register(
            TypeMapDefinition(name="Direction", choices=["North", "South"])
        )
        result = PatternCompiler(registry).compile("go :dir@Direction").match("go NORTH")
        assert result is not None
        assert result["dir"] == "North"

    def test_unquoted_only(self, registry: TypeMapRegistry) -> None:
        """quoted=False does not accept quoted values."""
        TypeMapLoader(registry).register(
            TypeMapDefinition(name="Digits", pattern=r"\d+", quoted=False)
        )
        compiled = PatternCompiler(registry).compile(":d@Digits")
        assert compiled.match("12") is not None
        assert compiled.match('"12"') is None

    def test_load_file(self, registry: TypeMapRegistry, temp_dir: Path) -> None:
        """Type maps load from a YAML file."""
        path = temp_dir / "types.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "schema": "typemaps/v1",
                    "types": [
                        {"name": "Port", "pattern": r"\d{1,5}", "convert": "int", "maximum": 65535},
                        {"name": "Ratio", "pattern": r"\d+(?:\.\d+)?", "convert": "float"},
                    ],
                }
            )
        )
        names = TypeMapLoader(registry).load_file(path)
        assert names == ["Port", "Ratio"]

        compiled = PatternCompiler(registry).compile("listen :port@Port")
        result = compiled.match("listen 8080")
        assert result is not None
        assert result["port"] == 8080
        assert compiled.match("listen 70000") is None

    def test_load_directory(self, registry: TypeMapRegistry, temp_dir: Path) -> None:
        """Every YAML file in a directory is loaded, missing directories are fine."""
        dump_definitions([TypeMapDefinition(name="A", pattern="a")], temp_dir / "a.yaml")
        dump_definitions([TypeMapDefinition(name="B", pattern="b")], temp_dir / "b.yaml")

        loader = TypeMapLoader(registry)
        assert loader.load_directory(temp_dir) == ["A", "B"]
        assert loader.load_directory(temp_dir / "missing") == []

    def test_dump_round_trip(self, temp_dir: Path) -> None:
        """Dumped definitions validate again when loaded."""
        definition = TypeMapDefinition(name="Level", pattern=r"\d", convert="int", minimum=1)
        path = dump_definitions([definition], temp_dir / "out" / "types.yaml")

        data = yaml.safe_load(path.read_text())
        assert data["schema"] == "typemaps/v1"
        assert TypeMapDefinition.model_validate(data["types"][0]) == definition


class TestValidationFailure:
    """Tests for the validation failure channel."""

    def test_not_a_value_error(self) -> None:
        """Validation failures are distinct from programming errors."""
        assert not issubclass(ValidationFailure, ValueError)

    def test_typemap_convert_propagates(self) -> None:
        """TypeMap.convert lets ValidationFailure through."""

        def reject(pattern, value):  # type: ignore[no-untyped-def]
            raise ValidationFailure(value)

        with pytest.raises(ValidationFailure):
            TypeMap("Never", r"\S+", reject).convert(None, "x")
