"""
Command Registry - discovers, compiles and dispatches commands.

The registry provides access to both the built-in library command sets
and user-owned command sets in a project. Dispatching a line tries
every command in order and returns the first one whose grammar matches.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_grammar.constants import ErrorMessages
from chuk_mcp_grammar.core import CompiledPattern, MatchResult, PatternCompiler, TypeMapRegistry
from chuk_mcp_grammar.errors import CommandNotFoundError, GrammarError
from chuk_mcp_grammar.models.command import CommandDefinition, CommandMetadata, CommandSet

logger = logging.getLogger(__name__)


@dataclass
class CommandMatch:
    """A command whose grammar matched a line of input."""

    command: CommandDefinition
    expression: str
    result: MatchResult

    @property
    def name(self) -> str:
        return self.command.name

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "command": self.command.name,
            "expression": self.expression,
            "values": self.result.named,
        }


class CommandRegistry:
    """
    Discovers and loads command sets from library and project.

    Commands keep the order in which they were discovered; project
    commands replace library commands with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
        registry: TypeMapRegistry | None = None,
    ):
        """
        Initialize the registry.

        Args:
            library_path: Path to built-in command sets
            project_path: Path to project command sets (user-owned)
            registry: Type maps used to compile command grammars
        """
        self.library_path = library_path
        self.project_path = project_path
        self.compiler = PatternCompiler(registry)
        self._commands: dict[str, CommandDefinition] = {}
        self._paths: dict[str, str] = {}
        self._compiled: dict[str, list[CompiledPattern]] = {}
        self._broken: set[str] = set()
        self._loaded = False

    def list_commands(self) -> list[CommandMetadata]:
        """List available commands in dispatch order."""
        self._ensure_loaded()
        return [
            CommandMetadata.from_command(command, self._paths.get(name))
            for name, command in self._commands.items()
        ]

    def get_command(self, name: str) -> CommandDefinition | None:
        """Get a command by name, or None if not found."""
        self._ensure_loaded()
        return self._commands.get(name)

    def compiled(self, name: str) -> list[CompiledPattern]:
        """
        Compiled patterns of a command (main expression first).

        Raises:
            CommandNotFoundError: Unknown command
            StructureError / UnknownTypeReference: The grammar does not compile
        """
        self._ensure_loaded()
        command = self._commands.get(name)
        if command is None:
            raise CommandNotFoundError(name)

        if name not in self._compiled:
            self._compiled[name] = [self.compiler.compile(e) for e in command.expressions]
        return self._compiled[name]

    def register_command(self, command: CommandDefinition, compile_now: bool = True) -> str:
        """
        Register a command programmatically.

        Args:
            command: Command to register
            compile_now: Compile the grammar immediately, surfacing errors here

        Returns:
            The command name
        """
        self._ensure_loaded()
        compiled = [self.compiler.compile(e) for e in command.expressions] if compile_now else None
        self._add(command, None)
        if compiled is not None:
            self._compiled[command.name] = compiled
        return command.name

    def remove_command(self, name: str) -> bool:
        """Remove a command. Returns True if it existed."""
        self._ensure_loaded()
        self._compiled.pop(name, None)
        self._paths.pop(name, None)
        self._broken.discard(name)
        return self._commands.pop(name, None) is not None

    def dispatch(self, line: str) -> CommandMatch | None:
        """
        Find the first command matching a line.

        Args:
            line: Input line

        Returns:
            CommandMatch or None if no command matches
        """
        for match in self._iter_matches(line):
            return match
        return None

    def dispatch_all(self, line: str) -> list[CommandMatch]:
        """Every command matching a line (first matching expression per command)."""
        return list(self._iter_matches(line))

    def _iter_matches(self, line: str) -> Iterator[CommandMatch]:
        self._ensure_loaded()
        for name, command in list(self._commands.items()):
            try:
                patterns = self.compiled(name)
            except GrammarError as e:
                # Commands whose grammar does not compile never match
                if name not in self._broken:
                    self._broken.add(name)
                    source = self._paths.get(name, "registered")
                    logger.warning(f"Skipping command '{name}' ({source}): {e}")
                continue
            for compiled in patterns:
                result = compiled.match(line)
                if result is not None:
                    yield CommandMatch(command, compiled.expression, result)
                    break

    def save_project(self, name: str = "commands") -> Path:
        """
        Write all programmatically registered commands to the project.

        Args:
            name: Command set name (file stem)

        Returns:
            Path to the written file
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        self._ensure_loaded()
        commands = [c for n, c in self._commands.items() if self._paths.get(n) is None]

        self.project_path.mkdir(parents=True, exist_ok=True)
        target_path = self.project_path / f"{name}.yaml"

        command_set = CommandSet(name=name, commands=commands)
        with open(target_path, "w") as f:
            yaml.safe_dump(
                command_set.model_dump(by_alias=True),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

        for command in commands:
            self._paths[command.name] = str(target_path)

        return target_path

    def _add(self, command: CommandDefinition, path: str | None) -> None:
        if command.name in self._commands:
            logger.debug(f"Command '{command.name}' overridden by {path or 'registration'}")
        self._commands[command.name] = command
        self._compiled.pop(command.name, None)
        self._broken.discard(command.name)
        if path is None:
            self._paths.pop(command.name, None)
        else:
            self._paths[command.name] = path

    def _ensure_loaded(self) -> None:
        """Load all available command sets once."""
        if self._loaded:
            return
        self._loaded = True

        # Scan library
        if self.library_path and self.library_path.exists():
            self._scan_directory(self.library_path)

        # Scan project (overrides library commands)
        if self.project_path and self.project_path.exists():
            self._scan_directory(self.project_path)

    def _scan_directory(self, base_path: Path) -> None:
        """Scan a directory for command sets."""
        for set_file in sorted(base_path.glob("*.yaml")):
            command_set = self._load_command_set(set_file)
            if command_set is None:
                continue
            for command in command_set.commands:
                self._add(command, str(set_file))

    def _load_command_set(self, path: Path) -> CommandSet | None:
        """Load a command set from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return CommandSet.model_validate(data)
        except Exception:
            # Skip files that can't be parsed
            logger.warning(f"Skipping unreadable command set {path}", exc_info=True)
            return None
