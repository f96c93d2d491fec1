#!/usr/bin/env python3
"""
Example: Parsing chat commands with grammars.

This demonstrates compiling grammar expressions, registering a custom
type map, and dispatching input lines to the built-in command library.

Usage:
    python examples/parse_commands.py
"""

from pathlib import Path

from chuk_mcp_grammar import TypeMapRegistry, ValidationFailure, compile_expression
from chuk_mcp_grammar.commands import CommandRegistry


def main() -> None:
    """Demonstrate grammars, type maps and dispatch."""
    print("CHUK Grammar Demo")
    print("=" * 40)
    print()

    # A single expression
    pattern = compile_expression("go [to :place] [with *items]")
    print(f"Expression: {pattern.expression}")
    print(f"  Pattern: {pattern.pattern}")
    for line in ["go", "go to kitchen", "go to 'dining room' with knife, fork", "go away now"]:
        result = pattern.match(line)
        print(f"  {line!r:40} -> {result.named if result else 'no match'}")
    print()

    # A custom type map with a validator
    registry = TypeMapRegistry()

    @registry.type_map("Hour", r"\d{1,2}")
    def hour(compiled, value):  # type: ignore[no-untyped-def]
        number = int(value)
        if number > 23:
            raise ValidationFailure(f"{value} is not an hour")
        return number

    alarm = compile_expression("wake me at :hour@Hour", registry)
    print(f"Expression: {alarm.expression}")
    for line in ["wake me at 7", "wake me at 31"]:
        result = alarm.match(line)
        print(f"  {line!r:40} -> {result.named if result else 'no match'}")
    print()

    # Dispatch against the command library
    library_path = Path(__file__).parent.parent / "src/chuk_mcp_grammar/commands/library"
    commands = CommandRegistry(library_path=library_path)

    print("Available commands:")
    for meta in commands.list_commands():
        print(f"  {meta.name}: {meta.expression}")
    print()

    print("Dispatch:")
    for line in [
        "roll 3 dice with 6 sides",
        "dice 2",
        'invite alice, bob to "#general"',
        "say hello there",
        "mode ON",
        "dance",
    ]:
        match = commands.dispatch(line)
        if match is None:
            print(f"  {line!r:40} -> no command")
        else:
            print(f"  {line!r:40} -> {match.name} {match.result.named}")


if __name__ == "__main__":
    main()
