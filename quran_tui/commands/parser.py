"""Command parser for ex-style commands."""

import re
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ParsedCommand:
    """A parsed command with name and arguments."""

    name: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, str] = field(default_factory=dict)
    raw: str = ""

    @property
    def first_arg(self) -> str:
        """Get the first argument or empty string."""
        return self.args[0] if self.args else ""

    @property
    def rest_args(self) -> str:
        """Get all arguments as a single string."""
        return " ".join(self.args)


# Command aliases
COMMAND_ALIASES: Dict[str, str] = {
    "q": "quit",
    "w": "write",
    "h": "help",
    "g": "goto",
    "f": "filter",
    "s": "sort",
    "t": "translator",
    "tr": "translator",
    "r": "reciter",
    "p": "play",
    "pause": "stop",
    "ls": "list",
}


def parse_command(command_str: str) -> ParsedCommand:
    """Parse a command string into a ParsedCommand.

    Supports:
    - Simple commands: :quit, :play
    - Commands with args: :translator fa.makarem
    - Flags: :translator --lang=en
    - Quoted args: :filter "al f"

    Args:
        command_str: Raw command string (without leading :)

    Returns:
        ParsedCommand instance
    """
    command_str = command_str.strip()
    if not command_str:
        return ParsedCommand(name="", raw=command_str)

    try:
        tokens = shlex.split(command_str)
    except ValueError:
        # Unbalanced quotes
        tokens = command_str.split()

    if not tokens:
        return ParsedCommand(name="", raw=command_str)

    name = tokens[0].lower()
    name = COMMAND_ALIASES.get(name, name)

    args: List[str] = []
    flags: Dict[str, str] = {}

    for token in tokens[1:]:
        if token.startswith("--"):
            if "=" in token:
                key, value = token[2:].split("=", 1)
                flags[key] = value
            else:
                flags[token[2:]] = "true"
        elif token.startswith("-") and len(token) > 1 and not token[1:].isdigit():
            flags[token[1:]] = "true"
        else:
            args.append(token)

    return ParsedCommand(
        name=name,
        args=args,
        flags=flags,
        raw=command_str,
    )


def get_command_names() -> List[str]:
    """Get list of available command names.

    Returns:
        List of command names for completion
    """
    return [
        "quit",
        "help",
        "goto",
        "list",
        "filter",
        "sort",
        "translator",
        "reciter",
        "play",
        "stop",
        "share",
        "theme",
        "write",
        "download",
    ]


_REFERENCE = re.compile(r"^(?P<chapter>\d+)(?::(?P<verse>\d+))?$")


def parse_reference(ref_str: str) -> Optional[tuple[int, Optional[int]]]:
    """Parse a numeric verse reference.

    Supports:
    - "2" -> (2, None)
    - "2:255" -> (2, 255)

    Returns:
        Tuple of (chapter, verse) or None if invalid
    """
    match = _REFERENCE.match(ref_str.strip())
    if not match:
        return None
    chapter = int(match.group("chapter"))
    verse = int(match.group("verse")) if match.group("verse") else None
    if chapter < 1 or (verse is not None and verse < 1):
        return None
    return (chapter, verse)
