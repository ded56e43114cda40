"""Command parsing and handling for quran-tui."""

from quran_tui.commands.parser import parse_command, ParsedCommand
from quran_tui.commands.handlers import CommandHandler, CommandResult

__all__ = ["parse_command", "ParsedCommand", "CommandHandler", "CommandResult"]
