"""Command handlers for quran-tui."""

from dataclasses import dataclass
from typing import Optional

from quran_tui.commands.parser import ParsedCommand, parse_reference
from quran_tui.data.reciters import all_reciters, get_reciter
from quran_tui.data.store import find_chapter
from quran_tui.session import ReaderState


@dataclass
class CommandResult:
    """Result of command execution."""

    success: bool
    message: str = ""
    action: str = ""  # Special action to take: "quit", "goto", etc.
    data: Optional[dict] = None


HELP_TEXT = """
Commands:
  :quit, :q              - Quit
  :goto <n>[:<verse>]    - Open surah n
  :list                  - Back to the surah list
  :filter <text>         - Filter surahs by name
  :sort [asc|desc]       - Sort surahs by number
  :translator [id]       - Pick a translation
  :translator --lang=xx  - Load translations for language xx
  :reciter [n]           - Pick a reciter
  :play / :stop          - Recite the open surah / pause
  :share                 - Copy current verse and translation
  :theme                 - Toggle dark/light
  :write                 - Save settings
  :download [edition]    - Fetch the complete text

Keys:
  /        - Filter    o - Sort order
  Enter    - Open      Esc - Back
  j/k      - Verse     space - Play/pause
  t / r    - Translation / reciter picker
  R        - Next reciter
  y        - Share     d - Theme
  ?        - This help
"""


class CommandHandler:
    """Handles command execution."""

    def __init__(self, state: ReaderState) -> None:
        self.state = state

    def execute(self, cmd: ParsedCommand) -> CommandResult:
        """Execute a parsed command.

        Args:
            cmd: Parsed command

        Returns:
            CommandResult with status and message
        """
        if not cmd.name:
            return CommandResult(success=False, message="No command")

        handler_name = f"_cmd_{cmd.name.replace('-', '_')}"
        handler = getattr(self, handler_name, None)

        if handler:
            return handler(cmd)
        return CommandResult(success=False, message=f"Unknown command: {cmd.name}")

    def _cmd_quit(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :quit command."""
        return CommandResult(success=True, action="quit")

    def _cmd_help(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :help command."""
        return CommandResult(success=True, message=HELP_TEXT.strip(), action="help")

    def _cmd_goto(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :goto command."""
        if not cmd.args:
            return CommandResult(success=False, message="Usage: :goto <surah>[:<verse>]")

        parsed = parse_reference(cmd.rest_args)
        if not parsed:
            return CommandResult(success=False, message=f"Invalid reference: {cmd.rest_args}")

        chapter_id, verse = parsed
        chapter = find_chapter(self.state.chapters, chapter_id)
        if chapter is None:
            return CommandResult(success=False, message=f"Unknown surah: {chapter_id}")
        if verse is not None and verse > len(chapter.verses):
            return CommandResult(
                success=False,
                message=f"{chapter.transliteration} has {len(chapter.verses)} verses",
            )

        return CommandResult(
            success=True,
            action="goto",
            data={"chapter": chapter_id, "verse": verse},
        )

    def _cmd_list(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :list command."""
        return CommandResult(success=True, action="list")

    def _cmd_filter(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :filter command; no argument clears the filter."""
        return CommandResult(success=True, action="filter", data={"query": cmd.rest_args})

    def _cmd_sort(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :sort command."""
        arg = cmd.first_arg.lower()
        if not arg:
            ascending = not self.state.ascending
        elif arg in ("asc", "up"):
            ascending = True
        elif arg in ("desc", "down"):
            ascending = False
        else:
            return CommandResult(success=False, message="Usage: :sort [asc|desc]")
        return CommandResult(success=True, action="sort", data={"ascending": ascending})

    def _cmd_translator(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :translator command."""
        language = cmd.flags.get("lang") or cmd.flags.get("language")
        if language:
            return CommandResult(
                success=True,
                action="reload_translators",
                data={"language": language},
            )

        if not cmd.args:
            if not self.state.translators:
                return CommandResult(success=False, message="No translations loaded")
            return CommandResult(success=True, action="translator_picker")

        translator = self.state.find_translator(cmd.first_arg)
        if translator is None:
            return CommandResult(success=False, message=f"Unknown translation: {cmd.first_arg}")
        return CommandResult(
            success=True,
            action="set_translator",
            data={"translator": translator.identifier},
        )

    def _cmd_reciter(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :reciter command."""
        if not cmd.args:
            return CommandResult(success=True, action="reciter_picker")

        try:
            reciter = get_reciter(int(cmd.first_arg))
        except ValueError:
            reciter = None
        if reciter is None:
            ids = ", ".join(str(r.id) for r in all_reciters())
            return CommandResult(success=False, message=f"Reciter must be one of: {ids}")
        return CommandResult(success=True, action="set_reciter", data={"reciter": reciter.id})

    def _cmd_play(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :play command."""
        if self.state.chapter is None:
            return CommandResult(success=False, message="Open a surah first")
        return CommandResult(success=True, action="play")

    def _cmd_stop(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :stop command."""
        return CommandResult(success=True, action="stop")

    def _cmd_share(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :share command."""
        if self.state.chapter is None:
            return CommandResult(success=False, message="Open a surah first")
        return CommandResult(success=True, action="share")

    def _cmd_theme(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :theme command."""
        return CommandResult(success=True, action="toggle_theme")

    def _cmd_write(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :write command."""
        return CommandResult(success=True, action="write")

    def _cmd_download(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :download command; the argument picks a text edition."""
        return CommandResult(
            success=True,
            action="download",
            data={"edition": cmd.first_arg},
        )
