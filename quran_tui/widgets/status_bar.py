"""Status bar widget."""

from typing import Optional

from rich.text import Text
from textual.widgets import Static


class StatusBar(Static):
    """Status bar showing position, selections and keybinding hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._mode = "list"
        self._location = ""
        self._translator = ""
        self._reciter = ""
        self._playing = False
        self._message: Optional[str] = None

    def set_mode(self, mode: str) -> None:
        """Set the current mode: list, verses, command."""
        self._mode = mode
        self._message = None
        self._update()

    def set_location(self, location: str) -> None:
        """Set the location text, e.g. "Al-Fatihah 1/7" or "6 surahs"."""
        self._location = location
        self._update()

    def set_sources(self, translator: str, reciter: str) -> None:
        """Set the translator and reciter labels."""
        self._translator = translator
        self._reciter = reciter
        self._update()

    def set_playing(self, playing: bool) -> None:
        self._playing = playing
        self._update()

    def show_message(self, message: str) -> None:
        """Show a temporary message."""
        self._message = message
        self._update()

    def clear_message(self) -> None:
        self._message = None
        self._update()

    def _update(self) -> None:
        text = Text()

        if self._location:
            text.append(self._location, style="bold")

        if self._mode == "verses":
            if self._translator:
                text.append(" | ")
                text.append(f"[{self._translator}]", style="cyan")
            if self._reciter:
                text.append(" | ")
                text.append(self._reciter, style="magenta")
            if self._playing:
                text.append(" ")
                text.append("PLAYING", style="bold black on green")

        if self._message:
            text.append("  ")
            text.append(self._message, style="yellow")
        else:
            for i, (key, desc) in enumerate(self._get_hints()):
                text.append("  " if i == 0 else " ", style="dim")
                text.append(key, style="bold yellow")
                text.append(f" {desc}", style="dim")

        self.update(text)

    def _get_hints(self) -> list[tuple[str, str]]:
        """Get keybinding hints for the current mode."""
        if self._mode == "list":
            return [
                ("/", "filter"),
                ("o", "order"),
                ("Enter", "open"),
                (":", "cmd"),
                ("?", "help"),
                ("q", "quit"),
            ]
        elif self._mode == "verses":
            return [
                ("space", "play"),
                ("t", "transl"),
                ("r", "reciter"),
                ("y", "share"),
                ("Esc", "back"),
            ]
        elif self._mode == "command":
            return [
                ("Enter", "run"),
                ("Esc", "cancel"),
            ]
        return []
