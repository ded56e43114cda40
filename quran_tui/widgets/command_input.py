"""Ex-style command line widget."""

from typing import List, Optional

from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

MAX_HISTORY = 50


class CommandInput(Widget):
    """One-line ``:`` prompt with history (up/down) and tab completion."""

    DEFAULT_CSS = """
    CommandInput {
        dock: bottom;
        height: 1;
        layout: horizontal;
        background: $surface;
    }

    CommandInput > .command-prefix {
        width: 1;
        height: 1;
    }

    CommandInput > .command-text {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
        background: $surface;
    }

    CommandInput > .command-text:focus {
        border: none;
    }
    """

    class CommandSubmitted(Message):
        """Message sent when a command is submitted."""

        def __init__(self, command: str) -> None:
            self.command = command
            super().__init__()

    class CommandCancelled(Message):
        """Message sent when command input is cancelled."""

        pass

    def __init__(self, commands: Optional[List[str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._commands = sorted(commands or [])
        self._history: List[str] = []
        self._cursor: Optional[int] = None
        self._draft = ""

    def compose(self) -> ComposeResult:
        yield Static(":", classes="command-prefix")
        yield Input(classes="command-text", id="cmd-input")

    @property
    def input_widget(self) -> Input:
        return self.query_one("#cmd-input", Input)

    def reset(self) -> None:
        """Clear the prompt for a new command."""
        self.input_widget.value = ""
        self._cursor = None
        self._draft = ""

    def focus(self, scroll_visible: bool = True) -> None:
        self.input_widget.focus(scroll_visible=scroll_visible)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        command = self.input_widget.value.strip()
        if command and (not self._history or self._history[-1] != command):
            self._history = (self._history + [command])[-MAX_HISTORY:]
        self.post_message(self.CommandSubmitted(command))

    def on_key(self, event) -> None:
        key = event.key
        if key not in ("escape", "up", "down", "tab"):
            return
        event.prevent_default()
        event.stop()
        if key == "escape":
            self.post_message(self.CommandCancelled())
        elif key == "up":
            self._recall(-1)
        elif key == "down":
            self._recall(1)
        else:
            self._complete()

    def _recall(self, step: int) -> None:
        """Walk the history; stepping past the newest entry restores the draft."""
        if not self._history:
            return
        if self._cursor is None:
            if step > 0:
                return
            self._draft = self.input_widget.value
            self._cursor = len(self._history) - 1
        else:
            self._cursor += step

        if self._cursor >= len(self._history):
            self._cursor = None
            self.input_widget.value = self._draft
            return
        self._cursor = max(self._cursor, 0)
        self.input_widget.value = self._history[self._cursor]

    def _complete(self) -> None:
        """Complete the command word if it has a unique match."""
        value = self.input_widget.value.lstrip()
        if not value or " " in value:
            return
        matches = [c for c in self._commands if c.startswith(value)]
        if len(matches) == 1:
            self.input_widget.value = matches[0] + " "
            self.input_widget.cursor_position = len(self.input_widget.value)
