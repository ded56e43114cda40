"""Translation edition picker widget."""

from typing import List

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, ListItem, ListView, Static

from quran_tui.data.query import filter_translators
from quran_tui.data.types import Translator


class TranslatorPicker(Widget):
    """Widget for selecting a translation edition."""

    DEFAULT_CSS = """
    TranslatorPicker {
        width: 70;
        height: 18;
        background: $surface;
        border: solid $primary;
        padding: 1;
    }

    TranslatorPicker > .picker-title {
        height: 1;
        text-style: bold;
        color: $primary;
    }

    TranslatorPicker > .picker-input {
        height: 3;
        margin-bottom: 1;
    }

    TranslatorPicker > .picker-list {
        height: 1fr;
    }

    TranslatorPicker > .picker-hint {
        height: 1;
        color: $text-muted;
    }
    """

    class TranslatorSelected(Message):
        """Message sent when a translator is selected."""

        def __init__(self, translator: Translator) -> None:
            self.translator = translator
            super().__init__()

    class Cancelled(Message):
        """Message sent when picker is cancelled."""

        pass

    def __init__(self, translators: List[Translator], current: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._current = current
        self._translators = translators
        self._filtered: List[Translator] = translators

    def compose(self) -> ComposeResult:
        yield Static("Select translation", classes="picker-title")
        yield Input(placeholder="Name, id or language code...", classes="picker-input", id="picker-input")
        yield ListView(classes="picker-list", id="picker-list")
        yield Static("Enter=select, Esc=cancel", classes="picker-hint")

    def on_mount(self) -> None:
        self._update_list()
        self.query_one("#picker-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Narrow the list to editions matching the typed text."""
        event.stop()
        self._filtered = filter_translators(self._translators, event.value.strip())
        self._update_list()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._select_current()

    def on_key(self, event) -> None:
        key = event.key

        if key == "escape":
            event.stop()
            self.post_message(self.Cancelled())
        elif key == "down":
            event.stop()
            lst = self.query_one("#picker-list", ListView)
            if lst.index is not None and lst.index < len(self._filtered) - 1:
                lst.index += 1
        elif key == "up":
            event.stop()
            lst = self.query_one("#picker-list", ListView)
            if lst.index is not None and lst.index > 0:
                lst.index -= 1

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        self._select_current()

    def _update_list(self) -> None:
        lst = self.query_one("#picker-list", ListView)
        lst.clear()

        for translator in self._filtered:
            text = Text()
            if translator.identifier == self._current:
                text.append("* ", style="bold green")
                id_style = "bold green"
            else:
                text.append("  ")
                id_style = "bold cyan"

            text.append(translator.identifier.ljust(22), style=id_style)
            text.append(f"[{translator.language}] ", style="magenta")
            # Mark right-to-left editions
            if translator.direction == "rtl":
                text.append("← ", style="dim")
            text.append(translator.name)
            if translator.english_name and translator.english_name != translator.name:
                text.append(f"  {translator.english_name}", style="dim")
            if translator.type and translator.type != "translation":
                text.append(f"  ({translator.type})", style="dim italic")

            lst.append(ListItem(Static(text)))

        if self._filtered:
            lst.index = 0

    def _select_current(self) -> None:
        lst = self.query_one("#picker-list", ListView)
        if lst.index is not None and lst.index < len(self._filtered):
            self.post_message(self.TranslatorSelected(self._filtered[lst.index]))
