"""Reciter picker widget."""

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import ListItem, ListView, Static

from quran_tui.data.reciters import all_reciters
from quran_tui.data.types import Reciter


class ReciterPicker(Widget):
    """Widget for choosing the narrator."""

    DEFAULT_CSS = """
    ReciterPicker {
        width: 50;
        height: 10;
        background: $surface;
        border: solid $primary;
        padding: 1;
    }

    ReciterPicker > .picker-title {
        height: 1;
        text-style: bold;
        color: $primary;
    }

    ReciterPicker > .picker-list {
        height: 1fr;
    }
    """

    class ReciterSelected(Message):
        """Message sent when a reciter is selected."""

        def __init__(self, reciter: Reciter) -> None:
            self.reciter = reciter
            super().__init__()

    class Cancelled(Message):
        """Message sent when picker is cancelled."""

        pass

    def __init__(self, current: int = 0, **kwargs) -> None:
        super().__init__(**kwargs)
        self._current = current
        self._reciters = all_reciters()

    def compose(self) -> ComposeResult:
        yield Static("Select reciter", classes="picker-title")
        yield ListView(classes="picker-list", id="picker-list")

    def on_mount(self) -> None:
        lst = self.query_one("#picker-list", ListView)
        for reciter in self._reciters:
            text = Text()
            marker = "* " if reciter.id == self._current else "  "
            text.append(marker, style="bold green")
            text.append(f"{reciter.id}. ", style="bold yellow")
            text.append(reciter.name)
            lst.append(ListItem(Static(text)))

        ids = [r.id for r in self._reciters]
        lst.index = ids.index(self._current) if self._current in ids else 0
        lst.focus()

    def on_key(self, event) -> None:
        if event.key == "escape":
            event.stop()
            self.post_message(self.Cancelled())

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        idx = self.query_one("#picker-list", ListView).index
        if idx is not None and idx < len(self._reciters):
            self.post_message(self.ReciterSelected(self._reciters[idx]))
