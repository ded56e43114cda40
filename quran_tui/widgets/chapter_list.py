"""Surah list widget with filter box."""

from typing import List

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, ListItem, ListView, Static

from quran_tui.data.types import Chapter


class ChapterList(Widget):
    """Filterable list of chapters.

    The widget only reports what the user typed or picked; the app
    decides which chapters to show and passes them to :meth:`show`.
    """

    DEFAULT_CSS = """
    ChapterList {
        height: 1fr;
        background: $surface;
        padding: 0 1;
    }

    ChapterList > .list-title {
        height: 1;
        text-style: bold;
        color: $primary;
    }

    ChapterList > .list-input {
        height: 3;
        margin-bottom: 1;
    }

    ChapterList > .list-items {
        height: 1fr;
    }
    """

    class QueryChanged(Message):
        """Message sent when the filter text changes."""

        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    class ChapterSelected(Message):
        """Message sent when a chapter is opened."""

        def __init__(self, chapter_id: int) -> None:
            self.chapter_id = chapter_id
            super().__init__()

    class FilterDone(Message):
        """Message sent when the user leaves the filter box."""

        pass

    def __init__(self, title: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._title = title
        self._chapters: List[Chapter] = []

    def compose(self) -> ComposeResult:
        yield Static(self._title, classes="list-title")
        yield Input(placeholder="Search surah name...", classes="list-input", id="filter-input")
        yield ListView(classes="list-items", id="chapter-items")

    @property
    def chapters(self) -> List[Chapter]:
        return self._chapters

    @property
    def filter_input(self) -> Input:
        return self.query_one("#filter-input", Input)

    @property
    def items(self) -> ListView:
        return self.query_one("#chapter-items", ListView)

    def show(self, chapters: List[Chapter]) -> None:
        """Replace the listed chapters."""
        self._chapters = chapters
        lst = self.items
        lst.clear()

        for chapter in chapters:
            text = Text()
            text.append(f"{chapter.id:>4} ", style="bold yellow")
            text.append(chapter.transliteration.ljust(18), style="bold")
            text.append(chapter.name, style="cyan")
            text.append(f"  {chapter.type}, {chapter.total_verses} verses", style="dim")
            lst.append(ListItem(Static(text)))

        if chapters:
            lst.index = 0

    def set_query(self, query: str) -> None:
        """Put ``query`` in the filter box without re-posting it."""
        inp = self.filter_input
        if inp.value != query:
            with inp.prevent(Input.Changed):
                inp.value = query

    def focus_filter(self) -> None:
        self.filter_input.focus()

    def focus_list(self) -> None:
        self.items.focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the filter box opens the first hit."""
        event.stop()
        if self._chapters:
            self.post_message(self.ChapterSelected(self._chapters[0].id))
        else:
            self.post_message(self.FilterDone())

    def on_key(self, event) -> None:
        if event.key == "escape" and self.filter_input.has_focus:
            event.stop()
            self.post_message(self.FilterDone())
        elif event.key == "down" and self.filter_input.has_focus:
            event.stop()
            self.post_message(self.FilterDone())

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        idx = self.items.index
        if idx is not None and idx < len(self._chapters):
            self.post_message(self.ChapterSelected(self._chapters[idx].id))
