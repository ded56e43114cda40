"""Verse list widget with translations."""

from typing import List, Optional

from rich.text import Text
from textual.containers import Vertical
from textual.widgets import Static

from quran_tui.data.types import AlignedVerse


class VerseRow(Static):
    """Single verse with its translation underneath."""

    DEFAULT_CSS = """
    VerseRow {
        width: 100%;
        padding: 0 2 1 2;
        background: $surface;
    }
    VerseRow.current {
        background: $surface-lighten-1;
    }
    VerseRow.reciting {
        background: $primary-darken-3;
    }
    """

    def __init__(self, item: AlignedVerse, **kwargs):
        super().__init__("", **kwargs)
        self.item = item
        self._is_current = False
        self._is_reciting = False

    def set_state(self, is_current: bool = False, is_reciting: bool = False) -> None:
        """Update the row state and re-render."""
        self._is_current = is_current
        self._is_reciting = is_reciting
        self._render_verse()

        self.remove_class("current", "reciting")
        if is_reciting:
            self.add_class("reciting")
        elif is_current:
            self.add_class("current")

    def _render_verse(self) -> None:
        text = Text(justify="right")

        if self._is_reciting:
            text.append(self.item.verse.text, style="bold blue")
        else:
            text.append(self.item.verse.text)
        text.append(f" ({self.item.verse.id})", style="bold yellow")
        if self._is_current:
            text.append(" ◀", style="bold cyan")

        if self.item.translation:
            text.append("\n")
            text.append(self.item.translation, style="dim")

        self.update(text)


class VerseView(Vertical):
    """Widget that displays a chapter's verses.

    Rows are addressed by position (0-based), matching the positional
    pairing of verses and translations.
    """

    DEFAULT_CSS = """
    VerseView {
        width: 100%;
        height: auto;
        background: $surface;
    }
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._items: List[AlignedVerse] = []
        self._rows: List[VerseRow] = []
        self._current = 0
        self._reciting: Optional[int] = None

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def verse_count(self) -> int:
        return len(self._items)

    def update_content(self, items: List[AlignedVerse], keep_position: bool = False) -> None:
        """Replace the displayed verses.

        Args:
            items: Verses paired with translations
            keep_position: Keep the cursor (used when only translations changed)
        """
        self._items = items
        if not keep_position or self._current >= len(items):
            self._current = 0
        self._rebuild_rows()

    def _rebuild_rows(self) -> None:
        self._rows = []
        self.remove_children()
        for item in self._items:
            row = VerseRow(item)
            self._rows.append(row)
            self.mount(row)
        self._update_states()

    def _update_states(self) -> None:
        for i, row in enumerate(self._rows):
            row.set_state(i == self._current, i == self._reciting)

    def _scroll_to(self, index: int) -> None:
        if 0 <= index < len(self._rows):
            self._rows[index].scroll_visible()

    def set_reciting(self, index: Optional[int]) -> None:
        """Mark the verse being recited (None clears the mark)."""
        self._reciting = index
        if index is not None and 0 <= index < len(self._items):
            self._current = index
            self._update_states()
            self._scroll_to(index)
        else:
            self._update_states()

    def next_verse(self) -> bool:
        """Move the cursor down. Returns False at the end."""
        if self._current + 1 >= len(self._items):
            return False
        self._current += 1
        self._update_states()
        self._scroll_to(self._current)
        return True

    def prev_verse(self) -> bool:
        """Move the cursor up. Returns False at the start."""
        if self._current <= 0:
            return False
        self._current -= 1
        self._update_states()
        self._scroll_to(self._current)
        return True

    def move_to(self, index: int) -> None:
        """Move the cursor to ``index`` (clamped)."""
        if not self._items:
            return
        self._current = max(0, min(index, len(self._items) - 1))
        self._update_states()
        self._scroll_to(self._current)

    def get_current(self) -> Optional[AlignedVerse]:
        if 0 <= self._current < len(self._items):
            return self._items[self._current]
        return None
