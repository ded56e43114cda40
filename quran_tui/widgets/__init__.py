"""Textual widgets for quran-tui."""

from quran_tui.widgets.chapter_list import ChapterList
from quran_tui.widgets.command_input import CommandInput
from quran_tui.widgets.reciter_picker import ReciterPicker
from quran_tui.widgets.status_bar import StatusBar
from quran_tui.widgets.translator_picker import TranslatorPicker
from quran_tui.widgets.verse_view import VerseRow, VerseView

__all__ = [
    "ChapterList",
    "CommandInput",
    "ReciterPicker",
    "StatusBar",
    "TranslatorPicker",
    "VerseRow",
    "VerseView",
]
