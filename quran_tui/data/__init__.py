"""Data types, bundled text and chapter queries."""

from quran_tui.data.types import (
    AlignedVerse,
    Chapter,
    Reciter,
    TranslatedVerse,
    Translator,
    Verse,
    align_translations,
)
from quran_tui.data.store import (
    BUNDLED_DATA_FILE,
    clear_cache,
    find_chapter,
    get_chapters,
    load_chapters,
    save_chapters,
)
from quran_tui.data.query import filter_chapters, filter_translators
from quran_tui.data.reciters import (
    DEFAULT_RECITER,
    all_reciters,
    audio_url,
    get_reciter,
    next_reciter,
)

__all__ = [
    "AlignedVerse",
    "Chapter",
    "Reciter",
    "TranslatedVerse",
    "Translator",
    "Verse",
    "align_translations",
    "BUNDLED_DATA_FILE",
    "clear_cache",
    "find_chapter",
    "get_chapters",
    "load_chapters",
    "save_chapters",
    "filter_chapters",
    "filter_translators",
    "DEFAULT_RECITER",
    "all_reciters",
    "audio_url",
    "get_reciter",
    "next_reciter",
]
