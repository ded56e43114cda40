"""Reader state owned by the application."""

from dataclasses import dataclass, field
from typing import List, Optional

from quran_tui.backend.translations import TranslationKey
from quran_tui.config import Config
from quran_tui.data.query import filter_chapters
from quran_tui.data.reciters import DEFAULT_RECITER, get_reciter
from quran_tui.data.store import find_chapter
from quran_tui.data.types import (
    AlignedVerse,
    Chapter,
    Reciter,
    TranslatedVerse,
    Translator,
    align_translations,
)

UNKNOWN_CHAPTER_TITLE = "Unknown Surah"
NO_TRANSLATOR_LABEL = "Select translation"
# Chapter used for translation requests when nothing valid is selected
FALLBACK_CHAPTER_ID = 1


@dataclass
class ReaderState:
    """Everything the views render from.

    The app is the only writer; widgets get values from it, never from
    module globals.
    """

    chapters: List[Chapter] = field(default_factory=list)
    # Chapter list view
    query: str = ""
    ascending: bool = True
    # Verse view
    chapter_id: Optional[int] = None
    dark_mode: bool = True
    reciter: Reciter = DEFAULT_RECITER
    # Translations
    translators: List[Translator] = field(default_factory=list)
    translator: Optional[Translator] = None
    translations: List[TranslatedVerse] = field(default_factory=list)
    preferred_translator: Optional[str] = None

    @classmethod
    def from_config(cls, config: Config, chapters: List[Chapter]) -> "ReaderState":
        """Initial state from the user's configuration."""
        return cls(
            chapters=chapters,
            ascending=config.ascending,
            dark_mode=config.dark_mode,
            reciter=get_reciter(config.default_reciter) or DEFAULT_RECITER,
            preferred_translator=config.default_translator,
        )

    # ---- chapter list ----

    def visible_chapters(self) -> List[Chapter]:
        """Chapters for the list view under the current query and order."""
        return filter_chapters(self.chapters, self.query, self.ascending)

    def toggle_sort(self) -> bool:
        """Flip the sort direction. Returns the new ``ascending`` value."""
        self.ascending = not self.ascending
        return self.ascending

    # ---- verse view ----

    @property
    def chapter(self) -> Optional[Chapter]:
        """The selected chapter, if it exists."""
        if self.chapter_id is None:
            return None
        return find_chapter(self.chapters, self.chapter_id)

    @property
    def chapter_title(self) -> str:
        chapter = self.chapter
        return chapter.name if chapter else UNKNOWN_CHAPTER_TITLE

    @property
    def translator_label(self) -> str:
        return self.translator.name if self.translator else NO_TRANSLATOR_LABEL

    def open_chapter(self, chapter_id: int) -> None:
        """Select a chapter; translations of the previous one are dropped."""
        if chapter_id != self.chapter_id:
            self.translations = []
        self.chapter_id = chapter_id

    def close_chapter(self) -> None:
        """Return to the chapter list."""
        self.chapter_id = None
        self.translations = []

    def aligned_verses(self) -> List[AlignedVerse]:
        """Verses of the selected chapter paired by position with translations."""
        chapter = self.chapter
        if chapter is None:
            return []
        return align_translations(chapter.verses, self.translations)

    # ---- translators ----

    def set_translators(self, translators: List[Translator]) -> bool:
        """Store a fetched translator list and pick a default.

        Returns:
            True if the selected translator changed
        """
        self.translators = translators
        if self.translator and any(
            t.identifier == self.translator.identifier for t in translators
        ):
            return False
        chosen = None
        if self.preferred_translator:
            chosen = self.find_translator(self.preferred_translator)
        if chosen is None and translators:
            chosen = translators[0]
        changed = chosen != self.translator
        self.translator = chosen
        return changed

    def find_translator(self, identifier: str) -> Optional[Translator]:
        """Look up a fetched translator by identifier (case-insensitive)."""
        needle = identifier.lower()
        for translator in self.translators:
            if translator.identifier.lower() == needle:
                return translator
        return None

    def select_translator(self, translator: Translator) -> None:
        self.translator = translator

    def translation_key(self) -> Optional[TranslationKey]:
        """Key for the translation the current selection needs."""
        if self.translator is None:
            return None
        chapter_id = self.chapter_id if self.chapter is not None else FALLBACK_CHAPTER_ID
        return TranslationKey(chapter_id, self.translator.identifier)

    def apply_translation(
        self, key: TranslationKey, verses: Optional[List[TranslatedVerse]]
    ) -> bool:
        """Apply a finished fetch if it still matches the selection.

        ``verses`` is None for a failed fetch; the current translations
        are kept.

        Returns:
            False when nothing was applied (failed or stale result)
        """
        if verses is None or key != self.translation_key():
            return False
        self.translations = verses
        return True
