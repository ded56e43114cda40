"""Tests for reader state and configuration."""

import json

import pytest
import requests

from quran_tui.backend.translations import TranslationClient, TranslationFetcher, TranslationKey
from quran_tui.config import Config
from quran_tui.session import (
    FALLBACK_CHAPTER_ID,
    NO_TRANSLATOR_LABEL,
    UNKNOWN_CHAPTER_TITLE,
    ReaderState,
)
from quran_tui.data.types import Chapter, TranslatedVerse, Translator, Verse


def _chapter(chapter_id, name, count):
    return Chapter(
        id=chapter_id,
        name=name,
        transliteration=f"Surah {chapter_id}",
        type="meccan",
        total_verses=count,
        verses=tuple(Verse(i, f"v{i}") for i in range(1, count + 1)),
    )


def _translator(identifier, name=""):
    return Translator(identifier=identifier, language="fa", name=name or identifier, english_name="")


@pytest.fixture
def state():
    return ReaderState(chapters=[_chapter(1, "الفاتحة", 7), _chapter(108, "الكوثر", 3)])


MAKAREM = _translator("fa.makarem", "مکارم شیرازی")
ANSARIAN = _translator("fa.ansarian", "انصاریان")


class TestChapterSelection:
    """Test chapter selection and placeholders."""

    def test_placeholders(self, state):
        """Nothing selected shows the placeholders."""
        assert state.chapter is None
        assert state.chapter_title == UNKNOWN_CHAPTER_TITLE
        assert state.translator_label == NO_TRANSLATOR_LABEL
        assert state.aligned_verses() == []

    def test_unknown_chapter_id(self, state):
        """An id that is not in the data shows the placeholder title."""
        state.open_chapter(2)
        assert state.chapter is None
        assert state.chapter_title == UNKNOWN_CHAPTER_TITLE

    def test_open_chapter(self, state):
        """Opening a chapter exposes its name and verses."""
        state.open_chapter(108)
        assert state.chapter_title == "الكوثر"
        aligned = state.aligned_verses()
        assert len(aligned) == 3
        assert all(a.translation is None for a in aligned)

    def test_switching_drops_translations(self, state):
        """Translations of the previous chapter are not reused."""
        state.open_chapter(1)
        state.translations = [TranslatedVerse(1, "x")]
        state.open_chapter(1)
        assert state.translations
        state.open_chapter(108)
        assert state.translations == []

    def test_close_chapter(self, state):
        state.open_chapter(1)
        state.close_chapter()
        assert state.chapter_id is None

    def test_toggle_sort(self, state):
        """Toggling twice restores the original order."""
        before = [c.id for c in state.visible_chapters()]
        assert state.toggle_sort() is False
        assert [c.id for c in state.visible_chapters()] == [108, 1]
        state.toggle_sort()
        assert [c.id for c in state.visible_chapters()] == before

    def test_query(self, state):
        state.query = "الكوثر"
        assert [c.id for c in state.visible_chapters()] == [108]


class TestTranslatorSelection:
    """Test picking translators."""

    def test_first_is_default(self, state):
        """The first fetched translator is selected."""
        assert state.set_translators([MAKAREM, ANSARIAN]) is True
        assert state.translator == MAKAREM
        assert state.translator_label == "مکارم شیرازی"

    def test_preferred(self, state):
        """A configured translator wins over the first one."""
        state.preferred_translator = "FA.ANSARIAN"
        state.set_translators([MAKAREM, ANSARIAN])
        assert state.translator == ANSARIAN

    def test_preferred_missing(self, state):
        """An unavailable preference falls back to the first."""
        state.preferred_translator = "en.sahih"
        state.set_translators([MAKAREM, ANSARIAN])
        assert state.translator == MAKAREM

    def test_current_kept(self, state):
        """A refetch keeps a still-available selection."""
        state.set_translators([MAKAREM, ANSARIAN])
        state.select_translator(ANSARIAN)
        assert state.set_translators([MAKAREM, ANSARIAN]) is False
        assert state.translator == ANSARIAN

    def test_empty_list(self, state):
        """No translators clears the selection."""
        state.set_translators([MAKAREM])
        assert state.set_translators([]) is True
        assert state.translator is None

    def test_find_translator(self, state):
        state.set_translators([MAKAREM, ANSARIAN])
        assert state.find_translator("fa.ansarian") == ANSARIAN
        assert state.find_translator("nope") is None


class TestTranslationKey:
    """Test which translation the selection asks for."""

    def test_no_translator(self, state):
        state.open_chapter(1)
        assert state.translation_key() is None

    def test_key(self, state):
        state.set_translators([MAKAREM])
        state.open_chapter(108)
        assert state.translation_key() == TranslationKey(108, "fa.makarem")

    def test_fallback_chapter(self, state):
        """Without a valid chapter the fallback chapter is requested."""
        state.set_translators([MAKAREM])
        assert state.translation_key() == TranslationKey(FALLBACK_CHAPTER_ID, "fa.makarem")
        state.open_chapter(999)
        assert state.translation_key() == TranslationKey(FALLBACK_CHAPTER_ID, "fa.makarem")

    def test_apply_matching(self, state):
        """A result for the current selection is applied."""
        state.set_translators([MAKAREM])
        state.open_chapter(108)
        verses = [TranslatedVerse(1, "a"), TranslatedVerse(2, "b")]
        assert state.apply_translation(TranslationKey(108, "fa.makarem"), verses) is True
        assert [a.translation for a in state.aligned_verses()] == ["a", "b", None]

    def test_stale_result_discarded(self, state):
        """A result for an old chapter or translator is dropped."""
        state.set_translators([MAKAREM, ANSARIAN])
        state.open_chapter(1)
        old_key = state.translation_key()
        state.open_chapter(108)
        assert state.apply_translation(old_key, [TranslatedVerse(1, "old")]) is False
        assert state.translations == []

        key = state.translation_key()
        state.select_translator(ANSARIAN)
        assert state.apply_translation(key, [TranslatedVerse(1, "old")]) is False


class TestConfig:
    """Test configuration persistence."""

    def test_defaults(self):
        config = Config()
        assert config.translator_language == "fa"
        assert config.default_reciter == 1
        assert config.dark_mode is True
        assert config.data_file is None

    def test_roundtrip(self, tmp_path):
        """save -> load should preserve all fields."""
        path = tmp_path / "sub" / "config.json"
        config = Config(
            default_translator="fa.makarem",
            default_reciter=3,
            dark_mode=False,
            ascending=False,
            audio_player="mpv --volume=50",
        )
        config.save(path)
        assert Config.load(path) == config

    def test_missing_file(self, tmp_path):
        assert Config.load(tmp_path / "none.json") == Config()

    def test_broken_file(self, tmp_path):
        """Unreadable JSON gives defaults."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert Config.load(path) == Config()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"dark_mode": False, "font_size": 22}))
        config = Config.load(path)
        assert config.dark_mode is False

    def test_chapters_file_default(self, tmp_path):
        """Without a download the bundled sample is used."""
        assert Config().chapters_file(tmp_path / "quran.json") is None

    def test_chapters_file_downloaded(self, tmp_path):
        """A downloaded text is preferred over the bundled sample."""
        downloaded = tmp_path / "quran.json"
        downloaded.write_text("[]")
        assert Config().chapters_file(downloaded) == downloaded

    def test_chapters_file_configured(self, tmp_path):
        """An explicit data_file wins."""
        downloaded = tmp_path / "quran.json"
        downloaded.write_text("[]")
        config = Config(data_file=str(tmp_path / "mine.json"))
        assert config.chapters_file(downloaded) == tmp_path / "mine.json"

    def test_state_from_config(self):
        """Initial state follows the config."""
        config = Config(default_reciter=2, dark_mode=False, ascending=False,
                        default_translator="fa.ansarian")
        state = ReaderState.from_config(config, [])
        assert state.reciter.id == 2
        assert state.dark_mode is False
        assert state.ascending is False
        assert state.preferred_translator == "fa.ansarian"

    def test_bad_reciter_falls_back(self):
        state = ReaderState.from_config(Config(default_reciter=42), [])
        assert state.reciter.id == 1


class TestFailedFetch:
    """A failed fetch must not disturb what is shown."""

    def test_prior_translations_kept(self, state):
        """A failed fetch fed back into the state keeps what was shown."""
        class DownSession:
            def get(self, *args, **kwargs):
                raise requests.ConnectionError("offline")

        state.set_translators([MAKAREM])
        state.open_chapter(108)
        prior = [TranslatedVerse(1, "a")]
        state.apply_translation(state.translation_key(), prior)

        fetcher = TranslationFetcher(TranslationClient(session=DownSession()))
        key = state.translation_key()
        result = fetcher.translation(key)
        assert result is None
        assert state.apply_translation(key, result) is False
        assert state.translations == prior
        assert [a.translation for a in state.aligned_verses()] == ["a", None, None]

    def test_failed_fetch_not_applied(self, state):
        """A None result for the current key leaves translations alone."""
        state.set_translators([MAKAREM])
        state.open_chapter(1)
        prior = [TranslatedVerse(1, "x")]
        state.translations = prior
        assert state.apply_translation(state.translation_key(), None) is False
        assert state.translations is prior
