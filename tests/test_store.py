"""Tests for chapter loading and the chapter list query."""

import json

import pytest

from quran_tui.data import store
from quran_tui.data.query import filter_chapters, matches
from quran_tui.data.store import (
    clear_cache,
    find_chapter,
    get_chapters,
    load_chapters,
    save_chapters,
)
from quran_tui.data.types import Chapter, Verse


def _record(chapter_id, transliteration="Test", verses=2):
    return {
        "id": chapter_id,
        "name": f"سورة {chapter_id}",
        "transliteration": transliteration,
        "type": "meccan",
        "total_verses": verses,
        "verses": [{"id": i, "text": f"آية {i}"} for i in range(1, verses + 1)],
    }


def _chapter(chapter_id, name, transliteration):
    return Chapter(
        id=chapter_id,
        name=name,
        transliteration=transliteration,
        type="meccan",
        total_verses=1,
        verses=(Verse(1, "..."),),
    )


@pytest.fixture
def sample():
    return [
        _chapter(1, "الفاتحة", "Al-Fatihah"),
        _chapter(103, "العصر", "Al-'Asr"),
        _chapter(112, "الإخلاص", "Al-Ikhlas"),
        _chapter(113, "الفلق", "Al-Falaq"),
        _chapter(114, "الناس", "An-Nas"),
    ]


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


class TestLoadChapters:
    """Test reading the chapter document."""

    def test_bundled_file(self):
        """The bundled file should load in document order."""
        chapters = load_chapters()
        assert [c.id for c in chapters] == [1, 103, 108, 112, 113, 114]
        fatihah = chapters[0]
        assert fatihah.transliteration == "Al-Fatihah"
        assert fatihah.total_verses == 7
        assert len(fatihah.verses) == 7
        assert fatihah.verses[0].id == 1

    def test_custom_file(self, tmp_path):
        """A file given by path should be parsed."""
        path = tmp_path / "quran.json"
        path.write_text(json.dumps([_record(5, "Al-Ma'idah", 3)]), encoding="utf-8")
        chapters = load_chapters(path)
        assert len(chapters) == 1
        assert chapters[0].id == 5
        assert [v.id for v in chapters[0].verses] == [1, 2, 3]

    def test_missing_file(self, tmp_path):
        """A missing file yields an empty list."""
        assert load_chapters(tmp_path / "nope.json") == []

    def test_malformed_json(self, tmp_path):
        """Broken JSON yields an empty list."""
        path = tmp_path / "quran.json"
        path.write_text("[{", encoding="utf-8")
        assert load_chapters(path) == []

    def test_not_a_list(self, tmp_path):
        """A top-level object is rejected."""
        path = tmp_path / "quran.json"
        path.write_text(json.dumps({"chapters": []}), encoding="utf-8")
        assert load_chapters(path) == []

    def test_missing_key_is_all_or_nothing(self, tmp_path):
        """One bad record discards the whole document."""
        bad = _record(2)
        del bad["verses"]
        path = tmp_path / "quran.json"
        path.write_text(json.dumps([_record(1), bad]), encoding="utf-8")
        assert load_chapters(path) == []


    def test_saved_chapters_reload(self, tmp_path):
        """A saved download reads back as the same chapters."""
        chapters = load_chapters()
        path = tmp_path / "downloads" / "quran.json"
        save_chapters(chapters, path)
        assert load_chapters(path) == chapters


class TestChapterCache:
    """Test the process-wide chapter list."""

    def test_loaded_once(self, tmp_path):
        """The second call should not read the file again."""
        path = tmp_path / "quran.json"
        path.write_text(json.dumps([_record(1)]), encoding="utf-8")
        first = get_chapters(path)
        path.write_text(json.dumps([_record(1), _record(2)]), encoding="utf-8")
        assert get_chapters(path) is first
        assert len(store._cache) == 1

    def test_clear_cache(self, tmp_path):
        """clear_cache forces a reload."""
        path = tmp_path / "quran.json"
        path.write_text(json.dumps([_record(1)]), encoding="utf-8")
        get_chapters(path)
        clear_cache()
        path.write_text(json.dumps([_record(1), _record(2)]), encoding="utf-8")
        assert len(get_chapters(path)) == 2

    def test_find_chapter(self, sample):
        """Chapters are found by id."""
        assert find_chapter(sample, 112).transliteration == "Al-Ikhlas"
        assert find_chapter(sample, 2) is None


class TestFilterChapters:
    """Test chapter list filtering and ordering."""

    def test_empty_query_keeps_all(self, sample):
        """An empty query matches every chapter."""
        assert len(filter_chapters(sample, "")) == len(sample)

    def test_query_matched_as_typed(self, sample):
        """Whitespace in the query is part of the match."""
        assert filter_chapters(sample, "   ") == []
        assert filter_chapters(sample, "al ") == []
        for chapter in filter_chapters(sample, "an-"):
            assert "an-" in chapter.transliteration.casefold()

    def test_transliteration_case_insensitive(self, sample):
        """Queries match transliterations regardless of case."""
        result = filter_chapters(sample, "al-f")
        assert [c.id for c in result] == [1, 113]
        assert filter_chapters(sample, "AL-F") == result

    def test_arabic_name(self, sample):
        """Queries match the Arabic name."""
        result = filter_chapters(sample, "الناس")
        assert [c.id for c in result] == [114]

    def test_no_match(self, sample):
        """A query nothing contains yields an empty list."""
        assert filter_chapters(sample, "zzz") == []

    def test_result_is_subset(self, sample):
        """Every hit comes from the input and satisfies the match."""
        for chapter in filter_chapters(sample, "an"):
            assert chapter in sample
            assert matches(chapter, "an")

    def test_descending(self, sample):
        """Descending order reverses ids."""
        result = filter_chapters(sample, "", ascending=False)
        assert [c.id for c in result] == [114, 113, 112, 103, 1]

    def test_ascending_sorts_unordered_input(self, sample):
        """Output is ordered even if the input is not."""
        shuffled = [sample[3], sample[0], sample[4], sample[1], sample[2]]
        assert [c.id for c in filter_chapters(shuffled)] == [1, 103, 112, 113, 114]

    def test_input_untouched(self, sample):
        """Filtering must not reorder or shrink the input."""
        before = list(sample)
        filter_chapters(sample, "al", ascending=False)
        assert sample == before

    def test_no_matching_chapter_excluded(self, sample):
        """Every chapter that matches appears in the result."""
        result = filter_chapters(sample, "al")
        for chapter in sample:
            if matches(chapter, "al"):
                assert chapter in result

    def test_single_chapter(self):
        """One chapter: empty query keeps it, a miss drops it."""
        chapters = [_chapter(108, "الكوثر", "Al-Kawthar")]
        assert len(filter_chapters(chapters, "")) == 1
        assert len(filter_chapters(chapters, "Yasin")) == 0
