"""Tests for the recitation sequencer and audio addressing."""

import pytest

from quran_tui.backend.audio import AudioPlayer, find_player
from quran_tui.backend.playback import PlaybackSequencer, PlaybackState
from quran_tui.data.reciters import (
    DEFAULT_RECITER,
    all_reciters,
    audio_url,
    get_reciter,
    next_reciter,
)
from quran_tui.data.types import Chapter, Verse


def _chapter(chapter_id, count):
    return Chapter(
        id=chapter_id,
        name="",
        transliteration=f"Surah {chapter_id}",
        type="meccan",
        total_verses=count,
        verses=tuple(Verse(i, f"verse {i}") for i in range(1, count + 1)),
    )


@pytest.fixture
def seq():
    return PlaybackSequencer(audio_base_url="https://audio.test")


class TestReciters:
    """Test the reciter table."""

    def test_table(self):
        """Three reciters, ids 1 to 3."""
        assert [r.id for r in all_reciters()] == [1, 2, 3]
        assert DEFAULT_RECITER.id == 1

    def test_get_reciter(self):
        """Lookup by id."""
        assert get_reciter(2).name == "أبو بكر الشاطري"
        assert get_reciter(9) is None

    def test_next_reciter_wraps(self):
        """Cycling past the last reciter returns to the first."""
        assert next_reciter(get_reciter(1)).id == 2
        assert next_reciter(get_reciter(3)).id == 1

    def test_audio_url(self):
        """URLs follow {base}/{reciter}/{chapter}_{verse}.mp3."""
        assert audio_url(3, 1, 2) == "https://quranaudio.pages.dev/3/1_2.mp3"
        assert audio_url(1, 114, 6, "https://audio.test/") == "https://audio.test/1/114_6.mp3"


class TestSequencerStart:
    """Test starting and stepping through a chapter."""

    def test_starts_at_first_verse(self, seq):
        """start() plays verse index 0."""
        signal = seq.start(_chapter(1, 7))
        assert seq.state is PlaybackState.PLAYING
        assert seq.index == 0
        assert signal.action == "play"
        assert signal.verse_id == 1
        assert signal.url == "https://audio.test/1/1_1.mp3"

    def test_two_verse_chapter(self, seq):
        """Two verses play, then the sequencer stops on the last one."""
        seq.start(_chapter(108, 2))
        signal = seq.on_item_finished()
        assert signal.action == "play"
        assert seq.index == 1
        assert seq.is_playing

        signal = seq.on_item_finished()
        assert signal.action == "stop"
        assert seq.state is PlaybackState.STOPPED
        assert seq.index == 1

    def test_stays_playing_until_last(self, seq):
        """After n-1 completions the last verse is playing."""
        n = 5
        seq.start(_chapter(113, n))
        for _ in range(n - 1):
            seq.on_item_finished()
        assert seq.is_playing
        assert seq.index == n - 1

    def test_index_within_bounds(self, seq):
        """Extra completions never move the index past the end."""
        chapter = _chapter(112, 4)
        seq.start(chapter)
        for _ in range(10):
            seq.on_item_finished()
            assert 0 <= seq.index < len(chapter.verses)
        assert seq.state is PlaybackState.STOPPED

    def test_empty_chapter(self, seq):
        """A chapter without verses never starts."""
        signal = seq.start(_chapter(1, 0))
        assert signal.action == ""
        assert seq.state is PlaybackState.STOPPED
        assert seq.on_item_finished().action == ""

    def test_finished_while_stopped_is_ignored(self, seq):
        """Completions after stop() do not advance."""
        seq.start(_chapter(1, 7))
        seq.stop()
        assert seq.on_item_finished().action == ""
        assert seq.index == 0


class TestSequencerControls:
    """Test stop, reset, and reciter or chapter changes."""

    def test_stop_keeps_index(self, seq):
        """Pausing keeps the position."""
        seq.start(_chapter(1, 7))
        seq.on_item_finished()
        seq.on_item_finished()
        signal = seq.stop()
        assert signal.action == "stop"
        assert seq.index == 2
        assert seq.state is PlaybackState.STOPPED

    def test_stop_when_stopped(self, seq):
        """stop() on an idle sequencer does nothing."""
        assert seq.stop().action == ""

    def test_reset(self, seq):
        """reset() stops and forgets the chapter."""
        seq.start(_chapter(1, 7))
        seq.on_item_finished()
        seq.reset()
        assert seq.index == 0
        assert seq.chapter is None
        assert not seq.is_playing

    def test_set_reciter_replays_current(self, seq):
        """Changing reciter while playing replays the same verse."""
        seq.start(_chapter(1, 7))
        seq.on_item_finished()
        before = seq.generation
        signal = seq.set_reciter(get_reciter(2))
        assert signal.action == "play"
        assert signal.index == 1
        assert signal.reciter_id == 2
        assert signal.url == "https://audio.test/2/1_2.mp3"
        assert signal.generation == before + 1
        assert seq.reciter.id == 2

    def test_set_reciter_when_stopped(self, seq):
        """Changing reciter while stopped only records it."""
        signal = seq.set_reciter(get_reciter(3))
        assert signal.action == ""
        assert seq.reciter.id == 3

    def test_set_chapter_replays_same_index(self, seq):
        """Switching chapter while playing keeps the index."""
        seq.start(_chapter(1, 7))
        seq.on_item_finished()
        signal = seq.set_chapter(_chapter(113, 5))
        assert signal.action == "play"
        assert signal.chapter_id == 113
        assert signal.verse_id == 2

    def test_set_chapter_out_of_range_stops(self, seq):
        """An index past the new chapter's end stops playback."""
        seq.start(_chapter(1, 7))
        for _ in range(5):
            seq.on_item_finished()
        signal = seq.set_chapter(_chapter(108, 3))
        assert signal.action == "stop"
        assert seq.state is PlaybackState.STOPPED

    def test_play_without_chapter_stops(self, seq):
        """A play request with no chapter loaded stops instead of failing."""
        seq._state = PlaybackState.PLAYING
        signal = seq.set_reciter(get_reciter(2))
        assert signal.action == ""
        assert seq.state is PlaybackState.STOPPED
        assert seq.generation == 0

    def test_generation_increases(self, seq):
        """Each play signal carries a new generation."""
        first = seq.start(_chapter(1, 7))
        second = seq.on_item_finished()
        assert second.generation > first.generation


class TestAudioPlayer:
    """Test the player wrapper without starting processes."""

    def test_fallback_unavailable(self):
        """A forced fallback player reports itself unavailable."""
        player = AudioPlayer(force_fallback=True)
        assert not player.available
        assert player.name == ""
        assert player.play("https://audio.test/1/1_1.mp3") is False
        assert player.wait() is False

    def test_stop_without_process(self):
        """stop() with nothing playing is a no-op."""
        player = AudioPlayer(force_fallback=True)
        player.stop()

    def test_configured_player_missing(self):
        """An uninstalled configured player resolves to None."""
        assert find_player("no-such-player-binary --flag") is None
