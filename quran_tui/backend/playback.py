"""Verse-by-verse recitation sequencing."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from quran_tui.data.reciters import DEFAULT_AUDIO_BASE_URL, DEFAULT_RECITER, audio_url
from quran_tui.data.types import Chapter, Reciter


class PlaybackState(Enum):
    """Sequencer states."""

    STOPPED = "stopped"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackSignal:
    """Instruction for the audio player.

    ``action`` is "play", "stop" or "" (nothing to do).
    """

    action: str = ""
    chapter_id: int = 0
    verse_id: int = 0
    index: int = 0
    reciter_id: int = 0
    url: str = ""
    generation: int = 0


class PlaybackSequencer:
    """Walks a chapter's verses one at a time.

    The sequencer never touches audio itself. Each transition returns a
    :class:`PlaybackSignal`; the caller hands it to the player and reports
    back through :meth:`on_item_finished` when a verse has been recited.
    """

    def __init__(
        self,
        reciter: Reciter = DEFAULT_RECITER,
        audio_base_url: str = DEFAULT_AUDIO_BASE_URL,
    ) -> None:
        self._chapter: Optional[Chapter] = None
        self._reciter = reciter
        self._audio_base_url = audio_base_url
        self._index = 0
        self._state = PlaybackState.STOPPED
        # Bumped on every play signal so stale completions can be told apart
        self._generation = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def chapter(self) -> Optional[Chapter]:
        return self._chapter

    @property
    def reciter(self) -> Reciter:
        return self._reciter

    @property
    def generation(self) -> int:
        return self._generation

    def start(self, chapter: Chapter) -> PlaybackSignal:
        """Begin reciting ``chapter`` from its first verse."""
        self._chapter = chapter
        self._index = 0
        if not chapter.verses:
            self._state = PlaybackState.STOPPED
            return PlaybackSignal()
        self._state = PlaybackState.PLAYING
        return self._play_signal()

    def on_item_finished(self) -> PlaybackSignal:
        """Advance after the current verse has been recited.

        At the last verse the sequencer stops and the index stays put.
        """
        if not self.is_playing or self._chapter is None:
            return PlaybackSignal()
        if self._index + 1 < len(self._chapter.verses):
            self._index += 1
            return self._play_signal()
        self._state = PlaybackState.STOPPED
        return PlaybackSignal(action="stop", chapter_id=self._chapter.id, index=self._index)

    def stop(self) -> PlaybackSignal:
        """Pause; the index is kept."""
        was_playing = self.is_playing
        self._state = PlaybackState.STOPPED
        if not was_playing:
            return PlaybackSignal()
        chapter_id = self._chapter.id if self._chapter else 0
        return PlaybackSignal(action="stop", chapter_id=chapter_id, index=self._index)

    def reset(self) -> PlaybackSignal:
        """Forget the position, e.g. when leaving the chapter."""
        signal = self.stop()
        self._index = 0
        self._chapter = None
        return signal

    def set_reciter(self, reciter: Reciter) -> PlaybackSignal:
        """Switch narrator; replays the current verse when playing."""
        self._reciter = reciter
        if not self.is_playing:
            return PlaybackSignal()
        return self._play_signal()

    def set_chapter(self, chapter: Chapter) -> PlaybackSignal:
        """Switch chapter; replays the verse at the same index when playing."""
        self._chapter = chapter
        if not self.is_playing:
            return PlaybackSignal()
        if self._index >= len(chapter.verses):
            self._state = PlaybackState.STOPPED
            return PlaybackSignal(action="stop", chapter_id=chapter.id, index=self._index)
        return self._play_signal()

    def _play_signal(self) -> PlaybackSignal:
        if self._chapter is None or not 0 <= self._index < len(self._chapter.verses):
            self._state = PlaybackState.STOPPED
            return PlaybackSignal()
        verse = self._chapter.verses[self._index]
        self._generation += 1
        return PlaybackSignal(
            action="play",
            chapter_id=self._chapter.id,
            verse_id=verse.id,
            index=self._index,
            reciter_id=self._reciter.id,
            url=audio_url(self._reciter.id, self._chapter.id, verse.id, self._audio_base_url),
            generation=self._generation,
        )
