"""Remote translations, recitation sequencing and audio output."""

from quran_tui.backend.translations import (
    TranslationClient,
    TranslationError,
    TranslationFetcher,
    TranslationKey,
)
from quran_tui.backend.playback import PlaybackSequencer, PlaybackSignal, PlaybackState
from quran_tui.backend.audio import AudioPlayer, find_player

__all__ = [
    "TranslationClient",
    "TranslationError",
    "TranslationFetcher",
    "TranslationKey",
    "PlaybackSequencer",
    "PlaybackSignal",
    "PlaybackState",
    "AudioPlayer",
    "find_player",
]
