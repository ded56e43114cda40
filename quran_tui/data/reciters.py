"""Reciter table and audio addressing."""

from typing import List, Optional, Sequence

from quran_tui.data.types import Reciter


DEFAULT_AUDIO_BASE_URL = "https://quranaudio.pages.dev"

_RECITER_TABLE: Sequence[Reciter] = (
    Reciter(1, "مشاري بن راشد العفاسي"),
    Reciter(2, "أبو بكر الشاطري"),
    Reciter(3, "ناصر القطامي"),
)

DEFAULT_RECITER = _RECITER_TABLE[0]


def all_reciters() -> List[Reciter]:
    """Return all reciters in display order."""
    return list(_RECITER_TABLE)


def get_reciter(reciter_id: int) -> Optional[Reciter]:
    """Find a reciter by id."""
    for reciter in _RECITER_TABLE:
        if reciter.id == reciter_id:
            return reciter
    return None


def next_reciter(reciter: Reciter) -> Reciter:
    """Return the reciter after ``reciter`` (cyclic)."""
    ids = [r.id for r in _RECITER_TABLE]
    try:
        idx = ids.index(reciter.id)
    except ValueError:
        return DEFAULT_RECITER
    return _RECITER_TABLE[(idx + 1) % len(_RECITER_TABLE)]


def audio_url(
    reciter_id: int,
    chapter_id: int,
    verse_id: int,
    base_url: str = DEFAULT_AUDIO_BASE_URL,
) -> str:
    """Build the streaming address for one recited verse."""
    return f"{base_url.rstrip('/')}/{reciter_id}/{chapter_id}_{verse_id}.mp3"
