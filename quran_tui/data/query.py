"""Chapter list and translation edition filtering."""

from typing import List, Sequence

from quran_tui.data.types import Chapter, Translator


def matches(chapter: Chapter, query: str) -> bool:
    """Case-insensitive substring match on name or transliteration."""
    if not query:
        return True
    needle = query.casefold()
    return (
        needle in chapter.name.casefold()
        or needle in chapter.transliteration.casefold()
    )


def filter_chapters(
    chapters: Sequence[Chapter], query: str = "", ascending: bool = True
) -> List[Chapter]:
    """Return the chapters matching ``query``, ordered by id.

    The input sequence is left untouched.
    """
    filtered = [c for c in chapters if matches(c, query)]
    return sorted(filtered, key=lambda c: c.id, reverse=not ascending)


def filter_translators(translators: Sequence[Translator], query: str = "") -> List[Translator]:
    """Editions matching ``query`` (case-insensitive).

    The query matches a substring of the identifier or either name, or
    the whole language code.

    ``"fa.mak"`` narrows by identifier, ``"fa"`` by language code.
    Order is kept as the API listed it.
    """
    if not query:
        return list(translators)
    needle = query.casefold()
    return [
        t for t in translators
        if needle in t.identifier.casefold()
        or needle == t.language.casefold()
        or needle in t.name.casefold()
        or needle in t.english_name.casefold()
    ]
