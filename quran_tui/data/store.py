"""Bundled Quran text loading."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from quran_tui.data.types import Chapter

logger = logging.getLogger(__name__)

BUNDLED_DATA_FILE = Path(__file__).parent / "quran.json"

_cache: Optional[List[Chapter]] = None


def load_chapters(path: Optional[Union[str, Path]] = None) -> List[Chapter]:
    """Parse the chapter document at ``path`` (bundled file by default).

    The whole document is read in one go. Any I/O or schema problem
    yields an empty list; a half-parsed file is never returned.
    """
    data_file = Path(path) if path else BUNDLED_DATA_FILE

    try:
        with open(data_file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise TypeError(f"expected a list of chapters, got {type(data).__name__}")
        chapters = [Chapter.from_dict(item) for item in data]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
        logger.warning("Could not load chapters from %s", data_file, exc_info=True)
        return []

    logger.info("Loaded %d chapters from %s", len(chapters), data_file)
    return chapters


def save_chapters(chapters: List[Chapter], path: Union[str, Path]) -> None:
    """Write ``chapters`` in the bundled schema, e.g. after a full download."""
    data_file = Path(path)
    data_file.parent.mkdir(parents=True, exist_ok=True)
    with open(data_file, "w", encoding="utf-8") as f:
        json.dump([c.to_dict() for c in chapters], f, ensure_ascii=False)
    logger.info("Saved %d chapters to %s", len(chapters), data_file)


def get_chapters(path: Optional[Union[str, Path]] = None) -> List[Chapter]:
    """Return the process-wide chapter list, loading it on first use."""
    global _cache
    if _cache is None:
        _cache = load_chapters(path)
    return _cache


def clear_cache() -> None:
    """Forget the cached chapter list."""
    global _cache
    _cache = None


def find_chapter(chapters: List[Chapter], chapter_id: int) -> Optional[Chapter]:
    """Find a chapter by id."""
    for chapter in chapters:
        if chapter.id == chapter_id:
            return chapter
    return None
