"""Data types for quran-tui."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Verse:
    """A single verse (ayah) of a chapter."""

    id: int
    text: str


@dataclass(frozen=True)
class Chapter:
    """A chapter (surah) with its verses."""

    id: int
    name: str
    transliteration: str
    type: str
    total_verses: int
    verses: Tuple[Verse, ...] = ()

    @property
    def title(self) -> str:
        """Return formatted title string."""
        return f"{self.id}. {self.transliteration}"

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        """Create from the bundled JSON schema.

        Raises KeyError, TypeError or ValueError on a malformed record.
        """
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            transliteration=str(data["transliteration"]),
            type=str(data["type"]),
            total_verses=int(data["total_verses"]),
            verses=tuple(
                Verse(id=int(v["id"]), text=str(v["text"])) for v in data["verses"]
            ),
        )

    @classmethod
    def from_api(cls, data: dict) -> "Chapter":
        """Create from a surah object of the API's ``quran/{edition}`` reply."""
        verses = tuple(
            Verse(id=int(a["numberInSurah"]), text=str(a["text"])) for a in data["ayahs"]
        )
        return cls(
            id=int(data["number"]),
            name=str(data["name"]),
            transliteration=str(data.get("englishName", "")),
            type=str(data.get("revelationType", "")).lower(),
            total_verses=int(data.get("numberOfAyahs", len(verses))),
            verses=verses,
        )

    def to_dict(self) -> dict:
        """Convert to the bundled JSON schema."""
        return {
            "id": self.id,
            "name": self.name,
            "transliteration": self.transliteration,
            "type": self.type,
            "total_verses": self.total_verses,
            "verses": [{"id": v.id, "text": v.text} for v in self.verses],
        }


@dataclass(frozen=True)
class Translator:
    """A translation edition offered by the remote API."""

    identifier: str
    language: str
    name: str
    english_name: str
    format: str = ""
    type: str = ""
    direction: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Translator":
        """Create from an API edition object."""
        return cls(
            identifier=data["identifier"],
            language=data.get("language", ""),
            name=data.get("name", ""),
            english_name=data.get("englishName", ""),
            format=data.get("format", ""),
            type=data.get("type", ""),
            direction=data.get("direction"),
        )


@dataclass(frozen=True)
class TranslatedVerse:
    """Translated text of one verse.

    ``number`` is whatever the API reports and is not used for matching;
    translations line up with verses by list position.
    """

    number: int
    text: str


@dataclass(frozen=True)
class Reciter:
    """An audio narrator."""

    id: int
    name: str


@dataclass(frozen=True)
class AlignedVerse:
    """A verse paired with its translation, if one exists at that position."""

    index: int
    verse: Verse
    translation: Optional[str] = None


def align_translations(
    verses: Sequence[Verse], translations: Sequence[TranslatedVerse]
) -> List[AlignedVerse]:
    """Pair verse *i* with translation *i*.

    Verses past the end of ``translations`` get ``None``; surplus
    translations are dropped.
    """
    aligned: List[AlignedVerse] = []
    for i, verse in enumerate(verses):
        text = translations[i].text if i < len(translations) else None
        aligned.append(AlignedVerse(index=i, verse=verse, translation=text))
    return aligned
