"""Configuration management for quran-tui."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from quran_tui.backend.translations import (
    DEFAULT_API_BASE_URL,
    DEFAULT_FORMAT,
    DEFAULT_LANGUAGE,
    DEFAULT_TEXT_EDITION,
)
from quran_tui.data.reciters import DEFAULT_AUDIO_BASE_URL, DEFAULT_RECITER

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "quran-tui"
CONFIG_FILE = CONFIG_DIR / "config.json"
# Where :download stores the complete text
DATA_FILE = CONFIG_DIR / "quran.json"


@dataclass
class Config:
    """Application configuration."""

    data_file: Optional[str] = None  # None means downloaded, else bundled quran.json
    text_edition: str = DEFAULT_TEXT_EDITION
    api_base_url: str = DEFAULT_API_BASE_URL
    audio_base_url: str = DEFAULT_AUDIO_BASE_URL
    translator_format: str = DEFAULT_FORMAT
    translator_language: str = DEFAULT_LANGUAGE
    default_translator: Optional[str] = None
    default_reciter: int = DEFAULT_RECITER.id
    dark_mode: bool = True
    ascending: bool = True
    audio_player: Optional[str] = None  # e.g. "mpv --volume=80"
    request_timeout: float = 30.0
    log_file: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def chapters_file(self, downloaded: Path = DATA_FILE) -> Optional[Path]:
        """Chapter document to read; None selects the bundled sample."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        if downloaded.exists():
            return downloaded
        return None

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> "Config":
        """Load config from file, or return defaults."""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError, AttributeError):
            logger.warning("Ignoring unreadable config file %s", path, exc_info=True)
            return cls()

    def save(self, path: Path = CONFIG_FILE) -> None:
        """Save config to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


def get_config() -> Config:
    """Get the application config."""
    return Config.load()
