"""Client for the alquran.cloud translation API.

Two read endpoints are used for translations:

* ``edition`` lists the available translation editions, optionally
  narrowed down by ``format`` and ``language``.
* ``surah/{number}/{edition}`` returns one chapter rendered by one
  edition.

``quran/{edition}`` is also used once, on request, to download the
complete text when only the bundled sample is installed.

:class:`TranslationClient` raises :class:`TranslationError` when a call
fails. :class:`TranslationFetcher` sits on top of it for the UI: a failed
call is logged and reported as ``None`` so the caller keeps whatever it
was showing before.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from quran_tui.data.types import Chapter, TranslatedVerse, Translator

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.alquran.cloud/v1"
DEFAULT_FORMAT = "text"
DEFAULT_LANGUAGE = "fa"
# Arabic script edition used for the full text download
DEFAULT_TEXT_EDITION = "quran-uthmani"


class TranslationError(ConnectionError):
    """Raised when the translation API cannot be reached or answers badly."""


@dataclass(frozen=True)
class TranslationKey:
    """The selection a translation fetch was started for."""

    chapter_id: int
    translator_id: str


class TranslationClient:
    """Thin wrapper around the translation REST API.

    :param base_url: API root, without trailing slash.
    :param timeout: Seconds before a request is abandoned.
    :param session: Optional pre-built session (mainly for tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send a GET request and return the ``data`` member of the reply.

        :raises TranslationError: On transport errors, non-200 status or a
            reply without ``data``.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.get(
                url,
                params=params or {},
                headers={"User-Agent": "quran-tui/0.1"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TranslationError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code != 200:
            raise TranslationError(
                f"Translation API responded with status {resp.status_code} for {url}"
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TranslationError(f"Invalid JSON from {url}") from exc

        if not isinstance(payload, dict) or "data" not in payload:
            raise TranslationError(f"Unexpected payload from {url}")
        return payload["data"]

    def list_translators(
        self, format: str = DEFAULT_FORMAT, language: str = DEFAULT_LANGUAGE
    ) -> List[Translator]:
        """Return the editions available for ``format`` and ``language``."""
        params: Dict[str, Any] = {}
        if format:
            params["format"] = format
        if language:
            params["language"] = language

        data = self._request("edition", params=params)
        try:
            return [Translator.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as exc:
            raise TranslationError("Malformed edition list") from exc

    def get_translation(self, chapter_id: int, translator_id: str) -> List[TranslatedVerse]:
        """Return the translated verses of one chapter, in verse order."""
        data = self._request(f"surah/{chapter_id}/{translator_id}")
        try:
            return [
                TranslatedVerse(number=int(item.get("number", 0)), text=item["text"])
                for item in data["ayahs"]
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TranslationError(
                f"Malformed translation for surah {chapter_id} ({translator_id})"
            ) from exc

    def get_quran(self, edition: str = DEFAULT_TEXT_EDITION) -> List[Chapter]:
        """Return the complete text of ``edition``, one chapter per surah."""
        data = self._request(f"quran/{edition}")
        try:
            return [Chapter.from_api(item) for item in data["surahs"]]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise TranslationError(f"Malformed text edition {edition}") from exc


class TranslationFetcher:
    """Failure-tolerant front for :class:`TranslationClient`.

    Every method returns ``None`` instead of raising, meaning "leave the
    current value alone".
    """

    def __init__(
        self,
        client: Optional[TranslationClient] = None,
        format: str = DEFAULT_FORMAT,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.client = client or TranslationClient()
        self.format = format
        self.language = language

    def translators(self) -> Optional[List[Translator]]:
        """Fetch the translator list."""
        try:
            return self.client.list_translators(self.format, self.language)
        except TranslationError:
            logger.warning("Could not fetch translator list", exc_info=True)
            return None

    def translation(self, key: TranslationKey) -> Optional[List[TranslatedVerse]]:
        """Fetch the translation for ``key``."""
        try:
            return self.client.get_translation(key.chapter_id, key.translator_id)
        except TranslationError:
            logger.warning(
                "Could not fetch translation %s for surah %d",
                key.translator_id,
                key.chapter_id,
                exc_info=True,
            )
            return None

    def full_text(self, edition: str = DEFAULT_TEXT_EDITION) -> Optional[List[Chapter]]:
        """Download every chapter in ``edition``."""
        try:
            return self.client.get_quran(edition)
        except TranslationError:
            logger.warning("Could not download text edition %s", edition, exc_info=True)
            return None
