"""Downloads pronunciation recordings."""
from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

import requests

from anki_french.errors import MediaFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
FALLBACK_FILENAME = "audio.mp3"


@dataclass
class DownloadedAudio:
    """Raw audio bytes and a best-effort filename taken from the URL."""
    data: bytes
    filename: str


def filename_from_url(url: str) -> str:
    """Last path segment of ``url`` with an ``.mp3`` extension.

    Falls back to ``audio.mp3`` when the segment has no extension.
    """
    filename = FALLBACK_FILENAME
    try:
        base = posixpath.basename(unquote(urlparse(url).path))
    except ValueError:
        base = ""
    if base and "." in base.strip("."):
        filename = base
    if not filename.lower().endswith(".mp3"):
        filename += ".mp3"
    return filename


class AudioFetcher:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, url: str) -> DownloadedAudio:
        """Download ``url``.

        Raises:
            MediaFetchError: On transport failure or a non-200 response
        """
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise MediaFetchError(url, str(e)) from e
        if resp.status_code != 200:
            raise MediaFetchError(url, f"bad status: {resp.status_code}")
        logger.debug("Downloaded audio", extra={"url": url, "size": len(resp.content)})
        return DownloadedAudio(data=resp.content, filename=filename_from_url(url))
