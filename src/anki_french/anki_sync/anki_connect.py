"""
AnkiConnect client used to add notes and store media in a running Anki.

Talks JSON to the AnkiConnect add-on over HTTP with stdlib urllib.

Usage example:

from anki_french.anki_sync import AnkiConnectClient
from anki_french.cards import Note

client = AnkiConnectClient()
client.create_deck("French::Verbs")
client.add_note(Note("French::Verbs", "Basic (type in the answer)", {"Front": "bonjour", "Back": "bonjour"}))
"""
from __future__ import annotations

import base64
import json
import logging
import re
import urllib.error
import urllib.request
from typing import Any, List, Mapping

from anki_french.cards.models import Note
from anki_french.errors import AnkiConnectError

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6
DEFAULT_ANKI_CONNECT_URL = "http://127.0.0.1:8765"


def _glob_escape(name: str) -> str:
    # getMediaFilesNames takes a glob; match metacharacters literally
    return re.sub(r"([*?\[])", r"[\1]", name)


class AnkiConnectClient:
    def __init__(self, url: str = DEFAULT_ANKI_CONNECT_URL, allow_duplicate: bool = False) -> None:
        self.url = url
        self.allow_duplicate = allow_duplicate

    def invoke(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        """Call an AnkiConnect action and return its result.

        Raises:
            AnkiConnectError: If Anki is unreachable or the action reports an error
        """
        payload: dict[str, Any] = {
            "action": action,
            "version": ANKI_CONNECT_VERSION,
        }
        if params:
            payload["params"] = params
        data = json.dumps(payload).encode("utf-8")
        req = urllib.request.Request(
            self.url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req) as resp:
                raw = resp.read()
            parsed = json.loads(raw.decode("utf-8"))
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise AnkiConnectError(action, e) from e
        if parsed.get("error") is not None:
            raise AnkiConnectError(action, parsed["error"])
        return parsed.get("result")

    def version(self) -> int:
        return int(self.invoke("version"))

    def create_deck(self, name: str) -> None:
        self.invoke("createDeck", {"deck": name})

    def add_note(self, note: Note) -> int:
        """Add one note and return its id."""
        note_id = self.invoke("addNote", {"note": note.to_payload(self.allow_duplicate)})
        if note_id is None:
            raise AnkiConnectError("addNote", "no note id returned")
        return int(note_id)

    def media_file_names(self, pattern: str = "*") -> List[str]:
        return list(self.invoke("getMediaFilesNames", {"pattern": pattern}) or [])

    def media_exists(self, filename: str) -> bool:
        return filename in self.media_file_names(_glob_escape(filename))

    def store_media_file(self, filename: str, data: bytes) -> str:
        """Store media file in Anki's media collection.

        Args:
            filename: Name of the file (e.g., "bonjour_1a2b3c4d5e6f7a8b.mp3")
            data: Binary file content

        Returns:
            The filename Anki stored the file under
        """
        params = {
            "filename": filename,
            "data": base64.b64encode(data).decode("utf-8"),
        }
        return str(self.invoke("storeMediaFile", params) or filename)
