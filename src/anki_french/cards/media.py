"""
Content-addressed names for audio files stored in Anki's media folder.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass

MP3_SUFFIX = ".mp3"
HASH_PREFIX_BYTES = 8
DEFAULT_BASENAME = "audio"


class MediaNamer:
    """Derives stable mp3 filenames from audio content.

    The hash suffix depends only on the bytes, so the same recording always gets
    the same name and Anki never stores it twice.
    """

    def name(self, suggested_name: str, data: bytes) -> str:
        digest = hashlib.sha1(data).digest()[:HASH_PREFIX_BYTES].hex()
        base = self._sanitize(suggested_name)
        return f"{base}_{digest}{MP3_SUFFIX}"

    @staticmethod
    def _sanitize(name: str) -> str:
        base = name.replace(" ", "_").replace("/", "_").replace("\\", "_")
        while base.lower().endswith(MP3_SUFFIX):
            base = base[: -len(MP3_SUFFIX)]
        return base or DEFAULT_BASENAME


def stable_mp3_name(suggested_name: str, data: bytes) -> str:
    """Shortcut for ``MediaNamer().name(suggested_name, data)``."""
    return MediaNamer().name(suggested_name, data)


@dataclass(frozen=True)
class MediaAsset:
    """Audio content together with the filename it is stored under."""
    data: bytes
    filename: str

    @classmethod
    def from_download(cls, suggested_name: str, data: bytes, namer: MediaNamer | None = None) -> "MediaAsset":
        namer = namer or MediaNamer()
        return cls(data=data, filename=namer.name(suggested_name, data))

    @property
    def sound_tag(self) -> str:
        """Anki field markup that plays this file."""
        return f"[sound:{self.filename}]"
