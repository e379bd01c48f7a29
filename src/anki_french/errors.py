"""
Exception types raised across the deck-to-notes pipeline.

Configuration problems are fatal; lookup and media failures are scoped to a
single word; AnkiConnect failures are scoped to a single note or media file.
"""
from __future__ import annotations


class AnkiFrenchError(Exception):
    """Base class for all errors raised by this package."""


class DeckFileError(AnkiFrenchError):
    """The deck file is missing, unreadable or does not validate."""


class LexicalLookupError(AnkiFrenchError):
    """A lookup provider could not produce a result for a word."""

    def __init__(self, word: str, reason: str) -> None:
        super().__init__(f"lookup failed for '{word}': {reason}")
        self.word = word
        self.reason = reason


class ConjugationLookupError(LexicalLookupError):
    pass


class DefinitionLookupError(LexicalLookupError):
    pass


class MediaFetchError(AnkiFrenchError):
    """Downloading an audio file failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"download error for {url}: {reason}")
        self.url = url
        self.reason = reason


class AnkiConnectError(AnkiFrenchError, RuntimeError):
    """AnkiConnect rejected a request or could not be reached."""

    def __init__(self, action: str, error: object) -> None:
        super().__init__(f"AnkiConnect error on action '{action}': {error}")
        self.action = action
        self.error = error
