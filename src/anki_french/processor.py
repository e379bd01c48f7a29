"""
Runs every deck of a deck file through lookup, note building and AnkiConnect.

Decks are processed strictly in order: phrases, definitions, verbs; inside a
group deck by deck and word by word. Notes are submitted in the order they
are built.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from anki_french.anki_sync.anki_connect import AnkiConnectClient
from anki_french.cards.builder import NoteBuilder
from anki_french.cards.media import MediaAsset, MediaNamer
from anki_french.cards.models import DeckCategory, Note
from anki_french.config_models import Deck, DeckCollection
from anki_french.errors import AnkiConnectError, LexicalLookupError, MediaFetchError
from anki_french.lookup.audio import AudioFetcher
from anki_french.lookup.larousse import LarousseConjugationLookup, LarousseDefinitionLookup
from anki_french.lookup.models import DefinitionResult

logger = logging.getLogger(__name__)

CATEGORY_ORDER = (DeckCategory.PHRASE, DeckCategory.DEFINITION, DeckCategory.VERB)


@dataclass(frozen=True)
class WordFailure:
    """A word that was skipped because its lookup or audio download failed."""
    category: DeckCategory
    deck_name: str
    word: str
    reason: str


class RunReport:
    def __init__(self) -> None:
        self.notes_added: int = 0
        self.notes_failed: int = 0
        self.media_stored: int = 0
        self.media_skipped: int = 0
        self.failures: List[WordFailure] = []
        self.notes: List[Note] = []

    @property
    def ok(self) -> bool:
        return not self.failures and not self.notes_failed

    def __repr__(self) -> str:
        return (
            f"RunReport(notes_added={self.notes_added}, notes_failed={self.notes_failed}, "
            f"media_stored={self.media_stored}, media_skipped={self.media_skipped}, "
            f"failures={len(self.failures)})"
        )


class DeckProcessor:
    """Turns a DeckCollection into Anki notes.

    Collaborators:
    - conjugations: object with ``lookup(verb) -> ConjugationResult``
    - definitions: object with ``lookup(word) -> DefinitionResult``
    - audio_fetcher: object with ``fetch(url) -> DownloadedAudio``
    - anki: AnkiConnectClient (or anything with the same methods)

    A failed lookup or audio download skips only that word. A rejected note or
    media file is logged and the run goes on.
    """

    def __init__(
        self,
        conjugations: LarousseConjugationLookup,
        definitions: LarousseDefinitionLookup,
        audio_fetcher: AudioFetcher,
        anki: AnkiConnectClient,
        builder: NoteBuilder | None = None,
        namer: MediaNamer | None = None,
        skip_existing_media: bool = True,
    ) -> None:
        self.conjugations = conjugations
        self.definitions = definitions
        self.audio_fetcher = audio_fetcher
        self.anki = anki
        self.builder = builder or NoteBuilder()
        self.namer = namer or MediaNamer()
        self.skip_existing_media = skip_existing_media

    def run(self, decks: DeckCollection) -> RunReport:
        report = RunReport()
        for category in CATEGORY_ORDER:
            for deck in decks.group(category):
                self.process_deck(category, deck, report)
        logger.info(
            "Run finished",
            extra={"added": report.notes_added, "failed_notes": report.notes_failed,
                   "skipped_words": len(report.failures)},
        )
        return report

    def process_deck(self, category: DeckCategory, deck: Deck, report: RunReport) -> None:
        if not deck.words:
            logger.debug(f"Deck '{deck.name}' has no words", extra={"category": category.value})
            return

        logger.info(f"Processing deck '{deck.name}'", extra={"category": category.value, "words": len(deck.words)})
        try:
            self.anki.create_deck(deck.name)
        except AnkiConnectError as e:
            logger.warning(f"Could not create deck '{deck.name}': {e}")

        for word in deck.words:
            try:
                notes = self.build_word(category, deck.name, word, report)
            except (LexicalLookupError, MediaFetchError) as e:
                logger.error(f"Skipping '{word}': {e}", extra={"deck": deck.name, "category": category.value})
                report.failures.append(WordFailure(category, deck.name, word, str(e)))
                continue
            self.submit(notes, report)

    def build_word(self, category: DeckCategory, deck_name: str, word: str, report: RunReport) -> List[Note]:
        """Look up ``word`` (when its category needs it) and build its notes."""
        if category is DeckCategory.PHRASE:
            return self.builder.build(category, deck_name, word)
        if category is DeckCategory.DEFINITION:
            result = self.definitions.lookup(word)
            media = self.store_audio(result, report)
            return self.builder.build(category, deck_name, word, result, media)
        result = self.conjugations.lookup(word)
        return self.builder.build(category, deck_name, word, result)

    def store_audio(self, result: DefinitionResult, report: RunReport) -> Dict[str, MediaAsset]:
        """Download and store the audio of every entry, keyed by audio URL."""
        media: Dict[str, MediaAsset] = {}
        for entry in result.entries:
            if not entry.audio_url or entry.audio_url in media:
                continue
            audio = self.audio_fetcher.fetch(entry.audio_url)
            asset = MediaAsset.from_download(audio.filename, audio.data, self.namer)
            media[entry.audio_url] = asset
            self._store_asset(asset, report)
        return media

    def _store_asset(self, asset: MediaAsset, report: RunReport) -> None:
        try:
            if self.skip_existing_media and self.anki.media_exists(asset.filename):
                report.media_skipped += 1
                logger.debug(f"Media already stored: {asset.filename}")
                return
            self.anki.store_media_file(asset.filename, asset.data)
        except AnkiConnectError as e:
            logger.error(f"store error: {e}", extra={"media": asset.filename})
            return
        report.media_stored += 1
        logger.info(f"stored media: {asset.filename}")

    def submit(self, notes: Sequence[Note], report: RunReport) -> None:
        for note in notes:
            report.notes.append(note)
            try:
                self.anki.add_note(note)
            except AnkiConnectError as e:
                report.notes_failed += 1
                logger.error(f"{e}", extra={"model": note.model_name, "deck": note.deck_name})
                continue
            report.notes_added += 1
