"""
Maps lookup results to Anki notes for each deck category.
"""
from __future__ import annotations

from typing import List, Mapping, Optional, Union

from anki_french.cards.cloze import ClozeFormatter, cloze
from anki_french.cards.media import MediaAsset
from anki_french.cards.models import DeckCategory, Note, NoteModels
from anki_french.lookup.models import (
    IMPERATIF,
    INDICATIF,
    ConjugationResult,
    DefinitionEntry,
    DefinitionResult,
)

LookupResult = Union[ConjugationResult, DefinitionResult, None]


class NoteBuilder:
    """Builds the notes for one word of a deck.

    Pure transformation: audio must already be downloaded and named, and is
    passed in as ``media`` keyed by audio URL.
    """

    def __init__(self, models: NoteModels | None = None, formatter: ClozeFormatter | None = None) -> None:
        self.models = models or NoteModels()
        self.formatter = formatter or ClozeFormatter()

    def build(
        self,
        category: DeckCategory,
        deck_name: str,
        word: str,
        lookup_result: LookupResult = None,
        media: Optional[Mapping[str, MediaAsset]] = None,
    ) -> List[Note]:
        if category is DeckCategory.PHRASE:
            return self.phrase_notes(deck_name, word)
        if category is DeckCategory.DEFINITION:
            if not isinstance(lookup_result, DefinitionResult):
                raise TypeError(f"definition deck needs a DefinitionResult, got {type(lookup_result).__name__}")
            return self.definition_notes(deck_name, lookup_result, media or {})
        if category is DeckCategory.VERB:
            if not isinstance(lookup_result, ConjugationResult):
                raise TypeError(f"verb deck needs a ConjugationResult, got {type(lookup_result).__name__}")
            return self.verb_notes(deck_name, word, lookup_result)
        raise ValueError(f"Unknown deck category: {category}")

    def phrase_notes(self, deck_name: str, phrase: str) -> List[Note]:
        # Back is left equal to the phrase; the translation is typed in Anki by hand
        # so re-running never creates near-duplicate notes.
        return [
            Note(deck_name, model, {"Front": phrase, "Back": phrase})
            for model in (self.models.type_in_answer, self.models.reversed_phrase)
        ]

    def definition_notes(
        self, deck_name: str, result: DefinitionResult, media: Mapping[str, MediaAsset]
    ) -> List[Note]:
        notes: List[Note] = []
        for entry in result.entries:
            sound = _sound_field(entry, media)
            notes.append(Note(deck_name, self.models.definition, {
                "Rubric": entry.text,
                "Question": cloze(entry.text),
                "Image": entry.part_of_speech,
                "Audio": sound,
            }))
            notes.append(Note(deck_name, self.models.definition_reversed, {
                "Front-Expression": entry.text,
                "Front-PartOfSpeech": entry.part_of_speech,
                "Front-Audio": sound,
                "Back": "-",
            }))
        return notes

    def verb_notes(self, deck_name: str, verb: str, result: ConjugationResult) -> List[Note]:
        mood_models = (
            (INDICATIF, self.models.indicatif_present),
            (IMPERATIF, self.models.imperatif_present),
        )
        return [
            Note(deck_name, model, {
                "Rubric": verb,
                "Question": self.formatter.format(result.present(mood)),
            })
            for mood, model in mood_models
        ]


def _sound_field(entry: DefinitionEntry, media: Mapping[str, MediaAsset]) -> str:
    asset = media.get(entry.audio_url) if entry.audio_url else None
    return asset.sound_tag if asset is not None else ""
