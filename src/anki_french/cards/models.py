"""
Data models for notes sent to AnkiConnect.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping


class DeckCategory(str, Enum):
    """Deck group in the deck file. The value is the group's JSON key."""
    PHRASE = "phrases"
    DEFINITION = "definition"
    VERB = "verbs"


# Note types configured in the user's Anki collection. Names must match exactly,
# typos included.
BASIC_TYPE_IN_ANSWER = "Basic (type in the answer)"
BASIC_AND_REVERSED_FRENCH = "Basic (and reversed card french)"
FRENCH_DEFINITION = "French Defenition"
DEFINITION_AND_REVERSED = "Basic (and reversed card (Word/Transcription/PartOfSpeach/Audio)"
INDICATIF_PRESENT = "French Conjugation: INDICATIF Présent"
IMPERATIF_PRESENT = "French Conjugation: IMPÉRATIF Présent"


@dataclass(frozen=True)
class NoteModels:
    """Note type names used for each card template."""
    type_in_answer: str = BASIC_TYPE_IN_ANSWER
    reversed_phrase: str = BASIC_AND_REVERSED_FRENCH
    definition: str = FRENCH_DEFINITION
    definition_reversed: str = DEFINITION_AND_REVERSED
    indicatif_present: str = INDICATIF_PRESENT
    imperatif_present: str = IMPERATIF_PRESENT


@dataclass(frozen=True)
class Note:
    """A single Anki note ready for submission."""
    deck_name: str
    model_name: str
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def to_payload(self, allow_duplicate: bool = False) -> Dict[str, Any]:
        """Build the note object expected by the AnkiConnect addNote action."""
        return {
            "deckName": self.deck_name,
            "modelName": self.model_name,
            "fields": dict(self.fields),
            "options": {"allowDuplicate": allow_duplicate},
        }
