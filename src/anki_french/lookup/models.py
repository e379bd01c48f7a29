"""
Results returned by the lexical lookup providers.
"""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

INDICATIF = "Indicatif"
IMPERATIF = "Impératif"
PRESENT = "Présent"


class ConjugationResult(BaseModel):
    """Conjugation table of a verb, keyed by mood then tense."""

    verb: str = Field(..., description="Infinitive that was looked up")
    moods: Dict[str, Dict[str, List[str]]] = Field(
        default_factory=dict, description="Mood name -> tense name -> conjugated forms in table order"
    )

    def tense(self, mood: str, tense: str) -> List[str]:
        """Forms for one mood/tense pair; empty when the table lacks it."""
        return list(self.moods.get(mood, {}).get(tense, []))

    def present(self, mood: str) -> List[str]:
        return self.tense(mood, PRESENT)


class DefinitionEntry(BaseModel):
    """One headword block of a dictionary article."""

    text: str = Field(..., description="Headword as displayed")
    part_of_speech: str = Field(default="", description="Grammatical category label, e.g. 'nom masculin'")
    audio_url: str = Field(default="", description="Absolute URL of the pronunciation recording")


class DefinitionResult(BaseModel):
    """Headword entries of a dictionary article, in page order."""

    word: str = Field(..., description="Word that was looked up")
    entries: List[DefinitionEntry] = Field(default_factory=list)
