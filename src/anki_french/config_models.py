from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from anki_french.cards.models import DeckCategory
from anki_french.errors import DeckFileError

DEFAULT_DECKS_FILE = Path("words/verbs.json")


class Deck(BaseModel):
    """A destination Anki deck and the words/phrases to put in it."""

    name: str = Field(..., min_length=1, description="Anki deck name, e.g. 'French::Verbs'")
    words: List[str] = Field(default_factory=list, description="Words or phrases, in the order to add them")

    @field_validator("words", mode="before")
    @classmethod
    def null_words(cls, value: Any) -> Any:
        return [] if value is None else value


class DeckCollection(BaseModel):
    """Contents of the deck file.

    - verbs: decks whose words are verbs to conjugate
    - definition: decks whose words are looked up in the dictionary
    - phrases: decks whose entries are used verbatim
    """

    verbs: List[Deck] = Field(default_factory=list)
    definition: List[Deck] = Field(default_factory=list)
    phrases: List[Deck] = Field(default_factory=list)

    @field_validator("verbs", "definition", "phrases", mode="before")
    @classmethod
    def unwrap_decks(cls, value: Any) -> Any:
        # Groups are written either as a list of decks or as {"decks": [...]}
        if value is None:
            return []
        if isinstance(value, dict):
            return value.get("decks") or []
        return value

    def group(self, category: DeckCategory) -> List[Deck]:
        return getattr(self, category.value)


def load_decks(path: Path) -> DeckCollection:
    """Read and validate the deck file.

    Raises:
        DeckFileError: If the file cannot be read, is not JSON or does not validate
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DeckFileError(f"Cannot read deck file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DeckFileError(f"Deck file {path} is not valid JSON: {e}") from e

    try:
        return DeckCollection.model_validate(raw)
    except ValidationError as ve:
        raise DeckFileError(f"Invalid deck file {path}:\n{ve}") from ve


class RunConfig(BaseModel):
    """Top-level run configuration, read from YAML.

    Every key is optional; CLI flags and ANKI_CONNECT_URL take precedence.
    """

    decks_file: Path = Field(default=DEFAULT_DECKS_FILE, description="Path to the JSON deck file")
    anki_connect_url: str | None = Field(default=None, description="AnkiConnect endpoint")
    http_timeout_seconds: float = Field(default=30.0, gt=0, description="Timeout for Larousse and audio requests")
    allow_duplicates: bool = Field(default=False, description="Let Anki add notes whose first field already exists")
    skip_existing_media: bool = Field(default=True, description="Do not re-upload audio Anki already has")
    output_file: Path | None = Field(default=None, description="Optional JSON dump of every built note")


def load_run_config(path: Path | None) -> RunConfig:
    """Load a RunConfig from YAML; ``None`` gives the defaults."""
    if path is None:
        return RunConfig()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    try:
        return RunConfig.model_validate(raw)
    except ValidationError as ve:
        raise SystemExit(f"Invalid configuration in {path}:\n{ve}")
