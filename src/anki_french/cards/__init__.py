"""Note synthesis: cloze formatting, media naming and per-category note building."""
from .models import DeckCategory, Note, NoteModels
from .cloze import ClozeFormatter, format_cloze
from .media import MediaAsset, MediaNamer, stable_mp3_name
from .builder import NoteBuilder
