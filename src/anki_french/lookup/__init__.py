"""Larousse lookup providers and their result models."""
from .models import ConjugationResult, DefinitionEntry, DefinitionResult
from .larousse import LarousseConjugationLookup, LarousseDefinitionLookup
from .audio import AudioFetcher, DownloadedAudio
