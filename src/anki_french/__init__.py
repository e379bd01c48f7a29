"""anki_french package.

Turns French study lists into Anki notes:
- phrases: type-in-the-answer and reversed cards
- definition: Larousse headwords with pronunciation audio
- verbs: Larousse present-tense conjugations as cloze cards

Run with ``python -m anki_french --config config.yaml``.
"""
__version__ = "0.1.0"
