"""
Cloze formatting for conjugation tables.

Turns a list of conjugated forms such as ``["je joue", "tu joues"]`` into
``"je {{c1::joue}}<br>tu {{c1::joues}}"`` so that only the verb form is hidden.
"""
from __future__ import annotations

import re
from typing import List, Pattern, Sequence

PRONOUN_PATTERN: Pattern[str] = re.compile(r"^(j'|je|tu|il, elle|nous|vous|ils, elles)\s*")
LINE_BREAK = "<br>"


def cloze(text: str) -> str:
    return "{{c1::" + text + "}}"


class ClozeFormatter:
    """Formats conjugated forms as cloze deletions, keeping the pronoun visible."""

    def __init__(self, pattern: Pattern[str] = PRONOUN_PATTERN, delimiter: str = LINE_BREAK) -> None:
        self._pattern = pattern
        self._delimiter = delimiter

    def format(self, conjugations: Sequence[str]) -> str:
        """Format conjugations into one cloze string.

        Forms starting with a known pronoun become ``"<pronoun> {{c1::<form>}}"``.
        Forms without a pronoun are dropped, unless no form has one: then every
        form is wrapped whole (imperative tables have no pronouns).

        Args:
            conjugations: Conjugated forms in table order

        Returns:
            Fragments joined with the delimiter, or "" for empty input
        """
        parts: List[str] = []
        for form in conjugations:
            match = self._pattern.match(form)
            if match is None:
                continue
            pronoun = match.group(0).strip()
            verb = form[match.end():].strip()
            parts.append(f"{pronoun} {cloze(verb)}")

        if not parts:
            parts = [cloze(form) for form in conjugations]

        return self._delimiter.join(parts)


_default_formatter = ClozeFormatter()


def format_cloze(conjugations: Sequence[str]) -> str:
    """Format conjugations with the default pronoun pattern and ``<br>`` delimiter."""
    return _default_formatter.format(conjugations)
