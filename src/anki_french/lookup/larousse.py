"""Conjugation and definition lookups scraped from larousse.fr."""
from __future__ import annotations

import logging
import re
from typing import Dict, List
from urllib.parse import quote, urljoin

import requests
from bs4 import BeautifulSoup, Tag

from anki_french.errors import ConjugationLookupError, DefinitionLookupError, LexicalLookupError
from anki_french.lookup.models import ConjugationResult, DefinitionEntry, DefinitionResult

logger = logging.getLogger(__name__)

BASE_URL = "https://www.larousse.fr"
CONJUGATION_PATH = "/conjugaison/francais/"
DEFINITION_PATH = "/dictionnaires/francais/"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "anki-french/0.1 (+https://www.larousse.fr)"

# Mood section ids on conjugation pages
MOOD_IDS = {
    "indicatif": "Indicatif",
    "subjonctif": "Subjonctif",
    "conditionnel": "Conditionnel",
    "imperatif": "Impératif",
    "infinitif": "Infinitif",
    "participe": "Participe",
}

_WHITESPACE = re.compile(r"\s+")


def _clean(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def _get_page(session: requests.Session, url: str, word: str, timeout: float, error_cls: type[LexicalLookupError]) -> str:
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise error_cls(word, str(e)) from e
    if resp.status_code != 200:
        raise error_cls(word, f"bad status: {resp.status_code}")
    return resp.text


def parse_conjugation_page(verb: str, html: str) -> ConjugationResult:
    """Extract mood -> tense -> forms from a conjugation page.

    Each mood is a ``div.mode`` (identified by its id), each tense a
    ``div.conjugation`` with an ``h3`` title and one ``li`` per form.
    """
    soup = BeautifulSoup(html, "html.parser")
    moods: Dict[str, Dict[str, List[str]]] = {}
    for section in soup.select("div.mode"):
        mood = MOOD_IDS.get(str(section.get("id", "")).lower())
        if mood is None:
            continue
        tenses: Dict[str, List[str]] = {}
        for block in section.select("div.conjugation"):
            title = block.find("h3")
            if not isinstance(title, Tag):
                continue
            forms = [_clean(li.get_text(" ")) for li in block.find_all("li")]
            tenses[_clean(title.get_text())] = [f for f in forms if f]
        moods[mood] = tenses
    return ConjugationResult(verb=verb, moods=moods)


def parse_definition_page(word: str, html: str, base_url: str = BASE_URL) -> DefinitionResult:
    """Extract headword entries (text, part of speech, audio) from a dictionary article."""
    soup = BeautifulSoup(html, "html.parser")
    entries: List[DefinitionEntry] = []
    for header in soup.select("div.header-article"):
        title = header.select_one("h2.AdresseDefinition")
        if title is None:
            continue
        audio = ""
        link = title.select_one("a.lienson")
        if link is not None:
            if link.get("href"):
                audio = urljoin(base_url, str(link["href"]))
            link.extract()
        catgram = header.select_one("p.CatgramDefinition")
        entries.append(DefinitionEntry(
            text=_clean(title.get_text(" ")),
            part_of_speech=_clean(catgram.get_text(" ")) if catgram is not None else "",
            audio_url=audio,
        ))
    return DefinitionResult(word=word, entries=entries)


class LarousseConjugationLookup:
    """Looks up a verb's conjugation table."""

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or _new_session()

    def url_for(self, verb: str) -> str:
        return f"{self.base_url}{CONJUGATION_PATH}{quote(verb.strip())}"

    def lookup(self, verb: str) -> ConjugationResult:
        url = self.url_for(verb)
        logger.debug("Fetching conjugation", extra={"verb": verb, "url": url})
        html = _get_page(self._session, url, verb, self.timeout, ConjugationLookupError)
        result = parse_conjugation_page(verb, html)
        if not result.moods:
            raise ConjugationLookupError(verb, "no conjugation table found")
        return result


class LarousseDefinitionLookup:
    """Looks up the headword entries of a dictionary article."""

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or _new_session()

    def url_for(self, word: str) -> str:
        return f"{self.base_url}{DEFINITION_PATH}{quote(word.strip())}"

    def lookup(self, word: str) -> DefinitionResult:
        url = self.url_for(word)
        logger.debug("Fetching definition", extra={"word": word, "url": url})
        html = _get_page(self._session, url, word, self.timeout, DefinitionLookupError)
        result = parse_definition_page(word, html, self.base_url)
        if not result.entries:
            raise DefinitionLookupError(word, "no dictionary entry found")
        return result
