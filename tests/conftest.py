import logging
from unittest.mock import MagicMock

import pytest

from anki_french.config_models import Deck, DeckCollection
from anki_french.lookup.audio import DownloadedAudio
from anki_french.lookup.models import ConjugationResult, DefinitionEntry, DefinitionResult


@pytest.fixture(autouse=True)
def reset_package_logger():
    # setup_logging() detaches the package logger from root, which hides records from caplog
    yield
    pkg_logger = logging.getLogger("anki_french")
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture
def jouer_conjugation():
    return ConjugationResult(
        verb="jouer",
        moods={
            "Indicatif": {
                "Présent": ["je joue", "tu joues", "il, elle joue", "nous jouons", "vous jouez", "ils, elles jouent"],
                "Imparfait": ["je jouais"],
            },
            "Impératif": {"Présent": ["joue", "jouons", "jouez"]},
        },
    )


@pytest.fixture
def maison_definition():
    return DefinitionResult(
        word="maison",
        entries=[
            DefinitionEntry(text="maison", part_of_speech="nom féminin",
                            audio_url="https://www.larousse.fr/tts/48611fra2"),
            DefinitionEntry(text="maison", part_of_speech="adjectif invariable",
                            audio_url="https://www.larousse.fr/tts/48612fra2"),
        ],
    )


@pytest.fixture
def deck_collection():
    return DeckCollection(
        phrases=[Deck(name="French::Phrases", words=["ça marche"])],
        definition=[Deck(name="French::Words", words=["maison"])],
        verbs=[Deck(name="French::Verbs", words=["jouer"])],
    )


@pytest.fixture
def mock_anki():
    anki = MagicMock()
    anki.add_note.return_value = 1
    anki.media_exists.return_value = False
    return anki


@pytest.fixture
def mock_audio_fetcher():
    fetcher = MagicMock()
    fetcher.fetch.side_effect = lambda url: DownloadedAudio(data=url.encode("utf-8"), filename="audio.mp3")
    return fetcher


@pytest.fixture
def conjugation_html():
    return """
    <html><body>
    <div id="indicatif" class="mode">
      <h2>Indicatif</h2>
      <div class="conjugation">
        <h3>Présent</h3>
        <ul>
          <li>je <span class="verbe">joue</span></li>
          <li>tu <span class="verbe">joues</span></li>
          <li>il, elle <span class="verbe">joue</span></li>
        </ul>
      </div>
      <div class="conjugation">
        <h3>Imparfait</h3>
        <ul><li>je jouais</li></ul>
      </div>
    </div>
    <div id="imperatif" class="mode">
      <h2>Impératif</h2>
      <div class="conjugation">
        <h3>Présent</h3>
        <ul><li>joue</li><li>jouons</li><li>jouez</li></ul>
      </div>
    </div>
    <div id="publicite" class="mode"><div class="conjugation"><h3>Pub</h3></div></div>
    </body></html>
    """


@pytest.fixture
def definition_html():
    return """
    <html><body>
    <div class="header-article">
      <h2 class="AdresseDefinition">
        <a class="lienson" href="/dictionnaires-prononciation/francais/tts/48611fra2"><img src="son.png"/></a>
        maison
      </h2>
      <p class="CatgramDefinition">nom féminin</p>
    </div>
    <div class="header-article">
      <h2 class="AdresseDefinition">maison</h2>
      <p class="CatgramDefinition">adjectif  invariable</p>
    </div>
    </body></html>
    """
