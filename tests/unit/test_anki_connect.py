import base64
import json
import urllib.error

import pytest

from anki_french.anki_sync import anki_connect
from anki_french.anki_sync.anki_connect import AnkiConnectClient
from anki_french.cards.models import Note
from anki_french.errors import AnkiConnectError


class _FakeResponse:
    def __init__(self, body):
        self._body = json.dumps(body).encode("utf-8")

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_urlopen(monkeypatch):
    calls = []
    responses = []

    def urlopen(req):
        calls.append(json.loads(req.data.decode("utf-8")))
        result = responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return _FakeResponse(result)

    monkeypatch.setattr(anki_connect.urllib.request, "urlopen", urlopen)
    return calls, responses


def test_add_note_payload(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": 1496198395707, "error": None})
    note = Note("French::Verbs", "French Conjugation: INDICATIF Présent", {"Rubric": "jouer", "Question": "q"})

    assert AnkiConnectClient().add_note(note) == 1496198395707
    assert calls[0] == {
        "action": "addNote",
        "version": 6,
        "params": {"note": {
            "deckName": "French::Verbs",
            "modelName": "French Conjugation: INDICATIF Présent",
            "fields": {"Rubric": "jouer", "Question": "q"},
            "options": {"allowDuplicate": False},
        }},
    }


def test_allow_duplicate_flag(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": 1, "error": None})
    AnkiConnectClient(allow_duplicate=True).add_note(Note("d", "m", {}))
    assert calls[0]["params"]["note"]["options"] == {"allowDuplicate": True}


def test_error_field_raises(fake_urlopen):
    _, responses = fake_urlopen
    responses.append({"result": None, "error": "cannot create note because it is a duplicate"})
    with pytest.raises(AnkiConnectError) as exc:
        AnkiConnectClient().add_note(Note("d", "m", {"Front": "x"}))
    assert exc.value.action == "addNote"
    assert "duplicate" in str(exc.value)


def test_unreachable_raises(fake_urlopen):
    _, responses = fake_urlopen
    responses.append(urllib.error.URLError("connection refused"))
    with pytest.raises(AnkiConnectError):
        AnkiConnectClient().version()


def test_store_media_file_sends_base64(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": "a_0011.mp3", "error": None})
    assert AnkiConnectClient().store_media_file("a_0011.mp3", b"\x00\xffmp3") == "a_0011.mp3"
    assert calls[0]["action"] == "storeMediaFile"
    assert base64.b64decode(calls[0]["params"]["data"]) == b"\x00\xffmp3"


def test_media_exists(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": ["a_0011.mp3"], "error": None})
    responses.append({"result": [], "error": None})
    client = AnkiConnectClient()
    assert client.media_exists("a_0011.mp3") is True
    assert client.media_exists("b_0022.mp3") is False
    assert calls[0]["params"] == {"pattern": "a_0011.mp3"}


def test_create_deck_and_version(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": 1651, "error": None})
    responses.append({"result": 6, "error": None})
    client = AnkiConnectClient()
    client.create_deck("French::Verbs")
    assert client.version() == 6
    assert calls[0] == {"action": "createDeck", "version": 6, "params": {"deck": "French::Verbs"}}
    assert "params" not in calls[1]


def test_media_exists_matches_glob_characters_literally(fake_urlopen):
    calls, responses = fake_urlopen
    responses.append({"result": ["son[1]*?_0011.mp3"], "error": None})
    assert AnkiConnectClient().media_exists("son[1]*?_0011.mp3") is True
    assert calls[0]["params"] == {"pattern": "son[[]1][*][?]_0011.mp3"}
