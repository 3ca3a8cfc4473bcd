"""Shared test fixtures for wordnet-ls."""

import io
import json

import pytest

from wordnet_ls import PartOfSpeech, Relation, RelationType, Sense
from wordnet_ls.config import ServerOptions
from wordnet_ls.session import Session
from wordnet_ls.transport import MessageReader


class FakeResolver:
    """In-memory lexical resolver keyed like the real database."""

    def __init__(self, senses=(), words=None):
        self.by_key = {ss.key: ss for ss in senses}
        self.by_offset = {ss.offset: ss for ss in senses}
        self.words = words or {}
        self.lookups = []

    def senses_for(self, word):
        self.lookups.append(word)
        return [self.by_offset[offset] for offset in self.words.get(word, [])]

    def resolve(self, pos, offset):
        return self.by_key.get((pos, offset))


class RecordingConnection:
    """Connection double: replays inbound messages, records outbound ones."""

    def __init__(self, inbound=()):
        self.inbound = list(inbound)
        self.sent = []

    def receive(self):
        if not self.inbound:
            return None
        return self.inbound.pop(0)

    def send(self, message):
        self.sent.append(message)


def noun(offset, definition, *lemmas, relations=()):
    return Sense(PartOfSpeech.NOUN, offset, definition, lemmas, tuple(relations))


def verb(offset, definition, *lemmas, relations=()):
    return Sense(PartOfSpeech.VERB, offset, definition, lemmas, tuple(relations))


def adj(offset, definition, *lemmas, relations=()):
    return Sense(PartOfSpeech.ADJECTIVE, offset, definition, lemmas, tuple(relations))


def antonym(pos, offset):
    return Relation(RelationType.ANTONYM, pos, offset)


def frame(obj):
    """Encode one JSON-RPC message with its Content-Length header."""
    body = json.dumps(obj).encode("utf-8")
    return f"Content-Length: {len(body)}\r\n\r\n".encode("ascii") + body


def read_all(data):
    """Decode every framed message in ``data``."""
    reader = MessageReader(io.BytesIO(data))
    messages = []
    while True:
        message = reader.read()
        if message is None:
            return messages
        messages.append(message)


@pytest.fixture
def resolver():
    """A small dictionary: 'light' (noun, verb, adjective) and friends."""
    senses = [
        noun("light-n-1", "electromagnetic radiation", "light", "visible_light",
             relations=[antonym(PartOfSpeech.NOUN, "dark-n-1")]),
        noun("light-n-2", "a source of illumination", "light", "light_source"),
        verb("light-v-1", "make lighter or brighter", "light", "illume",
             relations=[antonym(PartOfSpeech.VERB, "darken-v-1"),
                        Relation(RelationType.HYPERNYM, PartOfSpeech.VERB, "change-v-1")]),
        adj("light-a-1", "of comparatively little physical weight", "light",
            relations=[antonym(PartOfSpeech.ADJECTIVE, "heavy-a-1"),
                       antonym(PartOfSpeech.ADJECTIVE, "missing-a-9")]),
        noun("dark-n-1", "absence of light", "dark", "darkness"),
        verb("darken-v-1", "become dark", "darken"),
        verb("change-v-1", "cause to change", "change", "alter"),
        adj("heavy-a-1", "of comparatively great weight", "heavy"),
    ]
    words = {
        "light": ["light-n-1", "light-n-2", "light-v-1", "light-a-1"],
        "dark": ["dark-n-1"],
    }
    return FakeResolver(senses, words)


@pytest.fixture
def options(tmp_path):
    """Server options with a private scratch directory."""
    return ServerOptions(wordnet=tmp_path, scratch_dir=tmp_path / "scratch")


@pytest.fixture
def connection():
    return RecordingConnection()


@pytest.fixture
def session(resolver, connection, options):
    """A fresh, active session over the fake resolver."""
    return Session(resolver, connection, options)


@pytest.fixture
def document(tmp_path):
    """A text document on disk; returns (uri, path)."""
    path = tmp_path / "notes.txt"
    path.write_text("the light was gone\n\nno-words: 123\n", encoding="utf-8")
    return path.as_uri(), path
