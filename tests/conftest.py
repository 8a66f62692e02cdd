"""Test configuration and fixtures.

Provides:
- a QCoreApplication for the Qt objects under test
- a fake requests session / response pair for the transport client
- small lyric record sets
"""

import pytest
import requests
from PySide6.QtCore import QCoreApplication
from requests.structures import CaseInsensitiveDict

from core.lyricus_client import LyricusClient
from core.models import LyricRecord


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, content=b"", headers=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._json_data = json_data
        self.content = content
        self.headers = CaseInsensitiveDict(headers or {})

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.headers = {}
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise RuntimeError("no response")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)


@pytest.fixture
def make_client():
    def _make(*responses):
        session = FakeSession(responses)
        client = LyricusClient(base_url="https://api.test/api/lyrics", session=session, timeout=5)
        return client, session
    return _make


def record(id, song_name="", artist_name="", release_date=None, lyrics=""):
    return LyricRecord(
        id=id,
        song_name=song_name,
        artist_name=artist_name,
        release_date=release_date,
        lyrics=lyrics,
    )


@pytest.fixture
def abc_records():
    return [
        record(1, "A", "X"),
        record(2, "B", "X"),
        record(3, "C", "Y"),
    ]


@pytest.fixture
def catalogue():
    return [
        record(4, "Hello", "Adele", "2015-10-23", "Hello, it's me\nI was wondering"),
        record(1, "Shake It Off", "Taylor Swift", "2014-08-18", "I stay out too late"),
        record(7, "Easy On Me", "Adele", "2021-10-15", "There ain't no gold"),
        record(3, "Bohemian Rhapsody", "Queen", None, "Is this the real life?"),
        record(9, "Anti-Hero", "Taylor Swift", "2022-10-21", "It's me, hi"),
        record(2, "Crazy in Love", "Beyoncé", "2003-05-18", "Uh oh, uh oh"),
    ]


@pytest.fixture
def network_error():
    return requests.ConnectionError("connection refused")
