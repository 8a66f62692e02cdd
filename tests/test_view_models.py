import pytest

from core.models import NewLyricRequest
from core.query import SortDirection, SortKey
from core.ranking import KeywordGenreClassifier
from core.state import AppState
from ui.models.artists_model import ArtistsModel
from ui.models.browse_model import BrowseModel
from ui.models.lyric_actions import LyricActions
from ui.models.trending_model import TrendingModel
from ui.workers import lyrics_api_workers as workers

from conftest import FakeResponse


def _lyrics_json(records):
    return [
        {
            "id": r.id,
            "song_name": r.song_name,
            "artist_name": r.artist_name,
            "release_date": r.release_date,
            "lyrics": r.lyrics,
        }
        for r in records
    ]


@pytest.fixture
def sync_workers(monkeypatch):
    # run workers inline instead of on a background thread
    monkeypatch.setattr(workers._ApiWorker, "start", lambda self: self.run())


@pytest.fixture
def app_state():
    state = AppState()
    state.received = []
    state.notification.connect(state.received.append)
    return state


def test_browse_load_and_search(make_client, app_state, catalogue, sync_workers):
    client, _ = make_client(FakeResponse(json_data=_lyrics_json(catalogue)))
    model = BrowseModel(app_state, client)
    emitted = []
    model.resultsChanged.connect(emitted.append)

    model.load()

    assert model.store.is_loaded
    assert [r.id for r in emitted[-1]] == [r.id for r in catalogue]
    assert not model.is_loading

    model.setSearchValue("taylor")
    assert [r.id for r in model.results] == [1, 9]
    assert model.table.rowCount() == 2


def test_browse_sorting_and_filters(make_client, app_state, catalogue, sync_workers):
    client, _ = make_client(FakeResponse(json_data=_lyrics_json(catalogue)))
    model = BrowseModel(app_state, client, classifier=KeywordGenreClassifier())
    model.load()

    model.setSort(SortKey.RECENT, SortDirection.DESC)
    assert [r.id for r in model.results] == [9, 7, 4, 3, 2, 1]

    model.toggleSortDirection()
    assert [r.id for r in model.results] == [1, 2, 3, 4, 7, 9]

    model.setBrowseSort("alphabetical")
    assert model.results[0].song_name == "Anti-Hero"

    model.setArtistFilter("Adele")
    model.setGenreFilter("easy")
    assert [r.id for r in model.results] == [7]
    assert model.active_filter_count() == 2

    model.clearFilters()
    assert len(model.results) == len(catalogue)
    assert model.artist_options() == ["Adele", "Beyoncé", "Queen", "Taylor Swift"]


def test_browse_load_failure_notifies_and_keeps_store(make_client, app_state, sync_workers):
    client, _ = make_client(FakeResponse(status_code=500, reason="Internal Server Error"))
    model = BrowseModel(app_state, client)

    model.load()

    assert not model.store.is_loaded
    assert model.store.records == ()
    [note] = app_state.received
    assert note.notify_type == "error"
    assert "500" in note.message


def test_stale_results_are_discarded(make_client, app_state, catalogue):
    client, _ = make_client()
    model = BrowseModel(app_state, client)
    model._request_id = 2

    model._on_loaded(1, True, "", catalogue)
    assert not model.store.is_loaded

    model._on_loaded(2, True, "", catalogue[:2])
    assert len(model.store) == 2


def test_results_after_close_are_discarded(make_client, app_state, catalogue):
    client, _ = make_client()
    model = BrowseModel(app_state, client)
    model._request_id = 1

    model.close()
    model._on_loaded(1, True, "", catalogue)
    model.load()

    assert not model.store.is_loaded
    assert model._request_id == 1


def test_artists_model(make_client, app_state, catalogue, sync_workers):
    client, _ = make_client(FakeResponse(json_data=_lyrics_json(catalogue)))
    model = ArtistsModel(app_state, client)
    model.load()

    assert [g.name for g in model.spotlight(2)] == ["Adele", "Taylor Swift"]
    assert [r.id for r in model.group_for("Taylor Swift").songs] == [9, 1]

    model.setSearchValue("que")
    assert [g.name for g in model.visible] == ["Queen"]
    assert model.group_for("Nobody") is None


def test_artists_model_error_message(make_client, app_state, sync_workers):
    client, _ = make_client(FakeResponse(status_code=502, reason="Bad Gateway"))
    ArtistsModel(app_state, client).load()
    assert app_state.received[0].message.startswith("Failed to fetch artists data")


def test_trending_model(make_client, app_state, catalogue, sync_workers):
    client, _ = make_client(FakeResponse(json_data=_lyrics_json(catalogue)))
    model = TrendingModel(app_state, client)
    model.load()

    assert [r.id for r in model.trending] == [9, 7, 4, 3, 2, 1]
    assert model.recent_hits == []
    assert [r.id for r in model.recent] == [9, 7, 4, 3]
    assert [g.name for g in model.popular_artists][:2] == ["Adele", "Taylor Swift"]


def test_lyric_actions_open_and_download(make_client, app_state, tmp_path, sync_workers):
    client, _ = make_client(
        FakeResponse(json_data={"id": 4, "song_name": "Hello", "artist_name": "Adele", "lyrics": "hi"}),
        FakeResponse(content=b"%PDF", headers={"Content-Disposition": 'attachment; filename="hello.pdf"'}),
    )
    actions = LyricActions(app_state, client, str(tmp_path))
    opened, downloaded = [], []
    actions.lyricOpened.connect(opened.append)
    actions.downloaded.connect(lambda lyric_id, path: downloaded.append((lyric_id, path)))

    actions.open_lyric(4)
    actions.download(4)

    assert opened[0].song_name == "Hello"
    assert downloaded == [(4, str(tmp_path / "hello.pdf"))]
    assert app_state.received[-1].notify_type == "success"


def test_lyric_actions_submit_validation(make_client, app_state, sync_workers):
    client, session = make_client()
    actions = LyricActions(app_state, client, "")

    assert actions.submit(NewLyricRequest(song_name="", artist_name="A", lyrics="x")) is False
    assert app_state.received[0].message == "Please fill in all required fields"
    assert session.calls == []


def test_lyric_actions_submit(make_client, app_state, sync_workers):
    client, _ = make_client(FakeResponse(json_data={"id": 12, "song_name": "S", "artist_name": "A", "lyrics": "x"}))
    actions = LyricActions(app_state, client, "")
    created = []
    actions.submitted.connect(created.append)

    assert actions.submit(NewLyricRequest(song_name="S", artist_name="A", lyrics="x")) is True
    assert created[0].id == 12
    assert app_state.received[-1].message == "Lyrics added successfully!"


def test_lyric_actions_submit_failure(make_client, app_state, sync_workers):
    client, _ = make_client(FakeResponse(status_code=500, reason="Internal Server Error"))
    actions = LyricActions(app_state, client, "")

    actions.submit(NewLyricRequest(song_name="S", artist_name="A", lyrics="x"))

    assert app_state.received[-1].message == "Failed to add lyrics. Please try again."
    assert app_state.received[-1].notify_type == "error"


def test_lyric_actions_ignores_superseded_detail(make_client, app_state):
    client, _ = make_client()
    actions = LyricActions(app_state, client, "")
    opened = []
    actions.lyricOpened.connect(opened.append)
    actions._open_request = 5

    actions._on_opened(4, True, "", object())
    assert opened == []


class BrokenClient:
    """Fails with something other than a TransportError."""

    def fetch_all(self):
        raise KeyError("song_name")

    def create(self, request):
        raise KeyError("id")


def test_unexpected_worker_error_does_not_leave_model_loading(app_state, sync_workers):
    model = BrowseModel(app_state, BrokenClient())

    model.load()

    assert model.is_loading is False
    assert not model.store.is_loaded
    assert app_state.received[-1].notify_type == "error"
    assert "song_name" in app_state.received[-1].message


def test_unexpected_submit_error_allows_retry(app_state, sync_workers):
    actions = LyricActions(app_state, BrokenClient(), "")
    request = NewLyricRequest(song_name="S", artist_name="A", lyrics="x")

    assert actions.submit(request) is True
    assert actions.submit(request) is True
    assert app_state.received[-1].message == "Failed to add lyrics. Please try again."


def test_browse_row_opens_lyric_detail(make_client, app_state, catalogue, sync_workers):
    client, session = make_client(
        FakeResponse(json_data=_lyrics_json(catalogue)),
        FakeResponse(json_data={"id": 9, "song_name": "Anti-Hero", "artist_name": "Taylor Swift", "lyrics": "hi"}),
    )
    model = BrowseModel(app_state, client)
    actions = LyricActions(app_state, client, "")
    model.openLyric.connect(actions.open_lyric)
    opened = []
    actions.lyricOpened.connect(opened.append)
    model.load()

    model.setSort(SortKey.RECENT, SortDirection.DESC)
    model.openRow(0)
    model.openRow(42)

    assert session.calls[-1][1] == "https://api.test/api/lyrics/9"
    assert [r.id for r in opened] == [9]
