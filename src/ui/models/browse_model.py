# ui/models/browse_model.py
from __future__ import annotations

from dataclasses import replace

from PySide6.QtCore import Signal

from core.lyricus_client import LyricusClient
from core.query import (
    BROWSE_SORTS,
    QueryParams,
    SortDirection,
    SortKey,
    apply_query,
    unique_artists,
)
from core.ranking import GenreClassifier
from ui.models.lyric_table_model import LyricTableModel
from ui.models.record_list_model import RecordListModel


class BrowseModel(RecordListModel):
    """Search/browse page: free text, artist and genre filters, sorting."""
    resultsChanged = Signal(object)  # list[LyricRecord]
    openLyric = Signal(int)          # lyric_id

    def __init__(
        self,
        app_state,
        client: LyricusClient,
        classifier: GenreClassifier | None = None,
        parent=None,
    ):
        super().__init__(app_state, client, parent)
        self.classifier = classifier
        self.params = QueryParams()
        self.table = LyricTableModel([])
        self.results: list = []

    # -------------------------
    # External API
    # -------------------------

    def setSearchValue(self, text: str):
        self._update(query=text or "")

    def setArtistFilter(self, artist: str | None):
        self._update(artist=artist or None)

    def setGenreFilter(self, genre: str | None):
        self._update(genre=genre or None)

    def setSort(self, key: SortKey | str, direction: SortDirection | str | None = None):
        key = SortKey(key)
        direction = SortDirection(direction) if direction is not None else self.params.direction
        self._update(sort_key=key, direction=direction)

    def setBrowseSort(self, preset: str):
        key, direction = BROWSE_SORTS[preset]
        self._update(sort_key=key, direction=direction)

    def toggleSortDirection(self):
        self._update(direction=self.params.direction.toggled())

    def clearFilters(self):
        self._update(artist=None, genre=None)

    def active_filter_count(self) -> int:
        return sum(1 for v in (self.params.genre, self.params.artist) if v)

    def openRow(self, row: int):
        lyric_id = self.table.lyric_id_at(row)
        if lyric_id is not None:
            self.openLyric.emit(lyric_id)

    def artist_options(self) -> list[str]:
        return unique_artists(self.store.records)

    def refresh(self):
        self.results = apply_query(self.store.records, self.params, self.classifier)
        self.table.set_rows(self.results)
        self.resultsChanged.emit(self.results)

    # -------------------------
    # Helpers
    # -------------------------

    def _update(self, **changes):
        params = replace(self.params, **changes)
        if params == self.params:
            return
        self.params = params
        self.refresh()
