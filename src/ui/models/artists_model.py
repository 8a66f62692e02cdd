# ui/models/artists_model.py
from __future__ import annotations

from PySide6.QtCore import Signal

from core.grouping import ArtistGroup, filter_groups, group_by_artist
from ui.models.record_list_model import RecordListModel

SPOTLIGHT_SIZE = 4


class ArtistsModel(RecordListModel):
    artistsChanged = Signal(object)  # list[ArtistGroup]

    load_error_message = "Failed to fetch artists data"

    def __init__(self, app_state, client, parent=None):
        super().__init__(app_state, client, parent)
        self._search = ""
        self.groups: list[ArtistGroup] = []
        self.visible: list[ArtistGroup] = []

    def setSearchValue(self, text: str):
        self._search = text or ""
        self._apply_search()

    def refresh(self):
        # artist pages list each artist's newest songs first
        self.groups = group_by_artist(self.store.records, newest_first=True)
        self._apply_search()

    def spotlight(self, limit: int = SPOTLIGHT_SIZE) -> list[ArtistGroup]:
        return self.groups[:limit]

    def group_for(self, name: str) -> ArtistGroup | None:
        for g in self.groups:
            if g.name == name:
                return g
        return None

    def _apply_search(self):
        self.visible = filter_groups(self.groups, self._search)
        self.artistsChanged.emit(self.visible)
