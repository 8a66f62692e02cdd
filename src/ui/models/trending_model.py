# ui/models/trending_model.py
from __future__ import annotations

from PySide6.QtCore import Signal

from core.ranking import Ranker, RecencyRanker, featured, popular_artists, recent, trending
from ui.models.record_list_model import RecordListModel


class TrendingModel(RecordListModel):
    """Home/trending sections. Ordering comes from the injected Ranker."""
    sectionsChanged = Signal()

    load_error_message = "Failed to fetch trending data"

    def __init__(self, app_state, client, ranker: Ranker | None = None, parent=None):
        super().__init__(app_state, client, parent)
        self.ranker = ranker or RecencyRanker()
        self.trending: list = []
        self.recent_hits: list = []
        self.featured: list = []
        self.recent: list = []
        self.popular_artists: list = []

    def setRanker(self, ranker: Ranker):
        self.ranker = ranker
        self.refresh()

    def refresh(self):
        records = self.store.records
        self.trending, self.recent_hits = trending(records, self.ranker)
        self.featured = featured(records, self.ranker)
        self.recent = recent(records)
        self.popular_artists = popular_artists(records)
        self.sectionsChanged.emit()
