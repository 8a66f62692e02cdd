# ui/models/record_list_model.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from core.lyricus_client import LyricusClient
from core.record_store import RecordStore
from ui.workers.lyrics_api_workers import FetchAllWorker

logger = logging.getLogger(__name__)


class RecordListModel(QObject):
    """
    Base for views that load the whole lyrics list once and derive their
    content from it. Each instance owns its own RecordStore.

    Results that arrive after close(), or after a newer load() was issued,
    are dropped.
    """
    loadingChanged = Signal(bool)

    load_error_message = "Failed to fetch lyrics"

    def __init__(self, app_state, client: LyricusClient, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.client = client
        self.store = RecordStore(self)
        self.store.changed.connect(self.refresh)

        self._request_id = 0
        self._closed = False
        self._loading = False
        self.worker: FetchAllWorker | None = None

    # -------------------------
    # External API
    # -------------------------

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_closed(self) -> bool:
        return self._closed

    def load(self):
        if self._closed:
            return
        self._request_id += 1
        self._set_loading(True)

        self.worker = FetchAllWorker(self.client, request_id=self._request_id, parent=self)
        self.worker.finished_signal.connect(self._on_loaded)
        self.worker.start()

    def close(self):
        # in-flight requests are left to finish; their results are ignored
        self._closed = True
        self._set_loading(False)

    def refresh(self):
        raise NotImplementedError

    # -------------------------
    # Worker results
    # -------------------------

    def _on_loaded(self, request_id: int, ok: bool, msg: str, payload):
        if self._closed or request_id != self._request_id:
            logger.debug("Discarding stale lyrics load #%s (current #%s, closed=%s)",
                         request_id, self._request_id, self._closed)
            return

        self._set_loading(False)
        if not ok:
            self.app_state.notify(f"{self.load_error_message}: {msg}", "error")
            return
        self.store.replace(payload or [])

    def _set_loading(self, loading: bool):
        if loading != self._loading:
            self._loading = loading
            self.loadingChanged.emit(loading)
