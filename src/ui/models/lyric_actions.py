# ui/models/lyric_actions.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from core.lyricus_client import LyricusClient
from core.models import NewLyricRequest
from ui.workers.lyrics_api_workers import (
    CreateLyricWorker,
    DownloadLyricWorker,
    FetchLyricWorker,
)

logger = logging.getLogger(__name__)


class LyricActions(QObject):
    """
    Single-lyric operations: open the detail view, download the PDF,
    submit a new lyric. Outcomes go to the app notification channel.
    """
    lyricOpened = Signal(object)   # LyricRecord
    downloaded = Signal(int, str)  # lyric_id, saved path
    submitted = Signal(object)     # LyricRecord created by the server
    busyChanged = Signal(bool)

    def __init__(self, app_state, client: LyricusClient, download_dir: str, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.client = client
        self.download_dir = download_dir

        self._closed = False
        self._open_request = 0
        self._pending: dict[int, object] = {}
        self._next_id = 0
        self._submitting = False

    # -------------------------
    # External API
    # -------------------------

    def open_lyric(self, lyric_id: int):
        if self._closed:
            return
        # only the most recently opened lyric is shown
        request_id = self._new_request_id()
        self._open_request = request_id
        self._start(FetchLyricWorker(self.client, lyric_id, request_id=request_id, parent=self),
                    self._on_opened)

    def download(self, lyric_id: int):
        if self._closed:
            return
        request_id = self._new_request_id()
        worker = DownloadLyricWorker(
            self.client, lyric_id, self.download_dir, request_id=request_id, parent=self
        )
        self._start(worker, lambda rid, ok, msg, path: self._on_downloaded(lyric_id, rid, ok, msg, path))

    def submit(self, request: NewLyricRequest) -> bool:
        if self._closed or self._submitting:
            return False
        if request.missing_fields():
            self.app_state.notify("Please fill in all required fields", "error")
            return False

        self._submitting = True
        self.busyChanged.emit(True)
        worker = CreateLyricWorker(self.client, request, request_id=self._new_request_id(), parent=self)
        self._start(worker, self._on_submitted)
        return True

    def close(self):
        self._closed = True

    # -------------------------
    # Worker results
    # -------------------------

    def _on_opened(self, request_id: int, ok: bool, msg: str, record):
        self._pending.pop(request_id, None)
        if self._closed or request_id != self._open_request:
            logger.debug("Discarding stale lyric detail #%s", request_id)
            return
        if not ok:
            self.app_state.notify(msg, "error")
            return
        self.lyricOpened.emit(record)

    def _on_downloaded(self, lyric_id: int, request_id: int, ok: bool, msg: str, path):
        self._pending.pop(request_id, None)
        if self._closed:
            return
        if not ok:
            self.app_state.notify(msg, "error")
            return
        self.app_state.notify(msg, "success")
        self.downloaded.emit(int(lyric_id), str(path))

    def _on_submitted(self, request_id: int, ok: bool, msg: str, record):
        self._pending.pop(request_id, None)
        self._submitting = False
        self.busyChanged.emit(False)
        if self._closed:
            return
        if not ok:
            self.app_state.notify("Failed to add lyrics. Please try again.", "error")
            logger.warning("Submit failed: %s", msg)
            return
        self.app_state.notify(msg, "success")
        self.submitted.emit(record)

    # -------------------------
    # Helpers
    # -------------------------

    def _new_request_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def _start(self, worker, slot):
        # keep a reference until the worker reports back
        self._pending[worker.request_id] = worker
        worker.finished_signal.connect(slot)
        worker.start()
