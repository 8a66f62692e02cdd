# ui/workers/lyrics_api_workers.py
from __future__ import annotations

import logging

from PySide6.QtCore import QThread, Signal

from core.lyricus_client import LyricusClient, TransportError, save_download
from core.models import NewLyricRequest

logger = logging.getLogger(__name__)


class _ApiWorker(QThread):
    # request_id, ok, msg, payload
    finished_signal = Signal(int, bool, str, object)

    def __init__(self, client: LyricusClient, request_id: int = 0, parent=None):
        super().__init__(parent)
        self.client = client
        self.request_id = request_id

    def run(self):
        try:
            payload, msg = self.call()
        except TransportError as e:
            self.finished_signal.emit(self.request_id, False, str(e), None)
            return
        except OSError as e:
            logger.exception("Worker %s failed", type(self).__name__)
            self.finished_signal.emit(self.request_id, False, f"Could not save file: {e}", None)
            return
        except Exception as e:
            logger.exception("Worker %s failed", type(self).__name__)
            self.finished_signal.emit(self.request_id, False, f"Request failed: {e}", None)
            return
        self.finished_signal.emit(self.request_id, True, msg, payload)

    def call(self):
        raise NotImplementedError


class FetchAllWorker(_ApiWorker):
    def call(self):
        records = self.client.fetch_all()
        return records, f"Loaded {len(records)} lyrics."


class FetchLyricWorker(_ApiWorker):
    def __init__(self, client: LyricusClient, lyric_id: int, request_id: int = 0, parent=None):
        super().__init__(client, request_id, parent)
        self.lyric_id = lyric_id

    def call(self):
        record = self.client.fetch_by_id(self.lyric_id)
        return record, ""


class CreateLyricWorker(_ApiWorker):
    def __init__(self, client: LyricusClient, request: NewLyricRequest, request_id: int = 0, parent=None):
        super().__init__(client, request_id, parent)
        self.request = request

    def call(self):
        record = self.client.create(self.request)
        return record, "Lyrics added successfully!"


class DownloadLyricWorker(_ApiWorker):
    def __init__(self, client: LyricusClient, lyric_id: int, directory: str, request_id: int = 0, parent=None):
        super().__init__(client, request_id, parent)
        self.lyric_id = lyric_id
        self.directory = directory

    def call(self):
        downloaded = self.client.download(self.lyric_id)
        path = save_download(downloaded, self.directory)
        return str(path), f"Downloaded {path.name}"
