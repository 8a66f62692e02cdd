# core/record_store.py
from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import QObject, Signal

from core.models import LyricRecord


class RecordStore(QObject):
    """
    Holds the full list of lyrics loaded by one view.
    The list is only ever replaced as a whole.
    """
    changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._records: tuple[LyricRecord, ...] = ()
        self._loaded = False

    @property
    def records(self) -> tuple[LyricRecord, ...]:
        return self._records

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def replace(self, records: Iterable[LyricRecord]):
        self._records = tuple(records)
        self._loaded = True
        self.changed.emit()

    def get(self, lyric_id: int) -> LyricRecord | None:
        for r in self._records:
            if r.id == int(lyric_id):
                return r
        return None

    def __len__(self) -> int:
        return len(self._records)
