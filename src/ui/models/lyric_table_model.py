# ui/models/lyric_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from core.models import LyricRecord, format_release_date

class LyricTableModel(QAbstractTableModel):
    HEADERS = ["Song", "Artist", "Released"]

    def __init__(self, rows):
        super().__init__()
        self._rows = list(rows)

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(self.HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return self.HEADERS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row: LyricRecord = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == 0:
                return row.song_name
            if col == 1:
                return row.artist_name
            if col == 2:
                return format_release_date(row.release_date)
        if role == Qt.ToolTipRole and col == 0:
            return row.preview()
        if role == Qt.UserRole:
            return row
        return None

    def lyric_id_at(self, row: int) -> int | None:
        if row < 0 or row >= len(self._rows):
            return None
        return int(self._rows[row].id)
