# core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_release_date(value: Optional[str]) -> Optional[date]:
    """
    Accepts "YYYY-MM-DD" and full ISO timestamps ("2024-01-05T00:00:00.000Z").
    Returns None for anything else instead of raising.
    """
    if not value:
        return None
    s = str(value).strip()
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_release_date(value: Optional[str]) -> str:
    # en-US short format, e.g. "Jan 5, 2024"
    d = parse_release_date(value)
    if d is None:
        return ""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


@dataclass(frozen=True)
class LyricRecord:
    id: int
    song_name: str
    artist_name: str
    release_date: Optional[str]
    lyrics: str

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "LyricRecord":
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        raw_id = data.get("id")
        # ids are server-assigned JSON integers; "2" or 1.0 are not coerced
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"record has no usable id: {raw_id!r}")

        return LyricRecord(
            id=raw_id,
            song_name=_text(data.get("song_name")),
            artist_name=_text(data.get("artist_name")),
            release_date=_text(data.get("release_date")) or None,
            lyrics=_text(data.get("lyrics")),
        )

    def lines(self) -> list[str]:
        return self.lyrics.split("\n")

    def preview(self, max_length: int = 150) -> str:
        if len(self.lyrics) <= max_length:
            return self.lyrics
        return self.lyrics[:max_length] + "..."

    def release_day(self) -> Optional[date]:
        return parse_release_date(self.release_date)


@dataclass(frozen=True)
class NewLyricRequest:
    song_name: str
    artist_name: str
    lyrics: str
    release_date: str = ""

    def missing_fields(self) -> list[str]:
        required = ("song_name", "artist_name", "lyrics")
        return [name for name in required if not (getattr(self, name) or "").strip()]

    def to_payload(self) -> dict:
        return {
            "song_name": self.song_name,
            "artist_name": self.artist_name,
            "release_date": self.release_date,
            "lyrics": self.lyrics,
        }


@dataclass(frozen=True)
class DownloadedFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None
