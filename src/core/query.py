# core/query.py
"""
Client-side search, filtering and sorting over a fully loaded lyrics list.

Every function here is pure: it takes a sequence, returns a new list and never
touches its input.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from core.models import LyricRecord
from core.utils import collation_key, normalize_query

if TYPE_CHECKING:
    from core.ranking import GenreClassifier


class SortKey(str, Enum):
    RELEVANCE = "relevance"
    RECENT = "recent"
    TITLE = "title"
    ARTIST = "artist"
    DATE = "date"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class QueryParams:
    query: str = ""
    artist: Optional[str] = None
    genre: Optional[str] = None
    sort_key: SortKey = SortKey.RELEVANCE
    direction: SortDirection = SortDirection.DESC


# Sort presets offered by the browse page
BROWSE_SORTS: dict[str, tuple[SortKey, SortDirection]] = {
    "recent": (SortKey.RECENT, SortDirection.DESC),
    "oldest": (SortKey.RECENT, SortDirection.ASC),
    "alphabetical": (SortKey.TITLE, SortDirection.ASC),
    "artist": (SortKey.ARTIST, SortDirection.ASC),
}


def matches_query(record: LyricRecord, query: str) -> bool:
    term = normalize_query(query)
    if not term:
        return True
    return (
        term in (record.song_name or "").casefold()
        or term in (record.artist_name or "").casefold()
        or term in (record.lyrics or "").casefold()
    )


def search_lyrics(records: Iterable[LyricRecord], query: str | None) -> list[LyricRecord]:
    term = normalize_query(query)
    if not term:
        return list(records)
    return [r for r in records if matches_query(r, term)]


def filter_by_artist(records: Iterable[LyricRecord], artist: str | None) -> list[LyricRecord]:
    if not artist:
        return list(records)
    return [r for r in records if r.artist_name == artist]


def filter_by_genre(
    records: Iterable[LyricRecord],
    genre: str | None,
    classifier: "GenreClassifier | None",
) -> list[LyricRecord]:
    # Without genre data there is nothing to filter on.
    if not genre or classifier is None:
        return list(records)
    return [r for r in records if classifier.matches(r, genre)]


def sort_lyrics(
    records: Iterable[LyricRecord],
    key: SortKey = SortKey.RELEVANCE,
    direction: SortDirection = SortDirection.DESC,
) -> list[LyricRecord]:
    items = list(records)
    reverse = SortDirection(direction) is SortDirection.DESC
    key = SortKey(key)

    if key is SortKey.RELEVANCE:
        return items
    if key is SortKey.RECENT:
        return sorted(items, key=lambda r: r.id, reverse=reverse)
    if key is SortKey.TITLE:
        return sorted(items, key=lambda r: collation_key(r.song_name), reverse=reverse)
    if key is SortKey.ARTIST:
        return sorted(items, key=lambda r: collation_key(r.artist_name), reverse=reverse)

    # DATE: undated records go last whichever way the dated ones are ordered
    dated = [r for r in items if r.release_day() is not None]
    undated = [r for r in items if r.release_day() is None]
    return sorted(dated, key=lambda r: r.release_day(), reverse=reverse) + undated


def apply_query(
    records: Sequence[LyricRecord],
    params: QueryParams,
    classifier: "GenreClassifier | None" = None,
) -> list[LyricRecord]:
    results = search_lyrics(records, params.query)
    results = filter_by_artist(results, params.artist)
    results = filter_by_genre(results, params.genre, classifier)
    return sort_lyrics(results, params.sort_key, params.direction)


def unique_artists(records: Iterable[LyricRecord]) -> list[str]:
    return sorted({r.artist_name for r in records})
