# core/ranking.py
"""
Pluggable ranking and genre classification.

The API carries no play counts and no genre data, so these are interfaces with
a deterministic default rather than real scoring.
"""
from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from core.grouping import ArtistGroup, group_by_artist
from core.models import LyricRecord

TRENDING_SIZE = 9
RECENT_HITS_SIZE = 6


class Ranker(Protocol):
    def rank(self, records: Sequence[LyricRecord]) -> list[LyricRecord]: ...


class GenreClassifier(Protocol):
    def matches(self, record: LyricRecord, genre: str) -> bool: ...


class RecencyRanker:
    """Newest submissions first."""

    def rank(self, records: Sequence[LyricRecord]) -> list[LyricRecord]:
        return sorted(records, key=lambda r: r.id, reverse=True)


class KeywordGenreClassifier:
    """
    A record belongs to a genre when the genre word appears in its song or
    artist name. Crude, but deterministic.
    """

    def matches(self, record: LyricRecord, genre: str) -> bool:
        g = (genre or "").strip().casefold()
        if not g or g == "all":
            return True
        return g in (record.song_name or "").casefold() or g in (record.artist_name or "").casefold()


def featured(records: Sequence[LyricRecord], ranker: Ranker, limit: int = 6) -> list[LyricRecord]:
    return ranker.rank(records)[:limit]


def trending(
    records: Sequence[LyricRecord],
    ranker: Ranker,
    trending_size: int = TRENDING_SIZE,
    hits_size: int = RECENT_HITS_SIZE,
) -> tuple[list[LyricRecord], list[LyricRecord]]:
    ranked = ranker.rank(records)
    return ranked[:trending_size], ranked[trending_size:trending_size + hits_size]


def recent(records: Iterable[LyricRecord], limit: int = 4) -> list[LyricRecord]:
    return sorted(records, key=lambda r: r.id, reverse=True)[:limit]


def popular_artists(records: Iterable[LyricRecord], limit: int = 6) -> list[ArtistGroup]:
    return group_by_artist(records, newest_first=False)[:limit]
