# core/grouping.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from core.models import LyricRecord
from core.utils import normalize_query


def artist_initials(name: str) -> str:
    # "Taylor Swift" -> "TS", "Adele" -> "A"
    return "".join(word[0] for word in (name or "").split(" ") if word)[:2].upper()


@dataclass(frozen=True)
class ArtistGroup:
    name: str
    songs: tuple[LyricRecord, ...]

    @property
    def song_count(self) -> int:
        return len(self.songs)

    @property
    def initials(self) -> str:
        return artist_initials(self.name)


def group_by_artist(records: Iterable[LyricRecord], *, newest_first: bool) -> list[ArtistGroup]:
    """
    Groups records by exact artist name.

    newest_first=True orders each artist's songs by id descending,
    False keeps them in source order. Groups come out by descending song
    count; artists with equal counts keep first-seen order.
    """
    buckets: dict[str, list[LyricRecord]] = {}
    for r in records:
        buckets.setdefault(r.artist_name or "", []).append(r)

    groups = []
    for name, songs in buckets.items():
        if newest_first:
            songs = sorted(songs, key=lambda r: r.id, reverse=True)
        groups.append(ArtistGroup(name=name, songs=tuple(songs)))

    return sorted(groups, key=lambda g: g.song_count, reverse=True)


def filter_groups(groups: Sequence[ArtistGroup], query: str | None) -> list[ArtistGroup]:
    term = normalize_query(query)
    if not term:
        return list(groups)
    return [g for g in groups if term in g.name.casefold()]
