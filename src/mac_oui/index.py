from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .blocks import BlockRange
from .models import Record

log = logging.getLogger(__name__)

# More simultaneous matches than this points at a corrupt or ambiguous table.
AMBIGUOUS_MATCHES = 2


@dataclass(frozen=True)
class RangeEntry:
    start: int
    end: int
    record: Record
    seq: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1


class _MaskBucket:
    """
    Entries of one mask length, sorted by start.

    Every entry in a bucket is at most `width` addresses wide, so the entries
    that can contain a point q all start in [q - width + 1, q].
    """

    __slots__ = ("width", "starts", "entries")

    def __init__(self, mask: int, entries: list[RangeEntry]) -> None:
        entries.sort(key=lambda e: (e.start, e.seq))
        self.width = 1 << (48 - mask)
        self.starts = tuple(e.start for e in entries)
        self.entries = tuple(entries)

    def containing(self, q: int) -> list[RangeEntry]:
        lo = bisect_left(self.starts, q - self.width + 1)
        hi = bisect_right(self.starts, q)
        return [e for e in self.entries[lo:hi] if e.end >= q]


class RangeIndex:
    """
    Closed 48-bit intervals mapped to the records that own them.

    Overlapping intervals are all kept. A point query returns the most
    specific match: the smallest interval, and among intervals of equal size
    the one inserted last.
    """

    def __init__(self, ranges: Iterable[tuple[BlockRange, Record]] = ()) -> None:
        grouped: dict[int, list[RangeEntry]] = {}
        count = 0
        for seq, (rng, record) in enumerate(ranges):
            grouped.setdefault(rng.mask, []).append(
                RangeEntry(start=rng.start, end=rng.end, record=record, seq=seq)
            )
            count += 1

        # longest mask first
        self._buckets = tuple(
            _MaskBucket(mask, grouped[mask]) for mask in sorted(grouped, reverse=True)
        )
        self._count = count

    def __len__(self) -> int:
        return self._count

    def find_all(self, q: int) -> list[RangeEntry]:
        """All entries whose interval contains q, in insertion order."""
        matches: list[RangeEntry] = []
        for bucket in self._buckets:
            matches.extend(bucket.containing(q))
        matches.sort(key=lambda e: e.seq)
        return matches

    def get_entry(self, q: int) -> RangeEntry | None:
        matches = self.find_all(q)
        if not matches:
            return None
        if len(matches) > AMBIGUOUS_MATCHES:
            log.warning(
                "%d overlapping blocks contain %012X: %s",
                len(matches),
                q,
                ", ".join(e.record.block_notation for e in matches),
            )
        return min(matches, key=lambda e: (e.size, -e.seq))

    def get(self, q: int) -> Record | None:
        entry = self.get_entry(q)
        return entry.record if entry else None

    def __contains__(self, q: int) -> bool:
        return any(bucket.containing(q) for bucket in self._buckets)


class ManufacturerIndex:
    """Organization name -> records in table order. Names match byte-for-byte."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        buckets: dict[str, list[Record]] = {}
        for rec in records:
            buckets.setdefault(rec.organization_name, []).append(rec)
        self._map: Mapping[str, tuple[Record, ...]] = MappingProxyType(
            {name: tuple(recs) for name, recs in buckets.items()}
        )

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, name: object) -> bool:
        return name in self._map

    def get(self, name: str) -> tuple[Record, ...] | None:
        return self._map.get(name)

    def names(self) -> frozenset[str]:
        return frozenset(self._map)
