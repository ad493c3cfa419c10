from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .blocks import BlockRange, decode_block
from .errors import InvalidMask, MalformedBlockNotation
from .index import ManufacturerIndex, RangeIndex
from .models import Record

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    ranges: RangeIndex
    manufacturers: ManufacturerIndex
    organizations: frozenset[str]
    block_notations: frozenset[str]
    total_records: int


def load_records(records: Iterable[Record]) -> LoadResult:
    """
    Decode every record's block notation and build both indexes.

    The first bad row aborts the whole load; nothing is returned for a
    partially decoded table.
    """
    decoded: list[tuple[BlockRange, Record]] = []
    for row, rec in enumerate(records, start=1):
        try:
            rng = decode_block(rec.block_notation)
        except (MalformedBlockNotation, InvalidMask) as e:
            raise type(e)(str(e), e.value, row=row) from e
        decoded.append((rng, rec))

    ordered = [rec for _, rec in decoded]
    result = LoadResult(
        ranges=RangeIndex(decoded),
        manufacturers=ManufacturerIndex(ordered),
        organizations=frozenset(rec.organization_name for rec in ordered),
        block_notations=frozenset(rec.block_notation for rec in ordered),
        total_records=len(ordered),
    )
    log.debug(
        "Loaded %d records (%d organizations, %d blocks)",
        result.total_records,
        len(result.organizations),
        len(result.block_notations),
    )
    return result
