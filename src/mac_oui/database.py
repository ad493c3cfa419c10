from __future__ import annotations

import functools
from pathlib import Path
from typing import Iterable

from .address import mac_to_int, parse_mac
from .blocks import BlockRange, decode_block
from .loader import load_records
from .models import Record
from .table import parse_table, read_default_source, read_source


class OuiDatabase:
    """
    Read-only MAC address block database.

    Built once from the full table and never mutated afterwards, so a single
    instance can be shared between threads without locking.
    """

    __slots__ = ("_ranges", "_manufacturers", "_organizations", "_blocks", "_total")

    def __init__(self, records: Iterable[Record]) -> None:
        loaded = load_records(records)
        self._ranges = loaded.ranges
        self._manufacturers = loaded.manufacturers
        self._organizations = loaded.organizations
        self._blocks = loaded.block_notations
        self._total = loaded.total_records

    @classmethod
    def from_csv_file(cls, path: str | Path) -> OuiDatabase:
        return cls(parse_table(read_source(path)))

    @classmethod
    def default(cls) -> OuiDatabase:
        """The bundled table, loaded on first use and shared process-wide."""
        return default_database()

    def lookup_by_address(self, mac: str) -> Record | None:
        """
        Record of the block owning `mac`, or None when no block contains it.

        Raises AddressParseError for text that is not a MAC address.
        """
        return self._ranges.get(mac_to_int(parse_mac(mac)))

    def lookup_by_organization(self, name: str) -> tuple[Record, ...] | None:
        """All records registered under exactly `name`, in table order."""
        return self._manufacturers.get(name)

    def ranges_for(self, record: Record) -> BlockRange:
        return decode_block(record.block_notation)

    @property
    def total_records(self) -> int:
        return self._total

    @property
    def organizations(self) -> frozenset[str]:
        return self._organizations

    @property
    def organization_count(self) -> int:
        return len(self._organizations)

    @property
    def block_notations(self) -> frozenset[str]:
        return self._blocks

    @property
    def block_count(self) -> int:
        return len(self._blocks)

    def __len__(self) -> int:
        return self._total

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(records={self._total}, "
            f"organizations={self.organization_count}, blocks={self.block_count})"
        )


@functools.lru_cache(maxsize=1)
def default_database() -> OuiDatabase:
    return OuiDatabase(parse_table(read_default_source()))
