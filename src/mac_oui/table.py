from __future__ import annotations

import csv
import io
import re
from importlib import resources
from pathlib import Path

from .errors import SourceUnavailable, TableSchemaMismatch
from .models import BlockSize, Record, parse_private_flag

DEFAULT_TABLE = "oui.csv"

# normalized header -> Record field
COLUMNS: dict[str, str] = {
    "oui": "block_notation",
    "isprivate": "is_private",
    "isiab": "is_private",
    "companyname": "organization_name",
    "companyaddress": "organization_address",
    "countrycode": "country_code",
    "assignmentblocksize": "block_size_class",
    "datecreated": "date_created",
    "dateupdated": "date_updated",
}
REQUIRED_FIELDS = frozenset(COLUMNS.values())

DOWNLOAD_HINT = "be sure to download here: https://macaddress.io/database-download/csv"


def normalize_header(name: str) -> str:
    return re.sub(r"[^0-9a-z]", "", name.lower())


def read_source(path: str | Path) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"could not open database file - {p}: {e}", str(p)) from e


def read_default_source() -> str:
    try:
        return (
            resources.files("mac_oui")
            .joinpath("data")
            .joinpath(DEFAULT_TABLE)
            .read_text(encoding="utf-8")
        )
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(
            f"could not open bundled database {DEFAULT_TABLE}: {e}", DEFAULT_TABLE
        ) from e


def _field_map(header: list[str]) -> dict[str, int]:
    fields: dict[str, int] = {}
    for i, name in enumerate(header):
        field = COLUMNS.get(normalize_header(name))
        if field is not None and field not in fields:
            fields[field] = i

    missing = REQUIRED_FIELDS - fields.keys()
    if missing:
        raise TableSchemaMismatch(
            f"CSV file is not matching OUI CSV (missing {', '.join(sorted(missing))}), "
            + DOWNLOAD_HINT,
            header,
        )
    return fields


def parse_table(text: str) -> list[Record]:
    """
    Decode CSV text (header row + data rows) into Records in table order.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        header = next(reader, None)
        if header is None:
            raise TableSchemaMismatch("CSV file is empty, " + DOWNLOAD_HINT, text)
        fields = _field_map(header)

        records: list[Record] = []
        data = (values for values in reader if values)
        for row, values in enumerate(data, start=1):
            if len(values) != len(header):
                raise TableSchemaMismatch(
                    f"expected {len(header)} fields, found {len(values)}",
                    values,
                    row=row,
                )
            records.append(_to_record({f: values[i] for f, i in fields.items()}, row))
    except csv.Error as e:
        raise TableSchemaMismatch(f"CSV file could not be decoded: {e}") from e
    return records


def _to_record(raw: dict[str, str], row: int) -> Record:
    try:
        size = BlockSize.from_text(raw["block_size_class"])
    except ValueError as e:
        raise TableSchemaMismatch(
            f"unknown assignment block size {raw['block_size_class']!r}",
            raw["block_size_class"],
            row=row,
        ) from e

    return Record(
        block_notation=raw["block_notation"],
        is_private=parse_private_flag(raw["is_private"]),
        organization_name=raw["organization_name"],
        organization_address=raw["organization_address"],
        country_code=raw["country_code"],
        block_size_class=size,
        date_created=raw["date_created"],
        date_updated=raw["date_updated"],
    )
