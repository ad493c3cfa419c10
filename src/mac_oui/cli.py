from __future__ import annotations

import argparse
import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .address import format_mac
from .database import OuiDatabase
from .models import Record


def _build_table(title: str) -> Table:
    t = Table(title=title, show_lines=False)
    t.add_column("OUI", style="bold")
    t.add_column("First")
    t.add_column("Last")
    t.add_column("Organization")
    t.add_column("Country")
    t.add_column("Size")
    t.add_column("Updated")
    return t


def _add_record(table: Table, db: OuiDatabase, rec: Record) -> None:
    rng = db.ranges_for(rec)
    name = escape(rec.organization_name)
    if rec.is_private:
        name = f"[dim]{name or '(private)'}[/dim]"
    table.add_row(
        rec.block_notation,
        format_mac(rng.start),
        format_mac(rng.end),
        name,
        rec.country_code,
        rec.block_size_class.value,
        rec.date_updated,
    )


def _open_db(args: argparse.Namespace) -> OuiDatabase:
    if args.db:
        return OuiDatabase.from_csv_file(args.db)
    return OuiDatabase.default()


def cmd_mac(args: argparse.Namespace) -> int:
    console = Console()
    db = _open_db(args)

    rec = db.lookup_by_address(args.address)
    if rec is None:
        console.print(f"No entry found for: {escape(args.address)}")
        return 1

    if args.json:
        console.print_json(json.dumps(rec.to_dict()))
        return 0

    table = _build_table(escape(args.address))
    _add_record(table, db, rec)
    console.print(table)
    return 0


def cmd_manufacturer(args: argparse.Namespace) -> int:
    console = Console()
    db = _open_db(args)

    records = db.lookup_by_organization(args.name)
    if records is None:
        console.print(f"No entry found for: {escape(args.name)}")
        return 1

    if args.json:
        console.print_json(json.dumps([r.to_dict() for r in records]))
        return 0

    table = _build_table(escape(args.name))
    for rec in records:
        _add_record(table, db, rec)
    console.print(table)
    console.print(f"Blocks: [bold]{len(records)}[/bold]")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    console = Console()
    db = _open_db(args)

    manufacturers = sorted(db.organizations)
    console.print(
        f"Records: [bold]{db.total_records}[/bold]  |  "
        f"Manufacturers: [bold]{db.organization_count}[/bold]  |  "
        f"MAC blocks: [bold]{db.block_count}[/bold]"
    )

    if args.limit > 0 and manufacturers:
        console.print()
        console.print("[dim]Manufacturers:[/dim]")
        if len(manufacturers) <= 2 * args.limit:
            shown = manufacturers
        else:
            shown = manufacturers[: args.limit] + ["..."] + manufacturers[-args.limit :]
        for name in shown:
            console.print(f"  {escape(name)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mac-oui")
    p.add_argument("--db", help="Path to OUI CSV database (default: bundled copy)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    mac_cmd = sub.add_parser("mac", help="Look up the organization owning a MAC address")
    mac_cmd.add_argument("address", help="MAC address, e.g. 70:B3:D5:E7:4F:81")
    mac_cmd.add_argument("--json", action="store_true", help="Print the record as JSON")
    mac_cmd.set_defaults(func=cmd_mac)

    manuf_cmd = sub.add_parser("manufacturer", help="List the address blocks of an organization")
    manuf_cmd.add_argument("name", help="Exact organization name (case-sensitive)")
    manuf_cmd.add_argument("--json", action="store_true", help="Print the records as JSON")
    manuf_cmd.set_defaults(func=cmd_manufacturer)

    stats_cmd = sub.add_parser("stats", help="Show database statistics")
    stats_cmd.add_argument(
        "--limit", type=int, default=20, help="Manufacturer names to show from each end"
    )
    stats_cmd.set_defaults(func=cmd_stats)
    return p


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        code = args.func(args)
        raise SystemExit(code)
    except KeyboardInterrupt:
        raise SystemExit(2)
    except Exception as e:
        Console().print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(2)
