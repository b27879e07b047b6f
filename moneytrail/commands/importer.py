"""Import command for loading transactions from CSV files."""

import csv
import sqlite3
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from moneytrail.commands.transactions import check_payload, normalize_date
from moneytrail.domain.models import EXPENSE
from moneytrail.domain.records import TransactionRecord, record_from_payload
from moneytrail.store.queries import insert_transaction
from moneytrail.store.schema import get_db_path

console = Console()

CSV_COLUMNS = ("date", "description", "amount", "category", "type")


@dataclass
class ImportStats:
    """Statistics from importing transactions."""

    inserted: int = 0
    rejected: list[tuple[int, dict[str, str]]] = field(default_factory=list)


def csv_row_to_payload(row: dict[str, str]) -> dict[str, Any]:
    """Map a CSV row onto a transaction payload.

    Header names are matched case-insensitively. A missing or blank type
    column means the row is an expense.
    """
    normalized = {(key or "").strip().lower(): (value or "").strip() for key, value in row.items()}
    payload: dict[str, Any] = {column: normalized.get(column, "") for column in CSV_COLUMNS}
    payload["amount"] = payload["amount"].replace(",", "")
    payload["type"] = payload["type"].lower() or EXPENSE
    return payload


def parse_csv_rows(rows: list[dict[str, str]]) -> tuple[list[TransactionRecord], list[tuple[int, dict[str, str]]]]:
    """Turn CSV rows into records, collecting per-row errors.

    Args:
        rows: Rows from csv.DictReader.

    Returns:
        Tuple of (records, rejected) where rejected holds (line number, errors).
    """
    records: list[TransactionRecord] = []
    rejected: list[tuple[int, dict[str, str]]] = []

    # Line 1 is the header
    for line_no, row in enumerate(rows, start=2):
        payload = csv_row_to_payload(row)
        result = check_payload(payload)
        if not result.is_valid:
            rejected.append((line_no, result.errors))
            continue

        try:
            payload["date"] = normalize_date(payload["date"])
            records.append(record_from_payload(payload))
        except ValueError as e:
            rejected.append((line_no, {"row": str(e)}))

    return records, rejected


def import_command(csv_file: str, dry_run: bool = False) -> None:
    """Import transactions from a CSV file."""
    db_path = get_db_path()
    csv_path = Path(csv_file).expanduser()

    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as f:
            rows = list(csv.DictReader(f))
    except OSError as e:
        console.print(f"[red]Could not read {csv_path}: {e}[/red]", style="bold")
        sys.exit(1)

    records, rejected = parse_csv_rows(rows)
    stats = ImportStats(rejected=rejected)

    if not dry_run:
        try:
            for record in records:
                insert_transaction(record, db_path)
                stats.inserted += 1
        except sqlite3.Error as e:
            console.print(f"[red]Database error: {e}[/red]", style="bold")
            sys.exit(1)

    if dry_run:
        console.print(f"[cyan]Dry run:[/cyan] {len(records)} transactions would be imported")
    else:
        console.print(f"[green]✓[/green] Imported {stats.inserted} transactions from {csv_path.name}")

    if stats.rejected:
        console.print(f"\n[yellow]Skipped {len(stats.rejected)} invalid rows:[/yellow]")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Line", style="dim", justify="right")
        table.add_column("Problems", style="red")
        for line_no, errors in stats.rejected:
            table.add_row(str(line_no), "; ".join(f"{k}: {v}" for k, v in errors.items()))
        console.print(table)
