"""Transaction management commands (add, edit, delete, list)."""

import sqlite3
import sys
import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from moneytrail.config import load_settings
from moneytrail.dates import parse_month
from moneytrail.domain.categories import CATEGORIES, category_color, is_known_category
from moneytrail.domain.formatting import format_money
from moneytrail.domain.models import EXPENSE, CategoryName, Month, TransactionType
from moneytrail.domain.records import TransactionRecord, record_from_payload
from moneytrail.domain.validation import ValidationResult, validate_transaction
from moneytrail.store.queries import (
    delete_transaction,
    get_transaction,
    get_transactions,
    insert_transaction,
    update_transaction,
)
from moneytrail.store.schema import get_db_path

console = Console()


def normalize_date(raw_date: str) -> datetime:
    """Parse a user supplied date into a naive datetime.

    ISO dates are read directly. Anything else goes through
    pandas.to_datetime with day-first parsing, which copes with the
    European, American and textual formats bank exports use.

    Args:
        raw_date: Raw date string.

    Returns:
        Parsed datetime without timezone (aware values are converted to UTC).

    Raises:
        ValueError: If date cannot be parsed.
    """
    raw_date = raw_date.strip()
    try:
        parsed = datetime.fromisoformat(raw_date)
    except ValueError:
        try:
            timestamp = pd.to_datetime(raw_date, dayfirst=True)
        except (ValueError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
        if pd.isna(timestamp):
            raise ValueError(f"Could not parse date '{raw_date}'")
        parsed = timestamp.to_pydatetime()

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def check_payload(payload: dict[str, Any]) -> ValidationResult:
    """Validate a payload and also require a known category."""
    result = validate_transaction(payload)
    errors = dict(result.errors)

    category = payload.get("category")
    if category and not is_known_category(category):
        errors["category"] = f"Category must be one of: {', '.join(CATEGORIES)}"

    return ValidationResult(is_valid=not errors, errors=errors)


def print_validation_errors(errors: dict[str, str]) -> None:
    console.print("[red]Validation failed:[/red]", style="bold")
    for field_name, message in errors.items():
        console.print(f"  [red]•[/red] {field_name}: {message}")


def read_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load settings, exiting with a message if the config file is not valid TOML."""
    try:
        return load_settings(config_path)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]")
        console.print("[dim]Fix the file or run 'moneytrail init --force' to recreate it[/dim]")
        sys.exit(1)


def build_record(payload: dict[str, Any], txn_id: int | None = None) -> TransactionRecord:
    """Validate a raw payload and turn it into a record, exiting on failure."""
    result = check_payload(payload)
    if not result.is_valid:
        print_validation_errors(result.errors)
        sys.exit(1)

    try:
        payload = {**payload, "date": normalize_date(str(payload["date"]))}
        return record_from_payload(payload, txn_id)
    except ValueError as e:
        console.print(f"[red]Invalid transaction: {e}[/red]")
        sys.exit(1)


def render_transaction(record: TransactionRecord, symbol: str) -> None:
    sign = "-" if record.type == EXPENSE else "+"
    colour = "red" if record.type == EXPENSE else "green"
    console.print(f"  Date: {record.date:%Y-%m-%d}")
    console.print(f"  Description: {record.description}")
    console.print(f"  Amount: [{colour}]{sign}{format_money(record.amount, symbol)}[/{colour}]")
    console.print(f"  Category: {record.category}")


def add_command(
    amount: str,
    description: str,
    category: str,
    txn_type: str = EXPENSE,
    date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Amount as a positive number.
        description: Transaction description.
        category: One of the fixed categories.
        txn_type: "income" or "expense".
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, or other formats). Defaults to today.
    """
    db_path = get_db_path()
    settings = read_settings()

    payload = {
        "amount": amount,
        "description": description,
        "category": category,
        "type": txn_type,
        "date": date or datetime.now().strftime("%Y-%m-%d"),
    }
    record = build_record(payload)

    try:
        txn_id = insert_transaction(record, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction {txn_id} added:")
    render_transaction(record, settings["currency_symbol"])


def edit_command(
    txn_id: int,
    amount: str | None = None,
    description: str | None = None,
    category: str | None = None,
    txn_type: str | None = None,
    date: str | None = None,
) -> None:
    """Edit fields of an existing transaction. Fields left as None are kept."""
    db_path = get_db_path()
    settings = read_settings()

    try:
        existing = get_transaction(txn_id, db_path)
        if existing is None:
            console.print(f"[red]Transaction {txn_id} not found[/red]")
            sys.exit(1)

        payload = {
            "amount": amount if amount is not None else existing.amount,
            "description": description if description is not None else existing.description,
            "category": category if category is not None else existing.category,
            "type": txn_type if txn_type is not None else existing.type,
            "date": date if date is not None else existing.date.isoformat(),
        }
        record = build_record(payload, txn_id)

        update_transaction(txn_id, record, db_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Transaction {txn_id} updated:")
    render_transaction(record, settings["currency_symbol"])


def delete_command(txn_id: int, yes: bool = False) -> None:
    """Delete a transaction after confirmation."""
    db_path = get_db_path()

    try:
        existing = get_transaction(txn_id, db_path)
        if existing is None:
            console.print(f"[red]Transaction {txn_id} not found[/red]")
            sys.exit(1)

        if not yes:
            render_transaction(existing, read_settings()["currency_symbol"])
            if not typer.confirm("Delete this transaction?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return

        delete_transaction(txn_id, db_path)
        console.print(f"[green]✓[/green] Transaction {txn_id} deleted")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(
    category: str | None = None,
    txn_type: str | None = None,
    month: str | None = None,
    limit: int | None = None,
    all: bool = False,
    search: str | None = None,
) -> None:
    """List transactions, newest first."""
    db_path = get_db_path()
    settings = read_settings()
    symbol = settings["currency_symbol"]

    try:
        month_typed: Month | None = parse_month(month) if month else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    actual_limit = None if all else (limit or settings["default_list_limit"])

    try:
        transactions = get_transactions(
            db_path,
            category=CategoryName(category) if category else None,
            txn_type=TransactionType(txn_type) if txn_type else None,
            month=month_typed,
            limit=actual_limit,
            search=search,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Transactions (showing {len(transactions)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        if txn.type == EXPENSE:
            amount_display = f"[red]-{format_money(txn.amount, symbol)}[/red]"
        else:
            amount_display = f"[green]+{format_money(txn.amount, symbol)}[/green]"

        colour = category_color(txn.category)
        table.add_row(
            str(txn.id),
            f"{txn.date:%Y-%m-%d}",
            txn.description,
            f"[{colour}]{txn.category}[/]",
            amount_display,
        )

    console.print(table)
