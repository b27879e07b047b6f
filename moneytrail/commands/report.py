"""Report command for monthly and category expense breakdowns."""

import sqlite3
import sys

from rich.console import Console
from rich.table import Table

from moneytrail.commands.transactions import read_settings
from moneytrail.dates import month_label, parse_month
from moneytrail.domain.formatting import calculate_bar_length, format_money
from moneytrail.domain.models import Money, Month
from moneytrail.domain.rollups import (
    CategoryExpenseAggregate,
    MonthlyExpenseAggregate,
    calculate_category_expenses,
    calculate_monthly_expenses,
    sort_by_amount,
)
from moneytrail.store.queries import get_transactions
from moneytrail.store.schema import get_db_path

console = Console()

BAR_WIDTH = 30


def render_monthly_expenses(monthly: list[MonthlyExpenseAggregate], symbol: str, histogram: bool) -> None:
    """Render the month-by-month expense trend."""
    table = Table(title="Monthly expenses", show_header=True, header_style="bold")
    table.add_column("Month", style="cyan")
    table.add_column("Spent", justify="right")
    if histogram:
        table.add_column("")

    max_amount = max(m.amount for m in monthly)
    for month in monthly:
        row = [month.display_label, format_money(month.amount, symbol)]
        if histogram:
            row.append("█" * calculate_bar_length(month.amount, max_amount, BAR_WIDTH))
        table.add_row(*row)

    console.print(table)
    total = Money(sum(m.amount for m in monthly))
    console.print(f"  [bold]Total:[/bold] {format_money(total, symbol)}\n")


def render_category_expenses(categories: list[CategoryExpenseAggregate], symbol: str, histogram: bool) -> None:
    """Render spending per category, largest first, in category colors."""
    total = sum(c.amount for c in categories)

    table = Table(title="Expenses by category", show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Spent", justify="right")
    table.add_column("Share", justify="right", style="dim")
    if histogram:
        table.add_column("")

    ranked = sort_by_amount(categories)
    max_amount = ranked[0].amount
    for cat in ranked:
        share = f"{cat.amount / total * 100:.1f}%" if total > 0 else "-"
        row = [f"[{cat.color}]{cat.category}[/]", format_money(cat.amount, symbol), share]
        if histogram:
            bar = "█" * calculate_bar_length(cat.amount, max_amount, BAR_WIDTH)
            row.append(f"[{cat.color}]{bar}[/]")
        table.add_row(*row)

    console.print(table)
    console.print(f"  [bold]Total:[/bold] {format_money(Money(total), symbol)}\n")


def report_command(month: str | None = None, histogram: bool = True) -> None:
    """Show expense totals per month and per category.

    With a month, both views are limited to that month.
    """
    db_path = get_db_path()
    symbol = read_settings()["currency_symbol"]

    try:
        report_month: Month | None = parse_month(month) if month else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions = get_transactions(db_path, month=report_month)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    period = month_label(report_month) if report_month else "All Time"
    console.print(f"[bold cyan]{period}[/bold cyan]\n")

    monthly = calculate_monthly_expenses(transactions)
    if not monthly:
        console.print("[dim]No expenses recorded yet[/dim]")
        return

    render_monthly_expenses(monthly, symbol, histogram)
    render_category_expenses(calculate_category_expenses(transactions), symbol, histogram)
