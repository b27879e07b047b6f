"""CLI entry point for moneytrail."""

import typer

from moneytrail.commands.admin import backup_command, init_command
from moneytrail.commands.budget import budget_command
from moneytrail.commands.dashboard import dashboard_command
from moneytrail.commands.importer import import_command
from moneytrail.commands.report import report_command
from moneytrail.commands.transactions import (
    add_command,
    delete_command,
    edit_command,
    list_command,
)

app = typer.Typer(
    name="moneytrail",
    help="moneytrail - track your spending against monthly budgets",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """moneytrail - track your spending against monthly budgets."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize moneytrail database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    amount: str,
    description: str,
    category: str = typer.Option(..., "--category", "-c", help="Spending category, e.g. 'Groceries'"),
    txn_type: str = typer.Option("expense", "--type", "-t", help="'income' or 'expense'"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Add a transaction."""
    add_command(amount, description, category, txn_type, date)


@app.command()
def edit(
    txn_id: int,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    txn_type: str = typer.Option(None, "--type", "-t", help="'income' or 'expense'"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Edit a transaction."""
    edit_command(txn_id, amount, description, category, txn_type, date)


@app.command()
def delete(
    txn_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(txn_id, yes)


@app.command(name="list")
def list_transactions(
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    txn_type: str = typer.Option(None, "--type", "-t", help="Only 'income' or 'expense'"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    limit: int = typer.Option(None, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
    search: str = typer.Option(None, "--search", "-q", help="Only descriptions containing this text"),
) -> None:
    """List your transactions."""
    list_command(category, txn_type, month, limit, all, search)


@app.command(name="import")
def import_csv(
    csv_file: str,
    dry_run: bool = typer.Option(False, "--dry-run", help="Check the file without saving anything"),
) -> None:
    """Import transactions from a CSV file (date, description, amount, category, type)."""
    import_command(csv_file, dry_run)


@app.command(name="report")
def report(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM); default is all time"),
    histogram: bool = typer.Option(True, help="Show histogram bars"),
) -> None:
    """Show your expenses by month and by category."""
    report_command(month, histogram)


@app.command()
def budget(
    assignments: list[str] = typer.Option(None, "--set", "-s", help="Set a budget, e.g. 'Groceries=200'"),
    replace: bool = typer.Option(False, "--replace", help="Replace all budgets of the month with --set values"),
    month: str = typer.Option(None, "--month", help="Month to budget for (YYYY-MM)"),
) -> None:
    """Set your monthly budgets and see how much of them you have used."""
    budget_command(month, assignments, replace)


@app.command()
def dashboard(
    month: str = typer.Option(None, "--month", help="Month to summarise (YYYY-MM)"),
) -> None:
    """Show an overview of income, spending and budgets."""
    dashboard_command(month)


if __name__ == "__main__":
    app()
