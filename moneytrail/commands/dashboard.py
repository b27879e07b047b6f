"""Dashboard command: one-screen overview of income, spending and budgets."""

import sqlite3
import sys

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from moneytrail.commands.transactions import read_settings
from moneytrail.dates import current_month, month_label, parse_month
from moneytrail.domain.budget import calculate_budget_utilization
from moneytrail.domain.categories import category_color
from moneytrail.domain.dashboard import DashboardSummary, compute_dashboard_summary
from moneytrail.domain.formatting import format_money
from moneytrail.domain.models import EXPENSE
from moneytrail.store.queries import get_budgets, get_transactions
from moneytrail.store.schema import get_db_path

console = Console()


def render_stat_cards(summary: DashboardSummary, symbol: str) -> None:
    net_colour = "green" if summary.net_balance >= 0 else "red"
    cards = [
        Panel(f"[green]{format_money(summary.total_income, symbol)}[/green]", title="Total Income"),
        Panel(f"[red]{format_money(summary.total_expenses, symbol)}[/red]", title="Total Expenses"),
        Panel(f"[{net_colour}]{format_money(summary.net_balance, symbol)}[/{net_colour}]", title="Net Balance"),
        Panel(f"[cyan]{format_money(summary.month_expenses, symbol)}[/cyan]", title="This Month"),
    ]
    console.print(Columns(cards))


def render_recent_transactions(summary: DashboardSummary, symbol: str) -> None:
    if not summary.recent_transactions:
        console.print("[dim]No transactions yet[/dim]\n")
        return

    table = Table(title="Recent transactions", show_header=True, header_style="bold")
    table.add_column("Date", style="cyan")
    table.add_column("Description")
    table.add_column("Category")
    table.add_column("Amount", justify="right")

    for txn in summary.recent_transactions:
        if txn.type == EXPENSE:
            amount_display = f"[red]-{format_money(txn.amount, symbol)}[/red]"
        else:
            amount_display = f"[green]+{format_money(txn.amount, symbol)}[/green]"
        table.add_row(f"{txn.date:%b %d, %Y}", txn.description, txn.category, amount_display)

    console.print(table)


def render_top_categories(summary: DashboardSummary, symbol: str) -> None:
    console.print(f"\n[bold]Top categories - {month_label(summary.month)}[/bold]")
    if not summary.top_categories:
        console.print("  [dim]No expenses this month[/dim]")
        return

    for item in summary.top_categories:
        colour = category_color(item.category)
        console.print(
            f"  [{colour}]●[/] {item.category:20} {format_money(item.amount, symbol):>12}"
            f"  [dim]{item.share:.1f}% of monthly expenses[/dim]"
        )


def render_budget_overview(summary: DashboardSummary, symbol: str) -> None:
    budget = summary.budget
    console.print("\n[bold]Budget overview[/bold]")
    if budget.total_budget <= 0:
        console.print("  [dim]No budgets set for this month[/dim]")
        return

    console.print(
        f"  {format_money(budget.total_spent, symbol)} of {format_money(budget.total_budget, symbol)}"
        f" ({budget.utilization:.1f}%)"
    )
    if budget.over_budget_count:
        console.print(f"  [red]{budget.over_budget_count} categories over budget[/red]")
    else:
        console.print("  [green]All categories within budget[/green]")


def dashboard_command(month: str | None = None) -> None:
    """Show the dashboard for a month (defaults to the current month)."""
    db_path = get_db_path()
    settings = read_settings()
    symbol = settings["currency_symbol"]

    try:
        target_month = parse_month(month) if month else current_month()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        transactions = get_transactions(db_path)
        budgets = get_budgets(target_month, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    utilizations = calculate_budget_utilization(transactions, budgets, target_month)
    summary = compute_dashboard_summary(
        transactions,
        utilizations,
        target_month,
        recent_limit=settings["recent_transactions"],
    )

    render_stat_cards(summary, symbol)
    render_recent_transactions(summary, symbol)
    render_top_categories(summary, symbol)
    render_budget_overview(summary, symbol)
