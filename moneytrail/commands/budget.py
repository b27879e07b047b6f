"""Budget command for setting monthly limits and showing utilization."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from moneytrail.commands.transactions import read_settings
from moneytrail.dates import current_month, month_label, parse_month
from moneytrail.domain.budget import (
    BudgetUtilization,
    calculate_budget_utilization,
    summarize_budget_utilization,
)
from moneytrail.domain.categories import CATEGORIES, is_known_category
from moneytrail.domain.formatting import format_money, format_percentage
from moneytrail.domain.models import CategoryName, Month
from moneytrail.domain.records import BudgetDefinition, to_money
from moneytrail.domain.validation import validate_budget
from moneytrail.store.queries import get_budgets, get_transactions, replace_budgets, set_budget
from moneytrail.store.schema import get_db_path

console = Console()


def parse_budget_assignment(assignment: str, month: Month) -> tuple[BudgetDefinition | None, dict[str, str]]:
    """Parse a CATEGORY=AMOUNT assignment into a budget.

    Args:
        assignment: Text such as "Groceries=200".
        month: Month the budget applies to.

    Returns:
        Tuple of (budget, errors). Budget is None when errors is non-empty.
    """
    category, sep, amount = assignment.partition("=")
    if not sep:
        return None, {"budget": f"Expected CATEGORY=AMOUNT, got '{assignment}'"}

    payload = {"category": category.strip(), "monthly_limit": amount.strip(), "month": month}
    result = validate_budget(payload)
    errors = dict(result.errors)
    if payload["category"] and not is_known_category(payload["category"]):
        errors["category"] = f"Category must be one of: {', '.join(CATEGORIES)}"
    if errors:
        return None, errors

    budget = BudgetDefinition(
        category=CategoryName(payload["category"]),
        monthly_limit=to_money(payload["monthly_limit"]),
        month=month,
    )
    return budget, {}


def collapse_budgets(budgets: list[BudgetDefinition]) -> list[BudgetDefinition]:
    """Keep one budget per category; a later assignment wins over an earlier one."""
    by_category: dict[CategoryName, BudgetDefinition] = {}
    for budget in budgets:
        by_category[budget.category] = budget
    return list(by_category.values())


def format_usage_with_color(utilization: BudgetUtilization, warning_percent: float) -> str:
    """Color the percentage red when over budget, yellow past the warning level."""
    text = format_percentage(utilization.percentage)
    if utilization.is_over_budget:
        return f"[red]{text}[/red]"
    elif utilization.percentage > warning_percent:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def show_budget_status(target_month: Month, db_path: Path) -> None:
    """Show budget utilization for a month.

    Args:
        target_month: Month in YYYY-MM format.
        db_path: Path to database.
    """
    settings = read_settings()
    symbol = settings["currency_symbol"]
    warning_percent = settings["budget_warning_percent"]

    console.print(f"[bold cyan]{month_label(target_month)} Budget Status[/bold cyan]\n")

    budgets = get_budgets(target_month, db_path)
    if not budgets:
        console.print(f"[yellow]No budgets set for {month_label(target_month)}[/yellow]")
        console.print("[dim]Use 'moneytrail budget --set \"Groceries=200\"' to add one[/dim]")
        return

    transactions = get_transactions(db_path, month=target_month)
    utilizations = calculate_budget_utilization(transactions, budgets, target_month)
    summary = summarize_budget_utilization(utilizations)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category", style="white")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")

    for item in utilizations:
        if item.is_over_budget:
            remaining_display = f"[red]over by {format_money(item.overspent, symbol)}[/red]"
        else:
            remaining_display = f"[green]{format_money(item.remaining, symbol)}[/green]"

        table.add_row(
            item.category,
            format_money(item.monthly_limit, symbol),
            format_money(item.spent, symbol),
            remaining_display,
            format_usage_with_color(item, warning_percent),
        )

    console.print(table)

    console.print(f"\n[bold]Total budget:[/bold] {format_money(summary.total_budget, symbol)}")
    console.print(f"[bold]Total spent:[/bold]  {format_money(summary.total_spent, symbol)}")
    console.print(f"[bold]Utilization:[/bold]  {summary.utilization:.1f}%")
    if summary.over_budget_count:
        console.print(f"[red]{summary.over_budget_count} categories over budget[/red]")
    else:
        console.print("[green]All categories within budget[/green]")


def budget_command(
    month: str | None = None,
    assignments: list[str] | None = None,
    replace: bool = False,
) -> None:
    """Set budgets for a month and show their status."""
    db_path = get_db_path()

    try:
        target_month = parse_month(month) if month else current_month()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    try:
        if assignments or replace:
            budgets: list[BudgetDefinition] = []
            failed = False
            for assignment in assignments or []:
                budget, errors = parse_budget_assignment(assignment, target_month)
                if budget is None:
                    failed = True
                    for field_name, message in errors.items():
                        console.print(f"[red]•[/red] {assignment}: {field_name}: {message}")
                else:
                    budgets.append(budget)

            if failed:
                console.print("[red]No budgets were changed[/red]", style="bold")
                sys.exit(1)

            budgets = collapse_budgets(budgets)

            if replace:
                replace_budgets(target_month, budgets, db_path)
                console.print(f"[green]✓[/green] Replaced budgets for {month_label(target_month)}")
            else:
                for budget in budgets:
                    set_budget(budget, db_path)
                    console.print(f"[green]✓[/green] {budget.category}: {budget.monthly_limit}")
            console.print()

        show_budget_status(target_month, db_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
