"""Pure functions for rolling up expenses by month and by category.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimals (Money type).
"""

from dataclasses import dataclass
from typing import Iterable

from moneytrail.dates import month_key, month_label
from moneytrail.domain.categories import category_color, is_expense
from moneytrail.domain.models import ZERO, CategoryName, Money, Month
from moneytrail.domain.records import TransactionRecord


@dataclass(frozen=True)
class MonthlyExpenseAggregate:
    """Immutable expense total for one month."""

    month_key: Month
    display_label: str
    amount: Money


@dataclass(frozen=True)
class CategoryExpenseAggregate:
    """Immutable expense total for one category."""

    category: CategoryName
    amount: Money
    color: str


def group_transactions_by_month(
    transactions: Iterable[TransactionRecord],
) -> dict[Month, list[TransactionRecord]]:
    """Group transactions by their YYYY-MM month key.

    Args:
        transactions: Transactions of any type.

    Returns:
        Dictionary of month key to transactions, in first-encounter order.
    """
    grouped: dict[Month, list[TransactionRecord]] = {}
    for transaction in transactions:
        grouped.setdefault(month_key(transaction.date), []).append(transaction)
    return grouped


def calculate_monthly_expenses(transactions: Iterable[TransactionRecord]) -> list[MonthlyExpenseAggregate]:
    """Total expenses per calendar month.

    Income is ignored. YYYY-MM keys sort chronologically as strings.

    Args:
        transactions: Transactions of any type.

    Returns:
        One aggregate per month with expenses, ascending by month key.
    """
    totals: dict[Month, Money] = {}
    for transaction in transactions:
        if not is_expense(transaction):
            continue
        key = month_key(transaction.date)
        totals[key] = Money(totals.get(key, ZERO) + transaction.amount)

    return [
        MonthlyExpenseAggregate(month_key=key, display_label=month_label(key), amount=totals[key])
        for key in sorted(totals)
    ]


def sum_expenses_by_category(transactions: Iterable[TransactionRecord]) -> dict[CategoryName, Money]:
    """Sum expense amounts per category, in first-encounter order."""
    totals: dict[CategoryName, Money] = {}
    for transaction in transactions:
        if is_expense(transaction):
            totals[transaction.category] = Money(totals.get(transaction.category, ZERO) + transaction.amount)
    return totals


def calculate_category_expenses(transactions: Iterable[TransactionRecord]) -> list[CategoryExpenseAggregate]:
    """Total expenses per category with display colors.

    Categories without any expense transaction get no entry at all.

    Args:
        transactions: Transactions of any type.

    Returns:
        One aggregate per category, in order of first occurrence.
    """
    totals = sum_expenses_by_category(transactions)
    return [
        CategoryExpenseAggregate(category=category, amount=amount, color=category_color(category))
        for category, amount in totals.items()
    ]


def sort_by_amount(aggregates: Iterable[CategoryExpenseAggregate]) -> list[CategoryExpenseAggregate]:
    """Sort category aggregates by amount, largest first (ties keep input order)."""
    return sorted(aggregates, key=lambda aggregate: aggregate.amount, reverse=True)
