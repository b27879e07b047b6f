"""Pure functions for the dashboard overview."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from moneytrail.dates import month_key
from moneytrail.domain.budget import BudgetSummary, BudgetUtilization, summarize_budget_utilization
from moneytrail.domain.categories import is_expense, is_income
from moneytrail.domain.models import CategoryName, Money, Month
from moneytrail.domain.records import TransactionRecord
from moneytrail.domain.rollups import sum_expenses_by_category


@dataclass(frozen=True)
class CategoryShare:
    """Immutable spending of one category as a share of the month."""

    category: CategoryName
    amount: Money
    share: float


@dataclass(frozen=True)
class DashboardSummary:
    """Immutable dashboard overview."""

    total_income: Money
    total_expenses: Money
    net_balance: Money
    month: Month
    month_expenses: Money
    recent_transactions: list[TransactionRecord]
    top_categories: list[CategoryShare]
    budget: BudgetSummary


def _total(transactions: Iterable[TransactionRecord]) -> Money:
    return Money(sum((t.amount for t in transactions), Decimal("0")))


def select_recent_transactions(transactions: Iterable[TransactionRecord], limit: int = 5) -> list[TransactionRecord]:
    """Newest transactions first, at most `limit` of them."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)[:limit]


def calculate_top_categories(
    month_expenses: Iterable[TransactionRecord],
    limit: int = 3,
) -> list[CategoryShare]:
    """Largest spending categories with their share of the total.

    Args:
        month_expenses: Expense transactions, usually of a single month.
        limit: Maximum number of categories to return.

    Returns:
        CategoryShare list ordered by amount, largest first.
    """
    totals = sum_expenses_by_category(month_expenses)
    grand_total = sum(totals.values(), Decimal("0"))
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]

    return [
        CategoryShare(
            category=category,
            amount=amount,
            share=float(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category, amount in ranked
    ]


def compute_dashboard_summary(
    transactions: Iterable[TransactionRecord],
    utilizations: Iterable[BudgetUtilization],
    month: Month,
    recent_limit: int = 5,
    top_limit: int = 3,
) -> DashboardSummary:
    """Compute the dashboard overview for a month.

    Args:
        transactions: All transactions.
        utilizations: Budget utilization already computed for `month`.
        month: Month in YYYY-MM format.
        recent_limit: Number of recent transactions to include.
        top_limit: Number of top spending categories to include.

    Returns:
        DashboardSummary with all-time totals and month details.
    """
    items = list(transactions)
    total_income = _total(t for t in items if is_income(t))
    total_expenses = _total(t for t in items if is_expense(t))
    month_expenses = [t for t in items if is_expense(t) and month_key(t.date) == month]

    return DashboardSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=Money(total_income - total_expenses),
        month=month,
        month_expenses=_total(month_expenses),
        recent_transactions=select_recent_transactions(items, recent_limit),
        top_categories=calculate_top_categories(month_expenses, top_limit),
        budget=summarize_budget_utilization(utilizations),
    )
