"""Pure functions for budget utilization.

This module contains the functional core for budget operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are Decimals (Money type).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from moneytrail.dates import month_key
from moneytrail.domain.models import ZERO, CategoryName, Money, Month
from moneytrail.domain.records import BudgetDefinition, TransactionRecord
from moneytrail.domain.rollups import sum_expenses_by_category


@dataclass(frozen=True)
class BudgetUtilization:
    """Immutable spending status of one budgeted category for a month."""

    category: CategoryName
    monthly_limit: Money
    month: Month
    spent: Money
    remaining: Money
    percentage: float
    is_over_budget: bool

    @property
    def overspent(self) -> Money:
        """Amount spent past the limit (zero when within budget)."""
        return Money(max(ZERO, self.spent - self.monthly_limit))


@dataclass(frozen=True)
class BudgetSummary:
    """Immutable totals across all budgeted categories of a month."""

    total_budget: Money
    total_spent: Money
    utilization: float
    over_budget_count: int


def calculate_percentage_used(spent: Money, monthly_limit: Money) -> float:
    """Calculate percentage of budget used.

    Args:
        spent: Amount spent.
        monthly_limit: Budget ceiling.

    Returns:
        Percentage clamped to 0-100. A zero limit always gives 0.
    """
    if monthly_limit <= 0:
        return 0.0
    percentage = float(spent / monthly_limit * 100)
    return min(100.0, max(0.0, percentage))


def create_budget_utilization(budget: BudgetDefinition, spent: Money) -> BudgetUtilization:
    """Create utilization for a single budget given what was spent against it."""
    return BudgetUtilization(
        category=budget.category,
        monthly_limit=budget.monthly_limit,
        month=budget.month,
        spent=spent,
        remaining=Money(max(ZERO, budget.monthly_limit - spent)),
        percentage=calculate_percentage_used(spent, budget.monthly_limit),
        is_over_budget=spent > budget.monthly_limit,
    )


def calculate_budget_utilization(
    transactions: Iterable[TransactionRecord],
    budgets: Iterable[BudgetDefinition],
    month: Month,
) -> list[BudgetUtilization]:
    """Join budgets against one month's expenses.

    The month only selects transactions. Budgets are used as given, so the
    caller passes the budgets of that month. Spending in categories without a
    budget does not appear in the result.

    Args:
        transactions: All transactions (any month, any type).
        budgets: Budget definitions, usually those of `month`.
        month: Month in YYYY-MM format.

    Returns:
        One BudgetUtilization per budget, in input order.
    """
    spending = sum_expenses_by_category(t for t in transactions if month_key(t.date) == month)

    return [create_budget_utilization(budget, spending.get(budget.category, ZERO)) for budget in budgets]


def summarize_budget_utilization(utilizations: Iterable[BudgetUtilization]) -> BudgetSummary:
    """Summarize budget utilization across categories.

    Args:
        utilizations: Per-category utilization for one month.

    Returns:
        BudgetSummary. Utilization is not clamped and is 0 with no budget.
    """
    items = list(utilizations)
    total_budget = Money(sum((u.monthly_limit for u in items), Decimal("0")))
    total_spent = Money(sum((u.spent for u in items), Decimal("0")))
    utilization = float(total_spent / total_budget * 100) if total_budget > 0 else 0.0

    return BudgetSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        utilization=utilization,
        over_budget_count=sum(1 for u in items if u.is_over_budget),
    )
