"""Tests for moneytrail.domain.dashboard pure functions."""

from datetime import datetime
from decimal import Decimal

import pytest

from moneytrail.domain.budget import calculate_budget_utilization
from moneytrail.domain.dashboard import (
    calculate_top_categories,
    compute_dashboard_summary,
    select_recent_transactions,
)
from moneytrail.domain.models import CategoryName, Description, Money, Month, TransactionType
from moneytrail.domain.records import BudgetDefinition, TransactionRecord

MARCH = Month("2024-03")


def txn(amount: str, day: int, category: str = "Groceries", kind: str = "expense", month: int = 3) -> TransactionRecord:
    return TransactionRecord(
        amount=Money(Decimal(amount)),
        description=Description(f"{category} {day}"),
        category=CategoryName(category),
        type=TransactionType(kind),
        date=datetime(2024, month, day),
    )


TRANSACTIONS = [
    txn("3000", 1, "Other", kind="income"),
    txn("120", 2, "Groceries"),
    txn("80", 9, "Groceries"),
    txn("600", 12, "Travel"),
    txn("50", 15, "Entertainment"),
    txn("25", 20, "Healthcare"),
    txn("400", 20, "Shopping", month=2),
]


class TestSelectRecentTransactions:
    """Tests for select_recent_transactions."""

    def test_newest_first(self) -> None:
        """Should return the latest transactions first, limited."""
        recent = select_recent_transactions(TRANSACTIONS, limit=2)

        assert [t.date.day for t in recent] == [20, 15]
        assert recent[0].category == "Healthcare"


class TestCalculateTopCategories:
    """Tests for calculate_top_categories."""

    def test_top_three_with_shares(self) -> None:
        """Should rank categories and give each its share of the total."""
        march_expenses = [t for t in TRANSACTIONS if t.type == "expense" and t.date.month == 3]

        top = calculate_top_categories(march_expenses)

        assert [c.category for c in top] == ["Travel", "Groceries", "Entertainment"]
        assert top[0].amount == Decimal("600")
        assert top[0].share == pytest.approx(68.571, abs=0.001)

    def test_empty(self) -> None:
        """Should return nothing for no expenses."""
        assert calculate_top_categories([]) == []


class TestComputeDashboardSummary:
    """Tests for compute_dashboard_summary."""

    def test_summary(self) -> None:
        """Should compute all-time totals alongside month details."""
        budgets = [BudgetDefinition(CategoryName("Travel"), Money(Decimal("500")), MARCH)]
        utilizations = calculate_budget_utilization(TRANSACTIONS, budgets, MARCH)

        summary = compute_dashboard_summary(TRANSACTIONS, utilizations, MARCH, recent_limit=3)

        assert summary.total_income == Decimal("3000")
        assert summary.total_expenses == Decimal("1275")
        assert summary.net_balance == Decimal("1725")
        assert summary.month_expenses == Decimal("875")
        assert len(summary.recent_transactions) == 3
        assert summary.budget.over_budget_count == 1
        assert summary.budget.total_spent == Decimal("600")

    def test_empty(self) -> None:
        """Should return zero totals for no data."""
        summary = compute_dashboard_summary([], [], MARCH)

        assert summary.net_balance == Decimal("0")
        assert summary.recent_transactions == []
        assert summary.top_categories == []
