"""Tests for moneytrail.domain.rollups pure functions."""

from datetime import datetime
from decimal import Decimal

from moneytrail.domain.categories import DEFAULT_COLOR
from moneytrail.domain.models import CategoryName, Description, Money, Month, TransactionType
from moneytrail.domain.records import TransactionRecord
from moneytrail.domain.rollups import (
    CategoryExpenseAggregate,
    calculate_category_expenses,
    calculate_monthly_expenses,
    group_transactions_by_month,
    sort_by_amount,
)


def txn(amount: str, when: datetime, category: str = "Groceries", kind: str = "expense") -> TransactionRecord:
    return TransactionRecord(
        amount=Money(Decimal(amount)),
        description=Description("test"),
        category=CategoryName(category),
        type=TransactionType(kind),
        date=when,
    )


MIXED = [
    txn("100", datetime(2024, 3, 5), "Groceries"),
    txn("500", datetime(2024, 3, 10), "Other", kind="income"),
    txn("50", datetime(2024, 3, 20), "Travel"),
    txn("20.25", datetime(2024, 1, 2), "Groceries"),
    txn("300", datetime(2023, 12, 31), "Travel"),
    txn("9.99", datetime(2024, 2, 14), "Pets"),
]


def expense_total(transactions: list[TransactionRecord]) -> Decimal:
    return sum((t.amount for t in transactions if t.type == "expense"), Decimal("0"))


class TestCalculateMonthlyExpenses:
    """Tests for calculate_monthly_expenses."""

    def test_single_month_excludes_income(self) -> None:
        """Should total a month's expenses and ignore income."""
        transactions = [
            txn("100", datetime(2024, 3, 5)),
            txn("50", datetime(2024, 3, 20)),
            txn("500", datetime(2024, 3, 10), kind="income"),
        ]

        monthly = calculate_monthly_expenses(transactions)

        assert len(monthly) == 1
        assert monthly[0].month_key == Month("2024-03")
        assert monthly[0].display_label == "March 2024"
        assert monthly[0].amount == Decimal("150")

    def test_sorted_ascending_across_years(self) -> None:
        """Should order months chronologically regardless of input order."""
        monthly = calculate_monthly_expenses(MIXED)

        assert [m.month_key for m in monthly] == ["2023-12", "2024-01", "2024-02", "2024-03"]

    def test_conserves_expense_total(self) -> None:
        """Should sum to the total of all expense amounts."""
        monthly = calculate_monthly_expenses(MIXED)

        assert sum(m.amount for m in monthly) == expense_total(MIXED)

    def test_empty_input(self) -> None:
        """Should return an empty list for no transactions."""
        assert calculate_monthly_expenses([]) == []

    def test_only_income(self) -> None:
        """Should return an empty list when there are no expenses."""
        assert calculate_monthly_expenses([txn("10", datetime(2024, 1, 1), kind="income")]) == []

    def test_no_rounding(self) -> None:
        """Should keep cents exactly."""
        transactions = [txn("0.10", datetime(2024, 5, 1)), txn("0.20", datetime(2024, 5, 2))]

        assert calculate_monthly_expenses(transactions)[0].amount == Decimal("0.30")

    def test_idempotent(self) -> None:
        """Should give identical results on repeated calls."""
        assert calculate_monthly_expenses(MIXED) == calculate_monthly_expenses(MIXED)


class TestCalculateCategoryExpenses:
    """Tests for calculate_category_expenses."""

    def test_groups_by_category(self) -> None:
        """Should produce one entry per category with expenses."""
        transactions = [
            txn("200", datetime(2024, 3, 1), "Groceries"),
            txn("50", datetime(2024, 3, 2), "Groceries"),
            txn("300", datetime(2024, 3, 3), "Travel"),
        ]

        categories = calculate_category_expenses(transactions)

        assert categories == [
            CategoryExpenseAggregate(CategoryName("Groceries"), Money(Decimal("250")), "#BB8FCE"),
            CategoryExpenseAggregate(CategoryName("Travel"), Money(Decimal("300")), "#F7DC6F"),
        ]

    def test_omits_categories_without_expenses(self) -> None:
        """Should not emit zero entries, even for categories that only have income."""
        categories = calculate_category_expenses(MIXED)

        names = [c.category for c in categories]
        assert "Other" not in names
        assert all(c.amount > 0 for c in categories)

    def test_first_encounter_order(self) -> None:
        """Should keep the order in which categories first appear."""
        categories = calculate_category_expenses(MIXED)

        assert [c.category for c in categories] == ["Groceries", "Travel", "Pets"]

    def test_unknown_category_gets_default_color(self) -> None:
        """Should fall back to the default color for unknown categories."""
        categories = {c.category: c for c in calculate_category_expenses(MIXED)}

        assert categories[CategoryName("Pets")].color == DEFAULT_COLOR

    def test_conserves_expense_total(self) -> None:
        """Should sum to the total of all expense amounts."""
        categories = calculate_category_expenses(MIXED)

        assert sum(c.amount for c in categories) == expense_total(MIXED)

    def test_does_not_modify_input(self) -> None:
        """Should leave the input list as it was."""
        transactions = list(MIXED)

        calculate_category_expenses(transactions)

        assert transactions == MIXED


class TestSortByAmount:
    """Tests for sort_by_amount."""

    def test_largest_first(self) -> None:
        """Should order by amount descending."""
        ranked = sort_by_amount(calculate_category_expenses(MIXED))

        assert [c.category for c in ranked] == ["Travel", "Groceries", "Pets"]


class TestGroupTransactionsByMonth:
    """Tests for group_transactions_by_month."""

    def test_groups_all_types(self) -> None:
        """Should group income and expenses alike."""
        grouped = group_transactions_by_month(MIXED)

        assert len(grouped[Month("2024-03")]) == 3
        assert set(grouped) == {"2024-03", "2024-01", "2023-12", "2024-02"}
