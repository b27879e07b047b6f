"""Tests for moneytrail.store against a temporary SQLite database."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from moneytrail.domain.models import CategoryName, Description, Money, Month, TransactionType
from moneytrail.domain.records import BudgetDefinition, TransactionRecord
from moneytrail.store import (
    database_exists,
    delete_transaction,
    get_budgets,
    get_transaction,
    get_transactions,
    init_database,
    insert_transaction,
    replace_budgets,
    set_budget,
    update_transaction,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "moneytrail.db"
    init_database(path)
    return path


def record(
    amount: str = "10.00",
    category: str = "Groceries",
    kind: str = "expense",
    when: datetime = datetime(2024, 3, 5, 12, 0),
    description: str = "Market",
) -> TransactionRecord:
    return TransactionRecord(
        amount=Money(Decimal(amount)),
        description=Description(description),
        category=CategoryName(category),
        type=TransactionType(kind),
        date=when,
    )


def budget(category: str, limit: str, month: str = "2024-03") -> BudgetDefinition:
    return BudgetDefinition(CategoryName(category), Money(Decimal(limit)), Month(month))


class TestSchema:
    """Tests for init_database."""

    def test_creates_database_and_parent_dir(self, db_path: Path) -> None:
        """Should create the file, including missing directories."""
        assert database_exists(db_path)

    def test_is_idempotent(self, db_path: Path) -> None:
        """Should be safe to run twice."""
        init_database(db_path)
        assert get_transactions(db_path) == []


class TestTransactions:
    """Tests for transaction queries."""

    def test_insert_and_get_round_trips_decimal(self, db_path: Path) -> None:
        """Should store amounts exactly and assign an id."""
        txn_id = insert_transaction(record(amount="0.10"), db_path)

        stored = get_transaction(txn_id, db_path)

        assert stored is not None
        assert stored.id == txn_id
        assert stored.amount == Decimal("0.10")
        assert stored.date == datetime(2024, 3, 5, 12, 0)

    def test_get_missing(self, db_path: Path) -> None:
        """Should return None for an unknown id."""
        assert get_transaction(999, db_path) is None

    def test_newest_first(self, db_path: Path) -> None:
        """Should order by date descending."""
        insert_transaction(record(when=datetime(2024, 1, 1)), db_path)
        insert_transaction(record(when=datetime(2024, 3, 1)), db_path)
        insert_transaction(record(when=datetime(2024, 2, 1)), db_path)

        dates = [t.date.month for t in get_transactions(db_path)]

        assert dates == [3, 2, 1]

    def test_filters(self, db_path: Path) -> None:
        """Should filter by category, type and month."""
        insert_transaction(record(category="Travel"), db_path)
        insert_transaction(record(kind="income", category="Other"), db_path)
        insert_transaction(record(when=datetime(2024, 4, 1)), db_path)
        insert_transaction(record(when=datetime(2024, 3, 31, 23, 59)), db_path)

        assert len(get_transactions(db_path, category=CategoryName("Travel"))) == 1
        assert len(get_transactions(db_path, txn_type=TransactionType("income"))) == 1
        assert len(get_transactions(db_path, month=Month("2024-03"))) == 3
        assert len(get_transactions(db_path, month=Month("2024-04"))) == 1

    def test_search_matches_description_ignoring_case(self, db_path: Path) -> None:
        """Should keep only descriptions containing the search text."""
        insert_transaction(record(description="Weekly Market run"), db_path)
        insert_transaction(record(description="Farmers MARKET"), db_path)
        insert_transaction(record(description="Cinema"), db_path)

        found = get_transactions(db_path, search="market")

        assert sorted(t.description for t in found) == ["Farmers MARKET", "Weekly Market run"]

    def test_search_treats_wildcards_literally(self, db_path: Path) -> None:
        """Should not treat % or _ in the search text as patterns."""
        insert_transaction(record(description="50% off shoes"), db_path)
        insert_transaction(record(description="500 off"), db_path)

        found = get_transactions(db_path, search="0%")

        assert [t.description for t in found] == ["50% off shoes"]

    def test_search_combines_with_other_filters(self, db_path: Path) -> None:
        """Should apply the search alongside category filtering."""
        insert_transaction(record(category="Travel", description="Train ticket"), db_path)
        insert_transaction(record(category="Entertainment", description="Concert ticket"), db_path)

        found = get_transactions(db_path, category=CategoryName("Travel"), search="ticket")

        assert [t.description for t in found] == ["Train ticket"]

    def test_limit(self, db_path: Path) -> None:
        """Should return at most limit transactions."""
        for day in range(1, 6):
            insert_transaction(record(when=datetime(2024, 3, day)), db_path)

        assert len(get_transactions(db_path, limit=2)) == 2

    def test_update(self, db_path: Path) -> None:
        """Should replace the stored fields."""
        txn_id = insert_transaction(record(), db_path)

        updated = update_transaction(txn_id, record(amount="99.99", description="Updated"), db_path)

        stored = get_transaction(txn_id, db_path)
        assert updated is True
        assert stored is not None
        assert stored.amount == Decimal("99.99")
        assert stored.description == "Updated"

    def test_update_missing(self, db_path: Path) -> None:
        """Should report that nothing was updated."""
        assert update_transaction(42, record(), db_path) is False

    def test_delete(self, db_path: Path) -> None:
        """Should remove the transaction."""
        txn_id = insert_transaction(record(), db_path)

        assert delete_transaction(txn_id, db_path) is True
        assert get_transaction(txn_id, db_path) is None
        assert delete_transaction(txn_id, db_path) is False


class TestBudgets:
    """Tests for budget queries."""

    def test_sorted_by_category(self, db_path: Path) -> None:
        """Should return a month's budgets sorted by category."""
        set_budget(budget("Travel", "300"), db_path)
        set_budget(budget("Groceries", "200"), db_path)

        budgets = get_budgets(Month("2024-03"), db_path)

        assert [b.category for b in budgets] == ["Groceries", "Travel"]
        assert budgets[0].monthly_limit == Decimal("200")

    def test_set_budget_replaces_same_category_and_month(self, db_path: Path) -> None:
        """Should keep one budget per category and month."""
        set_budget(budget("Travel", "300"), db_path)
        set_budget(budget("Travel", "450.50"), db_path)

        budgets = get_budgets(Month("2024-03"), db_path)

        assert len(budgets) == 1
        assert budgets[0].monthly_limit == Decimal("450.50")

    def test_replace_budgets_only_touches_that_month(self, db_path: Path) -> None:
        """Should swap a month's budgets and leave other months alone."""
        set_budget(budget("Travel", "300"), db_path)
        set_budget(budget("Travel", "100", month="2024-04"), db_path)

        replace_budgets(Month("2024-03"), [budget("Groceries", "150")], db_path)

        assert [b.category for b in get_budgets(Month("2024-03"), db_path)] == ["Groceries"]
        assert [b.category for b in get_budgets(Month("2024-04"), db_path)] == ["Travel"]

    def test_replace_budgets_with_nothing_clears_month(self, db_path: Path) -> None:
        """Should remove every budget of the month when given no budgets."""
        set_budget(budget("Travel", "300"), db_path)
        set_budget(budget("Groceries", "200"), db_path)
        set_budget(budget("Travel", "100", month="2024-04"), db_path)

        replace_budgets(Month("2024-03"), [], db_path)

        assert get_budgets(Month("2024-03"), db_path) == []
        assert [b.category for b in get_budgets(Month("2024-04"), db_path)] == ["Travel"]

    def test_replace_budgets_rejects_other_month(self, db_path: Path) -> None:
        """Should refuse budgets that belong to a different month."""
        with pytest.raises(ValueError):
            replace_budgets(Month("2024-03"), [budget("Groceries", "150", month="2024-05")], db_path)
