"""Database query functions."""

import sqlite3
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from moneytrail.dates import month_range
from moneytrail.domain.models import CategoryName, Description, Money, Month, TransactionType
from moneytrail.domain.records import BudgetDefinition, TransactionRecord
from moneytrail.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_transaction(row: sqlite3.Row) -> TransactionRecord:
    return TransactionRecord(
        id=row["id"],
        amount=Money(Decimal(row["amount"])),
        description=Description(row["description"]),
        category=CategoryName(row["category"]),
        type=TransactionType(row["type"]),
        date=datetime.fromisoformat(row["date"]),
    )


def _row_to_budget(row: sqlite3.Row) -> BudgetDefinition:
    return BudgetDefinition(
        category=CategoryName(row["category"]),
        monthly_limit=Money(Decimal(row["monthly_limit"])),
        month=Month(row["month"]),
    )


def insert_transaction(record: TransactionRecord, db_path: Path | None = None) -> int:
    """Insert a transaction.

    Args:
        record: Transaction to store. Its id is ignored.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID assigned to the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (amount, description, category, type, date) VALUES (?, ?, ?, ?, ?)",
                (str(record.amount), record.description, record.category, record.type, record.date.isoformat()),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_transaction(txn_id: int, db_path: Path | None = None) -> TransactionRecord | None:
    """Get a single transaction by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, amount, description, category, type, date FROM transactions WHERE id = ?",
            (txn_id,),
        )
        row = cursor.fetchone()
        return _row_to_transaction(row) if row else None


def get_transactions(
    db_path: Path | None = None,
    category: CategoryName | None = None,
    txn_type: TransactionType | None = None,
    month: Month | None = None,
    limit: int | None = None,
    search: str | None = None,
) -> list[TransactionRecord]:
    """Get transactions, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        category: Only transactions in this category.
        txn_type: Only income or only expense transactions.
        month: Only transactions dated within this month (YYYY-MM).
        limit: Maximum number of transactions to return. If None, returns all.
        search: Only transactions whose description contains this text, ignoring case.

    Returns:
        List of TransactionRecord ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, amount, description, category, type, date FROM transactions WHERE 1 = 1"
        params: list[Any] = []

        if category:
            query += " AND category = ?"
            params.append(category)
        if txn_type:
            query += " AND type = ?"
            params.append(txn_type)
        if month:
            since_date, until_date, _ = month_range(month)
            query += " AND date >= ? AND date < ?"
            params.extend([since_date, until_date])
        if search:
            escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            query += " AND LOWER(description) LIKE ? ESCAPE '\\'"
            params.append(f"%{escaped}%")

        query += " ORDER BY date DESC, id DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [_row_to_transaction(row) for row in cursor.fetchall()]


def update_transaction(txn_id: int, record: TransactionRecord, db_path: Path | None = None) -> bool:
    """Replace the fields of an existing transaction.

    Args:
        txn_id: Transaction ID.
        record: New field values. Its id is ignored.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a transaction was updated, False if the ID does not exist.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE transactions SET amount = ?, description = ?, category = ?, type = ?, date = ? WHERE id = ?",
                (
                    str(record.amount),
                    record.description,
                    record.category,
                    record.type,
                    record.date.isoformat(),
                    txn_id,
                ),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_transaction(txn_id: int, db_path: Path | None = None) -> bool:
    """Delete a transaction.

    Returns:
        True if a transaction was deleted, False if the ID does not exist.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def get_budgets(month: Month, db_path: Path | None = None) -> list[BudgetDefinition]:
    """Get all budgets for a month, sorted by category name.

    Args:
        month: Month in YYYY-MM format.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT category, month, monthly_limit FROM budgets WHERE month = ? ORDER BY category",
            (month,),
        )
        return [_row_to_budget(row) for row in cursor.fetchall()]


def set_budget(budget: BudgetDefinition, db_path: Path | None = None) -> None:
    """Create or replace the budget for one category and month.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT OR REPLACE INTO budgets (category, month, monthly_limit) VALUES (?, ?, ?)",
                (budget.category, budget.month, str(budget.monthly_limit)),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def replace_budgets(month: Month, budgets: list[BudgetDefinition], db_path: Path | None = None) -> None:
    """Replace every budget of a month with a new set.

    Budgets of other months are untouched.

    Args:
        month: Month in YYYY-MM format.
        budgets: New budgets. Each must belong to `month`.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        ValueError: If a budget belongs to another month.
        sqlite3.Error: If database operation fails.
    """
    for budget in budgets:
        if budget.month != month:
            raise ValueError(f"Budget for {budget.category} is for {budget.month}, not {month}")

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM budgets WHERE month = ?", (month,))
            cursor.executemany(
                "INSERT INTO budgets (category, month, monthly_limit) VALUES (?, ?, ?)",
                [(b.category, b.month, str(b.monthly_limit)) for b in budgets],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
