"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from moneytrail.store.queries import (
    delete_transaction,
    get_budgets,
    get_transaction,
    get_transactions,
    insert_transaction,
    replace_budgets,
    set_budget,
    update_transaction,
)
from moneytrail.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_transaction",
    "get_budgets",
    "get_transaction",
    "get_transactions",
    "insert_transaction",
    "replace_budgets",
    "set_budget",
    "update_transaction",
]
