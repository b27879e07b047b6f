"""Domain models and types for moneytrail.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from moneytrail.domain.models import (
    EXPENSE,
    INCOME,
    TRANSACTION_TYPES,
    CategoryName,
    Description,
    Money,
    Month,
    TransactionType,
)

__all__ = [
    "Money",
    "Month",
    "CategoryName",
    "Description",
    "TransactionType",
    "INCOME",
    "EXPENSE",
    "TRANSACTION_TYPES",
]
