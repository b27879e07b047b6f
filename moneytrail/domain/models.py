"""Domain type definitions for moneytrail.

These NewTypes provide semantic clarity and help with type checking:
- Money: Decimal amount in major units (two decimal places)
- Month: Month in YYYY-MM format
- CategoryName: Name of a spending category
- Description: Transaction description text
- TransactionType: Either "income" or "expense"
"""

from decimal import Decimal
from typing import NewType

# Money amounts are Decimals to avoid floating point errors
Money = NewType("Money", Decimal)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Category name for spending categories
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)

# "income" or "expense"
TransactionType = NewType("TransactionType", str)

INCOME = TransactionType("income")
EXPENSE = TransactionType("expense")
TRANSACTION_TYPES: tuple[TransactionType, ...] = (INCOME, EXPENSE)

ZERO = Money(Decimal("0"))
CENT = Decimal("0.01")
