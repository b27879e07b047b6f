"""Spending categories, their display colors and transaction classification."""

from types import MappingProxyType
from typing import Mapping

from moneytrail.domain.models import EXPENSE, INCOME, CategoryName
from moneytrail.domain.records import TransactionRecord

CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food & Dining"),
    CategoryName("Transportation"),
    CategoryName("Shopping"),
    CategoryName("Entertainment"),
    CategoryName("Bills & Utilities"),
    CategoryName("Healthcare"),
    CategoryName("Education"),
    CategoryName("Travel"),
    CategoryName("Groceries"),
    CategoryName("Other"),
)

DEFAULT_COLOR = "#85C1E9"

CATEGORY_COLORS: Mapping[CategoryName, str] = MappingProxyType(
    {
        CategoryName("Food & Dining"): "#FF6B6B",
        CategoryName("Transportation"): "#4ECDC4",
        CategoryName("Shopping"): "#45B7D1",
        CategoryName("Entertainment"): "#96CEB4",
        CategoryName("Bills & Utilities"): "#FFEAA7",
        CategoryName("Healthcare"): "#DDA0DD",
        CategoryName("Education"): "#98D8C8",
        CategoryName("Travel"): "#F7DC6F",
        CategoryName("Groceries"): "#BB8FCE",
        CategoryName("Other"): "#85C1E9",
    }
)


def category_color(category: str) -> str:
    """Get the display color for a category.

    Unknown categories get DEFAULT_COLOR rather than an error.
    """
    return CATEGORY_COLORS.get(CategoryName(category), DEFAULT_COLOR)


def is_known_category(category: str) -> bool:
    """Check whether a category is one of the fixed CATEGORIES."""
    return category in CATEGORIES


def is_expense(record: TransactionRecord) -> bool:
    return record.type == EXPENSE


def is_income(record: TransactionRecord) -> bool:
    return record.type == INCOME
