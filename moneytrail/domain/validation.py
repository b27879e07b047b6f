"""Pure validation of incoming transaction and budget payloads.

Validators report every failing field instead of stopping at the first one,
and never modify the payload.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from moneytrail.dates import parse_month
from moneytrail.domain.models import TRANSACTION_TYPES
from moneytrail.domain.records import to_money


@dataclass(frozen=True)
class ValidationResult:
    """Immutable validation outcome."""

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


def _is_positive_amount(value: Any) -> bool:
    if value is None or value == "":
        return False
    try:
        return to_money(value) > 0
    except ValueError:
        return False


def _is_non_negative_amount(value: Any) -> bool:
    if value is None or value == "":
        return False
    try:
        return to_money(value) >= Decimal("0")
    except ValueError:
        return False


def _is_valid_month(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_month(value)
    except ValueError:
        return False
    return True


def validate_transaction(payload: Mapping[str, Any]) -> ValidationResult:
    """Validate a candidate transaction payload.

    Args:
        payload: Raw fields (amount, description, category, date, type).

    Returns:
        ValidationResult with one error message per failing field.
    """
    errors: dict[str, str] = {}

    if not _is_positive_amount(payload.get("amount")):
        errors["amount"] = "Amount must be greater than 0"

    description = payload.get("description")
    if not isinstance(description, str) or not description.strip():
        errors["description"] = "Description is required"

    if not payload.get("category"):
        errors["category"] = "Category is required"

    if not payload.get("date"):
        errors["date"] = "Date is required"

    if payload.get("type") not in TRANSACTION_TYPES:
        errors["type"] = "Type must be either income or expense"

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_budget(payload: Mapping[str, Any]) -> ValidationResult:
    """Validate a candidate budget payload (category, monthly_limit, optional month)."""
    errors: dict[str, str] = {}

    if not payload.get("category"):
        errors["category"] = "Category is required"

    if not _is_non_negative_amount(payload.get("monthly_limit")):
        errors["monthly_limit"] = "Amount must be a positive number"

    month = payload.get("month")
    if month is not None and not _is_valid_month(month):
        errors["month"] = "Month must be in YYYY-MM format"

    return ValidationResult(is_valid=not errors, errors=errors)
