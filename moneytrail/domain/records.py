"""Immutable transaction and budget records.

Records validate their fields on construction, so the rollup and budget
functions can rely on well-typed input without presence checks of their own.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from moneytrail.dates import parse_month
from moneytrail.domain.models import (
    CENT,
    TRANSACTION_TYPES,
    CategoryName,
    Description,
    Money,
    Month,
    TransactionType,
)

MAX_DESCRIPTION_LENGTH = 200


def to_money(value: Any) -> Money:
    """Coerce a number or numeric string to Money.

    Floats go through their string form so 12.3 becomes Decimal("12.3").

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a valid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a valid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    return Money(amount)


def _check_precision(amount: Decimal) -> None:
    if amount != amount.quantize(CENT):
        raise ValueError(f"Amount {amount} has more than two decimal places")


@dataclass(frozen=True)
class TransactionRecord:
    """Immutable transaction fact.

    The id is assigned by the store and is None for records that have not
    been saved yet.
    """

    amount: Money
    description: Description
    category: CategoryName
    type: TransactionType
    date: datetime
    id: int | None = None

    def __post_init__(self) -> None:
        amount = to_money(self.amount)
        if amount <= 0:
            raise ValueError("Amount must be greater than 0")
        _check_precision(amount)
        object.__setattr__(self, "amount", amount)

        description = self.description.strip() if isinstance(self.description, str) else ""
        if not description:
            raise ValueError("Description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
        object.__setattr__(self, "description", Description(description))

        if not self.category:
            raise ValueError("Category is required")

        if self.type not in TRANSACTION_TYPES:
            raise ValueError("Type must be either income or expense")

        if not isinstance(self.date, date):
            raise ValueError("Date is required")
        if not isinstance(self.date, datetime):
            # Plain dates become midnight datetimes
            object.__setattr__(self, "date", datetime(self.date.year, self.date.month, self.date.day))


@dataclass(frozen=True)
class BudgetDefinition:
    """Immutable spending ceiling for one category in one month."""

    category: CategoryName
    monthly_limit: Money
    month: Month

    def __post_init__(self) -> None:
        if not self.category:
            raise ValueError("Category is required")

        limit = to_money(self.monthly_limit)
        if limit < 0:
            raise ValueError("Monthly limit must be greater than or equal to 0")
        object.__setattr__(self, "monthly_limit", limit)

        parse_month(self.month)


def record_from_payload(payload: dict[str, Any], txn_id: int | None = None) -> TransactionRecord:
    """Build a TransactionRecord from a validated payload.

    Args:
        payload: Fields as accepted by validate_transaction, with `date`
            already parsed to a date or datetime.
        txn_id: Optional store ID.

    Returns:
        TransactionRecord with trimmed description and Decimal amount.

    Raises:
        ValueError: If a field violates a record invariant.
    """
    return TransactionRecord(
        id=txn_id,
        amount=to_money(payload["amount"]),
        description=Description(str(payload["description"]).strip()),
        category=CategoryName(payload["category"]),
        type=TransactionType(payload["type"]),
        date=payload["date"],
    )
