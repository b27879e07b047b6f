"""Date utilities for moneytrail.

Pure functions for month keys, date range calculations and formatting.
"""

import re
from datetime import date, datetime, timedelta, timezone

from moneytrail.domain.models import Month

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def month_key(value: date | datetime) -> Month:
    """Derive the YYYY-MM month key for a date or datetime.

    The key is the first seven characters of the ISO form. Timezone-aware
    datetimes are converted to UTC first; naive values are taken as-is.

    Args:
        value: Transaction date or datetime.

    Returns:
        Month in YYYY-MM format.
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return Month(value.isoformat()[:7])


def parse_month(text: str) -> Month:
    """Validate a YYYY-MM month token.

    Args:
        text: Candidate month string.

    Returns:
        The month as a Month.

    Raises:
        ValueError: If the text is not a valid YYYY-MM month.
    """
    if not MONTH_PATTERN.match(text):
        raise ValueError(f"Month must be in YYYY-MM format, got '{text}'")
    # strptime rejects month 00 and 13+
    datetime.strptime(text, "%Y-%m")
    return Month(text)


def month_label(month: Month) -> str:
    """Human-readable label for a month (e.g., "January 2025")."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")


def current_month() -> Month:
    """Get the current month in YYYY-MM format."""
    return Month(datetime.now().strftime("%Y-%m"))


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label
