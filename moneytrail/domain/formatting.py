"""Pure display formatting helpers."""

from decimal import Decimal


def format_money(amount: Decimal, symbol: str = "₹", include_sign: bool = False) -> str:
    """Format money amount for display.

    Args:
        amount: Amount in major units.
        symbol: Currency symbol to prefix.
        include_sign: Whether to include + or - sign.

    Returns:
        Formatted string (e.g., "₹1,234.50" or "-₹1,234.50").
    """
    formatted = f"{symbol}{abs(amount):,.2f}"

    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted


def format_percentage(percentage: float) -> str:
    return f"{percentage:.0f}%"


def calculate_bar_length(amount: Decimal, max_amount: Decimal, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int(abs(amount) / max_amount * bar_width)
