"""Pure functions for exact-decimal money handling and display."""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

CENTS = Decimal("0.01")
FALLBACK_CURRENCY_TEXT = "$0.00"


def to_decimal(value: str | int | Decimal) -> Decimal:
    """Convert a config or table value to Decimal without going through float.

    Args:
        value: String, integer or Decimal amount.

    Returns:
        Decimal amount.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, Decimal)):
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format amount as currency with two fraction digits.

    Args:
        amount: Amount to display.
        symbol: Currency symbol placed before the digits.

    Returns:
        Display string (e.g., "$1,234.50"), or "$0.00" if the amount
        cannot be formatted.
    """
    try:
        value = Decimal(amount)
        if not value.is_finite():
            return FALLBACK_CURRENCY_TEXT
        rounded = value.quantize(CENTS, rounding=ROUND_HALF_EVEN)
    except (InvalidOperation, TypeError, ValueError):
        return FALLBACK_CURRENCY_TEXT

    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
