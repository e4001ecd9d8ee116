"""Helpers for exact Decimal money arithmetic."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.domain.errors import InvalidAmount

ZERO = Decimal("0")
CENT = Decimal("0.01")
MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_PLACES = 4

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
}


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        InvalidAmount: If the value is not a finite number.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"Not a numeric amount: {value!r}") from exc
    if not result.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    return result


def parse_amount(value) -> Decimal:
    """Validate a user-supplied monetary amount.

    Floats are refused so binary rounding noise never enters the ledger;
    callers pass strings, ints or Decimals.

    Args:
        value: Raw amount from a form, CLI argument or API payload.

    Returns:
        Decimal: The exact, non-negative amount.

    Raises:
        InvalidAmount: If the value is missing, non-numeric, a float,
            non-finite, negative, larger than ``MAX_INTEGER_DIGITS``
            integer digits or finer than ``MAX_DECIMAL_PLACES`` places.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"Amount is required, got {value!r}")
    if isinstance(value, float):
        raise InvalidAmount(
            f"Amounts must be given as text or Decimal, not float: {value!r}"
        )
    if isinstance(value, str) and not value.strip():
        raise InvalidAmount("Amount is required")
    amount = coerce_decimal(value)
    if amount < 0:
        raise InvalidAmount(f"Amount must not be negative: {amount}")
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidAmount(
            f"Amount exceeds {MAX_INTEGER_DIGITS} integer digits: {value!r}"
        )
    if -amount.normalize().as_tuple().exponent > MAX_DECIMAL_PLACES:
        raise InvalidAmount(
            f"Amount has more than {MAX_DECIMAL_PLACES} decimal places: "
            f"{value!r}"
        )
    return amount


def add(*amounts: Decimal) -> Decimal:
    """Return the exact sum of the given amounts."""
    return sum_amounts(amounts)


def subtract(left: Decimal, right: Decimal) -> Decimal:
    """Return ``left - right`` using exact decimals."""
    return coerce_decimal(left) - coerce_decimal(right)


def compare(left: Decimal, right: Decimal) -> int:
    """Compare two amounts.

    Returns:
        int: -1, 0 or 1 as ``left`` is below, equal to or above ``right``.
    """
    return int(coerce_decimal(left).compare(coerce_decimal(right)))


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum an iterable of amounts starting from an exact zero."""
    return sum((coerce_decimal(amount) for amount in amounts), start=ZERO)


def to_display_string(amount: Decimal, currency_code: str) -> str:
    """Format an amount for display with two decimals and a currency symbol.

    Args:
        amount: Amount to render.
        currency_code: ISO currency code used to pick the symbol.

    Returns:
        str: Text such as ``"1,234.50 €"``.
    """
    rounded = coerce_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code)
    return f"{rounded:,.2f} {symbol}"


def to_storage_string(amount: Decimal) -> str:
    """Return the canonical text persisted for an amount."""
    return format(coerce_decimal(amount), "f")


__all__ = [
    "ZERO",
    "MAX_INTEGER_DIGITS",
    "MAX_DECIMAL_PLACES",
    "coerce_decimal",
    "parse_amount",
    "add",
    "subtract",
    "compare",
    "sum_amounts",
    "to_display_string",
    "to_storage_string",
]
