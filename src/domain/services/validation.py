"""Input-boundary validation for transactions."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from src.domain.errors import InvalidTransaction
from src.domain.models import TransactionDraft, TransactionKind
from src.domain.policies import is_known_category, is_valid_description
from src.utils.decimal_utils import parse_amount


def parse_kind(value: Any) -> TransactionKind:
    """Normalize a transaction kind.

    Raises:
        InvalidTransaction: If the value is neither income nor expense.
    """
    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidTransaction(
            f"Transaction kind must be 'income' or 'expense', got {value!r}"
        ) from exc


def parse_date(value: Any) -> date:
    """Normalize a transaction date from a date, datetime or ISO string.

    Raises:
        InvalidTransaction: If the value is missing or not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as exc:
            raise InvalidTransaction(
                f"Invalid date '{value}'. Expected format YYYY-MM-DD."
            ) from exc
    raise InvalidTransaction(f"Transaction date is required, got {value!r}")


def validate_transaction(
    data: Mapping[str, Any],
    categories: Iterable[str],
) -> TransactionDraft:
    """Validate raw transaction fields into a draft.

    Args:
        data: Mapping with kind, amount, category, description and date.
        categories: Allowed category labels.

    Returns:
        TransactionDraft: Normalized, validated fields.

    Raises:
        InvalidAmount: If the amount is not a finite non-negative number.
        InvalidTransaction: If any other field is invalid.
    """
    kind = parse_kind(data.get("kind"))
    amount = parse_amount(data.get("amount"))
    category = str(data.get("category") or "").strip()
    if not is_known_category(category, categories):
        raise InvalidTransaction(f"Unknown or empty category: {category!r}")
    description = str(data.get("description") or "").strip()
    if not is_valid_description(description):
        raise InvalidTransaction(
            "Description must be between 2 and 100 characters"
        )
    return TransactionDraft(
        kind=kind,
        amount=amount,
        category=category,
        description=description,
        date=parse_date(data.get("date")),
    )


__all__ = ["parse_kind", "parse_date", "validate_transaction"]
