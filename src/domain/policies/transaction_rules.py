"""Field rules for ledger transactions."""

from collections.abc import Iterable

from src.domain.constants import DESCRIPTION_MAX_LENGTH, DESCRIPTION_MIN_LENGTH


def is_valid_description(description: str) -> bool:
    """Return True when the description length is within bounds.

    Args:
        description: Free text entered for the transaction.

    Returns:
        bool: True for 2 to 100 characters once surrounding spaces are removed.
    """
    candidate = description.strip()
    return DESCRIPTION_MIN_LENGTH <= len(candidate) <= DESCRIPTION_MAX_LENGTH


def is_known_category(category: str, categories: Iterable[str]) -> bool:
    """Return True when the category is non-empty and configured."""
    candidate = category.strip()
    if not candidate:
        return False
    return candidate in set(categories)


__all__ = ["is_valid_description", "is_known_category"]
