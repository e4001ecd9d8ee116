"""Domain policies package."""

from .transaction_rules import is_known_category, is_valid_description

__all__ = ["is_known_category", "is_valid_description"]
