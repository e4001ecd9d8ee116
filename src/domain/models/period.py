"""Calendar month value object used as the ledger's period key."""

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class Period:
    """A calendar month, ordered chronologically.

    Attributes:
        year: Four-digit calendar year.
        month: Month number, 1 for January through 12 for December.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if self.year < 1:
            raise ValueError(f"Year must be positive, got {self.year}")

    @classmethod
    def from_date(cls, value: date) -> "Period":
        """Return the period containing ``value``."""
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, raw: str) -> "Period":
        """Parse a ``YYYY-MM`` key.

        Raises:
            ValueError: If the text is not a valid key.
        """
        parts = raw.strip().split("-")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            raise ValueError(f"Expected a YYYY-MM period, got {raw!r}")
        return cls(int(parts[0]), int(parts[1]))

    @property
    def key(self) -> str:
        """Deterministic identifier, e.g. ``"2024-03"``."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(
            self.year,
            self.month,
            calendar.monthrange(self.year, self.month)[1],
        )

    def previous(self) -> "Period":
        """Return the month immediately before this one."""
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)

    def next(self) -> "Period":
        """Return the month immediately after this one."""
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def months_until(self, other: "Period") -> int:
        """Return how many months separate this period from ``other``."""
        return (other.year - self.year) * 12 + (other.month - self.month)

    def __str__(self) -> str:
        return self.key


def months_of_year(year: int) -> list[Period]:
    """Return the twelve periods of ``year`` in calendar order."""
    return [Period(year, month) for month in range(1, 13)]


__all__ = ["Period", "months_of_year"]
