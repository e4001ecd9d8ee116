"""Port for the external monthly summary generator."""

from typing import Protocol

from src.domain.models import SummaryRequest, SummaryResult


class SummaryServicePort(Protocol):
    """Port exposing natural-language summaries of a month.

    Implementations raise ``SummaryServiceError`` on failure.
    """

    def generate(self, request: SummaryRequest) -> SummaryResult:
        """Return a summary and suggestions for the request."""


__all__ = ["SummaryServicePort"]
