"""Port for the organization profile shown on reports."""

from typing import Protocol

from src.domain.models import CompanyProfile


class CompanyProfileRepositoryPort(Protocol):
    """Port exposing the singleton company profile."""

    def get(self) -> CompanyProfile | None:
        """Return the stored profile, or None before it is configured."""

    def save(self, profile: CompanyProfile) -> None:
        """Create or replace the profile."""


__all__ = ["CompanyProfileRepositoryPort"]
