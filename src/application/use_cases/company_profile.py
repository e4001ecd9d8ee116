"""Use cases to read and update the company profile."""

import re

from src.application.ports.company_profile_repository import (
    CompanyProfileRepositoryPort,
)
from src.domain.models import CompanyProfile
from src.infrastructure.logging.logger import get_app_logger

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class GetCompanyProfileUseCase:
    """Return the stored profile, or an empty one."""

    def __init__(self, repository: CompanyProfileRepositoryPort) -> None:
        self._repository = repository

    def execute(self) -> CompanyProfile:
        return self._repository.get() or CompanyProfile()


class SaveCompanyProfileUseCase:
    """Validate and persist the company profile."""

    def __init__(
        self,
        repository: CompanyProfileRepositoryPort,
        logger=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, profile: CompanyProfile) -> CompanyProfile:
        """Save the profile with surrounding whitespace removed.

        Raises:
            ValueError: If the name is a single character or the email is
                malformed.
        """
        cleaned = CompanyProfile(
            name=profile.name.strip(),
            tax_id=profile.tax_id.strip(),
            address=profile.address.strip(),
            phone=profile.phone.strip(),
            email=profile.email.strip(),
            logo=profile.logo.strip(),
        )
        if len(cleaned.name) == 1:
            raise ValueError("Company name must have at least 2 characters")
        if cleaned.email and not EMAIL_PATTERN.match(cleaned.email):
            raise ValueError(f"Invalid email address: {cleaned.email}")
        self._repository.save(cleaned)
        self._logger.info("Company profile saved")
        return cleaned


__all__ = ["GetCompanyProfileUseCase", "SaveCompanyProfileUseCase"]
