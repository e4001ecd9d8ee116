"""Domain model for the organization shown on report headers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompanyProfile:
    """Organization details printed on reports."""

    name: str = ""
    tax_id: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    logo: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.name, self.tax_id, self.address, self.phone, self.email)
        )


__all__ = ["CompanyProfile"]
