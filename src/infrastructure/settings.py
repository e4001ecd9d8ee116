"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
import os

import dotenv

from src.domain.constants import DEFAULT_CATEGORIES, DEFAULT_MAX_LOOKBACK_MONTHS
from src.domain.errors import ConfigurationError
from src.domain.models import Period
from src.infrastructure.logging.logger import get_app_logger

REOPEN_MODES = ("flag", "delete")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger and its collaborators.

    Attributes:
        epoch: Earliest tracked month, or None to use the earliest month
            holding data.
        max_lookback_months: Upper bound on months derived by the resolver.
        currency_code: Currency used for display.
        categories: Allowed transaction categories, in report order.
        reopen_mode: ``flag`` keeps reopened records, ``delete`` drops them.
        admin_password: Password unlocking write actions in the UI.
        summary_model: Model name for the summary service.
        summary_language: Language the summary is written in.
    """

    epoch: Period | None = None
    max_lookback_months: int = DEFAULT_MAX_LOOKBACK_MONTHS
    currency_code: str = "USD"
    categories: tuple[str, ...] = field(default=DEFAULT_CATEGORIES)
    reopen_mode: str = "flag"
    admin_password: str | None = None
    summary_model: str = "gpt-4o-mini"
    summary_language: str = "Spanish"

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        reopen_mode = os.getenv("LEDGER_REOPEN_MODE", "flag").strip().lower()
        if reopen_mode not in REOPEN_MODES:
            raise ConfigurationError(
                f"LEDGER_REOPEN_MODE must be one of {REOPEN_MODES}, "
                f"got {reopen_mode!r}"
            )
        categories = cls._parse_categories(os.getenv("LEDGER_CATEGORIES"))
        if categories != DEFAULT_CATEGORIES:
            logger.info(f"Using {len(categories)} configured categories")
        return cls(
            epoch=cls._parse_epoch(os.getenv("LEDGER_EPOCH")),
            max_lookback_months=cls._parse_positive_int(
                "LEDGER_MAX_LOOKBACK_MONTHS",
                os.getenv("LEDGER_MAX_LOOKBACK_MONTHS"),
                DEFAULT_MAX_LOOKBACK_MONTHS,
            ),
            currency_code=os.getenv("LEDGER_CURRENCY", "USD").strip().upper(),
            categories=categories,
            reopen_mode=reopen_mode,
            admin_password=os.getenv("LEDGER_ADMIN_PASSWORD") or None,
            summary_model=os.getenv("SUMMARY_MODEL", "gpt-4o-mini").strip(),
            summary_language=os.getenv("SUMMARY_LANGUAGE", "Spanish").strip(),
        )

    @staticmethod
    def _parse_epoch(raw: str | None) -> Period | None:
        if not raw or not raw.strip():
            return None
        try:
            return Period.parse(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"LEDGER_EPOCH must look like YYYY-MM, got {raw!r}"
            ) from exc

    @staticmethod
    def _parse_positive_int(name: str, raw: str | None, default: int) -> int:
        if not raw or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigurationError(
                f"{name} must be an integer, got {raw!r}"
            ) from exc
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")
        return value

    @staticmethod
    def _parse_categories(raw: str | None) -> tuple[str, ...]:
        if not raw or not raw.strip():
            return DEFAULT_CATEGORIES
        categories = tuple(
            dict.fromkeys(
                item.strip() for item in raw.split(",") if item.strip()
            )
        )
        return categories or DEFAULT_CATEGORIES


__all__ = ["LedgerSettings", "REOPEN_MODES"]
