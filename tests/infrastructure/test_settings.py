"""Tests for infrastructure settings."""

import pytest

from src.domain.constants import DEFAULT_CATEGORIES
from src.domain.errors import ConfigurationError
from src.domain.models import Period
from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings

LEDGER_VARS = (
    "LEDGER_EPOCH",
    "LEDGER_MAX_LOOKBACK_MONTHS",
    "LEDGER_CURRENCY",
    "LEDGER_CATEGORIES",
    "LEDGER_REOPEN_MODE",
    "LEDGER_ADMIN_PASSWORD",
    "SUMMARY_MODEL",
    "SUMMARY_LANGUAGE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in LEDGER_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_apply_when_unset() -> None:
    settings = LedgerSettings.from_env()

    assert settings.epoch is None
    assert settings.max_lookback_months == 1200
    assert settings.currency_code == "USD"
    assert settings.categories == DEFAULT_CATEGORIES
    assert settings.reopen_mode == "flag"
    assert settings.admin_password is None
    assert settings.summary_model == "gpt-4o-mini"


def test_values_are_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("LEDGER_EPOCH", "2023-07")
    monkeypatch.setenv("LEDGER_MAX_LOOKBACK_MONTHS", "240")
    monkeypatch.setenv("LEDGER_CURRENCY", "eur")
    monkeypatch.setenv("LEDGER_CATEGORIES", "Rent, Loans ,Rent,")
    monkeypatch.setenv("LEDGER_REOPEN_MODE", "DELETE")
    monkeypatch.setenv("LEDGER_ADMIN_PASSWORD", "s3cret")

    settings = LedgerSettings.from_env()

    assert settings.epoch == Period(2023, 7)
    assert settings.max_lookback_months == 240
    assert settings.currency_code == "EUR"
    assert settings.categories == ("Rent", "Loans")
    assert settings.reopen_mode == "delete"
    assert settings.admin_password == "s3cret"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LEDGER_EPOCH", "July 2023"),
        ("LEDGER_MAX_LOOKBACK_MONTHS", "zero"),
        ("LEDGER_MAX_LOOKBACK_MONTHS", "-4"),
        ("LEDGER_REOPEN_MODE", "archive"),
    ],
)
def test_invalid_values_raise_configuration_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        LedgerSettings.from_env()
