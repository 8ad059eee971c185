"""Tests for infrastructure settings."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from beanledger.infrastructure import settings as settings_module
from beanledger.infrastructure.settings import LedgerSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: MagicMock())
    for name in (
        "LEDGER_BACKEND",
        "LEDGER_DB_URL",
        "LEDGER_BASE_CURRENCY",
        "LEDGER_EXCHANGE_RATES",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    """Without configuration the memory backend and CNY are used."""
    settings = LedgerSettings.from_env()

    assert settings.backend == "memory"
    assert settings.db_url is None
    assert settings.base_currency == "CNY"
    assert settings.exchange_rates == {}


def test_from_env_reads_backend_and_rates(monkeypatch) -> None:
    """Configured values should be normalized."""
    monkeypatch.setenv("LEDGER_BACKEND", " SQLAlchemy ")
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite:///ledger.db")
    monkeypatch.setenv("LEDGER_BASE_CURRENCY", "eur")
    monkeypatch.setenv("LEDGER_EXCHANGE_RATES", "usd=0.9, CNY = 0.13")

    settings = LedgerSettings.from_env()

    assert settings.backend == "sqlalchemy"
    assert settings.db_url == "sqlite:///ledger.db"
    assert settings.base_currency == "EUR"
    assert settings.exchange_rates == {
        "USD": Decimal("0.9"),
        "CNY": Decimal("0.13"),
    }


def test_parse_rates_skips_malformed_entries() -> None:
    """Malformed, non-positive and base entries should be skipped."""
    logger = MagicMock()

    rates = LedgerSettings._parse_rates(
        "USD=7.2,bogus,EUR=abc,JPY=-1,CNY=1,,=3,GBP=9.1",
        "CNY",
        logger=logger,
    )

    assert rates == {"USD": Decimal("7.2"), "GBP": Decimal("9.1")}
    assert logger.warning.call_count == 5
