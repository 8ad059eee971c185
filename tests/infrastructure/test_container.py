"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from beanledger.application.use_cases.ledger_engine import LedgerEngine
from beanledger.application.use_cases.ledger_reports import LedgerReports
from beanledger.domain.models import AccountType
from beanledger.infrastructure import container
from beanledger.infrastructure.memory_repository import InMemoryLedgerRepository
from beanledger.infrastructure.settings import LedgerSettings


def _settings() -> LedgerSettings:
    return LedgerSettings(
        backend="memory",
        base_currency="EUR",
        exchange_rates={"USD": Decimal("0.5")},
    )


def test_build_rate_table_uses_settings(monkeypatch) -> None:
    """The rate table should carry the configured base and rates."""
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())

    table = container.build_rate_table(_settings())

    assert table.base_currency == "EUR"
    assert table.convert_to_base(Decimal("10"), "USD") == Decimal("5.0")


def test_engine_and_reports_share_injected_repository(monkeypatch) -> None:
    """Engine writes should be visible to reports over the same repository."""
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    repository = InMemoryLedgerRepository()

    engine = container.build_ledger_engine(repository, settings=_settings())
    reports = container.build_ledger_reports(repository, settings=_settings())
    engine.create_account(
        "Dollars",
        AccountType.ASSET,
        currency_code="USD",
        initial_balance="8",
    )

    assert isinstance(engine, LedgerEngine)
    assert isinstance(reports, LedgerReports)
    assert engine.rates.base_currency == "EUR"
    assert reports.net_worth() == Decimal("4.0")


def test_build_ledger_repository_delegates_to_factory(monkeypatch) -> None:
    """The container should pass settings and logger to the factory."""
    captured = {}
    logger = MagicMock()

    def fake_factory(db_port, logger=None, settings=None):
        captured.update(db_port=db_port, logger=logger, settings=settings)
        return "repository"

    monkeypatch.setattr(container, "create_ledger_repository", fake_factory)
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)
    settings = _settings()

    assert container.build_ledger_repository(settings=settings) == "repository"
    assert captured == {"db_port": None, "logger": logger, "settings": settings}


def test_build_database_adapter_uses_configured_url() -> None:
    """The adapter should be bound to the configured URL."""
    adapter = container.build_database_adapter(
        LedgerSettings(backend="sqlalchemy", db_url="sqlite://")
    )

    assert str(adapter.get_ledger_engine().url) == "sqlite://"
