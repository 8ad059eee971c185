"""Composition root for wiring infrastructure adapters."""

from beanledger.application.ports.database import DatabaseEnginePort
from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.application.use_cases.ledger_engine import LedgerEngine
from beanledger.application.use_cases.ledger_reports import LedgerReports
from beanledger.domain.services import ExchangeRateTable
from beanledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.infrastructure.repository_factory import create_ledger_repository
from beanledger.infrastructure.settings import LedgerSettings


def build_database_adapter(
    settings: LedgerSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or LedgerSettings.from_env()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositoryPort:
    """Return the configured ledger repository."""
    return create_ledger_repository(
        db_port,
        logger=get_app_logger(),
        settings=settings or LedgerSettings.from_env(),
    )


def build_rate_table(settings: LedgerSettings | None = None) -> ExchangeRateTable:
    """Return the exchange-rate table configured for reports."""
    resolved = settings or LedgerSettings.from_env()
    return ExchangeRateTable(
        base_currency=resolved.base_currency,
        rates=resolved.exchange_rates,
        logger=get_app_logger(),
    )


def build_ledger_engine(
    repository: LedgerRepositoryPort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerEngine:
    """Return a ledger engine over the configured repository."""
    resolved = settings or LedgerSettings.from_env()
    return LedgerEngine(
        repository or build_ledger_repository(settings=resolved),
        rates=build_rate_table(resolved),
        logger=get_app_logger(),
    )


def build_ledger_reports(
    repository: LedgerRepositoryPort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerReports:
    """Return the reporting facade over the configured repository."""
    resolved = settings or LedgerSettings.from_env()
    return LedgerReports(
        repository or build_ledger_repository(settings=resolved),
        build_rate_table(resolved),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_rate_table",
    "build_ledger_engine",
    "build_ledger_reports",
]
