"""Factory helpers to select the ledger repository backend."""

from beanledger.application.ports.database import DatabaseEnginePort
from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.infrastructure.memory_repository import InMemoryLedgerRepository
from beanledger.infrastructure.settings import LedgerSettings
from beanledger.infrastructure.sql_repository import SqlAlchemyLedgerRepository


def create_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
    logger=None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositoryPort:
    """Return a ledger repository implementation based on configuration.

    Args:
        db_port: Optional port providing the ledger engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        settings: Optional settings override; read from the environment
            when omitted.

    Returns:
        LedgerRepositoryPort: Concrete repository implementation.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or LedgerSettings.from_env()
    backend = resolved_settings.backend.strip().lower()

    if backend == "memory":
        resolved_logger.info("Using in-memory ledger repository")
        return InMemoryLedgerRepository()

    if backend == "sqlalchemy":
        if db_port is None:
            if not resolved_settings.db_url:
                raise RuntimeError(
                    "SQLAlchemy backend requires a LEDGER_DB_URL value."
                )
            db_port = SqlAlchemyDatabaseEngineAdapter(resolved_settings.db_url)
        repository = SqlAlchemyLedgerRepository(db_port)
        repository.prepare_storage()
        resolved_logger.info("Using SQLAlchemy ledger repository")
        return repository

    raise ValueError(
        "Unsupported ledger backend: "
        f"{backend}. Expected memory or sqlalchemy."
    )


__all__ = ["create_ledger_repository"]
