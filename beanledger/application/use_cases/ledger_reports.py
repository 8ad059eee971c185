"""Read-only reporting entry points over the ledger."""

from datetime import date, datetime
from decimal import Decimal

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.application.use_cases.get_flow_summary import GetFlowSummaryUseCase
from beanledger.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from beanledger.domain.services import ExchangeRateTable
from beanledger.infrastructure.logging.logger import get_app_logger


class LedgerReports:
    """Aggregate totals in the base currency; never mutates balances."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        rates: ExchangeRateTable,
        logger=None,
    ) -> None:
        resolved_logger = logger or get_app_logger()
        self._net_worth = GetNetWorthSummaryUseCase(
            repository,
            rates,
            logger=resolved_logger,
        )
        self._flows = GetFlowSummaryUseCase(
            repository,
            rates,
            logger=resolved_logger,
        )

    def net_worth(self) -> Decimal:
        return self._net_worth.execute().net_worth

    def total_assets(self) -> Decimal:
        return self._net_worth.execute().asset_total

    def total_liabilities(self) -> Decimal:
        """Return the signed liability total; display code may negate it."""
        return self._net_worth.execute().liability_total

    def total_income(
        self,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> Decimal:
        return self._flows.execute(start_date, end_date).total_income

    def total_expense(
        self,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> Decimal:
        return self._flows.execute(start_date, end_date).total_expense


__all__ = ["LedgerReports"]
