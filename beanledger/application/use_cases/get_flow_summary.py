"""Use case to compute income and expense totals for a period."""

from datetime import date, datetime

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.models import FlowSummary
from beanledger.domain.services import ExchangeRateTable, compute_flow_summary
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.utils.date_utils import as_range_bounds


class GetFlowSummaryUseCase:
    """Compute range-scoped flow totals from the stored transactions."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        rates: ExchangeRateTable,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing ledger accounts and transactions.
            rates: Exchange rates used to value foreign amounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._rates = rates
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> FlowSummary:
        """Return flow totals for the period.

        Args:
            start_date: Optional inclusive lower bound on transaction dates.
            end_date: Optional inclusive upper bound on transaction dates.

        Returns:
            FlowSummary: Income, expense and asset movement totals.
        """
        start, end = as_range_bounds(start_date, end_date)
        transactions = self._repository.list_transactions(start=start, end=end)
        account_types = {
            account.id: account.account_type
            for account in self._repository.list_accounts()
        }
        summary = compute_flow_summary(
            transactions,
            account_types,
            self._rates,
            start=start,
            end=end,
        )
        self._logger.info(
            f"Flow totals computed from {len(transactions)} transactions: "
            f"income={summary.total_income}, expense={summary.total_expense}, "
            f"currency={summary.currency_code}"
        )
        return summary


__all__ = ["GetFlowSummaryUseCase", "FlowSummary"]
