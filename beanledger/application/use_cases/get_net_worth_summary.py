"""Use case to compute net worth from ledger accounts."""

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.models import NetWorthSummary
from beanledger.domain.services import ExchangeRateTable, compute_net_worth_summary
from beanledger.infrastructure.logging.logger import get_app_logger


class GetNetWorthSummaryUseCase:
    """Compute asset, liability and net worth totals in the base currency."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        rates: ExchangeRateTable,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing ledger accounts.
            rates: Exchange rates used to value foreign balances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._rates = rates
        self._logger = logger or get_app_logger()

    def execute(self) -> NetWorthSummary:
        """Return the net worth summary.

        Returns:
            NetWorthSummary: Computed asset, liability, and net worth totals.
        """
        accounts = self._repository.list_accounts()
        summary = compute_net_worth_summary(
            accounts,
            self._rates,
            logger=self._logger,
        )
        self._logger.info(
            f"Net worth computed: assets={summary.asset_total}, "
            f"liabilities={summary.liability_total}, "
            f"currency={summary.currency_code}"
        )
        return summary


__all__ = ["GetNetWorthSummaryUseCase", "NetWorthSummary"]
