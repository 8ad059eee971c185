"""Use case to list account balances for display."""

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.models import AccountBalanceDTO, AccountType
from beanledger.domain.services import ExchangeRateTable, compute_account_balances
from beanledger.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """List account balances alongside their base-currency value."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        rates: ExchangeRateTable,
        logger=None,
    ) -> None:
        self._repository = repository
        self._rates = rates
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_type: AccountType | None = None,
    ) -> list[AccountBalanceDTO]:
        """Return balances ordered by category, then by account order.

        Args:
            account_type: Optional type filter.

        Returns:
            list[AccountBalanceDTO]: Balances for UI rendering.
        """
        accounts = self._repository.list_accounts(account_type=account_type)
        categories = self._repository.list_categories(account_type)
        balances = compute_account_balances(accounts, categories, self._rates)
        self._logger.info(
            f"Fetched {len(balances)} account balances "
            f"for {self._rates.base_currency}"
        )
        return balances


__all__ = ["GetAccountBalancesUseCase", "AccountBalanceDTO"]
