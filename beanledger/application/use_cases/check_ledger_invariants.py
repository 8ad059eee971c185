"""Invariant check for stored ledger balances."""

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.models import LedgerCheckResult
from beanledger.domain.services import find_balance_mismatches
from beanledger.infrastructure.logging.logger import get_app_logger


class CheckLedgerInvariantsUseCase:
    """Verify that every balance equals its initial balance plus history."""

    def __init__(self, repository: LedgerRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self) -> LedgerCheckResult:
        """Replay stored transactions and compare with stored balances.

        Returns:
            LedgerCheckResult: Number of checked accounts and mismatches.
        """
        accounts = self._repository.list_accounts()
        transactions = self._repository.list_transactions()
        mismatches = find_balance_mismatches(accounts, transactions)
        for mismatch in mismatches:
            self._logger.warning(
                f"Balance drift on {mismatch.account_id} "
                f"({mismatch.account_name}): expected={mismatch.expected}, "
                f"actual={mismatch.actual}"
            )
        self._logger.info(
            f"Checked {len(accounts)} accounts against "
            f"{len(transactions)} transactions"
        )
        return LedgerCheckResult(
            checked_count=len(accounts),
            mismatches=mismatches,
        )


__all__ = ["CheckLedgerInvariantsUseCase", "LedgerCheckResult"]
