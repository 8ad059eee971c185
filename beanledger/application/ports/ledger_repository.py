"""Port for ledger entity storage."""

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol

from beanledger.domain.models import Account, AccountType, Category, Transaction


class LedgerRepositoryPort(Protocol):
    """Port exposing get/put/delete-by-id access to ledger entities.

    Implementations return detached copies: mutating a returned entity has no
    effect until it is saved. Write failures raise PersistenceError.
    """

    def atomic(self) -> AbstractContextManager[None]:
        """Group writes so that either all of them persist or none does.

        Nested calls join the outermost unit.
        """

    def get_account(self, account_id: str) -> Account | None:
        """Return the account or None when it does not exist."""

    def save_account(self, account: Account) -> None:
        """Insert or replace an account."""

    def delete_account(self, account_id: str) -> None:
        """Remove an account."""

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        category_id: str | None = None,
    ) -> list[Account]:
        """Return accounts ordered by order_index, optionally filtered."""

    def get_category(self, category_id: str) -> Category | None:
        """Return the category or None when it does not exist."""

    def save_category(self, category: Category) -> None:
        """Insert or replace a category."""

    def delete_category(self, category_id: str) -> None:
        """Remove a category."""

    def list_categories(
        self,
        account_type: AccountType | None = None,
    ) -> list[Category]:
        """Return categories ordered by order_index."""

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        """Return the transaction or None when it does not exist."""

    def save_transaction(self, transaction: Transaction) -> None:
        """Insert or replace a transaction."""

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove a transaction."""

    def list_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        account_id: str | None = None,
    ) -> list[Transaction]:
        """Return transactions newest first, filtered by date and account."""


__all__ = ["LedgerRepositoryPort"]
