"""In-memory repository for ledger entities."""

import threading
from contextlib import contextmanager
from copy import copy
from datetime import datetime

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.models import Account, AccountType, Category, Transaction
from beanledger.utils.date_utils import in_range


class InMemoryLedgerRepository(LedgerRepositoryPort):
    """Dict-backed repository returning detached copies.

    ``atomic`` gives the calling thread private copies of the three tables
    and publishes them in one step when the outermost unit exits cleanly.
    Other threads keep reading the last committed tables in the meantime.
    Writers are serialized by a lock held for the whole unit.
    """

    def __init__(self) -> None:
        self._committed: tuple[
            dict[str, Account], dict[str, Category], dict[str, Transaction]
        ] = ({}, {}, {})
        self._write_lock = threading.RLock()
        self._local = threading.local()

    @contextmanager
    def atomic(self):
        if getattr(self._local, "working", None) is not None:
            yield
            return

        with self._write_lock:
            accounts, categories, transactions = self._committed
            self._local.working = (
                dict(accounts),
                dict(categories),
                dict(transactions),
            )
            try:
                yield
                self._committed = self._local.working
            finally:
                self._local.working = None

    def _tables(self):
        working = getattr(self._local, "working", None)
        return working if working is not None else self._committed

    def get_account(self, account_id: str) -> Account | None:
        account = self._tables()[0].get(account_id)
        return copy(account) if account is not None else None

    def save_account(self, account: Account) -> None:
        with self.atomic():
            self._tables()[0][account.id] = copy(account)

    def delete_account(self, account_id: str) -> None:
        with self.atomic():
            self._tables()[0].pop(account_id, None)

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        category_id: str | None = None,
    ) -> list[Account]:
        accounts = [
            copy(account)
            for account in self._tables()[0].values()
            if (account_type is None or account.account_type == account_type)
            and (category_id is None or account.category_id == category_id)
        ]
        return sorted(accounts, key=lambda row: (row.order_index, row.name, row.id))

    def get_category(self, category_id: str) -> Category | None:
        category = self._tables()[1].get(category_id)
        return copy(category) if category is not None else None

    def save_category(self, category: Category) -> None:
        with self.atomic():
            self._tables()[1][category.id] = copy(category)

    def delete_category(self, category_id: str) -> None:
        with self.atomic():
            self._tables()[1].pop(category_id, None)

    def list_categories(
        self,
        account_type: AccountType | None = None,
    ) -> list[Category]:
        categories = [
            copy(category)
            for category in self._tables()[1].values()
            if account_type is None or category.account_type == account_type
        ]
        return sorted(
            categories,
            key=lambda row: (row.order_index, row.name, row.id),
        )

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        return self._tables()[2].get(transaction_id)

    def save_transaction(self, transaction: Transaction) -> None:
        with self.atomic():
            self._tables()[2][transaction.id] = transaction

    def delete_transaction(self, transaction_id: str) -> None:
        with self.atomic():
            self._tables()[2].pop(transaction_id, None)

    def list_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        account_id: str | None = None,
    ) -> list[Transaction]:
        transactions = [
            transaction
            for transaction in self._tables()[2].values()
            if in_range(transaction.created_at, start, end)
            and (account_id is None or transaction.references(account_id))
        ]
        return sorted(
            transactions,
            key=lambda row: (row.created_at, row.id),
            reverse=True,
        )


__all__ = ["InMemoryLedgerRepository"]
