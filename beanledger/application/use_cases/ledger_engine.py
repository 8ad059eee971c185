"""Ledger engine: the single writer of accounts, categories and transactions.

Every balance change goes through the canonical polarity rules. Creating a
transaction applies both legs, deleting it rolls both legs back, and editing
it rolls back the old legs before applying the new ones.
"""

import threading
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.constants import DEFAULT_ACCOUNT_ICON, DEFAULT_RECENT_LIMIT
from beanledger.domain.errors import (
    NotFoundError,
    PartialFailureError,
    PersistenceError,
    ValidationError,
)
from beanledger.domain.models import (
    Account,
    AccountType,
    BalanceDirection,
    Category,
    ConversionHint,
    Transaction,
    TransactionRole,
)
from beanledger.domain.services import (
    ExchangeRateTable,
    balance_effect,
    coerce_account_type,
    compute_conversion_hint,
    normalize_currency_code,
    normalize_name,
    validate_amount,
    validate_category_matches,
    validate_distinct_accounts,
)
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.utils.date_utils import as_range_bounds
from beanledger.utils.decimal_utils import coerce_decimal


class LedgerEngine:
    """Apply, reverse and re-apply transactions against accounts.

    Callers share one engine per ledger; writes are serialized with a
    re-entrant lock and each one runs inside a single storage unit.
    """

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        rates: ExchangeRateTable | None = None,
        logger=None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            repository: Storage collaborator for ledger entities.
            rates: Exchange-rate table; its base currency is the default
                currency of new accounts.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Optional callable returning the current time.
            id_factory: Optional callable returning new entity ids.
        """
        self._repository = repository
        self._rates = rates or ExchangeRateTable()
        self._logger = logger or get_app_logger()
        self._clock = clock or datetime.now
        self._id_factory = id_factory or (lambda: uuid4().hex)
        self._lock = threading.RLock()

    @property
    def rates(self) -> ExchangeRateTable:
        """Return the exchange-rate table used for display conversions."""
        return self._rates

    # Accounts

    def create_account(
        self,
        name: str,
        account_type: AccountType | str,
        *,
        currency_code: str | None = None,
        initial_balance=Decimal("0"),
        category_id: str | None = None,
        icon: str = DEFAULT_ACCOUNT_ICON,
        note: str = "",
        order_index: int = 0,
    ) -> Account:
        """Create an account whose balance starts at its initial balance.

        Raises:
            ValidationError: If the name, type, currency, balance or category
                type is invalid.
            NotFoundError: If the category does not exist.
        """
        resolved_name = self._validate_name(name, "Account")
        resolved_type = coerce_account_type(account_type)
        currency = normalize_currency_code(
            currency_code or self._rates.base_currency
        )
        if currency is None:
            raise ValidationError("Account currency code must not be empty")
        try:
            opening = coerce_decimal(initial_balance)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if not opening.is_finite():
            raise ValidationError(
                f"Initial balance must be a finite number: {initial_balance!r}"
            )

        with self._lock:
            if category_id is not None:
                category = self._require_category(category_id)
                validate_category_matches(resolved_type, category)
            now = self._clock()
            account = Account(
                id=self._id_factory(),
                name=resolved_name,
                account_type=resolved_type,
                currency_code=currency,
                balance=opening,
                initial_balance=opening,
                category_id=category_id,
                icon=icon,
                note=note,
                order_index=order_index,
                created_at=now,
                updated_at=now,
            )
            with self._repository.atomic():
                self._repository.save_account(account)

        self._logger.info(
            f"Created {resolved_type.value} account {account.id} "
            f"({account.name}, {currency}, initial={opening})"
        )
        return account

    def update_account(
        self,
        account_id: str,
        *,
        name: str | None = None,
        category_id: str | None = None,
        clear_category: bool = False,
        icon: str | None = None,
        note: str | None = None,
        order_index: int | None = None,
    ) -> Account:
        """Update the display fields of an account.

        The type, currency and balances are fixed; only the engine's
        transaction operations move the balance.

        Raises:
            ValidationError: If the name is invalid or the category belongs
                to another account type.
            NotFoundError: If the account or category does not exist.
        """
        if category_id is not None and clear_category:
            raise ValidationError(
                "Pass either category_id or clear_category, not both"
            )
        with self._lock:
            account = self._require_account(account_id)
            if name is not None:
                account.name = self._validate_name(name, "Account")
            if category_id is not None:
                category = self._require_category(category_id)
                validate_category_matches(account.account_type, category)
                account.category_id = category_id
            if clear_category:
                account.category_id = None
            if icon is not None:
                account.icon = icon
            if note is not None:
                account.note = note
            if order_index is not None:
                account.order_index = order_index
            account.updated_at = self._clock()
            with self._repository.atomic():
                self._repository.save_account(account)
        return account

    def get_account(self, account_id: str) -> Account:
        """Return an account or raise NotFoundError."""
        return self._require_account(account_id)

    def list_accounts(
        self,
        account_type: AccountType | str | None = None,
    ) -> list[Account]:
        """Return accounts ordered by order_index."""
        resolved = (
            coerce_account_type(account_type)
            if account_type is not None
            else None
        )
        return self._repository.list_accounts(account_type=resolved)

    def delete_account_cascade(self, account_id: str) -> int:
        """Delete every transaction referencing the account, then the account.

        Each transaction is deleted through ``delete_transaction`` so the
        counterparty leg is rolled back as well.

        Returns:
            int: Number of transactions removed.

        Raises:
            NotFoundError: If the account does not exist.
        """
        with self._lock:
            account = self._require_account(account_id)
            with self._repository.atomic():
                transactions = self._repository.list_transactions(
                    account_id=account_id
                )
                for transaction in transactions:
                    self.delete_transaction(transaction.id)
                self._repository.delete_account(account_id)

        self._logger.info(
            f"Deleted account {account_id} ({account.name}) "
            f"with {len(transactions)} transactions"
        )
        return len(transactions)

    # Categories

    def create_category(
        self,
        name: str,
        account_type: AccountType | str,
        *,
        order_index: int | None = None,
    ) -> Category:
        """Create a category for one account type.

        Without an explicit order_index the category is appended after the
        existing categories of its type.
        """
        resolved_name = self._validate_name(name, "Category")
        resolved_type = coerce_account_type(account_type)
        with self._lock:
            if order_index is None:
                existing = self._repository.list_categories(resolved_type)
                order_index = (
                    max(category.order_index for category in existing) + 1
                    if existing
                    else 0
                )
            category = Category(
                id=self._id_factory(),
                name=resolved_name,
                account_type=resolved_type,
                order_index=order_index,
            )
            with self._repository.atomic():
                self._repository.save_category(category)
        return category

    def rename_category(self, category_id: str, name: str) -> Category:
        """Rename a category; names are not required to be unique."""
        resolved_name = self._validate_name(name, "Category")
        with self._lock:
            category = self._require_category(category_id)
            category.name = resolved_name
            with self._repository.atomic():
                self._repository.save_category(category)
        return category

    def reorder_categories(self, category_ids: list[str]) -> list[Category]:
        """Assign order_index values following the given id order."""
        with self._lock:
            categories = [
                self._require_category(category_id)
                for category_id in category_ids
            ]
            with self._repository.atomic():
                for index, category in enumerate(categories):
                    category.order_index = index
                    self._repository.save_category(category)
        return categories

    def list_categories(
        self,
        account_type: AccountType | str | None = None,
    ) -> list[Category]:
        """Return categories ordered by order_index."""
        resolved = (
            coerce_account_type(account_type)
            if account_type is not None
            else None
        )
        return self._repository.list_categories(resolved)

    def delete_category(self, category_id: str) -> int:
        """Delete a category and clear it on every account that used it.

        Accounts are never deleted along with their category.

        Returns:
            int: Number of accounts whose category was cleared.
        """
        with self._lock:
            self._require_category(category_id)
            with self._repository.atomic():
                accounts = self._repository.list_accounts(
                    category_id=category_id
                )
                now = self._clock()
                for account in accounts:
                    account.category_id = None
                    account.updated_at = now
                    self._repository.save_account(account)
                self._repository.delete_category(category_id)

        self._logger.info(
            f"Deleted category {category_id}; cleared {len(accounts)} accounts"
        )
        return len(accounts)

    # Transactions

    def create_transaction(
        self,
        amount,
        from_account_id: str,
        to_account_id: str,
        currency_code: str | None = None,
        note: str = "",
        date: datetime | None = None,
    ) -> str:
        """Record a transaction and apply both of its legs.

        Args:
            amount: Strictly positive amount.
            from_account_id: Source account id.
            to_account_id: Destination account id.
            currency_code: Currency of the amount; defaults to the source
                account's currency.
            note: Free text.
            date: Transaction date; defaults to now.

        Returns:
            str: Id of the new transaction.

        Raises:
            ValidationError: If the amount is not positive or both legs are
                the same account.
            NotFoundError: If either account does not exist.
            PersistenceError: If storage fails; nothing is persisted.
        """
        value = validate_amount(amount)
        validate_distinct_accounts(from_account_id, to_account_id)

        with self._lock:
            accounts = self._load_accounts(from_account_id, to_account_id)
            now = self._clock()
            currency = normalize_currency_code(currency_code) or (
                accounts[from_account_id].currency_code
            )
            transaction = Transaction(
                id=self._id_factory(),
                amount=value,
                from_account_id=from_account_id,
                to_account_id=to_account_id,
                currency_code=currency,
                note=note,
                created_at=date or now,
                updated_at=now,
            )
            self._apply_legs(accounts, transaction, BalanceDirection.APPLY, now)
            with self._repository.atomic():
                self._save_legs(accounts, transaction)
                self._repository.save_transaction(transaction)

        self._logger.info(
            f"Created transaction {transaction.id}: {value} {currency} "
            f"from {from_account_id} to {to_account_id}"
        )
        return transaction.id

    def edit_transaction(
        self,
        transaction_id: str,
        *,
        amount=None,
        from_account_id: str | None = None,
        to_account_id: str | None = None,
        currency_code: str | None = None,
        note: str | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        """Edit a transaction by rolling back its old legs and applying new ones.

        All validation happens before any balance moves. The rollback and the
        reapply are committed as two separate storage units; if the second
        one fails the old effect is gone, the record is removed, and
        PartialFailureError carries the pending transaction for
        ``retry_reapply``.

        Raises:
            ValidationError: If the merged fields are invalid.
            NotFoundError: If the transaction or any involved account is
                missing.
            PersistenceError: If the rollback could not be committed.
            PartialFailureError: If the reapply could not be committed.
        """
        with self._lock:
            existing = self._require_transaction(transaction_id)
            now = self._clock()
            updated = replace(
                existing,
                amount=(
                    validate_amount(amount)
                    if amount is not None
                    else existing.amount
                ),
                from_account_id=from_account_id or existing.from_account_id,
                to_account_id=to_account_id or existing.to_account_id,
                currency_code=(
                    normalize_currency_code(currency_code)
                    or existing.currency_code
                ),
                note=note if note is not None else existing.note,
                created_at=date or existing.created_at,
                updated_at=now,
            )
            validate_distinct_accounts(
                updated.from_account_id,
                updated.to_account_id,
            )
            accounts = self._load_accounts(
                existing.from_account_id,
                existing.to_account_id,
                updated.from_account_id,
                updated.to_account_id,
            )

            self._apply_legs(accounts, existing, BalanceDirection.ROLLBACK, now)
            with self._repository.atomic():
                self._save_legs(accounts, existing)
                self._repository.delete_transaction(existing.id)

            try:
                self._apply_legs(accounts, updated, BalanceDirection.APPLY, now)
                with self._repository.atomic():
                    self._save_legs(accounts, updated)
                    self._repository.save_transaction(updated)
            except PersistenceError as exc:
                self._logger.error(
                    f"Edit of transaction {transaction_id} rolled back the old "
                    f"legs but failed to reapply: {exc}"
                )
                raise PartialFailureError(
                    f"Transaction {transaction_id} was rolled back but not "
                    "reapplied; retry the reapply",
                    pending=updated,
                ) from exc

        self._logger.info(f"Edited transaction {transaction_id}")
        return updated

    def retry_reapply(self, pending: Transaction) -> Transaction:
        """Apply a transaction left pending by a failed edit.

        Safe to call repeatedly: when the transaction is already stored the
        stored copy is returned untouched.

        Raises:
            NotFoundError: If either account has disappeared since.
            PersistenceError: If storage fails again.
        """
        with self._lock:
            stored = self._repository.get_transaction(pending.id)
            if stored is not None:
                self._logger.info(
                    f"Transaction {pending.id} already applied; nothing to retry"
                )
                return stored
            validate_amount(pending.amount)
            validate_distinct_accounts(
                pending.from_account_id,
                pending.to_account_id,
            )
            accounts = self._load_accounts(
                pending.from_account_id,
                pending.to_account_id,
            )
            now = self._clock()
            self._apply_legs(accounts, pending, BalanceDirection.APPLY, now)
            with self._repository.atomic():
                self._save_legs(accounts, pending)
                self._repository.save_transaction(pending)

        self._logger.info(f"Reapplied transaction {pending.id}")
        return pending

    def delete_transaction(self, transaction_id: str) -> None:
        """Roll back both legs of a transaction and remove it.

        Raises:
            NotFoundError: If the transaction or one of its accounts is
                missing; no balance is touched in that case.
            PersistenceError: If storage fails; nothing is persisted.
        """
        with self._lock:
            transaction = self._require_transaction(transaction_id)
            accounts = self._load_accounts(
                transaction.from_account_id,
                transaction.to_account_id,
            )
            now = self._clock()
            self._apply_legs(
                accounts,
                transaction,
                BalanceDirection.ROLLBACK,
                now,
            )
            with self._repository.atomic():
                self._save_legs(accounts, transaction)
                self._repository.delete_transaction(transaction_id)

        self._logger.info(f"Deleted transaction {transaction_id}")

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Return a transaction or raise NotFoundError."""
        return self._require_transaction(transaction_id)

    def list_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        account_id: str | None = None,
    ) -> list[Transaction]:
        """Return transactions newest first within an inclusive date range."""
        lower, upper = as_range_bounds(start, end)
        return self._repository.list_transactions(
            start=lower,
            end=upper,
            account_id=account_id,
        )

    def recent_transactions(
        self,
        limit: int = DEFAULT_RECENT_LIMIT,
    ) -> list[Transaction]:
        """Return the newest transactions."""
        return self._repository.list_transactions()[:limit]

    def conversion_hint(self, transaction_id: str) -> ConversionHint | None:
        """Return the converted amount to display next to a transaction."""
        transaction = self._require_transaction(transaction_id)
        accounts = self._load_accounts(
            transaction.from_account_id,
            transaction.to_account_id,
        )
        return compute_conversion_hint(
            transaction,
            accounts[transaction.from_account_id],
            accounts[transaction.to_account_id],
            self._rates,
        )

    # Internals

    def _apply_legs(
        self,
        accounts: dict[str, Account],
        transaction: Transaction,
        direction: BalanceDirection,
        at: datetime,
    ) -> None:
        for role, account_id in (
            (TransactionRole.FROM, transaction.from_account_id),
            (TransactionRole.TO, transaction.to_account_id),
        ):
            account = accounts[account_id]
            account.adjust_balance(
                balance_effect(
                    account.account_type,
                    role,
                    direction,
                    transaction.amount,
                ),
                at,
            )

    def _save_legs(
        self,
        accounts: dict[str, Account],
        transaction: Transaction,
    ) -> None:
        self._repository.save_account(accounts[transaction.from_account_id])
        self._repository.save_account(accounts[transaction.to_account_id])

    def _load_accounts(self, *account_ids: str) -> dict[str, Account]:
        accounts: dict[str, Account] = {}
        for account_id in account_ids:
            if account_id not in accounts:
                accounts[account_id] = self._require_account(account_id)
        return accounts

    def _require_account(self, account_id: str) -> Account:
        account = self._repository.get_account(account_id)
        if account is None:
            self._logger.warning(f"Account not found: {account_id}")
            raise NotFoundError("Account", account_id)
        return account

    def _require_category(self, category_id: str) -> Category:
        category = self._repository.get_category(category_id)
        if category is None:
            self._logger.warning(f"Category not found: {category_id}")
            raise NotFoundError("Category", category_id)
        return category

    def _require_transaction(self, transaction_id: str) -> Transaction:
        transaction = self._repository.get_transaction(transaction_id)
        if transaction is None:
            self._logger.warning(f"Transaction not found: {transaction_id}")
            raise NotFoundError("Transaction", transaction_id)
        return transaction

    @staticmethod
    def _validate_name(name: str | None, entity: str) -> str:
        resolved = normalize_name(name)
        if not resolved:
            raise ValidationError(f"{entity} name must not be blank: {name!r}")
        return resolved


__all__ = ["LedgerEngine"]
