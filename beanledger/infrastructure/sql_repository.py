"""SQLAlchemy-backed repository for ledger entities.

Amounts are stored as text so that Decimal values round-trip exactly on
every backend, and timestamps as ISO-8601 strings.
"""

import threading
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from beanledger.application.ports.database import DatabaseEnginePort
from beanledger.application.ports.ledger_repository import LedgerRepositoryPort
from beanledger.domain.errors import PersistenceError
from beanledger.domain.models import Account, AccountType, Category, Transaction
from beanledger.utils.decimal_utils import coerce_decimal


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS ledger_categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        account_type TEXT NOT NULL,
        order_index INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ledger_accounts (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        account_type TEXT NOT NULL,
        category_id TEXT,
        balance TEXT NOT NULL,
        initial_balance TEXT NOT NULL,
        currency_code TEXT NOT NULL,
        icon TEXT NOT NULL,
        note TEXT NOT NULL,
        order_index INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ledger_transactions (
        id TEXT PRIMARY KEY,
        amount TEXT NOT NULL,
        from_account_id TEXT NOT NULL,
        to_account_id TEXT NOT NULL,
        currency_code TEXT NOT NULL,
        note TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
)

UPSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO ledger_accounts (
        id, name, account_type, category_id, balance, initial_balance,
        currency_code, icon, note, order_index, created_at, updated_at
    )
    VALUES (
        :id, :name, :account_type, :category_id, :balance, :initial_balance,
        :currency_code, :icon, :note, :order_index, :created_at, :updated_at
    )
    ON CONFLICT (id) DO UPDATE SET
        name = excluded.name,
        category_id = excluded.category_id,
        balance = excluded.balance,
        icon = excluded.icon,
        note = excluded.note,
        order_index = excluded.order_index,
        updated_at = excluded.updated_at
    """
)

UPSERT_CATEGORY_SQL = text(
    """
    INSERT INTO ledger_categories (id, name, account_type, order_index)
    VALUES (:id, :name, :account_type, :order_index)
    ON CONFLICT (id) DO UPDATE SET
        name = excluded.name,
        order_index = excluded.order_index
    """
)

UPSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO ledger_transactions (
        id, amount, from_account_id, to_account_id, currency_code,
        note, created_at, updated_at
    )
    VALUES (
        :id, :amount, :from_account_id, :to_account_id, :currency_code,
        :note, :created_at, :updated_at
    )
    ON CONFLICT (id) DO UPDATE SET
        amount = excluded.amount,
        from_account_id = excluded.from_account_id,
        to_account_id = excluded.to_account_id,
        currency_code = excluded.currency_code,
        note = excluded.note,
        created_at = excluded.created_at,
        updated_at = excluded.updated_at
    """
)

SELECT_ACCOUNTS_SQL = """
    SELECT id, name, account_type, category_id, balance, initial_balance,
           currency_code, icon, note, order_index, created_at, updated_at
    FROM ledger_accounts
"""

SELECT_TRANSACTIONS_SQL = """
    SELECT id, amount, from_account_id, to_account_id, currency_code,
           note, created_at, updated_at
    FROM ledger_transactions
"""


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for ledger reads and writes."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port
        self._local = threading.local()

    def prepare_storage(self) -> None:
        """Ensure the ledger tables exist."""
        with self._connection(write=True) as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    @property
    def _active_conn(self):
        # Units of work are per thread; other threads read committed rows.
        return getattr(self._local, "conn", None)

    @contextmanager
    def atomic(self):
        if self._active_conn is not None:
            yield
            return
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                self._local.conn = conn
                try:
                    yield
                finally:
                    self._local.conn = None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Ledger commit failed: {exc}") from exc

    @contextmanager
    def _connection(self, write: bool = False):
        if self._active_conn is not None:
            try:
                yield self._active_conn
            except SQLAlchemyError as exc:
                raise PersistenceError(f"Ledger statement failed: {exc}") from exc
            return
        engine = self._db_port.get_ledger_engine()
        try:
            context = engine.begin() if write else engine.connect()
            with context as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Ledger statement failed: {exc}") from exc

    # Accounts

    def get_account(self, account_id: str) -> Account | None:
        query = text(SELECT_ACCOUNTS_SQL + " WHERE id = :id")
        with self._connection() as conn:
            row = conn.execute(query, {"id": account_id}).first()
        return self._to_account(row) if row is not None else None

    def save_account(self, account: Account) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                UPSERT_ACCOUNT_SQL,
                {
                    "id": account.id,
                    "name": account.name,
                    "account_type": AccountType(account.account_type).value,
                    "category_id": account.category_id,
                    "balance": str(account.balance),
                    "initial_balance": str(account.initial_balance),
                    "currency_code": account.currency_code,
                    "icon": account.icon,
                    "note": account.note,
                    "order_index": account.order_index,
                    "created_at": account.created_at.isoformat(),
                    "updated_at": account.updated_at.isoformat(),
                },
            )

    def delete_account(self, account_id: str) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                text("DELETE FROM ledger_accounts WHERE id = :id"),
                {"id": account_id},
            )

    def list_accounts(
        self,
        account_type: AccountType | None = None,
        category_id: str | None = None,
    ) -> list[Account]:
        sql = SELECT_ACCOUNTS_SQL + " WHERE 1=1"
        params: dict[str, str] = {}
        if account_type is not None:
            sql += " AND account_type = :account_type"
            params["account_type"] = AccountType(account_type).value
        if category_id is not None:
            sql += " AND category_id = :category_id"
            params["category_id"] = category_id
        sql += " ORDER BY order_index, name, id"
        with self._connection() as conn:
            rows = conn.execute(text(sql), params).all()
        return [self._to_account(row) for row in rows]

    # Categories

    def get_category(self, category_id: str) -> Category | None:
        query = text(
            """
            SELECT id, name, account_type, order_index
            FROM ledger_categories
            WHERE id = :id
            """
        )
        with self._connection() as conn:
            row = conn.execute(query, {"id": category_id}).first()
        return self._to_category(row) if row is not None else None

    def save_category(self, category: Category) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                UPSERT_CATEGORY_SQL,
                {
                    "id": category.id,
                    "name": category.name,
                    "account_type": AccountType(category.account_type).value,
                    "order_index": category.order_index,
                },
            )

    def delete_category(self, category_id: str) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                text("DELETE FROM ledger_categories WHERE id = :id"),
                {"id": category_id},
            )

    def list_categories(
        self,
        account_type: AccountType | None = None,
    ) -> list[Category]:
        sql = """
            SELECT id, name, account_type, order_index
            FROM ledger_categories
            WHERE 1=1
        """
        params: dict[str, str] = {}
        if account_type is not None:
            sql += " AND account_type = :account_type"
            params["account_type"] = AccountType(account_type).value
        sql += " ORDER BY order_index, name, id"
        with self._connection() as conn:
            rows = conn.execute(text(sql), params).all()
        return [self._to_category(row) for row in rows]

    # Transactions

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        query = text(SELECT_TRANSACTIONS_SQL + " WHERE id = :id")
        with self._connection() as conn:
            row = conn.execute(query, {"id": transaction_id}).first()
        return self._to_transaction(row) if row is not None else None

    def save_transaction(self, transaction: Transaction) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                UPSERT_TRANSACTION_SQL,
                {
                    "id": transaction.id,
                    "amount": str(transaction.amount),
                    "from_account_id": transaction.from_account_id,
                    "to_account_id": transaction.to_account_id,
                    "currency_code": transaction.currency_code,
                    "note": transaction.note,
                    "created_at": transaction.created_at.isoformat(),
                    "updated_at": transaction.updated_at.isoformat(),
                },
            )

    def delete_transaction(self, transaction_id: str) -> None:
        with self._connection(write=True) as conn:
            conn.execute(
                text("DELETE FROM ledger_transactions WHERE id = :id"),
                {"id": transaction_id},
            )

    def list_transactions(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        account_id: str | None = None,
    ) -> list[Transaction]:
        sql = SELECT_TRANSACTIONS_SQL + " WHERE 1=1"
        params: dict[str, str] = {}
        if start is not None:
            sql += " AND created_at >= :start"
            params["start"] = start.isoformat()
        if end is not None:
            sql += " AND created_at <= :end"
            params["end"] = end.isoformat()
        if account_id is not None:
            sql += (
                " AND (from_account_id = :account_id"
                " OR to_account_id = :account_id)"
            )
            params["account_id"] = account_id
        sql += " ORDER BY created_at DESC, id DESC"
        with self._connection() as conn:
            rows = conn.execute(text(sql), params).all()
        return [self._to_transaction(row) for row in rows]

    # Row mapping

    @staticmethod
    def _to_account(row) -> Account:
        return Account(
            id=row.id,
            name=row.name,
            account_type=AccountType(row.account_type),
            category_id=row.category_id,
            balance=coerce_decimal(row.balance),
            initial_balance=coerce_decimal(row.initial_balance),
            currency_code=row.currency_code,
            icon=row.icon,
            note=row.note,
            order_index=row.order_index,
            created_at=datetime.fromisoformat(row.created_at),
            updated_at=datetime.fromisoformat(row.updated_at),
        )

    @staticmethod
    def _to_category(row) -> Category:
        return Category(
            id=row.id,
            name=row.name,
            account_type=AccountType(row.account_type),
            order_index=row.order_index,
        )

    @staticmethod
    def _to_transaction(row) -> Transaction:
        return Transaction(
            id=row.id,
            amount=coerce_decimal(row.amount),
            from_account_id=row.from_account_id,
            to_account_id=row.to_account_id,
            currency_code=row.currency_code,
            note=row.note,
            created_at=datetime.fromisoformat(row.created_at),
            updated_at=datetime.fromisoformat(row.updated_at),
        )


__all__ = [
    "SqlAlchemyLedgerRepository",
    "CREATE_TABLES_SQL",
    "UPSERT_ACCOUNT_SQL",
    "UPSERT_CATEGORY_SQL",
    "UPSERT_TRANSACTION_SQL",
]
