"""Contract tests shared by the in-memory and SQLAlchemy repositories."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from beanledger.domain.models import Account, AccountType, Category, Transaction
from beanledger.infrastructure.memory_repository import InMemoryLedgerRepository
from beanledger.infrastructure.sql_repository import SqlAlchemyLedgerRepository


def _sqlite_repository() -> SqlAlchemyLedgerRepository:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    repository = SqlAlchemyLedgerRepository(db_port)
    repository.prepare_storage()
    return repository


@pytest.fixture(params=["memory", "sqlalchemy"])
def repository(request):
    """Each contract test runs against both backends."""
    if request.param == "memory":
        return InMemoryLedgerRepository()
    return _sqlite_repository()


def _account(account_id: str, **kwargs) -> Account:
    defaults = {
        "name": account_id.title(),
        "account_type": AccountType.ASSET,
        "balance": Decimal("0"),
        "created_at": datetime(2024, 1, 1, 8, 0),
        "updated_at": datetime(2024, 1, 1, 8, 0),
    }
    defaults.update(kwargs)
    return Account(id=account_id, **defaults)


def _transaction(tx_id: str, day: int, source="cash", target="food") -> Transaction:
    return Transaction(
        id=tx_id,
        amount=Decimal("12.30"),
        from_account_id=source,
        to_account_id=target,
        currency_code="CNY",
        note=f"note {tx_id}",
        created_at=datetime(2024, 1, day, 12, 30, 15, 250000),
        updated_at=datetime(2024, 1, day, 12, 30, 15, 250000),
    )


def test_accounts_round_trip_with_exact_decimals(repository) -> None:
    """Saved accounts should come back equal, with exact decimals."""
    account = _account(
        "cash",
        currency_code="USD",
        balance=Decimal("1234.5678"),
        initial_balance=Decimal("0.1"),
        icon="wallet",
        note="pocket",
        order_index=4,
    )

    repository.save_account(account)
    loaded = repository.get_account("cash")

    assert loaded == account
    assert loaded is not account
    assert repository.get_account("missing") is None


def test_returned_accounts_are_detached(repository) -> None:
    """Mutating a loaded account must not change the stored one."""
    repository.save_account(_account("cash", balance=Decimal("10")))

    loaded = repository.get_account("cash")
    loaded.balance = Decimal("99")

    assert repository.get_account("cash").balance == Decimal("10")


def test_save_account_updates_existing_row(repository) -> None:
    """Saving an existing id should overwrite the mutable fields."""
    repository.save_account(_account("cash", balance=Decimal("10")))
    repository.save_account(
        _account("cash", name="Wallet", balance=Decimal("7.5"), category_id="c1")
    )

    loaded = repository.get_account("cash")

    assert loaded.name == "Wallet"
    assert loaded.balance == Decimal("7.5")
    assert loaded.category_id == "c1"
    assert len(repository.list_accounts()) == 1


def test_list_accounts_filters_and_sorts(repository) -> None:
    """Accounts should be filtered by type and category and sorted by order."""
    repository.save_account(_account("b", order_index=2, category_id="c1"))
    repository.save_account(_account("a", order_index=1))
    repository.save_account(
        _account("food", account_type=AccountType.EXPENSE, category_id="c1")
    )

    assert [a.id for a in repository.list_accounts()] == ["food", "a", "b"]
    assert [
        a.id for a in repository.list_accounts(account_type=AccountType.ASSET)
    ] == ["a", "b"]
    assert [a.id for a in repository.list_accounts(category_id="c1")] == [
        "food",
        "b",
    ]

    repository.delete_account("a")
    assert repository.get_account("a") is None


def test_categories_round_trip_and_filter(repository) -> None:
    """Categories should be stored, listed by order and deleted."""
    repository.save_category(
        Category(id="c2", name="Banks", account_type=AccountType.ASSET, order_index=1)
    )
    repository.save_category(
        Category(id="c1", name="Cash", account_type=AccountType.ASSET)
    )
    repository.save_category(
        Category(id="c3", name="Work", account_type=AccountType.INCOME)
    )

    assert [c.id for c in repository.list_categories(AccountType.ASSET)] == [
        "c1",
        "c2",
    ]
    assert repository.get_category("c3").account_type is AccountType.INCOME

    repository.delete_category("c3")
    assert repository.get_category("c3") is None
    assert len(repository.list_categories()) == 2


def test_transactions_filter_by_range_and_account(repository) -> None:
    """Transactions should be listed newest first within inclusive bounds."""
    repository.save_transaction(_transaction("t1", 1))
    repository.save_transaction(_transaction("t2", 2, source="bank"))
    repository.save_transaction(_transaction("t3", 3))

    assert [t.id for t in repository.list_transactions()] == ["t3", "t2", "t1"]
    assert [
        t.id
        for t in repository.list_transactions(
            start=datetime(2024, 1, 2),
            end=datetime(2024, 1, 3, 12, 30, 15, 250000),
        )
    ] == ["t3", "t2"]
    assert [t.id for t in repository.list_transactions(account_id="bank")] == [
        "t2"
    ]
    assert repository.get_transaction("t1") == _transaction("t1", 1)

    repository.delete_transaction("t1")
    assert repository.get_transaction("t1") is None


def test_atomic_rolls_back_every_write_on_error(repository) -> None:
    """An exception inside atomic() should discard all writes of the unit."""
    repository.save_account(_account("cash", balance=Decimal("10")))

    with pytest.raises(RuntimeError):
        with repository.atomic():
            repository.save_account(_account("cash", balance=Decimal("0")))
            with repository.atomic():
                repository.save_transaction(_transaction("t1", 1))
            raise RuntimeError("boom")

    assert repository.get_account("cash").balance == Decimal("10")
    assert repository.get_transaction("t1") is None


def test_atomic_commits_nested_units_together(repository) -> None:
    """Writes made inside nested units should commit with the outer unit."""
    with repository.atomic():
        repository.save_account(_account("cash"))
        with repository.atomic():
            repository.save_transaction(_transaction("t1", 1))
        assert repository.get_transaction("t1") is not None

    assert repository.get_account("cash") is not None
    assert repository.get_transaction("t1") is not None
