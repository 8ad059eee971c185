"""Isolation of units of work across threads, for both repositories."""

import threading
from datetime import datetime
from decimal import Decimal

import pytest

from beanledger.domain.models import Account, AccountType
from beanledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from beanledger.infrastructure.memory_repository import InMemoryLedgerRepository
from beanledger.infrastructure.sql_repository import SqlAlchemyLedgerRepository


@pytest.fixture(params=["memory", "sqlalchemy"])
def repository(request, tmp_path):
    """File-backed SQLite so every thread checks out its own connection."""
    if request.param == "memory":
        return InMemoryLedgerRepository()
    adapter = SqlAlchemyDatabaseEngineAdapter(f"sqlite:///{tmp_path / 'ledger.db'}")
    repository = SqlAlchemyLedgerRepository(adapter)
    repository.prepare_storage()
    return repository


def _cash(balance: str) -> Account:
    return Account(
        id="cash",
        name="Cash",
        account_type=AccountType.ASSET,
        balance=Decimal(balance),
        created_at=datetime(2024, 1, 1, 8, 0),
        updated_at=datetime(2024, 1, 1, 8, 0),
    )


def test_other_threads_do_not_see_uncommitted_writes(repository) -> None:
    """A reader sees the committed balance while another thread's unit is open."""
    repository.save_account(_cash("10"))
    saved = threading.Event()
    read_done = threading.Event()
    errors: list[BaseException] = []

    def writer() -> None:
        try:
            with repository.atomic():
                repository.save_account(_cash("999"))
                assert repository.get_account("cash").balance == Decimal("999")
                saved.set()
                read_done.wait(timeout=5)
                raise RuntimeError("abort unit")
        except RuntimeError:
            pass
        except BaseException as exc:  # surfaced to the main thread below
            errors.append(exc)
            saved.set()

    thread = threading.Thread(target=writer)
    thread.start()
    assert saved.wait(timeout=5)
    try:
        seen = repository.get_account("cash").balance
    finally:
        read_done.set()
        thread.join(timeout=5)

    assert errors == []
    assert seen == Decimal("10")
    assert repository.get_account("cash").balance == Decimal("10")

