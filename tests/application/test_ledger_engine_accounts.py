"""Tests for account and category management in LedgerEngine."""

from datetime import datetime
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

import pytest

from beanledger.application.use_cases.ledger_engine import LedgerEngine
from beanledger.domain.errors import NotFoundError, ValidationError
from beanledger.domain.models import AccountType
from beanledger.domain.services import ExchangeRateTable
from beanledger.infrastructure.memory_repository import InMemoryLedgerRepository


def _build_engine() -> LedgerEngine:
    ids = count(1)
    return LedgerEngine(
        InMemoryLedgerRepository(),
        rates=ExchangeRateTable("EUR"),
        logger=MagicMock(),
        clock=lambda: datetime(2024, 3, 1, 9, 0),
        id_factory=lambda: f"id-{next(ids)}",
    )


def test_create_account_defaults_to_base_currency() -> None:
    """New accounts should start at their initial balance in base currency."""
    engine = _build_engine()

    account = engine.create_account("  Wallet ", "asset", initial_balance="12.5")

    assert account.name == "Wallet"
    assert account.account_type is AccountType.ASSET
    assert account.currency_code == "EUR"
    assert account.balance == Decimal("12.5")
    assert account.initial_balance == Decimal("12.5")


def test_create_account_rejects_bad_input() -> None:
    """Names, types and categories are validated."""
    engine = _build_engine()
    income = engine.create_category("Work", AccountType.INCOME)

    with pytest.raises(ValidationError):
        engine.create_account("", AccountType.ASSET)
    with pytest.raises(ValidationError):
        engine.create_account("Wallet", "equity")
    with pytest.raises(ValidationError):
        engine.create_account("Wallet", AccountType.ASSET, initial_balance="x")
    for non_finite in ("NaN", "Infinity", "-Infinity", Decimal("NaN"), float("inf")):
        with pytest.raises(ValidationError):
            engine.create_account(
                "Wallet", AccountType.ASSET, initial_balance=non_finite
            )
    with pytest.raises(ValidationError):
        engine.create_account("Wallet", AccountType.ASSET, category_id=income.id)
    with pytest.raises(NotFoundError):
        engine.create_account("Wallet", AccountType.ASSET, category_id="nope")

    assert engine.list_accounts() == []


def test_update_account_changes_display_fields_only() -> None:
    """Updates should touch names and grouping but never the balance."""
    engine = _build_engine()
    category = engine.create_category("Banks", AccountType.ASSET)
    account = engine.create_account("Bank", AccountType.ASSET, initial_balance="5")

    updated = engine.update_account(
        account.id,
        name="Main bank",
        category_id=category.id,
        icon="bank",
        order_index=3,
    )

    assert updated.name == "Main bank"
    assert updated.category_id == category.id
    assert updated.balance == Decimal("5")
    assert engine.get_account(account.id).icon == "bank"

    cleared = engine.update_account(account.id, clear_category=True)
    assert cleared.category_id is None
    with pytest.raises(ValidationError):
        engine.update_account(account.id, category_id=category.id, clear_category=True)


def test_list_accounts_filters_by_type_and_sorts_by_order() -> None:
    """Accounts should be listed by order_index within the requested type."""
    engine = _build_engine()
    engine.create_account("B", AccountType.ASSET, order_index=2)
    engine.create_account("A", AccountType.ASSET, order_index=1)
    engine.create_account("Food", AccountType.EXPENSE)

    names = [account.name for account in engine.list_accounts("asset")]

    assert names == ["A", "B"]


def test_categories_append_rename_and_reorder() -> None:
    """Categories should append in order and support renames and reorders."""
    engine = _build_engine()
    first = engine.create_category("Cash", AccountType.ASSET)
    second = engine.create_category("Banks", AccountType.ASSET)
    engine.create_category("Salary", AccountType.INCOME)

    assert (first.order_index, second.order_index) == (0, 1)

    engine.rename_category(first.id, "Wallets")
    engine.reorder_categories([second.id, first.id])

    listed = engine.list_categories(AccountType.ASSET)
    assert [category.name for category in listed] == ["Banks", "Wallets"]


def test_delete_category_clears_account_references() -> None:
    """Accounts should survive their category's deletion."""
    engine = _build_engine()
    category = engine.create_category("Cards", AccountType.LIABILITY)
    card = engine.create_account(
        "Visa",
        AccountType.LIABILITY,
        category_id=category.id,
    )

    cleared = engine.delete_category(category.id)

    assert cleared == 1
    assert engine.get_account(card.id).category_id is None
    assert engine.list_categories() == []
    with pytest.raises(NotFoundError):
        engine.delete_category(category.id)


def test_names_only_need_visible_text() -> None:
    """Any non-blank name is accepted, including hex-looking ones."""
    engine = _build_engine()
    hex_name = "0123456789abcdef0123456789ABCDEF"

    account = engine.create_account(f"  {hex_name} ", AccountType.ASSET)
    category = engine.create_category(hex_name, AccountType.ASSET)

    assert account.name == hex_name
    assert category.name == hex_name
    with pytest.raises(ValidationError):
        engine.create_category("   ", AccountType.ASSET)
