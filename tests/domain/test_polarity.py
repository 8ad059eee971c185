"""Tests for the balance polarity rules."""

from decimal import Decimal

import pytest

from beanledger.domain.models import AccountType, BalanceDirection, TransactionRole
from beanledger.domain.services.polarity import balance_effect, balance_multiplier


@pytest.mark.parametrize(
    ("account_type", "role", "expected"),
    [
        (AccountType.ASSET, TransactionRole.FROM, -1),
        (AccountType.ASSET, TransactionRole.TO, 1),
        (AccountType.LIABILITY, TransactionRole.FROM, 1),
        (AccountType.LIABILITY, TransactionRole.TO, -1),
        (AccountType.INCOME, TransactionRole.FROM, -1),
        (AccountType.INCOME, TransactionRole.TO, 1),
        (AccountType.EXPENSE, TransactionRole.FROM, 1),
        (AccountType.EXPENSE, TransactionRole.TO, 1),
    ],
)
def test_apply_multiplier_matches_polarity_table(
    account_type,
    role,
    expected,
) -> None:
    """Applying a leg should use the canonical sign for its type and role."""
    assert (
        balance_multiplier(account_type, role, BalanceDirection.APPLY)
        == expected
    )


@pytest.mark.parametrize("account_type", list(AccountType))
@pytest.mark.parametrize("role", list(TransactionRole))
def test_rollback_is_inverse_of_apply(account_type, role) -> None:
    """Rollback should exactly cancel apply for every type and role."""
    amount = Decimal("12.34")

    applied = balance_effect(account_type, role, BalanceDirection.APPLY, amount)
    rolled_back = balance_effect(
        account_type,
        role,
        BalanceDirection.ROLLBACK,
        amount,
    )

    assert applied + rolled_back == Decimal("0")


def test_multiplier_accepts_raw_enum_values() -> None:
    """String values should be accepted in place of enum members."""
    assert balance_multiplier("liability", "to", "rollback") == 1
