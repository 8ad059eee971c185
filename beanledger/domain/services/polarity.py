"""Canonical polarity rules for applying and reversing transactions."""

from decimal import Decimal

from beanledger.domain.models.account_types import (
    AccountType,
    BalanceDirection,
    TransactionRole,
)


# Sign of the balance change when a transaction is applied.
_APPLY_SIGNS: dict[tuple[AccountType, TransactionRole], int] = {
    (AccountType.ASSET, TransactionRole.FROM): -1,
    (AccountType.ASSET, TransactionRole.TO): 1,
    (AccountType.LIABILITY, TransactionRole.FROM): 1,
    (AccountType.LIABILITY, TransactionRole.TO): -1,
    (AccountType.INCOME, TransactionRole.FROM): -1,
    (AccountType.INCOME, TransactionRole.TO): 1,
    (AccountType.EXPENSE, TransactionRole.FROM): 1,
    (AccountType.EXPENSE, TransactionRole.TO): 1,
}


def balance_multiplier(
    account_type: AccountType,
    role: TransactionRole,
    direction: BalanceDirection,
) -> int:
    """Return the sign applied to a transaction amount for one leg.

    Rollback is always the exact inverse of apply for the same role.

    Args:
        account_type: Polarity of the account.
        role: Whether the account is the source or the destination.
        direction: Apply or rollback.

    Returns:
        int: Either 1 or -1.
    """
    sign = _APPLY_SIGNS[(AccountType(account_type), TransactionRole(role))]
    if BalanceDirection(direction) is BalanceDirection.ROLLBACK:
        return -sign
    return sign


def balance_effect(
    account_type: AccountType,
    role: TransactionRole,
    direction: BalanceDirection,
    amount: Decimal,
) -> Decimal:
    """Return the signed balance change for one leg of a transaction."""
    return amount * balance_multiplier(account_type, role, direction)


__all__ = ["balance_multiplier", "balance_effect"]
