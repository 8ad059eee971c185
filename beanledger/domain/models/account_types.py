"""Account polarity enumerations."""

from enum import Enum


class AccountType(str, Enum):
    """The four account polarities of the ledger."""

    INCOME = "income"
    EXPENSE = "expense"
    ASSET = "asset"
    LIABILITY = "liability"


class TransactionRole(str, Enum):
    """Side an account plays in a transaction."""

    FROM = "from"
    TO = "to"


class BalanceDirection(str, Enum):
    """Whether a transaction effect is being applied or reversed."""

    APPLY = "apply"
    ROLLBACK = "rollback"


__all__ = ["AccountType", "TransactionRole", "BalanceDirection"]
