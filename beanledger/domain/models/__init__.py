"""Domain models package."""

from .account_types import AccountType, BalanceDirection, TransactionRole
from .accounts import Account, AccountBalanceDTO
from .categories import Category
from .currency import DEFAULT_CURRENCIES, Currency
from .finance import (
    BalanceMismatch,
    ConversionHint,
    FlowSummary,
    LedgerCheckResult,
    NetWorthSummary,
)
from .transactions import Transaction

__all__ = [
    "Account",
    "AccountBalanceDTO",
    "AccountType",
    "BalanceDirection",
    "BalanceMismatch",
    "Category",
    "ConversionHint",
    "Currency",
    "DEFAULT_CURRENCIES",
    "FlowSummary",
    "LedgerCheckResult",
    "NetWorthSummary",
    "Transaction",
    "TransactionRole",
]
