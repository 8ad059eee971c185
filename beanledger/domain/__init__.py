"""Domain package for ledger rules and core models."""

from .constants import DEFAULT_BASE_CURRENCY
from .errors import (
    LedgerError,
    NotFoundError,
    PartialFailureError,
    PersistenceError,
    ValidationError,
)
from .models import (
    Account,
    AccountBalanceDTO,
    AccountType,
    BalanceDirection,
    Category,
    Currency,
    FlowSummary,
    LedgerCheckResult,
    NetWorthSummary,
    Transaction,
    TransactionRole,
)
from .services import (
    ExchangeRateTable,
    balance_multiplier,
    compute_flow_summary,
    compute_net_worth_summary,
    currency_symbol_and_name,
    lookup_currency,
)

__all__ = [
    "Account",
    "AccountBalanceDTO",
    "AccountType",
    "BalanceDirection",
    "Category",
    "Currency",
    "DEFAULT_BASE_CURRENCY",
    "ExchangeRateTable",
    "FlowSummary",
    "LedgerCheckResult",
    "LedgerError",
    "NetWorthSummary",
    "NotFoundError",
    "PartialFailureError",
    "PersistenceError",
    "Transaction",
    "TransactionRole",
    "ValidationError",
    "balance_multiplier",
    "compute_flow_summary",
    "compute_net_worth_summary",
    "currency_symbol_and_name",
    "lookup_currency",
]
