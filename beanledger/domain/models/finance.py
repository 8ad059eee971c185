"""Domain models for financial aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures in the base currency.

    Attributes:
        asset_total: Sum of asset balances.
        liability_total: Signed sum of liability balances.
        net_worth: Assets plus the signed liabilities.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    currency_code: str


@dataclass(frozen=True)
class FlowSummary:
    """Income and expense totals for a date range."""

    total_income: Decimal
    total_expense: Decimal
    asset_increase: Decimal
    asset_decrease: Decimal
    currency_code: str

    @property
    def difference(self) -> Decimal:
        """Return total_income minus total_expense."""
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class ConversionHint:
    """Converted value of a transaction amount for display."""

    amount: Decimal
    currency_code: str


@dataclass(frozen=True)
class BalanceMismatch:
    """Account whose stored balance disagrees with its transactions."""

    account_id: str
    account_name: str
    expected: Decimal
    actual: Decimal

    @property
    def delta(self) -> Decimal:
        """Return actual minus expected."""
        return self.actual - self.expected


@dataclass(frozen=True)
class LedgerCheckResult:
    """Outcome of a balance invariant check."""

    checked_count: int
    mismatches: list[BalanceMismatch] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        """Return True when no account drifted."""
        return not self.mismatches


__all__ = [
    "NetWorthSummary",
    "FlowSummary",
    "ConversionHint",
    "BalanceMismatch",
    "LedgerCheckResult",
]
