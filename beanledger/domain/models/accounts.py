"""Domain models for ledger accounts."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from beanledger.domain.constants import (
    DEFAULT_ACCOUNT_ICON,
    DEFAULT_BASE_CURRENCY,
)
from beanledger.domain.models.account_types import AccountType


@dataclass
class Account:
    """Balance-bearing ledger account.

    Attributes:
        id: Opaque identifier, stable for the account's lifetime.
        name: Display name.
        account_type: Polarity of the account, fixed at creation.
        currency_code: Native currency of the balance, fixed at creation.
        balance: Live running total in the native currency.
        initial_balance: Opening balance, never changed after creation.
        category_id: Optional weak reference to a category of the same type.
    """

    id: str
    name: str
    account_type: AccountType
    currency_code: str = DEFAULT_BASE_CURRENCY
    balance: Decimal = Decimal("0")
    initial_balance: Decimal = Decimal("0")
    category_id: str | None = None
    icon: str = DEFAULT_ACCOUNT_ICON
    note: str = ""
    order_index: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def adjust_balance(self, delta: Decimal, at: datetime) -> None:
        """Add a signed delta to the running balance."""
        self.balance += delta
        self.updated_at = at


@dataclass(frozen=True)
class AccountBalanceDTO:
    """Account balance with its value in the base currency."""

    id: str
    name: str
    account_type: AccountType
    category_id: str | None
    balance: Decimal
    currency_code: str
    base_balance: Decimal
    base_currency: str


__all__ = ["Account", "AccountBalanceDTO"]
