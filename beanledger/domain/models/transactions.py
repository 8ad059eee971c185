"""Domain model for ledger transactions."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from beanledger.domain.constants import DEFAULT_BASE_CURRENCY


@dataclass(frozen=True)
class Transaction:
    """Movement of a positive amount from one account to another.

    Attributes:
        id: Opaque identifier.
        amount: Strictly positive amount; direction comes from the accounts.
        from_account_id: Source account.
        to_account_id: Destination account.
        currency_code: Currency the amount is denominated in.
        note: Free text.
        created_at: User-assigned transaction date.
        updated_at: Last modification time.
    """

    id: str
    amount: Decimal
    from_account_id: str
    to_account_id: str
    currency_code: str = DEFAULT_BASE_CURRENCY
    note: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def references(self, account_id: str) -> bool:
        """Return True when the account is either leg of the transaction."""
        return account_id in (self.from_account_id, self.to_account_id)


__all__ = ["Transaction"]
