"""Domain model for account categories."""

from dataclasses import dataclass

from beanledger.domain.models.account_types import AccountType


@dataclass
class Category:
    """Named grouping tag scoped to a single account type.

    Categories only order and group accounts; they never take part in
    balance arithmetic.
    """

    id: str
    name: str
    account_type: AccountType
    order_index: int = 0


__all__ = ["Category"]
