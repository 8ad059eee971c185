"""Classification of transactions by their effect on assets."""

from beanledger.domain.models import AccountType

_ASSET_INCREASE_SOURCES = (AccountType.INCOME, AccountType.LIABILITY)
_ASSET_DECREASE_TARGETS = (AccountType.EXPENSE, AccountType.LIABILITY)

_DEFAULT_CATEGORY_NAMES = {
    AccountType.INCOME: "收入",
    AccountType.EXPENSE: "支出",
    AccountType.ASSET: "流动资产",
    AccountType.LIABILITY: "信用负债",
}


def is_asset_increase(from_type: AccountType) -> bool:
    """Money flowing out of income or borrowed from a liability."""
    return from_type in _ASSET_INCREASE_SOURCES


def is_asset_decrease(to_type: AccountType) -> bool:
    """Money spent on an expense or paid into a liability."""
    return to_type in _ASSET_DECREASE_TARGETS


def default_category_name(account_type: AccountType) -> str:
    """Return the default category name for an account type."""
    return _DEFAULT_CATEGORY_NAMES[AccountType(account_type)]


__all__ = [
    "is_asset_increase",
    "is_asset_decrease",
    "default_category_name",
]
