"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from beanledger.domain.errors import ValidationError
from beanledger.domain.models import AccountType, Category
from beanledger.utils.decimal_utils import coerce_decimal


def validate_amount(amount) -> Decimal:
    """Return the amount as a Decimal, rejecting non-positive values.

    Args:
        amount: Raw amount from the caller.

    Returns:
        Decimal: The validated amount.

    Raises:
        ValidationError: If the amount is missing, malformed, or not > 0.
    """
    if amount is None:
        raise ValidationError("Transaction amount is required")
    try:
        value = coerce_decimal(amount)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if not value.is_finite() or value <= 0:
        raise ValidationError(
            f"Transaction amount must be positive: {value}"
        )
    return value


def validate_distinct_accounts(from_account_id: str, to_account_id: str) -> None:
    """Reject transactions whose two legs are the same account."""
    if from_account_id == to_account_id:
        raise ValidationError(
            f"Source and destination accounts must differ: {from_account_id}"
        )


def validate_category_matches(
    account_type: AccountType,
    category: Category | None,
) -> None:
    """Reject categories that belong to another account type."""
    if category is None:
        return
    if category.account_type != account_type:
        raise ValidationError(
            f"Category {category.name!r} belongs to "
            f"{category.account_type.value} accounts, not {account_type.value}"
        )


def coerce_account_type(raw) -> AccountType:
    """Return an AccountType from an enum member or its value."""
    try:
        return AccountType(raw)
    except ValueError as exc:
        raise ValidationError(f"Unknown account type: {raw!r}") from exc


def validate_balance_sign(
    account_type: AccountType,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        account_type: Account polarity.
        balance: Raw balance amount.
        logger: Logger used for warnings.
    """
    if account_type is AccountType.ASSET and balance < 0:
        logger.warning(
            f"Asset balance is negative for account_type={account_type.value}: {balance}"
        )
    if account_type is AccountType.LIABILITY and balance > 0:
        logger.warning(
            f"Liability balance is positive for account_type={account_type.value}: {balance}"
        )


__all__ = [
    "validate_amount",
    "validate_distinct_accounts",
    "validate_category_matches",
    "coerce_account_type",
    "validate_balance_sign",
]
