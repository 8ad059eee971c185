"""Domain services for finance aggregates."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from logging import Logger

from beanledger.domain.models import (
    Account,
    AccountBalanceDTO,
    AccountType,
    BalanceDirection,
    BalanceMismatch,
    Category,
    ConversionHint,
    FlowSummary,
    NetWorthSummary,
    Transaction,
    TransactionRole,
)
from beanledger.domain.policies import is_asset_decrease, is_asset_increase
from beanledger.domain.services.fx import ExchangeRateTable
from beanledger.domain.services.normalization import normalize_currency_code
from beanledger.domain.services.polarity import balance_effect
from beanledger.domain.services.validation import validate_balance_sign
from beanledger.utils.date_utils import in_range


def compute_net_worth_summary(
    accounts: Iterable[Account],
    rates: ExchangeRateTable,
    *,
    logger: Logger,
) -> NetWorthSummary:
    """Compute net worth totals in the base currency.

    Liability balances are already signed, so net worth is the plain sum of
    assets and liabilities.

    Args:
        accounts: Accounts to aggregate; income and expense are ignored.
        rates: Exchange rates used to convert native balances.
        logger: Logger used for sign warnings.

    Returns:
        NetWorthSummary: Asset, liability and net worth totals.
    """
    asset_total = Decimal("0")
    liability_total = Decimal("0")
    for account in accounts:
        if account.account_type not in (AccountType.ASSET, AccountType.LIABILITY):
            continue
        validate_balance_sign(account.account_type, account.balance, logger)
        converted = rates.convert_to_base(account.balance, account.currency_code)
        if account.account_type is AccountType.ASSET:
            asset_total += converted
        else:
            liability_total += converted

    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total + liability_total,
        currency_code=rates.base_currency,
    )


def compute_flow_summary(
    transactions: Iterable[Transaction],
    account_types: Mapping[str, AccountType],
    rates: ExchangeRateTable,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> FlowSummary:
    """Compute range-scoped income and expense totals from transactions.

    Running balances are all-time, so range totals are rebuilt from the
    transactions dated inside the range.

    Args:
        transactions: Candidate transactions.
        account_types: Account type per account id.
        rates: Exchange rates used to convert transaction amounts.
        start: Optional inclusive lower bound on the transaction date.
        end: Optional inclusive upper bound on the transaction date.

    Returns:
        FlowSummary: Totals in the base currency.
    """
    total_income = Decimal("0")
    total_expense = Decimal("0")
    asset_increase = Decimal("0")
    asset_decrease = Decimal("0")
    for transaction in transactions:
        if not in_range(transaction.created_at, start, end):
            continue
        from_type = account_types.get(transaction.from_account_id)
        to_type = account_types.get(transaction.to_account_id)
        if from_type is None or to_type is None:
            continue
        amount = rates.convert_to_base(
            transaction.amount,
            transaction.currency_code,
        )
        if from_type is AccountType.INCOME:
            total_income += amount
        if to_type is AccountType.EXPENSE:
            total_expense += amount
        if is_asset_increase(from_type):
            asset_increase += amount
        if is_asset_decrease(to_type):
            asset_decrease += amount

    return FlowSummary(
        total_income=total_income,
        total_expense=total_expense,
        asset_increase=asset_increase,
        asset_decrease=asset_decrease,
        currency_code=rates.base_currency,
    )


def compute_account_balances(
    accounts: Iterable[Account],
    categories: Iterable[Category],
    rates: ExchangeRateTable,
) -> list[AccountBalanceDTO]:
    """Return account balances ordered by category, then account order."""
    category_order = {
        category.id: category.order_index for category in categories
    }
    ordered = sorted(
        accounts,
        key=lambda account: (
            category_order.get(account.category_id, len(category_order)),
            account.order_index,
            account.name.lower(),
            account.id,
        ),
    )
    return [
        AccountBalanceDTO(
            id=account.id,
            name=account.name,
            account_type=account.account_type,
            category_id=account.category_id,
            balance=account.balance,
            currency_code=account.currency_code,
            base_balance=rates.convert_to_base(
                account.balance,
                account.currency_code,
            ),
            base_currency=rates.base_currency,
        )
        for account in ordered
    ]


def compute_expected_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
) -> dict[str, Decimal]:
    """Replay every transaction over the initial balances.

    Returns:
        dict[str, Decimal]: Expected balance per account id. Transactions
        referencing unknown accounts contribute nothing.
    """
    types: dict[str, AccountType] = {}
    expected: dict[str, Decimal] = {}
    for account in accounts:
        types[account.id] = account.account_type
        expected[account.id] = account.initial_balance
    for transaction in transactions:
        for role, account_id in (
            (TransactionRole.FROM, transaction.from_account_id),
            (TransactionRole.TO, transaction.to_account_id),
        ):
            if account_id not in types:
                continue
            expected[account_id] += balance_effect(
                types[account_id],
                role,
                BalanceDirection.APPLY,
                transaction.amount,
            )
    return expected


def find_balance_mismatches(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
) -> list[BalanceMismatch]:
    """Return accounts whose stored balance drifted from their history."""
    accounts = list(accounts)
    expected = compute_expected_balances(accounts, transactions)
    return [
        BalanceMismatch(
            account_id=account.id,
            account_name=account.name,
            expected=expected[account.id],
            actual=account.balance,
        )
        for account in accounts
        if expected[account.id] != account.balance
    ]


def compute_conversion_hint(
    transaction: Transaction,
    from_account: Account,
    to_account: Account,
    rates: ExchangeRateTable,
) -> ConversionHint | None:
    """Return the converted value to show next to a transaction amount.

    A non-base transaction is shown in the base currency. Otherwise, when the
    two accounts hold different currencies, the amount is shown in the
    destination account's currency.
    """
    currency = normalize_currency_code(transaction.currency_code)
    if currency != rates.base_currency:
        return ConversionHint(
            amount=rates.convert_to_base(transaction.amount, currency),
            currency_code=rates.base_currency,
        )
    if from_account.currency_code != to_account.currency_code:
        return ConversionHint(
            amount=rates.convert(
                transaction.amount,
                from_account.currency_code,
                to_account.currency_code,
            ),
            currency_code=to_account.currency_code,
        )
    return None


__all__ = [
    "compute_net_worth_summary",
    "compute_flow_summary",
    "compute_account_balances",
    "compute_expected_balances",
    "find_balance_mismatches",
    "compute_conversion_hint",
]
