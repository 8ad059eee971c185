"""Domain services package."""

from .currency import currency_symbol_and_name, lookup_currency
from .finance import (
    compute_account_balances,
    compute_conversion_hint,
    compute_expected_balances,
    compute_flow_summary,
    compute_net_worth_summary,
    find_balance_mismatches,
)
from .fx import ExchangeRateTable
from .normalization import normalize_currency_code, normalize_name
from .polarity import balance_effect, balance_multiplier
from .validation import (
    coerce_account_type,
    validate_amount,
    validate_balance_sign,
    validate_category_matches,
    validate_distinct_accounts,
)

__all__ = [
    "ExchangeRateTable",
    "balance_effect",
    "balance_multiplier",
    "coerce_account_type",
    "compute_account_balances",
    "compute_conversion_hint",
    "compute_expected_balances",
    "compute_flow_summary",
    "compute_net_worth_summary",
    "currency_symbol_and_name",
    "find_balance_mismatches",
    "lookup_currency",
    "normalize_currency_code",
    "normalize_name",
    "validate_amount",
    "validate_balance_sign",
    "validate_category_matches",
    "validate_distinct_accounts",
]
