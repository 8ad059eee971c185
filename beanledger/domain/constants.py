"""Domain constants for the ledger."""

DEFAULT_BASE_CURRENCY = "CNY"

DEFAULT_ACCOUNT_ICON = "folder"

DEFAULT_RECENT_LIMIT = 20

UNKNOWN_CURRENCY_SYMBOL = "?"


__all__ = [
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_ACCOUNT_ICON",
    "DEFAULT_RECENT_LIMIT",
    "UNKNOWN_CURRENCY_SYMBOL",
]
