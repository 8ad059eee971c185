"""Currency table lookups."""

from beanledger.domain.constants import UNKNOWN_CURRENCY_SYMBOL
from beanledger.domain.models.currency import DEFAULT_CURRENCIES, Currency
from beanledger.domain.services.normalization import normalize_currency_code

_CURRENCIES_BY_CODE = {currency.code: currency for currency in DEFAULT_CURRENCIES}


def lookup_currency(code: str | None) -> Currency:
    """Return the known currency for a code, or a placeholder.

    Unknown codes never fail: they map to a currency whose symbol is ``?``
    and whose name is the code itself.
    """
    normalized = normalize_currency_code(code) or ""
    known = _CURRENCIES_BY_CODE.get(normalized)
    if known is not None:
        return known
    return Currency(
        code=normalized,
        symbol=UNKNOWN_CURRENCY_SYMBOL,
        name=normalized,
    )


def currency_symbol_and_name(code: str | None) -> tuple[str, str]:
    """Return the ``(symbol, name)`` pair for a currency code."""
    currency = lookup_currency(code)
    return currency.symbol, currency.name


__all__ = ["lookup_currency", "currency_symbol_and_name"]
