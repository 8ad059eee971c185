"""Exchange-rate table and currency conversion.

Rates are expressed as units of the base currency per one unit of a given
currency (``USD -> 7.2`` reads ``1 USD = 7.2 CNY`` when CNY is the base).
Conversion is read-only; it never touches stored balances.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from beanledger.domain.constants import DEFAULT_BASE_CURRENCY
from beanledger.domain.errors import ValidationError
from beanledger.domain.services.normalization import normalize_currency_code
from beanledger.utils.decimal_utils import coerce_decimal

_ONE = Decimal("1")


class ExchangeRateTable:
    """Mapping of currency code to its rate against the base currency."""

    def __init__(
        self,
        base_currency: str = DEFAULT_BASE_CURRENCY,
        rates: Mapping[str, object] | None = None,
        logger=None,
    ) -> None:
        """Initialize the table.

        Args:
            base_currency: Currency every rate is expressed in.
            rates: Optional initial rates keyed by currency code.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        normalized = normalize_currency_code(base_currency)
        if normalized is None:
            raise ValidationError("Base currency code must not be empty")
        self._base_currency = normalized
        self._logger = logger or logging.getLogger(__name__)
        self._rates: dict[str, Decimal] = {}
        for code, rate in (rates or {}).items():
            if normalize_currency_code(code) == self._base_currency:
                continue
            self.set_rate(code, rate)

    @property
    def base_currency(self) -> str:
        """Return the base currency code."""
        return self._base_currency

    def rates(self) -> dict[str, Decimal]:
        """Return a copy of the explicit rates, base currency excluded."""
        return dict(self._rates)

    def set_rate(self, currency_code: str, rate) -> None:
        """Store the rate for a currency.

        Raises:
            ValidationError: If the code is blank or the base currency, or
                the rate is not strictly positive.
        """
        code = normalize_currency_code(currency_code)
        if code is None:
            raise ValidationError("Currency code must not be empty")
        if code == self._base_currency:
            raise ValidationError(
                f"Rate of base currency {code} is fixed at 1"
            )
        try:
            value = coerce_decimal(rate)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if value <= 0:
            raise ValidationError(
                f"Exchange rate must be positive for {code}: {value}"
            )
        self._rates[code] = value

    def rate(self, currency_code: str | None) -> Decimal:
        """Return the rate for a currency, defaulting unknown codes to 1."""
        code = normalize_currency_code(currency_code)
        if code is None or code == self._base_currency:
            return _ONE
        rate = self._rates.get(code)
        if rate is None:
            self._logger.warning(
                f"Missing FX rate for {code} to {self._base_currency}; using 1"
            )
            return _ONE
        return rate

    def convert_to_base(self, amount: Decimal, from_currency: str | None) -> Decimal:
        """Convert an amount into the base currency."""
        return coerce_decimal(amount) * self.rate(from_currency)

    def convert(
        self,
        amount: Decimal,
        from_currency: str | None,
        to_currency: str | None,
    ) -> Decimal:
        """Convert an amount into another currency for display.

        The amount is scaled by the cross rate ``rate(to) / rate(from)``; it
        is a display figure shown next to transfers between accounts.
        """
        if normalize_currency_code(from_currency) == normalize_currency_code(
            to_currency
        ):
            return coerce_decimal(amount)
        return (
            coerce_decimal(amount)
            * self.rate(to_currency)
            / self.rate(from_currency)
        )


__all__ = ["ExchangeRateTable"]
