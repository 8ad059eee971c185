"""Tests for the exchange-rate table."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from beanledger.domain.errors import ValidationError
from beanledger.domain.services.fx import ExchangeRateTable


def test_convert_to_base_multiplies_by_rate() -> None:
    """Foreign amounts should be valued at units of base per unit."""
    table = ExchangeRateTable("CNY", {"USD": "7.2"})

    assert table.convert_to_base(Decimal("100"), "USD") == Decimal("720.0")
    assert table.convert_to_base(Decimal("100"), "cny") == Decimal("100")


def test_unknown_currency_defaults_to_one_and_warns() -> None:
    """Missing rates should fall back to 1 with a warning."""
    logger = MagicMock()
    table = ExchangeRateTable("CNY", logger=logger)

    assert table.rate("XYZ") == Decimal("1")
    assert table.convert_to_base(Decimal("5"), "XYZ") == Decimal("5")
    logger.warning.assert_called()


def test_set_rate_rejects_base_currency_and_non_positive() -> None:
    """The base rate is fixed and other rates must be positive."""
    table = ExchangeRateTable("CNY")

    with pytest.raises(ValidationError):
        table.set_rate("CNY", "2")
    with pytest.raises(ValidationError):
        table.set_rate("USD", "0")
    with pytest.raises(ValidationError):
        table.set_rate("USD", "-1")
    with pytest.raises(ValidationError):
        table.set_rate("", "1")


def test_set_rate_normalizes_code() -> None:
    """Codes should be stored upper-cased."""
    table = ExchangeRateTable("CNY")

    table.set_rate(" usd ", Decimal("7.1"))

    assert table.rates() == {"USD": Decimal("7.1")}
    assert table.rate("USD") == Decimal("7.1")


def test_initial_base_rate_is_skipped() -> None:
    """A base-currency entry in the initial rates should be ignored."""
    table = ExchangeRateTable("CNY", {"CNY": "3", "EUR": "7.8"})

    assert table.rates() == {"EUR": Decimal("7.8")}
    assert table.rate("CNY") == Decimal("1")


def test_convert_scales_by_target_over_source_rate() -> None:
    """Cross conversion should multiply by rate(to) / rate(from)."""
    table = ExchangeRateTable("CNY", {"USD": "8", "EUR": "4"})

    assert table.convert(Decimal("10"), "USD", "EUR") == Decimal("5")
    assert table.convert(Decimal("10"), "EUR", "CNY") == Decimal("2.5")
    assert table.convert(Decimal("10"), "CNY", "USD") == Decimal("80")
    assert table.convert(Decimal("10"), "usd", "USD") == Decimal("10")


def test_blank_base_currency_is_rejected() -> None:
    """The table needs a base currency."""
    with pytest.raises(ValidationError):
        ExchangeRateTable("  ")


def test_convert_between_non_base_currencies() -> None:
    """USD to EUR at USD=7 and EUR=8 should give amount * 8 / 7."""
    table = ExchangeRateTable("CNY", {"USD": "7", "EUR": "8"})

    converted = table.convert(Decimal("100"), "USD", "EUR")

    assert converted == Decimal("800") / Decimal("7")
    assert converted > Decimal("114.28")
