"""Currency reference data."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    """Currency code with its display symbol and name."""

    code: str
    symbol: str
    name: str


DEFAULT_CURRENCIES = (
    Currency(code="CNY", symbol="¥", name="人民币"),
    Currency(code="USD", symbol="$", name="美元"),
    Currency(code="EUR", symbol="€", name="欧元"),
    Currency(code="JPY", symbol="¥", name="日元"),
    Currency(code="GBP", symbol="£", name="英镑"),
    Currency(code="HKD", symbol="HK$", name="港币"),
    Currency(code="BTC", symbol="₿", name="比特币"),
    Currency(code="ETH", symbol="Ξ", name="以太坊"),
)


__all__ = ["Currency", "DEFAULT_CURRENCIES"]
