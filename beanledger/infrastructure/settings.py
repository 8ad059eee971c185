"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
import os
from decimal import Decimal
from typing import Optional

import dotenv

from beanledger.domain.constants import DEFAULT_BASE_CURRENCY
from beanledger.domain.services.normalization import normalize_currency_code
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for selecting the ledger backend and valuation currency.

    Attributes:
        backend: Backend identifier (memory or sqlalchemy).
        db_url: Optional SQLAlchemy URL for the sqlalchemy backend.
        base_currency: Currency every report is expressed in.
        exchange_rates: Rates against the base currency keyed by code.
    """

    backend: str = "memory"
    db_url: Optional[str] = None
    base_currency: str = DEFAULT_BASE_CURRENCY
    exchange_rates: dict[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Values from a local ``.env`` file are loaded first.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", "memory").strip().lower()
        db_url = os.getenv("LEDGER_DB_URL") or None
        base_currency = (
            normalize_currency_code(os.getenv("LEDGER_BASE_CURRENCY"))
            or DEFAULT_BASE_CURRENCY
        )
        exchange_rates = cls._parse_rates(
            os.getenv("LEDGER_EXCHANGE_RATES", ""),
            base_currency,
            logger=logger,
        )
        return cls(
            backend=backend,
            db_url=db_url,
            base_currency=base_currency,
            exchange_rates=exchange_rates,
        )

    @staticmethod
    def _parse_rates(
        raw_rates: str,
        base_currency: str,
        logger,
    ) -> dict[str, Decimal]:
        """Parse ``CODE=RATE`` pairs separated by commas.

        Args:
            raw_rates: Raw environment value, e.g. ``USD=7.2,EUR=7.8``.
            base_currency: Base currency; its entry is ignored.
            logger: Logger used for warnings.

        Returns:
            dict[str, Decimal]: Parsed positive rates keyed by currency code.
        """
        rates: dict[str, Decimal] = {}
        for chunk in raw_rates.split(","):
            if not chunk.strip():
                continue
            code, separator, raw_value = chunk.partition("=")
            normalized = normalize_currency_code(code)
            if not separator or normalized is None:
                logger.warning(f"Skipping malformed exchange rate '{chunk}'")
                continue
            if normalized == base_currency:
                logger.warning(
                    f"Ignoring exchange rate for base currency {normalized}"
                )
                continue
            try:
                value = coerce_decimal(raw_value)
            except ValueError:
                logger.warning(f"Skipping malformed exchange rate '{chunk}'")
                continue
            if not value.is_finite() or value <= 0:
                logger.warning(
                    f"Skipping non-positive exchange rate for {normalized}"
                )
                continue
            rates[normalized] = value
        return rates


__all__ = ["LedgerSettings"]
