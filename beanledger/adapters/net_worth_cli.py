"""CLI adapter printing the net worth of the configured ledger."""

from beanledger.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from beanledger.infrastructure.container import (
    build_ledger_repository,
    build_rate_table,
)
from beanledger.infrastructure.logging.logger import get_app_logger
from beanledger.infrastructure.settings import LedgerSettings


def main() -> None:
    """Print asset, liability and net worth totals in the base currency."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    repository = build_ledger_repository(settings=settings)
    use_case = GetNetWorthSummaryUseCase(
        repository,
        build_rate_table(settings),
        logger=logger,
    )
    summary = use_case.execute()

    print(f"Net worth ({summary.currency_code}, backend={settings.backend})")
    print(f"assets={summary.asset_total}")
    print(f"liabilities={summary.liability_total}")
    print(f"net_worth={summary.net_worth}")


if __name__ == "__main__":  # pragma: no cover
    main()
