"""CLI adapter verifying that stored balances match the transaction history.

Exits with status 1 when any account drifted, so it can run from cron or CI.
"""

from beanledger.application.use_cases.check_ledger_invariants import (
    CheckLedgerInvariantsUseCase,
)
from beanledger.infrastructure.container import build_ledger_repository
from beanledger.infrastructure.logging.logger import get_app_logger


def main() -> int:
    """Run the invariant check and print one line per drifted account."""
    logger = get_app_logger()
    use_case = CheckLedgerInvariantsUseCase(
        build_ledger_repository(),
        logger=logger,
    )
    result = use_case.execute()

    if result.is_consistent:
        print(f"OK: {result.checked_count} accounts consistent")
        return 0

    print(
        f"FAILED: {len(result.mismatches)} of {result.checked_count} "
        "accounts drifted"
    )
    for mismatch in result.mismatches:
        print(
            f"{mismatch.account_id} ({mismatch.account_name}): "
            f"expected={mismatch.expected}, actual={mismatch.actual}, "
            f"delta={mismatch.delta}"
        )
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
