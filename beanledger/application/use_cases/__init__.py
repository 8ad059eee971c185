"""Application use cases package."""

from .check_ledger_invariants import (
    CheckLedgerInvariantsUseCase,
    LedgerCheckResult,
)
from .get_account_balances import AccountBalanceDTO, GetAccountBalancesUseCase
from .get_flow_summary import FlowSummary, GetFlowSummaryUseCase
from .get_net_worth_summary import GetNetWorthSummaryUseCase, NetWorthSummary
from .ledger_engine import LedgerEngine
from .ledger_reports import LedgerReports

__all__ = [
    "AccountBalanceDTO",
    "CheckLedgerInvariantsUseCase",
    "FlowSummary",
    "GetAccountBalancesUseCase",
    "GetFlowSummaryUseCase",
    "GetNetWorthSummaryUseCase",
    "LedgerCheckResult",
    "LedgerEngine",
    "LedgerReports",
    "NetWorthSummary",
]
