"""ORM models for the ledger tables."""

from ifrs_kernel.models.account import Account, Entity
from ifrs_kernel.models.balance import Balance
from ifrs_kernel.models.clearance import ClearanceLink
from ifrs_kernel.models.exchange_rate import ExchangeRate
from ifrs_kernel.models.reporting_period import ReportingPeriod
from ifrs_kernel.models.transaction import LedgerEntry, LineItem, Transaction

__all__ = [
    "Entity",
    "Account",
    "ExchangeRate",
    "ReportingPeriod",
    "Transaction",
    "LineItem",
    "LedgerEntry",
    "Balance",
    "ClearanceLink",
]
