"""
Financial Reporting (``ifrs_reports``).

Responsibility
--------------
Read-only reports over a ``TransactionRepository``: the account schedule
of outstanding receivables and payables, the IFRS balance sheet and income
statement, and their fixed-width text rendering.

Invariants enforced
-------------------
* Nothing in this package writes to the repository.
* Current period profit reaches equity only through the income statement
  a balance sheet holds.
"""

from ifrs_reports.config import ReportingConfig
from ifrs_reports.models import (
    OutstandingItem,
    ScheduleResult,
    ScheduleTotals,
    StatementSections,
    StatementState,
)
from ifrs_reports.render import render_balance_sheet, render_income_statement
from ifrs_reports.schedule import AccountSchedule
from ifrs_reports.service import ReportingService
from ifrs_reports.statements import BalanceSheet, IncomeStatement

__all__ = [
    # Service
    "ReportingService",
    # Config
    "ReportingConfig",
    # Builders
    "AccountSchedule",
    "BalanceSheet",
    "IncomeStatement",
    # Rendering
    "render_balance_sheet",
    "render_income_statement",
    # Models
    "OutstandingItem",
    "ScheduleResult",
    "ScheduleTotals",
    "StatementSections",
    "StatementState",
]
