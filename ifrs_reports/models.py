"""
Financial Reporting Domain Models (``ifrs_reports.models``).

Responsibility
--------------
Frozen dataclass value objects returned by the report builders: outstanding
items and totals of an account schedule, and the sections of a financial
statement.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``OutstandingItem.uncleared_amount`` is always
  ``original_amount - cleared_amount`` and strictly positive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ifrs_kernel.domain.records import ZERO, Account, AccountType, Section


class StatementState(str, Enum):
    """Lifecycle of a financial statement instance."""

    CONSTRUCTED = "constructed"
    SECTIONS_BUILT = "sections_built"
    RENDERED = "rendered"


# =========================================================================
# Account Schedule
# =========================================================================


@dataclass(frozen=True)
class OutstandingItem:
    """A transaction or opening balance with an uncleared amount."""

    id: UUID
    transaction_type: str
    original_amount: Decimal
    cleared_amount: Decimal
    uncleared_amount: Decimal


@dataclass(frozen=True)
class ScheduleTotals:
    original_amount: Decimal = ZERO
    cleared_amount: Decimal = ZERO
    uncleared_amount: Decimal = ZERO


@dataclass(frozen=True)
class ScheduleResult:
    """Outstanding items of one account as at ``end_date``."""

    account: Account
    currency: str | None
    end_date: date
    transactions: tuple[OutstandingItem, ...]
    totals: ScheduleTotals


# =========================================================================
# Financial Statements
# =========================================================================


@dataclass(frozen=True)
class StatementSections:
    """
    Built sections of a balance sheet or income statement.

    ``balances`` are debit-positive; the renderer applies the presentation
    sign of each section.
    """

    title: str
    start_date: date
    end_date: date
    accounts: dict[Section, dict[AccountType, tuple[Account, ...]]]
    balances: dict[Section, dict[AccountType | str, Decimal]]
    totals: dict[Section, Decimal]
    credit: Decimal
    debit: Decimal

    @property
    def is_balanced(self) -> bool:
        return self.credit == self.debit
