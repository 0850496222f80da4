"""
Module: ifrs_kernel.repository
Responsibility: The read contract the ledger engine consumes, and an
    in-memory implementation of it.
Architecture position: Kernel.  Engines and reports depend on the
    ``TransactionRepository`` protocol only; ``InMemoryRepository`` and
    ``ifrs_kernel.selectors.ledger_selector.LedgerSelector`` are the two
    implementations.

Invariants enforced:
    - Read methods return fully materialized lists of frozen records.
    - Results are returned in insertion order, so repeated calls over the
      same data are deterministic.
    - The engine never writes through this protocol; the ``add_*`` and
      ``post_transaction`` methods of InMemoryRepository are seeding helpers
      for callers and tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Protocol, runtime_checkable
from uuid import UUID

from ifrs_kernel.domain.posting import post
from ifrs_kernel.domain.records import (
    Account,
    AccountType,
    Balance,
    ClearanceLink,
    LedgerEntry,
    ReportingPeriod,
    Transaction,
    TransactionType,
)
from ifrs_kernel.logging_config import get_logger

logger = get_logger("repository")


def in_range(value: date, start_date: date | None, end_date: date | None) -> bool:
    """Inclusive date range check; ``None`` bounds are open."""
    if start_date is not None and value < start_date:
        return False
    if end_date is not None and value > end_date:
        return False
    return True


@runtime_checkable
class TransactionRepository(Protocol):
    """Read-only source of ledger records for one or more entities."""

    def find_accounts(
        self,
        entity_id: UUID | None,
        account_types: Iterable[AccountType],
    ) -> list[Account]:
        ...

    def find_balances_for_account(self, account_id: UUID, year: int) -> list[Balance]:
        ...

    def find_transactions_for_account(
        self,
        account_id: UUID,
        types: Iterable[TransactionType],
        start_date: date | None,
        end_date: date | None,
        currency: str | None = None,
    ) -> list[Transaction]:
        ...

    def find_ledger_entries(
        self,
        account_id: UUID,
        start_date: date | None,
        end_date: date | None,
    ) -> list[LedgerEntry]:
        ...

    def find_reporting_period(self, entity_id: UUID | None, year: int) -> ReportingPeriod | None:
        ...

    def find_clearance_links(self, transaction_id: UUID) -> list[ClearanceLink]:
        ...

    def find_assignments(self, transaction_id: UUID) -> list[ClearanceLink]:
        ...


class InMemoryRepository:
    """
    Dictionary-backed TransactionRepository.

    Transactions are expanded into ledger entries with the kernel posting
    rules when they are added, mirroring what ``LedgerWriter`` persists.
    """

    def __init__(self) -> None:
        self._accounts: dict[UUID, Account] = {}
        self._balances: list[Balance] = []
        self._transactions: list[Transaction] = []
        self._entries: list[LedgerEntry] = []
        self._periods: list[ReportingPeriod] = []
        self._links: list[ClearanceLink] = []

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def add_account(self, account: Account) -> Account:
        self._accounts[account.id] = account
        return account

    def add_balance(self, balance: Balance) -> Balance:
        self._balances.append(balance)
        return balance

    def add_reporting_period(self, period: ReportingPeriod) -> ReportingPeriod:
        self._periods.append(period)
        return period

    def post_transaction(self, transaction: Transaction) -> tuple[LedgerEntry, ...]:
        entries = post(transaction)
        self._transactions.append(transaction)
        self._entries.extend(entries)
        logger.debug(
            "transaction_posted",
            extra={
                "transaction_id": str(transaction.id),
                "transaction_type": transaction.transaction_type.value,
                "entry_count": len(entries),
            },
        )
        return entries

    def add_clearance_link(self, link: ClearanceLink) -> ClearanceLink:
        self._links.append(link)
        return link

    # ------------------------------------------------------------------
    # TransactionRepository
    # ------------------------------------------------------------------

    def find_accounts(
        self,
        entity_id: UUID | None,
        account_types: Iterable[AccountType],
    ) -> list[Account]:
        wanted = set(account_types)
        return [
            account for account in self._accounts.values()
            if account.account_type in wanted
            and (entity_id is None or account.entity_id in (None, entity_id))
        ]

    def find_balances_for_account(self, account_id: UUID, year: int) -> list[Balance]:
        return [
            b for b in self._balances
            if b.account_id == account_id and b.year == year
        ]

    def find_transactions_for_account(
        self,
        account_id: UUID,
        types: Iterable[TransactionType],
        start_date: date | None,
        end_date: date | None,
        currency: str | None = None,
    ) -> list[Transaction]:
        wanted = set(types)
        return [
            t for t in self._transactions
            if t.account_id == account_id
            and t.transaction_type in wanted
            and in_range(t.date, start_date, end_date)
            and (currency is None or t.currency == currency)
        ]

    def find_ledger_entries(
        self,
        account_id: UUID,
        start_date: date | None,
        end_date: date | None,
    ) -> list[LedgerEntry]:
        return [
            e for e in self._entries
            if e.post_account == account_id
            and in_range(e.date, start_date, end_date)
        ]

    def find_reporting_period(self, entity_id: UUID | None, year: int) -> ReportingPeriod | None:
        for period in self._periods:
            if period.calendar_year == year and (
                entity_id is None or period.entity_id in (None, entity_id)
            ):
                return period
        return None

    def find_clearance_links(self, transaction_id: UUID) -> list[ClearanceLink]:
        return [link for link in self._links if link.cleared_id == transaction_id]

    def find_assignments(self, transaction_id: UUID) -> list[ClearanceLink]:
        return [link for link in self._links if link.clearing_id == transaction_id]
