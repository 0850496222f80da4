"""
Module: ifrs_kernel.selectors.ledger_selector
Responsibility: SQL implementation of the ``TransactionRepository`` read
    contract the ledger engine consumes.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/ and selectors/base.py.

Invariants enforced:
    - Returns frozen records from ``ifrs_kernel.domain.records``; ORM rows
      never leave this module.
    - Date ranges are inclusive; a None bound is open.
    - Results are ordered by date and then creation, so repeated queries
      over unchanged data return identical lists.
    - Accounts and periods without an entity match every entity, as in
      ``InMemoryRepository``.
"""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from sqlalchemy import or_, select

from ifrs_kernel.domain import records
from ifrs_kernel.domain.records import AccountType, TransactionType
from ifrs_kernel.models import (
    Account,
    Balance,
    ClearanceLink,
    LedgerEntry,
    ReportingPeriod,
    Transaction,
)
from ifrs_kernel.selectors.base import BaseSelector


class LedgerSelector(BaseSelector):
    """Read-only ledger queries returning domain records."""

    def find_accounts(
        self,
        entity_id: UUID | None,
        account_types: Iterable[AccountType],
    ) -> list[records.Account]:
        types = [t.value for t in account_types]
        query = select(Account).where(Account.account_type.in_(types))
        if entity_id is not None:
            query = query.where(
                or_(Account.entity_id.is_(None), Account.entity_id == entity_id)
            )
        query = query.order_by(Account.created_at, Account.id)
        return [row.to_record() for row in self.session.scalars(query)]

    def find_balances_for_account(
        self, account_id: UUID, year: int,
    ) -> list[records.Balance]:
        query = (
            select(Balance)
            .where(Balance.account_id == account_id, Balance.year == year)
            .order_by(Balance.created_at, Balance.id)
        )
        return [row.to_record() for row in self.session.scalars(query)]

    def find_transactions_for_account(
        self,
        account_id: UUID,
        types: Iterable[TransactionType],
        start_date: date | None,
        end_date: date | None,
        currency: str | None = None,
    ) -> list[records.Transaction]:
        query = select(Transaction).where(
            Transaction.account_id == account_id,
            Transaction.transaction_type.in_([t.value for t in types]),
        )
        if start_date is not None:
            query = query.where(Transaction.transaction_date >= start_date)
        if end_date is not None:
            query = query.where(Transaction.transaction_date <= end_date)
        if currency is not None:
            query = query.where(Transaction.currency == currency)
        query = query.order_by(
            Transaction.transaction_date, Transaction.created_at, Transaction.id,
        )
        return [row.to_record() for row in self.session.scalars(query)]

    def find_ledger_entries(
        self,
        account_id: UUID,
        start_date: date | None,
        end_date: date | None,
    ) -> list[records.LedgerEntry]:
        query = select(LedgerEntry).where(LedgerEntry.post_account == account_id)
        if start_date is not None:
            query = query.where(LedgerEntry.posting_date >= start_date)
        if end_date is not None:
            query = query.where(LedgerEntry.posting_date <= end_date)
        query = query.order_by(
            LedgerEntry.posting_date, LedgerEntry.created_at, LedgerEntry.id,
        )
        return [row.to_record() for row in self.session.scalars(query)]

    def find_reporting_period(
        self, entity_id: UUID | None, year: int,
    ) -> records.ReportingPeriod | None:
        query = select(ReportingPeriod).where(ReportingPeriod.calendar_year == year)
        if entity_id is not None:
            query = query.where(
                or_(
                    ReportingPeriod.entity_id.is_(None),
                    ReportingPeriod.entity_id == entity_id,
                )
            )
        row = self.session.scalars(query.limit(1)).first()
        return row.to_record() if row is not None else None

    def find_clearance_links(self, transaction_id: UUID) -> list[records.ClearanceLink]:
        query = (
            select(ClearanceLink)
            .where(ClearanceLink.cleared_id == transaction_id)
            .order_by(ClearanceLink.created_at, ClearanceLink.id)
        )
        return [row.to_record() for row in self.session.scalars(query)]

    def find_assignments(self, transaction_id: UUID) -> list[records.ClearanceLink]:
        query = (
            select(ClearanceLink)
            .where(ClearanceLink.clearing_id == transaction_id)
            .order_by(ClearanceLink.created_at, ClearanceLink.id)
        )
        return [row.to_record() for row in self.session.scalars(query)]
