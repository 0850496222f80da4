"""
LedgerWriter -- persists domain records into the ledger tables.

Responsibility:
    Writes entities, accounts, reporting periods, opening balances,
    transactions and clearance links.  ``post()`` expands a transaction
    into its ledger entries with the kernel posting rules and writes the
    transaction, its line items and every entry together.

Architecture position:
    Kernel > Services -- imperative shell.  The write-side counterpart of
    ``LedgerSelector``.

Invariants enforced:
    - Flush-only: the writer never commits or rolls back; the caller's
      ``session_scope()`` owns the transaction boundary.
    - Append-only: there is no update or delete path.
    - Each exchange rate row is written once, however many records
      reference it.

Failure modes:
    - MissingLineItem from ``post()`` for a transaction with no lines;
      nothing is written.
"""

from sqlalchemy.orm import Session

from ifrs_kernel.domain import records
from ifrs_kernel.domain.posting import post
from ifrs_kernel.logging_config import get_logger
from ifrs_kernel.models import (
    Account,
    Balance,
    ClearanceLink,
    Entity,
    ExchangeRate,
    LedgerEntry,
    ReportingPeriod,
    Transaction,
)

logger = get_logger("services.ledger_writer")


class LedgerWriter:
    """Write side of the ledger; uses ``session.flush()`` only."""

    def __init__(self, session: Session):
        self.session = session

    def _ensure_rate(self, rate: records.ExchangeRate) -> None:
        if self.session.get(ExchangeRate, rate.id) is None:
            self.session.add(ExchangeRate.from_record(rate))
            self.session.flush()

    def add_entity(self, entity: records.Entity) -> records.Entity:
        self.session.add(Entity.from_record(entity))
        self.session.flush()
        return entity

    def add_account(self, account: records.Account) -> records.Account:
        self.session.add(Account.from_record(account))
        self.session.flush()
        return account

    def add_reporting_period(
        self, period: records.ReportingPeriod,
    ) -> records.ReportingPeriod:
        self.session.add(ReportingPeriod.from_record(period))
        self.session.flush()
        return period

    def add_balance(self, balance: records.Balance) -> records.Balance:
        self._ensure_rate(balance.exchange_rate)
        self.session.add(Balance.from_record(balance))
        self.session.flush()
        return balance

    def post(self, transaction: records.Transaction) -> tuple[records.LedgerEntry, ...]:
        """Persist ``transaction`` and the ledger entries it posts."""
        entries = post(transaction)

        self._ensure_rate(transaction.exchange_rate)
        self.session.add(Transaction.from_record(transaction))
        self.session.flush()
        self.session.add_all(LedgerEntry.from_record(entry) for entry in entries)
        self.session.flush()

        logger.info(
            "transaction_posted",
            extra={
                "transaction_id": str(transaction.id),
                "transaction_type": transaction.transaction_type.value,
                "entry_count": len(entries),
            },
        )
        return entries

    def add_clearance_link(self, link: records.ClearanceLink) -> records.ClearanceLink:
        self._ensure_rate(link.exchange_rate)
        self.session.add(ClearanceLink.from_record(link))
        self.session.flush()
        logger.info(
            "clearance_link_recorded",
            extra={
                "cleared_id": str(link.cleared_id),
                "clearing_id": str(link.clearing_id),
                "amount": link.amount,
            },
        )
        return link
