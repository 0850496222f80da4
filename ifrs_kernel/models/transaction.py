"""
Module: ifrs_kernel.models.transaction
Responsibility: ORM persistence for posted transactions, their line items,
    and the ledger entries the posting rules expand them into.
Architecture position: Kernel > Models.  May import from db/base.py,
    models/exchange_rate.py and domain/records.py only.

Invariants enforced:
    - Every LedgerEntry belongs to exactly one Transaction and carries the
      transaction's exchange rate.
    - Line items keep their document order (position).
    - Rows are append-only: LedgerWriter has no update or delete path.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ifrs_kernel.db.base import TrackedBase, UUIDString
from ifrs_kernel.domain import records
from ifrs_kernel.domain.records import BalanceType, TransactionType
from ifrs_kernel.models.exchange_rate import ExchangeRate


class Transaction(TrackedBase):
    """A posted business document against a main account."""

    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_transaction_account_date", "account_id", "transaction_date"),
    )

    transaction_type: Mapped[TransactionType] = mapped_column(String(2), nullable=False)

    # Main account (receivable, payable, bank, ...)
    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)

    exchange_rate_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("exchange_rates.id"),
        nullable=False,
    )

    credited: Mapped[bool] = mapped_column(Boolean, nullable=False)

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    entity_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("entities.id"),
        nullable=True,
    )

    narration: Mapped[str] = mapped_column(String(1000), nullable=False, default="")

    exchange_rate: Mapped[ExchangeRate] = relationship(lazy="joined")

    line_items: Mapped[list["LineItem"]] = relationship(
        back_populates="transaction",
        order_by="LineItem.position",
        lazy="selectin",
    )

    @classmethod
    def from_record(cls, transaction: records.Transaction) -> "Transaction":
        return cls(
            id=transaction.id,
            transaction_type=transaction.transaction_type.value,
            account_id=transaction.account_id,
            transaction_date=transaction.date,
            exchange_rate_id=transaction.exchange_rate.id,
            credited=bool(transaction.credited),
            currency=transaction.currency,
            entity_id=transaction.entity_id,
            narration=transaction.narration,
            line_items=[
                LineItem.from_record(item, position)
                for position, item in enumerate(transaction.line_items)
            ],
        )

    def to_record(self) -> records.Transaction:
        return records.Transaction(
            transaction_type=TransactionType(self.transaction_type),
            account_id=self.account_id,
            date=self.transaction_date,
            exchange_rate=self.exchange_rate.to_record(),
            line_items=tuple(item.to_record() for item in self.line_items),
            credited=self.credited,
            currency=self.currency,
            entity_id=self.entity_id,
            narration=self.narration,
            id=self.id,
        )

    def __repr__(self) -> str:
        return f"<Transaction {self.transaction_type} {self.transaction_date}>"


class LineItem(TrackedBase):
    """One line of a transaction, optionally carrying VAT."""

    __tablename__ = "line_items"

    transaction_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("transactions.id"),
        nullable=False,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    quantity: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("1"))

    # VAT percentage; null when the line carries no VAT
    vat_rate: Mapped[Decimal | None] = mapped_column(nullable=True)

    vat_account_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=True,
    )

    transaction: Mapped[Transaction] = relationship(back_populates="line_items")

    @classmethod
    def from_record(cls, item: records.LineItem, position: int = 0) -> "LineItem":
        return cls(
            position=position,
            account_id=item.account_id,
            amount=item.amount,
            quantity=item.quantity,
            vat_rate=item.vat.rate if item.vat is not None else None,
            vat_account_id=item.vat.account_id if item.vat is not None else None,
        )

    def to_record(self) -> records.LineItem:
        vat = None
        if self.vat_rate is not None and self.vat_account_id is not None:
            vat = records.Vat(rate=self.vat_rate, account_id=self.vat_account_id)
        return records.LineItem(
            account_id=self.account_id,
            amount=self.amount,
            quantity=self.quantity,
            vat=vat,
        )


class LedgerEntry(TrackedBase):
    """One side of a double entry, posted to ``post_account``."""

    __tablename__ = "ledger_entries"

    __table_args__ = (
        Index("idx_ledger_post_account_date", "post_account", "posting_date"),
    )

    transaction_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("transactions.id"),
        nullable=False,
    )

    post_account: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    folio_account: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    entry_type: Mapped[BalanceType] = mapped_column(String(6), nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    posting_date: Mapped[date] = mapped_column(Date, nullable=False)

    exchange_rate_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("exchange_rates.id"),
        nullable=False,
    )

    exchange_rate: Mapped[ExchangeRate] = relationship(lazy="joined")

    @classmethod
    def from_record(cls, entry: records.LedgerEntry) -> "LedgerEntry":
        return cls(
            id=entry.id,
            transaction_id=entry.transaction_id,
            post_account=entry.post_account,
            folio_account=entry.folio_account,
            entry_type=entry.entry_type.value,
            amount=entry.amount,
            posting_date=entry.date,
            exchange_rate_id=entry.exchange_rate.id,
        )

    def to_record(self) -> records.LedgerEntry:
        return records.LedgerEntry(
            transaction_id=self.transaction_id,
            post_account=self.post_account,
            folio_account=self.folio_account,
            entry_type=BalanceType(self.entry_type),
            amount=self.amount,
            date=self.posting_date,
            exchange_rate=self.exchange_rate.to_record(),
            id=self.id,
        )
