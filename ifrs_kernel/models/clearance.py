"""
Module: ifrs_kernel.models.clearance
Responsibility: ORM persistence for clearance links -- the amount of a
    receipt, payment, note or journal applied against an invoice, bill,
    journal or opening balance.
Architecture position: Kernel > Models.

Invariants enforced:
    - cleared_id has no foreign key: it names either a transactions row or
      a balances row.
    - Sum of link amounts against one item never exceeds its original
      amount (checked by ifrs_engines.clearance before a link is written).
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ifrs_kernel.db.base import TrackedBase, UUIDString
from ifrs_kernel.domain import records
from ifrs_kernel.models.exchange_rate import ExchangeRate


class ClearanceLink(TrackedBase):
    """Amount of ``clearing_id`` applied against ``cleared_id``."""

    __tablename__ = "clearance_links"

    __table_args__ = (
        Index("idx_clearance_cleared", "cleared_id"),
        Index("idx_clearance_clearing", "clearing_id"),
    )

    cleared_id: Mapped[UUID] = mapped_column(UUIDString(), nullable=False)

    clearing_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("transactions.id"),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    exchange_rate_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("exchange_rates.id"),
        nullable=False,
    )

    link_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    exchange_rate: Mapped[ExchangeRate] = relationship(lazy="joined")

    @classmethod
    def from_record(cls, link: records.ClearanceLink) -> "ClearanceLink":
        return cls(
            id=link.id,
            cleared_id=link.cleared_id,
            clearing_id=link.clearing_id,
            amount=link.amount,
            exchange_rate_id=link.exchange_rate.id,
            link_date=link.date,
        )

    def to_record(self) -> records.ClearanceLink:
        return records.ClearanceLink(
            cleared_id=self.cleared_id,
            clearing_id=self.clearing_id,
            amount=self.amount,
            exchange_rate=self.exchange_rate.to_record(),
            date=self.link_date,
            id=self.id,
        )
