"""
Module: ifrs_kernel.models.exchange_rate
Responsibility: ORM persistence for the exchange rate snapshot attached to
    transactions, opening balances, ledger entries and clearance links.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/records.py only.

Invariants enforced:
    - A rate row is written once with the record that first references it
      and never updated, so historical amounts normalize identically on
      every report run.
"""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ifrs_kernel.db.base import TrackedBase
from ifrs_kernel.domain import records


class ExchangeRate(TrackedBase):
    """Reporting currency conversion factor: reporting = amount / rate."""

    __tablename__ = "exchange_rates"

    # Higher scale than money columns for rate precision
    rate: Mapped[Decimal] = mapped_column(Numeric(38, 18), nullable=False)

    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    @classmethod
    def from_record(cls, rate: records.ExchangeRate) -> "ExchangeRate":
        return cls(id=rate.id, rate=rate.rate, currency=rate.currency)

    def to_record(self) -> records.ExchangeRate:
        return records.ExchangeRate(rate=self.rate, currency=self.currency, id=self.id)

    def __repr__(self) -> str:
        return f"<ExchangeRate {self.currency} {self.rate}>"
