"""
Module: ifrs_kernel.models.balance
Responsibility: ORM persistence for opening balances carried into a
    reporting year.
Architecture position: Kernel > Models.
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ifrs_kernel.db.base import TrackedBase, UUIDString
from ifrs_kernel.domain import records
from ifrs_kernel.domain.records import BalanceType
from ifrs_kernel.models.exchange_rate import ExchangeRate


class Balance(TrackedBase):
    """Opening balance of one account for one year."""

    __tablename__ = "balances"

    __table_args__ = (
        Index("idx_balance_account_year", "account_id", "year"),
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    balance_type: Mapped[BalanceType] = mapped_column(String(6), nullable=False)

    exchange_rate_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("exchange_rates.id"),
        nullable=False,
    )

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    entity_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("entities.id"),
        nullable=True,
    )

    exchange_rate: Mapped[ExchangeRate] = relationship(lazy="joined")

    @classmethod
    def from_record(cls, balance: records.Balance) -> "Balance":
        return cls(
            id=balance.id,
            account_id=balance.account_id,
            year=balance.year,
            amount=balance.amount,
            balance_type=balance.balance_type.value,
            exchange_rate_id=balance.exchange_rate.id,
            currency=balance.currency,
            entity_id=balance.entity_id,
        )

    def to_record(self) -> records.Balance:
        return records.Balance(
            account_id=self.account_id,
            year=self.year,
            amount=self.amount,
            balance_type=BalanceType(self.balance_type),
            exchange_rate=self.exchange_rate.to_record(),
            currency=self.currency,
            entity_id=self.entity_id,
            id=self.id,
        )
