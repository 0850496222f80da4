"""
Module: ifrs_kernel.models.account
Responsibility: ORM persistence for reporting entities and the chart of
    accounts.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/records.py only.

Invariants enforced:
    - account_type is one of the AccountType values and decides the
      statement section the account is reported under.
    - An account's type must not change once transactions reference it
      within a closed period (enforced by callers; no update path exists
      in LedgerWriter).
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ifrs_kernel.db.base import TrackedBase, UUIDString
from ifrs_kernel.domain import records
from ifrs_kernel.domain.records import AccountType


class Entity(TrackedBase):
    """A reporting entity and its functional currency."""

    __tablename__ = "entities"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    @classmethod
    def from_record(cls, entity: records.Entity) -> "Entity":
        return cls(id=entity.id, name=entity.name, currency=entity.currency)

    def to_record(self) -> records.Entity:
        return records.Entity(name=self.name, currency=self.currency, id=self.id)

    def __repr__(self) -> str:
        return f"<Entity {self.name}>"


class Account(TrackedBase):
    """Chart of accounts entry."""

    __tablename__ = "accounts"

    __table_args__ = (
        Index("idx_account_entity_type", "entity_id", "account_type"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Account type determines financial statement section
    account_type: Mapped[AccountType] = mapped_column(String(32), nullable=False)

    entity_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("entities.id"),
        nullable=True,
    )

    code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Currency restriction (null = any currency)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)

    @classmethod
    def from_record(cls, account: records.Account) -> "Account":
        return cls(
            id=account.id,
            name=account.name,
            account_type=account.account_type.value,
            entity_id=account.entity_id,
            code=account.code,
            currency=account.currency,
        )

    def to_record(self) -> records.Account:
        return records.Account(
            name=self.name,
            account_type=AccountType(self.account_type),
            entity_id=self.entity_id,
            code=self.code,
            currency=self.currency,
            id=self.id,
        )

    def __repr__(self) -> str:
        return f"<Account {self.code or self.id}: {self.name}>"
