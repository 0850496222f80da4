"""
Module: ifrs_kernel.models.reporting_period
Responsibility: ORM persistence for reporting periods (calendar years).
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/records.py only.

Invariants enforced:
    - At most one period per entity and calendar year (uq_period_entity_year).
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ifrs_kernel.db.base import TrackedBase, UUIDString
from ifrs_kernel.domain import records


class ReportingPeriod(TrackedBase):
    """Calendar year a balance sheet can be drawn up for."""

    __tablename__ = "reporting_periods"

    __table_args__ = (
        UniqueConstraint("entity_id", "calendar_year", name="uq_period_entity_year"),
    )

    calendar_year: Mapped[int] = mapped_column(Integer, nullable=False)

    entity_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("entities.id"),
        nullable=True,
    )

    @classmethod
    def from_record(cls, period: records.ReportingPeriod) -> "ReportingPeriod":
        return cls(
            id=period.id,
            calendar_year=period.calendar_year,
            entity_id=period.entity_id,
        )

    def to_record(self) -> records.ReportingPeriod:
        return records.ReportingPeriod(
            calendar_year=self.calendar_year,
            entity_id=self.entity_id,
            id=self.id,
        )
