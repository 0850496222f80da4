"""
Reporting Service (``ifrs_reports.service``).

Responsibility
--------------
Single entry point for report generation against one reporting entity:
account schedules, balance sheets and income statements, plus their
rendered text.  Bridges any ``TransactionRepository`` (in-memory or the
SQLAlchemy ``LedgerSelector``) to the builders in ``schedule.py`` and
``statements.py``.

Architecture position
---------------------
**Reports layer** -- thin glue.  Constructor: ``repository`` + ``entity``
+ ``clock`` + ``config``.  No financial logic lives in this class.

Invariants enforced
-------------------
* Read-only -- nothing is written to the repository.
* Every report call runs under a ``LogContext`` carrying the entity id and
  report name.

Failure modes
-------------
* ``MissingAccount`` / ``MissingReportingPeriod`` propagate from the
  builders.
* ``ValueError`` for an income statement whose start is after its end.
"""

from __future__ import annotations

from datetime import date

from ifrs_kernel.domain.clock import Clock, SystemClock
from ifrs_kernel.domain.records import Account, Entity
from ifrs_kernel.logging_config import LogContext, get_logger
from ifrs_kernel.repository import TransactionRepository
from ifrs_reports.config import ReportingConfig
from ifrs_reports.models import ScheduleResult
from ifrs_reports.schedule import AccountSchedule
from ifrs_reports.statements import BalanceSheet, IncomeStatement

logger = get_logger("reports.service")


class ReportingService:
    """Financial report generation for one entity."""

    def __init__(
        self,
        repository: TransactionRepository,
        entity: Entity,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._repository = repository
        self._entity = entity
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": entity.name,
                "default_currency": self._config.default_currency,
            },
        )

    def _as_of(self, end_date: date | None) -> date:
        return end_date or self._clock.today()

    def account_schedule(
        self,
        account: Account | None,
        currency: str | None = None,
        end_date: date | None = None,
    ) -> ScheduleResult:
        account_id = str(account.id) if account is not None else None
        with LogContext.bind(
            entity_id=str(self._entity.id),
            report=AccountSchedule.TITLE,
            account_id=account_id,
        ):
            schedule = AccountSchedule(
                self._repository,
                account,
                currency=currency or self._config.default_currency,
                end_date=self._as_of(end_date),
            )
            return schedule.get_transactions()

    def balance_sheet(self, end_date: date | None = None) -> BalanceSheet:
        """Build a balance sheet as at ``end_date`` (default: today)."""
        statement = BalanceSheet(
            self._repository, self._entity, end_date=self._as_of(end_date),
        )
        statement.get_sections()
        return statement

    def income_statement(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> IncomeStatement:
        statement = IncomeStatement(
            self._repository,
            self._entity,
            start_date=start_date,
            end_date=self._as_of(end_date),
        )
        statement.get_sections()
        return statement

    def render_balance_sheet(self, end_date: date | None = None) -> str:
        return self.balance_sheet(end_date).to_string(self._config.display_precision)

    def render_income_statement(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> str:
        statement = self.income_statement(start_date, end_date)
        return statement.to_string(self._config.display_precision)
