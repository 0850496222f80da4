"""
Financial statement composers (``ifrs_reports.statements``).

``IncomeStatement`` aggregates revenue and expense sections over a date
range.  ``BalanceSheet`` aggregates the asset, liability, equity and
reconciliation sections as at a date, then folds the period's profit into
equity.  Current period profit is never posted to an equity account; the
balance sheet derives it by running the income statement it holds.

Both move from ``CONSTRUCTED`` to ``SECTIONS_BUILT`` on ``get_sections()``
and to ``RENDERED`` on ``to_string()``.  Sections are rebuilt from the
repository on every ``get_sections()`` call.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from ifrs_config import IFRSConfig, get_config
from ifrs_engines.aggregation import SectionTotals, aggregate_sections
from ifrs_kernel.domain.clock import Clock, SystemClock
from ifrs_kernel.domain.records import (
    BALANCE_SHEET_SECTIONS,
    INCOME_STATEMENT_SECTIONS,
    AccountType,
    Entity,
    ReportingPeriod,
    Section,
)
from ifrs_kernel.exceptions import MissingReportingPeriod
from ifrs_kernel.logging_config import LogContext, get_logger
from ifrs_kernel.repository import TransactionRepository
from ifrs_reports import render
from ifrs_reports.models import StatementSections, StatementState

logger = get_logger("reports.statements")


def _section_map(
    config: IFRSConfig,
    sections: tuple[Section, ...],
) -> dict:
    return {section: config.account_types(section) for section in sections}


class _Statement:
    """State and accessors shared by both statements."""

    TITLE = ""

    entity: Entity
    start_date: date
    end_date: date

    def __init__(self) -> None:
        self.state = StatementState.CONSTRUCTED
        self.sections: StatementSections | None = None

    def _built(self) -> StatementSections:
        if self.sections is None:
            raise RuntimeError(
                f"{self.TITLE} sections have not been built; call get_sections()"
            )
        return self.sections

    @property
    def balances(self) -> dict:
        return self._built().balances

    @property
    def accounts(self) -> dict:
        return self._built().accounts

    @property
    def credit(self) -> Decimal:
        return self._built().credit

    @property
    def debit(self) -> Decimal:
        return self._built().debit

    def attributes(self) -> dict[str, Any]:
        """Period and, once built, the balances as a plain dict."""
        attributes: dict[str, Any] = {
            "title": self.TITLE,
            "entity": self.entity.name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "state": self.state.value,
        }
        if self.sections is not None:
            attributes["balances"] = {
                section.value: {
                    key.value if isinstance(key, AccountType) else key: amount
                    for key, amount in lines.items()
                }
                for section, lines in self.sections.balances.items()
            }
            attributes["credit"] = self.sections.credit
            attributes["debit"] = self.sections.debit
        return attributes

    def _build(self, totals: SectionTotals) -> StatementSections:
        return StatementSections(
            title=self.TITLE,
            start_date=self.start_date,
            end_date=self.end_date,
            accounts=totals.accounts,
            balances=totals.balances,
            totals=totals.totals,
            credit=totals.credit,
            debit=totals.debit,
        )


class IncomeStatement(_Statement):
    """Operating and non-operating revenues and expenses over a range."""

    TITLE = "INCOME_STATEMENT"

    def __init__(
        self,
        repository: TransactionRepository,
        entity: Entity,
        start_date: date | None = None,
        end_date: date | None = None,
        clock: Clock | None = None,
        config: IFRSConfig | None = None,
    ):
        super().__init__()
        self.repository = repository
        self.entity = entity
        self.config = config or get_config()
        self.end_date = end_date or (clock or SystemClock()).today()
        self.start_date = start_date or ReportingPeriod(self.end_date.year).start_date
        if self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )

    def get_sections(self) -> StatementSections:
        year_start = ReportingPeriod(self.start_date.year).start_date
        with LogContext.bind(entity_id=str(self.entity.id), report=self.TITLE):
            totals = aggregate_sections(
                self.repository,
                _section_map(self.config, INCOME_STATEMENT_SECTIONS),
                entity_id=self.entity.id,
                start_date=self.start_date,
                end_date=self.end_date,
                opening_year=(
                    self.start_date.year if self.start_date == year_start else None
                ),
            )
            self.sections = self._build(totals)
            self.state = StatementState.SECTIONS_BUILT
            logger.info(
                "income_statement_built",
                extra={
                    "start_date": self.start_date,
                    "end_date": self.end_date,
                    "net_profit": self.net_profit,
                },
            )
        return self.sections

    @property
    def net_profit(self) -> Decimal:
        """Credit minus debit: revenues less expenses."""
        return self.credit - self.debit

    def to_string(self, precision: int = 2) -> str:
        if self.sections is None:
            self.get_sections()
        text = render.render_income_statement(self, precision)
        self.state = StatementState.RENDERED
        return text


class BalanceSheet(_Statement):
    """
    Assets, liabilities, reconciliation and equity as at ``end_date``.

    Holds an ``IncomeStatement`` for the same reporting period and end
    date; its net profit appears in equity under the ``INCOME_STATEMENT``
    line and its credit/debit totals join the balance sheet's own.
    """

    TITLE = "BALANCE_SHEET"

    def __init__(
        self,
        repository: TransactionRepository,
        entity: Entity,
        end_date: date | None = None,
        clock: Clock | None = None,
        config: IFRSConfig | None = None,
    ):
        super().__init__()
        self.repository = repository
        self.entity = entity
        self.config = config or get_config()
        self.end_date = end_date or (clock or SystemClock()).today()

        period = repository.find_reporting_period(entity.id, self.end_date.year)
        if period is None:
            raise MissingReportingPeriod(entity.name, self.end_date.year)
        self.period = period
        self.start_date = period.start_date

        self.income_statement = IncomeStatement(
            repository,
            entity,
            start_date=period.start_date,
            end_date=self.end_date,
            clock=clock,
            config=self.config,
        )

    def get_sections(self) -> StatementSections:
        with LogContext.bind(entity_id=str(self.entity.id), report=self.TITLE):
            totals = aggregate_sections(
                self.repository,
                _section_map(self.config, BALANCE_SHEET_SECTIONS),
                entity_id=self.entity.id,
                start_date=self.period.start_date,
                end_date=self.end_date,
                opening_year=self.period.calendar_year,
            )
            income = self.income_statement.get_sections()

            profit = income.credit - income.debit
            balances = {section: dict(lines) for section, lines in totals.balances.items()}
            balances[Section.EQUITY][IncomeStatement.TITLE] = profit
            section_totals = dict(totals.totals)
            section_totals[Section.EQUITY] += profit

            sections = StatementSections(
                title=self.TITLE,
                start_date=self.start_date,
                end_date=self.end_date,
                accounts=totals.accounts,
                balances=balances,
                totals=section_totals,
                credit=totals.credit + income.credit,
                debit=totals.debit + income.debit,
            )
            if not sections.is_balanced:
                logger.warning(
                    "balance_sheet_unbalanced",
                    extra={
                        "end_date": self.end_date,
                        "credit": sections.credit,
                        "debit": sections.debit,
                    },
                )
            self.sections = sections
            self.state = StatementState.SECTIONS_BUILT
            logger.info(
                "balance_sheet_built",
                extra={"end_date": self.end_date, "income_statement": profit},
            )
        return sections

    @property
    def net_assets(self) -> Decimal:
        """Assets less liabilities less reconciliation, as printed."""
        totals = self._built().totals
        return (
            totals[Section.ASSETS]
            + totals[Section.LIABILITIES]
            - totals[Section.RECONCILIATION]
        )

    def to_string(self, precision: int = 2) -> str:
        if self.sections is None:
            self.get_sections()
        text = render.render_balance_sheet(self, precision)
        self.state = StatementState.RENDERED
        return text
