"""Tests for the reporting service facade (ifrs_reports.service)."""

from datetime import date
from decimal import Decimal

import pytest

from ifrs_kernel.domain.records import (
    Account,
    AccountType,
    ExchangeRate,
    LineItem,
    Section,
    Transaction,
    TransactionType,
)
from ifrs_kernel.exceptions import MissingAccount, MissingReportingPeriod
from ifrs_reports import BalanceSheet, IncomeStatement, ReportingConfig, ReportingService
from ifrs_reports.render import AMOUNT_WIDTH, LABEL_WIDTH

END = date(2024, 12, 31)


@pytest.fixture
def service(reference_ledger, repository, deterministic_clock):
    return ReportingService(repository, reference_ledger.entity, clock=deterministic_clock)


class TestReportingService:

    def test_logs_initialization(self, reference_ledger, repository, captured_logs):
        ReportingService(repository, reference_ledger.entity)
        assert any(
            r["message"] == "reporting_service_initialized"
            and r["entity_name"] == "Example Company"
            for r in captured_logs()
        )

    def test_balance_sheet_is_built(self, service):
        statement = service.balance_sheet(END)
        assert isinstance(statement, BalanceSheet)
        assert statement.sections.is_balanced
        assert statement.net_assets == Decimal("270")

    def test_balance_sheet_defaults_to_clock(self, service):
        statement = service.balance_sheet()
        assert statement.end_date == date(2024, 6, 30)
        assert statement.balances[Section.EQUITY]["INCOME_STATEMENT"] == Decimal("200")

    def test_balance_sheet_missing_period(self, service):
        with pytest.raises(MissingReportingPeriod):
            service.balance_sheet(date(2023, 12, 31))

    def test_income_statement(self, service):
        statement = service.income_statement(date(2024, 1, 1), END)
        assert isinstance(statement, IncomeStatement)
        assert statement.net_profit == Decimal("200")

    def test_income_statement_invalid_range(self, service):
        with pytest.raises(ValueError):
            service.income_statement(date(2024, 12, 1), date(2024, 1, 31))

    def test_render_uses_display_precision(self, reference_ledger, repository):
        service = ReportingService(
            repository,
            reference_ledger.entity,
            config=ReportingConfig(display_precision=0),
        )
        text = service.render_balance_sheet(END)
        assert "Total Equity".ljust(LABEL_WIDTH) + "270".rjust(AMOUNT_WIDTH) in text.splitlines()

    def test_render_income_statement(self, service):
        text = service.render_income_statement(date(2024, 1, 1), END)
        assert "Net Profit".ljust(LABEL_WIDTH) + "200.00".rjust(AMOUNT_WIDTH) in text.splitlines()

    def test_account_schedule_missing_account(self, service):
        with pytest.raises(MissingAccount):
            service.account_schedule(None)

    def test_account_schedule_outstanding_bill(self, service, reference_ledger):
        result = service.account_schedule(reference_ledger.accounts["payable"], end_date=END)
        assert [item.id for item in result.transactions] == [
            reference_ledger.transactions["bill"].id,
        ]
        assert result.totals.uncleared_amount == Decimal("116")

    def test_account_schedule_default_currency(self, reference_ledger, repository):
        receivable = repository.add_account(Account(
            "Client", AccountType.RECEIVABLE, entity_id=reference_ledger.entity.id,
        ))
        for currency, rate in (("USD", "1"), ("EUR", "2")):
            repository.post_transaction(Transaction(
                TransactionType.CLIENT_INVOICE,
                receivable.id,
                date(2024, 5, 1),
                ExchangeRate(Decimal(rate), currency),
                line_items=(LineItem(reference_ledger.accounts["revenue"].id, Decimal("100")),),
                currency=currency,
                entity_id=reference_ledger.entity.id,
            ))

        service = ReportingService(
            repository,
            reference_ledger.entity,
            config=ReportingConfig(default_currency="EUR"),
        )
        result = service.account_schedule(receivable, end_date=END)
        assert result.currency == "EUR"
        assert result.totals.original_amount == Decimal("50")

    def test_account_schedule_logs_with_context(self, service, reference_ledger, captured_logs):
        payable = reference_ledger.accounts["payable"]
        service.account_schedule(payable, end_date=END)

        built = [r for r in captured_logs() if r["message"] == "account_schedule_built"]
        assert built[0]["report"] == "ACCOUNT_SCHEDULE"
        assert built[0]["account_id"] == str(payable.id)
