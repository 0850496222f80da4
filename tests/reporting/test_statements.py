"""Tests for the balance sheet and income statement (ifrs_reports.statements)."""

from datetime import date
from decimal import Decimal

import pytest

from ifrs_kernel.domain.records import (
    Account,
    AccountType,
    Entity,
    LineItem,
    Section,
    Transaction,
    TransactionType,
)
from ifrs_kernel.exceptions import MissingReportingPeriod
from ifrs_reports.models import StatementState
from ifrs_reports.statements import BalanceSheet, IncomeStatement

END = date(2024, 12, 31)


@pytest.fixture
def balance_sheet(reference_ledger, repository):
    statement = BalanceSheet(repository, reference_ledger.entity, end_date=END)
    statement.get_sections()
    return statement


class TestBalanceSheet:

    def test_section_balances(self, balance_sheet):
        balances = balance_sheet.balances
        assert balances[Section.ASSETS] == {
            AccountType.NON_CURRENT_ASSET: Decimal("100"),
            AccountType.INVENTORY: Decimal("100"),
            AccountType.BANK: Decimal("232"),
        }
        assert balances[Section.LIABILITIES] == {
            AccountType.CONTROL: Decimal("-16"),
            AccountType.CURRENT_LIABILITY: Decimal("-100"),
            AccountType.PAYABLE: Decimal("-116"),
        }
        assert balances[Section.RECONCILIATION] == {
            AccountType.RECONCILIATION: Decimal("-70"),
        }

    def test_profit_folded_into_equity(self, balance_sheet):
        equity = balance_sheet.balances[Section.EQUITY]
        assert equity[AccountType.EQUITY] == Decimal("70")
        assert equity["INCOME_STATEMENT"] == Decimal("200")
        assert balance_sheet.sections.totals[Section.EQUITY] == Decimal("270")

    def test_balances(self, balance_sheet):
        assert balance_sheet.debit == Decimal("502")
        assert balance_sheet.credit == Decimal("502")
        assert balance_sheet.sections.is_balanced

    def test_net_assets_equal_equity(self, balance_sheet):
        assert balance_sheet.net_assets == Decimal("270")
        assert balance_sheet.net_assets == balance_sheet.sections.totals[Section.EQUITY]

    def test_holds_income_statement_for_period(self, balance_sheet):
        income = balance_sheet.income_statement
        assert income.start_date == date(2024, 1, 1)
        assert income.end_date == END
        assert income.net_profit == Decimal("200")

    def test_only_balance_sheet_sections(self, balance_sheet):
        assert set(balance_sheet.balances) == {
            Section.ASSETS, Section.LIABILITIES, Section.EQUITY, Section.RECONCILIATION,
        }

    def test_missing_reporting_period(self, reference_ledger, repository):
        with pytest.raises(MissingReportingPeriod) as exc_info:
            BalanceSheet(repository, reference_ledger.entity, end_date=date(2025, 6, 30))
        assert exc_info.value.entity == "Example Company"
        assert exc_info.value.year == 2025

    def test_period_of_other_entity_not_used(self, reference_ledger, repository):
        with pytest.raises(MissingReportingPeriod):
            BalanceSheet(repository, Entity("Unrelated Ltd"), end_date=END)

    def test_end_date_defaults_to_clock(self, reference_ledger, repository, deterministic_clock):
        statement = BalanceSheet(
            repository, reference_ledger.entity, clock=deterministic_clock,
        )
        assert statement.end_date == date(2024, 6, 30)
        assert statement.start_date == date(2024, 1, 1)

    def test_mid_year_excludes_later_postings(self, reference_ledger, repository):
        statement = BalanceSheet(repository, reference_ledger.entity, end_date=date(2024, 3, 10))
        statement.get_sections()

        assert AccountType.BANK not in statement.balances[Section.ASSETS]
        assert statement.balances[Section.EQUITY]["INCOME_STATEMENT"] == Decimal("0")
        assert statement.sections.is_balanced

    def test_state_transitions(self, reference_ledger, repository):
        statement = BalanceSheet(repository, reference_ledger.entity, end_date=END)
        assert statement.state == StatementState.CONSTRUCTED

        statement.get_sections()
        assert statement.state == StatementState.SECTIONS_BUILT

        statement.to_string()
        assert statement.state == StatementState.RENDERED

    def test_accessors_require_built_sections(self, reference_ledger, repository):
        statement = BalanceSheet(repository, reference_ledger.entity, end_date=END)
        with pytest.raises(RuntimeError):
            statement.balances
        with pytest.raises(RuntimeError):
            statement.net_assets

    def test_rebuilt_on_every_call(self, reference_ledger, repository, balance_sheet):
        repository.post_transaction(Transaction(
            TransactionType.CASH_SALE,
            reference_ledger.accounts["bank"].id,
            date(2024, 5, 1),
            reference_ledger.rate,
            line_items=(LineItem(reference_ledger.accounts["revenue"].id, Decimal("50")),),
            entity_id=reference_ledger.entity.id,
        ))

        balance_sheet.get_sections()
        assert balance_sheet.balances[Section.ASSETS][AccountType.BANK] == Decimal("282")
        assert balance_sheet.balances[Section.EQUITY]["INCOME_STATEMENT"] == Decimal("250")
        assert balance_sheet.sections.is_balanced

    def test_attributes(self, reference_ledger, repository, balance_sheet):
        unbuilt = BalanceSheet(repository, reference_ledger.entity, end_date=END).attributes()
        assert unbuilt["state"] == "constructed"
        assert "balances" not in unbuilt

        attributes = balance_sheet.attributes()
        assert attributes["title"] == "BALANCE_SHEET"
        assert attributes["entity"] == "Example Company"
        assert attributes["balances"]["EQUITY"]["INCOME_STATEMENT"] == Decimal("200")
        assert attributes["balances"]["ASSETS"]["BANK"] == Decimal("232")
        assert attributes["credit"] == attributes["debit"] == Decimal("502")

    def test_logs_build(self, reference_ledger, repository, captured_logs):
        BalanceSheet(repository, reference_ledger.entity, end_date=END).get_sections()

        built = [r for r in captured_logs() if r["message"] == "balance_sheet_built"]
        assert len(built) == 1
        assert built[0]["report"] == "BALANCE_SHEET"
        assert not any(r["message"] == "balance_sheet_unbalanced" for r in captured_logs())


class TestIncomeStatement:

    def test_revenue_and_profit(self, reference_ledger, repository):
        statement = IncomeStatement(
            repository, reference_ledger.entity, date(2024, 1, 1), END,
        )
        statement.get_sections()

        assert statement.balances[Section.OPERATING_REVENUES] == {
            AccountType.OPERATING_REVENUE: Decimal("-200"),
        }
        assert statement.balances[Section.OPERATING_EXPENSES] == {}
        assert statement.credit == Decimal("200")
        assert statement.debit == Decimal("0")
        assert statement.net_profit == Decimal("200")

    def test_start_defaults_to_start_of_year(self, reference_ledger, repository):
        statement = IncomeStatement(repository, reference_ledger.entity, end_date=date(2024, 8, 1))
        assert statement.start_date == date(2024, 1, 1)

    def test_range_excludes_earlier_postings(self, reference_ledger, repository):
        statement = IncomeStatement(
            repository, reference_ledger.entity, date(2024, 4, 1), END,
        )
        statement.get_sections()
        assert statement.net_profit == Decimal("0")

    def test_expenses_reduce_profit(self, reference_ledger, repository):
        rent = repository.add_account(Account(
            "Rent", AccountType.OVERHEAD_EXPENSE, entity_id=reference_ledger.entity.id,
        ))
        repository.post_transaction(Transaction(
            TransactionType.CASH_PURCHASE,
            reference_ledger.accounts["bank"].id,
            date(2024, 6, 1),
            reference_ledger.rate,
            line_items=(LineItem(rent.id, Decimal("45")),),
            entity_id=reference_ledger.entity.id,
        ))

        statement = IncomeStatement(repository, reference_ledger.entity, end_date=END)
        statement.get_sections()
        assert statement.balances[Section.NON_OPERATING_EXPENSES] == {
            AccountType.OVERHEAD_EXPENSE: Decimal("45"),
        }
        assert statement.net_profit == Decimal("155")

    def test_start_after_end_rejected(self, reference_ledger, repository):
        with pytest.raises(ValueError):
            IncomeStatement(
                repository, reference_ledger.entity, date(2024, 6, 1), date(2024, 5, 1),
            )

    def test_net_profit_requires_sections(self, reference_ledger, repository):
        statement = IncomeStatement(repository, reference_ledger.entity, end_date=END)
        with pytest.raises(RuntimeError):
            statement.net_profit
