"""Tests for fixed-width statement rendering (ifrs_reports.render)."""

from datetime import date
from decimal import Decimal

import pytest

from ifrs_config import get_config
from ifrs_kernel.domain.records import (
    Account,
    AccountType,
    Balance,
    BalanceType,
    LineItem,
    Transaction,
    TransactionType,
)
from ifrs_reports.render import (
    AMOUNT_WIDTH,
    DOUBLE_SEPARATOR,
    INDENT,
    LABEL_WIDTH,
    SEPARATOR,
    format_amount,
)
from ifrs_reports.statements import BalanceSheet, IncomeStatement

END = date(2024, 12, 31)


def row(label: str, amount: str) -> str:
    return label.ljust(LABEL_WIDTH) + amount.rjust(AMOUNT_WIDTH)


class TestFormatAmount:

    @pytest.mark.parametrize(
        "amount, precision, expected",
        [
            (Decimal("1234567.891"), 2, "1,234,567.89"),
            (Decimal("-232"), 2, "-232.00"),
            (Decimal("0"), 2, "0.00"),
            (Decimal("-0.001"), 2, "0.00"),
            (Decimal("12.5"), 0, "12"),
            (Decimal("3.14159"), 4, "3.1416"),
        ],
    )
    def test_format(self, amount, precision, expected):
        assert format_amount(amount, precision) == expected


class TestRenderBalanceSheet:

    def test_reference_layout(self, reference_ledger, repository):
        text = BalanceSheet(repository, reference_ledger.entity, end_date=END).to_string()

        assert text.splitlines() == [
            "Example Company",
            "Balance Sheet",
            "As at: Dec 31 2024",
            "Assets",
            row("    Non Current Asset", "100.00"),
            row("    Inventory", "100.00"),
            row("    Bank", "232.00"),
            SEPARATOR,
            row("Total Assets", "432.00"),
            "Liabilities",
            row("    Control", "16.00"),
            row("    Current Liability", "100.00"),
            row("    Payable", "116.00"),
            SEPARATOR,
            row("Total Liabilities", "232.00"),
            "Reconciliation",
            row("    Reconciliation", "-70.00"),
            SEPARATOR,
            row("Total Reconciliation", "-70.00"),
            "",
            SEPARATOR,
            row("Net Assets", "270.00"),
            DOUBLE_SEPARATOR,
            "Equity",
            row("    Equity", "70.00"),
            row("    Income Statement", "200.00"),
            SEPARATOR,
            row("Total Equity", "270.00"),
            DOUBLE_SEPARATOR,
        ]
        assert text.endswith("\n")

    def test_precision(self, reference_ledger, repository):
        text = BalanceSheet(repository, reference_ledger.entity, end_date=END).to_string(0)
        assert row("Total Equity", "270") in text.splitlines()

    def test_renders_unbuilt_statement(self, reference_ledger, repository):
        statement = BalanceSheet(repository, reference_ledger.entity, end_date=END)
        assert "Net Assets" in statement.to_string()
        assert statement.sections is not None


class TestRenderIncomeStatement:

    def test_reference_layout(self, reference_ledger, repository):
        text = IncomeStatement(
            repository, reference_ledger.entity, date(2024, 1, 1), END,
        ).to_string()

        assert text.splitlines() == [
            "Example Company",
            "Income Statement",
            "For the Period: Jan 01 2024 to Dec 31 2024",
            "Operating Revenues",
            row("    Operating Revenue", "200.00"),
            "Non Operating Revenues",
            SEPARATOR,
            row("Total Revenue", "200.00"),
            "Operating Expenses",
            "Non Operating Expenses",
            SEPARATOR,
            row("Total Expenses", "0.00"),
            "",
            SEPARATOR,
            row("Net Profit", "200.00"),
            DOUBLE_SEPARATOR,
        ]


class TestColumnAlignment:

    @pytest.fixture
    def long_labels(self, reference_ledger, repository):
        entity_id = reference_ledger.entity.id
        rate = reference_ledger.rate
        loan = repository.add_account(
            Account("Bank Loan", AccountType.NON_CURRENT_LIABILITY, entity_id=entity_id),
        )
        deposit = repository.add_account(
            Account("Deposit", AccountType.BANK, entity_id=entity_id),
        )
        interest = repository.add_account(
            Account("Interest", AccountType.NON_OPERATING_REVENUE, entity_id=entity_id),
        )
        repository.add_balance(Balance(loan.id, 2024, Decimal("5"), BalanceType.CREDIT, rate))
        repository.add_balance(Balance(deposit.id, 2024, Decimal("5"), BalanceType.DEBIT, rate))
        repository.post_transaction(Transaction(
            TransactionType.CASH_SALE, deposit.id, date(2024, 7, 1), rate,
            line_items=(LineItem(interest.id, Decimal("40")),),
            entity_id=entity_id,
        ))
        return reference_ledger

    @staticmethod
    def _amount_lines(text):
        return [line for line in text.splitlines() if len(line) > LABEL_WIDTH]

    def test_balance_sheet_amounts_share_one_column(self, long_labels, repository):
        text = BalanceSheet(repository, long_labels.entity, end_date=END).to_string()

        assert row(INDENT + "Non Current Liability", "5.00") in text.splitlines()
        assert {len(line) for line in self._amount_lines(text)} == {LABEL_WIDTH + AMOUNT_WIDTH}

    def test_income_statement_amounts_share_one_column(self, long_labels, repository):
        text = IncomeStatement(repository, long_labels.entity, end_date=END).to_string()

        assert row(INDENT + "Non Operating Revenue", "40.00") in text.splitlines()
        assert {len(line) for line in self._amount_lines(text)} == {LABEL_WIDTH + AMOUNT_WIDTH}

    def test_every_configured_label_fits(self):
        config = get_config()
        labels = [INDENT + label for label in config.account_labels.values()]
        labels += list(config.section_labels.values())
        labels += [INDENT + config.account_label("INCOME_STATEMENT"), "Total Reconciliation"]
        assert max(len(label) for label in labels) < LABEL_WIDTH
