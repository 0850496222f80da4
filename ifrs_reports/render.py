"""
Fixed-width text rendering of financial statements (``ifrs_reports.render``).

Purely presentational.  Each section prints its heading, one indented
``label amount`` line per account type, a ``-`` rule and the section
total.  Subtotals that close a statement (Net Assets, Total Equity, Net
Profit) are followed by an ``=`` rule.

Stored balances are debit-positive.  Liabilities and revenues are negated
for printing; reconciliation is printed with its stored sign and
subtracted from net assets.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from ifrs_config import IFRSConfig
from ifrs_kernel.domain.records import ZERO, Section

if TYPE_CHECKING:
    from ifrs_reports.statements import BalanceSheet, IncomeStatement

INDENT = " " * 4
# Wide enough for the longest indented label in ifrs.yaml
LABEL_WIDTH = 32
AMOUNT_WIDTH = 15
SEPARATOR = " " * LABEL_WIDTH + "-" * AMOUNT_WIDTH
DOUBLE_SEPARATOR = SEPARATOR.replace("-", "=")

REVENUE_SECTIONS = (Section.OPERATING_REVENUES, Section.NON_OPERATING_REVENUES)
EXPENSE_SECTIONS = (Section.OPERATING_EXPENSES, Section.NON_OPERATING_EXPENSES)


def format_amount(amount: Decimal, precision: int = 2) -> str:
    """Thousands-separated, fixed precision, never ``-0.00``."""
    text = f"{amount:,.{precision}f}"
    if text.startswith("-") and text.strip("-0.,") == "":
        return text[1:]
    return text


def _line(label: str, amount: Decimal, precision: int, indent: str = "") -> str:
    return (
        f"{(indent + label):<{LABEL_WIDTH}}"
        f"{format_amount(amount, precision):>{AMOUNT_WIDTH}}"
    )


def _section(
    lines: list[str],
    config: IFRSConfig,
    section: Section,
    balances: dict,
    sign: int,
    precision: int,
) -> Decimal:
    """Append one section's heading and lines; return its printed total."""
    lines.append(config.section_label(section))
    total = ZERO
    for key, balance in balances.get(section, {}).items():
        amount = balance * sign
        total += amount
        lines.append(_line(config.account_label(key), amount, precision, INDENT))
    return total


def _total(lines: list[str], label: str, amount: Decimal, precision: int) -> None:
    lines.append(SEPARATOR)
    lines.append(_line(label, amount, precision))


def render_balance_sheet(statement: BalanceSheet, precision: int = 2) -> str:
    config = statement.config
    balances = statement.balances
    lines = [
        statement.entity.name,
        config.statement_title(statement.TITLE),
        f"As at: {statement.end_date.strftime('%b %d %Y')}",
    ]

    assets = _section(lines, config, Section.ASSETS, balances, 1, precision)
    _total(lines, "Total Assets", assets, precision)

    liabilities = _section(lines, config, Section.LIABILITIES, balances, -1, precision)
    _total(lines, "Total Liabilities", liabilities, precision)

    reconciliation = _section(
        lines, config, Section.RECONCILIATION, balances, 1, precision,
    )
    _total(lines, "Total Reconciliation", reconciliation, precision)
    lines.append("")

    _total(lines, "Net Assets", assets - liabilities - reconciliation, precision)
    lines.append(DOUBLE_SEPARATOR)

    equity = _section(lines, config, Section.EQUITY, balances, 1, precision)
    _total(lines, "Total Equity", equity, precision)
    lines.append(DOUBLE_SEPARATOR)

    return "\n".join(lines) + "\n"


def render_income_statement(statement: IncomeStatement, precision: int = 2) -> str:
    config = statement.config
    balances = statement.balances
    lines = [
        statement.entity.name,
        config.statement_title(statement.TITLE),
        "For the Period: {} to {}".format(
            statement.start_date.strftime("%b %d %Y"),
            statement.end_date.strftime("%b %d %Y"),
        ),
    ]

    revenue = ZERO
    for section in REVENUE_SECTIONS:
        revenue += _section(lines, config, section, balances, -1, precision)
    _total(lines, "Total Revenue", revenue, precision)

    expenses = ZERO
    for section in EXPENSE_SECTIONS:
        expenses += _section(lines, config, section, balances, 1, precision)
    _total(lines, "Total Expenses", expenses, precision)
    lines.append("")

    _total(lines, "Net Profit", revenue - expenses, precision)
    lines.append(DOUBLE_SEPARATOR)

    return "\n".join(lines) + "\n"
