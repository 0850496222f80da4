"""
Module: ifrs_engines.aggregation
Responsibility:
    Sum account balances per account type and per statement section over a
    date range, and accumulate the grand debit and credit totals used to
    check that the books balance.

Architecture position:
    Engines -- pure calculation over records read from a
    ``TransactionRepository``.  Every call builds fresh accumulators; no
    state survives between calls.

Invariants enforced:
    - Stored balances are debit-positive: debits add, credits subtract,
      each amount normalized to the reporting currency first.
    - Summation is associative and commutative, so totals do not depend on
      the order in which the repository returns records.
    - Only account types with a non-zero net balance are reported; every
      requested section is present in the result, possibly empty.
    - credit == debit for a correctly posted ledger is *checked* by callers
      via ``SectionTotals.is_balanced``, never enforced here.

Failure modes:
    - InvalidRate from normalization of any amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Mapping
from uuid import UUID

from ifrs_engines.exchange import normalize
from ifrs_engines.tracer import traced_engine
from ifrs_kernel.domain.records import ZERO, Account, AccountType, Section
from ifrs_kernel.logging_config import get_logger
from ifrs_kernel.repository import TransactionRepository

logger = get_logger("engines.aggregation")


@dataclass(frozen=True)
class SectionTotals:
    """
    Aggregated balances of a set of statement sections.

    ``balances[section]`` maps an account type (or a synthetic line name)
    to its debit-positive balance; ``totals[section]`` is the sum of that
    section's lines.
    """

    accounts: dict[Section, dict[AccountType, tuple[Account, ...]]]
    balances: dict[Section, dict[AccountType | str, Decimal]]
    totals: dict[Section, Decimal]
    credit: Decimal
    debit: Decimal

    @property
    def is_balanced(self) -> bool:
        return self.credit == self.debit


def account_balance(
    repository: TransactionRepository,
    account: Account,
    start_date: date | None,
    end_date: date | None,
    opening_year: int | None = None,
) -> Decimal:
    """
    Debit-positive balance of one account in the reporting currency.

    Opening balances of ``opening_year`` are included when it is given,
    followed by every ledger entry posted to the account in the range.
    """
    balance = ZERO
    if opening_year is not None:
        for opening in repository.find_balances_for_account(account.id, opening_year):
            balance += normalize(opening.signed_amount, opening.exchange_rate)
    for entry in repository.find_ledger_entries(account.id, start_date, end_date):
        balance += normalize(entry.signed_amount, entry.exchange_rate)
    return balance


@traced_engine(
    "aggregation",
    "1.0",
    fingerprint_fields=("start_date", "end_date", "opening_year"),
)
def aggregate_sections(
    repository: TransactionRepository,
    account_types_by_section: Mapping[Section, tuple[AccountType, ...]],
    *,
    entity_id: UUID | None,
    start_date: date | None,
    end_date: date | None,
    opening_year: int | None = None,
) -> SectionTotals:
    """
    Aggregate balances for every account type of every section.

    Balances are netted per account type.  Each non-zero type adds its
    balance to ``debit`` when positive and its absolute value to ``credit``
    when negative; types that net to zero are omitted.
    """
    accounts: dict[Section, dict[AccountType, tuple[Account, ...]]] = {}
    balances: dict[Section, dict[AccountType | str, Decimal]] = {}
    totals: dict[Section, Decimal] = {}
    credit = ZERO
    debit = ZERO

    for section, account_types in account_types_by_section.items():
        accounts[section] = {}
        balances[section] = {}
        section_total = ZERO

        for account_type in account_types:
            type_accounts: list[Account] = []
            type_balance = ZERO
            for account in repository.find_accounts(entity_id, [account_type]):
                balance = account_balance(
                    repository, account, start_date, end_date, opening_year,
                )
                if balance == ZERO:
                    continue
                type_accounts.append(account)
                type_balance += balance

            # Accounts of one type that cancel out leave no line
            if type_balance == ZERO:
                continue
            accounts[section][account_type] = tuple(type_accounts)
            balances[section][account_type] = type_balance
            section_total += type_balance
            if type_balance > ZERO:
                debit += type_balance
            else:
                credit += -type_balance

        totals[section] = section_total

    logger.debug(
        "sections_aggregated",
        extra={
            "sections": [s.value for s in account_types_by_section],
            "credit": credit,
            "debit": debit,
        },
    )
    return SectionTotals(
        accounts=accounts,
        balances=balances,
        totals=totals,
        credit=credit,
        debit=debit,
    )
