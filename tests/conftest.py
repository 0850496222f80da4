"""
Pytest fixtures for the IFRS ledger test suite.

Provides:
- Structured logging configured once per session, with LogContext cleared
  between tests
- A deterministic clock
- The reference ledger (opening balances, a supplier bill, a cash sale and
  a journal entry) seeded into any repository or writer
- In-memory SQLite sessions for persistence tests
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Callable, Generator

import pytest
from sqlalchemy.orm import Session

from ifrs_config import reset_config
from ifrs_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ifrs_kernel.domain.clock import DeterministicClock
from ifrs_kernel.domain.records import (
    Account,
    AccountType,
    Balance,
    BalanceType,
    Entity,
    ExchangeRate,
    LineItem,
    ReportingPeriod,
    Transaction,
    TransactionType,
    Vat,
)
from ifrs_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ifrs_kernel.repository import InMemoryRepository

REPORT_YEAR = 2024
REPORT_END = date(2024, 12, 31)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test loads ifrs.yaml from scratch."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def captured_logs():
    """
    Capture ifrs_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "balance_sheet_built" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ifrs_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock()


# =============================================================================
# Reference ledger
# =============================================================================


@dataclass
class ReferenceLedger:
    entity: Entity
    accounts: dict[str, Account]
    rate: ExchangeRate
    transactions: dict[str, Transaction]


def seed_reference_ledger(
    sink,
    post: Callable[[Transaction], object],
    entity: Entity | None = None,
) -> ReferenceLedger:
    """
    Seed the reference books into ``sink``.

    ``sink`` offers ``add_account``, ``add_balance`` and
    ``add_reporting_period`` (InMemoryRepository or LedgerWriter); ``post``
    persists a transaction.
    """
    entity = entity or Entity(name="Example Company")
    rate = ExchangeRate(Decimal("1"))

    def account(name: str, account_type: AccountType) -> Account:
        return sink.add_account(Account(name, account_type, entity_id=entity.id))

    accounts = {
        "inventory": account("Stock", AccountType.INVENTORY),
        "current_liability": account("Accruals", AccountType.CURRENT_LIABILITY),
        "non_current_asset": account("Equipment", AccountType.NON_CURRENT_ASSET),
        "payable": account("Supplier", AccountType.PAYABLE),
        "vat": account("VAT Control", AccountType.CONTROL),
        "bank": account("Current Account", AccountType.BANK),
        "revenue": account("Sales", AccountType.OPERATING_REVENUE),
        "equity": account("Share Capital", AccountType.EQUITY),
        "reconciliation": account("Suspense", AccountType.RECONCILIATION),
    }

    sink.add_reporting_period(ReportingPeriod(REPORT_YEAR, entity_id=entity.id))
    sink.add_balance(Balance(
        accounts["inventory"].id, REPORT_YEAR, Decimal("100"),
        BalanceType.DEBIT, rate, entity_id=entity.id,
    ))
    sink.add_balance(Balance(
        accounts["current_liability"].id, REPORT_YEAR, Decimal("100"),
        BalanceType.CREDIT, rate, entity_id=entity.id,
    ))

    vat = Vat(Decimal("16"), accounts["vat"].id)
    transactions = {
        "bill": Transaction(
            TransactionType.SUPPLIER_BILL,
            accounts["payable"].id,
            date(REPORT_YEAR, 3, 1),
            rate,
            line_items=(LineItem(accounts["non_current_asset"].id, Decimal("100"), vat=vat),),
            entity_id=entity.id,
        ),
        "sale": Transaction(
            TransactionType.CASH_SALE,
            accounts["bank"].id,
            date(REPORT_YEAR, 3, 15),
            rate,
            line_items=(LineItem(accounts["revenue"].id, Decimal("200"), vat=vat),),
            entity_id=entity.id,
        ),
        "journal": Transaction(
            TransactionType.JOURNAL_ENTRY,
            accounts["equity"].id,
            date(REPORT_YEAR, 4, 1),
            rate,
            line_items=(LineItem(accounts["reconciliation"].id, Decimal("70")),),
            credited=False,
            entity_id=entity.id,
        ),
    }
    for transaction in transactions.values():
        post(transaction)

    return ReferenceLedger(entity, accounts, rate, transactions)


@pytest.fixture
def seed_ledger():
    """The seeding helper, for tests that seed a store of their own."""
    return seed_reference_ledger


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def reference_ledger(repository) -> ReferenceLedger:
    """The reference books seeded into the in-memory repository."""
    return seed_reference_ledger(repository, repository.post_transaction)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Session on a fresh in-memory SQLite database."""
    init_engine_from_url("sqlite://")
    create_tables()
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.rollback()
        db_session.close()
        reset_engine()
