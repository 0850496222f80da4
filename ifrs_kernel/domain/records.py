"""
Records -- Immutable domain records read by the ledger engine.

Responsibility:
    Defines the closed enumerations (account, transaction and balance types)
    and the frozen dataclasses for every record the engine reads from a
    transaction repository: Entity, Account, ExchangeRate, Vat, LineItem,
    Transaction, Balance, ReportingPeriod, ClearanceLink and LedgerEntry.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.  ORM models in
    ``ifrs_kernel.models`` convert to these records at the selector
    boundary; engines and reports only ever see records.

Invariants enforced:
    - All records are ``frozen=True`` and never mutated after construction.
    - All monetary fields are ``Decimal`` (ints and strings are coerced).
    - A transaction's ``amount`` is always derived from its line items,
      never stored separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from ifrs_kernel.exceptions import InvalidRate

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _as_decimal(value: Decimal | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError(f"Monetary values must not be float: {value!r}")
    return Decimal(str(value))


# =========================================================================
# Enums
# =========================================================================


class AccountType(str, Enum):
    """Closed set of account types.  Each maps to one statement section."""

    NON_CURRENT_ASSET = "NON_CURRENT_ASSET"
    CONTRA_ASSET = "CONTRA_ASSET"
    INVENTORY = "INVENTORY"
    BANK = "BANK"
    CURRENT_ASSET = "CURRENT_ASSET"
    RECEIVABLE = "RECEIVABLE"
    NON_CURRENT_LIABILITY = "NON_CURRENT_LIABILITY"
    CONTROL = "CONTROL"
    CURRENT_LIABILITY = "CURRENT_LIABILITY"
    PAYABLE = "PAYABLE"
    EQUITY = "EQUITY"
    OPERATING_REVENUE = "OPERATING_REVENUE"
    OPERATING_EXPENSE = "OPERATING_EXPENSE"
    NON_OPERATING_REVENUE = "NON_OPERATING_REVENUE"
    DIRECT_EXPENSE = "DIRECT_EXPENSE"
    OVERHEAD_EXPENSE = "OVERHEAD_EXPENSE"
    OTHER_EXPENSE = "OTHER_EXPENSE"
    RECONCILIATION = "RECONCILIATION"


class TransactionType(str, Enum):
    """Closed set of transaction types, keyed by their two-letter code."""

    CASH_SALE = "CS"
    CLIENT_INVOICE = "IN"
    CREDIT_NOTE = "CN"
    CLIENT_RECEIPT = "RC"
    CASH_PURCHASE = "CP"
    SUPPLIER_BILL = "BL"
    DEBIT_NOTE = "DN"
    SUPPLIER_PAYMENT = "PY"
    CONTRA_ENTRY = "CE"
    JOURNAL_ENTRY = "JN"

    @property
    def default_credited(self) -> bool:
        """Posting side of the main account when the caller gives none."""
        return self in _CREDITED_BY_DEFAULT


_CREDITED_BY_DEFAULT = frozenset({
    TransactionType.CREDIT_NOTE,
    TransactionType.CLIENT_RECEIPT,
    TransactionType.CASH_PURCHASE,
    TransactionType.SUPPLIER_BILL,
    TransactionType.JOURNAL_ENTRY,
})

# Transactions whose original amount can be offset over time.
CLEARABLE_TYPES: tuple[TransactionType, ...] = (
    TransactionType.CLIENT_INVOICE,
    TransactionType.SUPPLIER_BILL,
    TransactionType.JOURNAL_ENTRY,
)

# Transactions that may offset (be assigned to) a clearable transaction.
ASSIGNABLE_TYPES: tuple[TransactionType, ...] = (
    TransactionType.CLIENT_RECEIPT,
    TransactionType.SUPPLIER_PAYMENT,
    TransactionType.CREDIT_NOTE,
    TransactionType.DEBIT_NOTE,
    TransactionType.JOURNAL_ENTRY,
)


class Section(str, Enum):
    """Statement sections.  The first four belong to the balance sheet."""

    ASSETS = "ASSETS"
    LIABILITIES = "LIABILITIES"
    EQUITY = "EQUITY"
    RECONCILIATION = "RECONCILIATION"
    OPERATING_REVENUES = "OPERATING_REVENUES"
    NON_OPERATING_REVENUES = "NON_OPERATING_REVENUES"
    OPERATING_EXPENSES = "OPERATING_EXPENSES"
    NON_OPERATING_EXPENSES = "NON_OPERATING_EXPENSES"


BALANCE_SHEET_SECTIONS: tuple[Section, ...] = (
    Section.ASSETS,
    Section.LIABILITIES,
    Section.EQUITY,
    Section.RECONCILIATION,
)

INCOME_STATEMENT_SECTIONS: tuple[Section, ...] = (
    Section.OPERATING_REVENUES,
    Section.NON_OPERATING_REVENUES,
    Section.OPERATING_EXPENSES,
    Section.NON_OPERATING_EXPENSES,
)


class BalanceType(str, Enum):
    """Side of an opening balance or ledger entry."""

    DEBIT = "debit"
    CREDIT = "credit"


# =========================================================================
# Reference records
# =========================================================================


@dataclass(frozen=True)
class Entity:
    """The reporting entity.  ``currency`` is its functional currency."""

    name: str
    currency: str = "USD"
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    name: str
    account_type: AccountType
    entity_id: UUID | None = None
    code: str | None = None
    currency: str | None = None
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class ExchangeRate:
    """
    Rate snapshot attached to a transaction or balance at posting time.

    Amounts are stored in transaction currency; dividing by ``rate`` gives
    the reporting currency amount.

    Raises:
        InvalidRate: ``rate`` is zero or negative.
    """

    rate: Decimal
    currency: str = "USD"
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate", _as_decimal(self.rate))
        if self.rate <= 0:
            raise InvalidRate(str(self.rate))


@dataclass(frozen=True)
class ReportingPeriod:
    """Fiscal year boundary for one entity."""

    calendar_year: int
    entity_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def start_date(self) -> date:
        return date(self.calendar_year, 1, 1)

    @property
    def end_date(self) -> date:
        return date(self.calendar_year, 12, 31)


# =========================================================================
# Postable records
# =========================================================================


@dataclass(frozen=True)
class Vat:
    """Value added tax rate (percent) and the control account it posts to."""

    rate: Decimal
    account_id: UUID

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate", _as_decimal(self.rate))


@dataclass(frozen=True)
class LineItem:
    """A single line of a transaction, posted against ``account_id``."""

    account_id: UUID
    amount: Decimal
    quantity: Decimal = Decimal("1")
    vat: Vat | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _as_decimal(self.amount))
        object.__setattr__(self, "quantity", _as_decimal(self.quantity))

    @property
    def net_amount(self) -> Decimal:
        return self.amount * self.quantity

    @property
    def vat_amount(self) -> Decimal:
        if self.vat is None:
            return ZERO
        return self.net_amount * self.vat.rate / HUNDRED


@dataclass(frozen=True)
class Transaction:
    """
    A posted business document.

    ``credited`` decides the side of the main account: True posts it as a
    CREDIT and every line account as a DEBIT.  When omitted it defaults to
    the usual side for the transaction type.
    """

    transaction_type: TransactionType
    account_id: UUID
    date: date
    exchange_rate: ExchangeRate
    line_items: tuple[LineItem, ...] = ()
    credited: bool | None = None
    currency: str = "USD"
    entity_id: UUID | None = None
    narration: str = ""
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if self.credited is None:
            object.__setattr__(
                self, "credited", self.transaction_type.default_credited,
            )
        object.__setattr__(self, "line_items", tuple(self.line_items))

    @property
    def amount(self) -> Decimal:
        """Total in transaction currency, VAT inclusive."""
        return sum(
            (item.net_amount + item.vat_amount for item in self.line_items),
            ZERO,
        )

    @property
    def is_clearable(self) -> bool:
        return self.transaction_type in CLEARABLE_TYPES

    @property
    def is_assignable(self) -> bool:
        return self.transaction_type in ASSIGNABLE_TYPES


@dataclass(frozen=True)
class Balance:
    """
    Opening balance of an account for a reporting year.

    Acts as a pseudo-transaction in account schedules: always fully
    original and clearable like an invoice.
    """

    account_id: UUID
    year: int
    amount: Decimal
    balance_type: BalanceType
    exchange_rate: ExchangeRate
    currency: str = "USD"
    entity_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _as_decimal(self.amount))

    @property
    def signed_amount(self) -> Decimal:
        """Debit positive, credit negative, in balance currency."""
        if self.balance_type == BalanceType.DEBIT:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class ClearanceLink:
    """
    Amount of ``clearing_id`` applied against ``cleared_id``.

    ``cleared_id`` identifies a clearable Transaction or an opening Balance.
    """

    cleared_id: UUID
    clearing_id: UUID
    amount: Decimal
    exchange_rate: ExchangeRate
    date: date | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _as_decimal(self.amount))


@dataclass(frozen=True)
class LedgerEntry:
    """
    One side of a double entry.

    ``post_account`` is the account this entry affects; ``folio_account`` is
    the account on the other side of the same pair.
    """

    transaction_id: UUID
    post_account: UUID
    folio_account: UUID
    entry_type: BalanceType
    amount: Decimal
    date: date
    exchange_rate: ExchangeRate
    id: UUID = field(default_factory=uuid4)

    @property
    def signed_amount(self) -> Decimal:
        """Debit positive, credit negative, in transaction currency."""
        if self.entry_type == BalanceType.DEBIT:
            return self.amount
        return -self.amount
