"""
Typed Exception Hierarchy for the IFRS ledger kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Report generation fails for two reasons only: the caller asked for something
that does not exist (an account, a reporting period), or the data in the
repository is inconsistent (a negative outstanding amount, a zero exchange
rate).  Neither is transient, so nothing here is retried.  Callers catch by
type and read structured attributes instead of parsing messages:

    try:
        sheet = BalanceSheet(repository, entity, end_date)
    except MissingReportingPeriod as e:
        api_response(code=e.code, year=e.year)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    IFRSError (base)
    |
    +-- AccountError
    |   +-- MissingAccount
    |
    +-- PeriodError
    |   +-- MissingReportingPeriod
    |
    +-- ExchangeRateError
    |   +-- InvalidRate
    |
    +-- ClearanceError
    |   +-- UnclearableTransaction
    |   +-- UnassignableTransaction
    |   +-- InvalidClearanceAmount
    |   +-- ClearanceOverflow
    |
    +-- PostingError
    |   +-- MissingLineItem
    |
    +-- ConfigurationError
        +-- MissingSectionMapping

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Account         | MISSING_ACCOUNT             | Report requires an account, none given
Period          | MISSING_REPORTING_PERIOD    | No reporting period for entity/year
Exchange Rate   | INVALID_RATE                | Rate is zero or negative
Clearance       | UNCLEARABLE_TRANSACTION     | Clearing a non-clearable type
                | UNASSIGNABLE_TRANSACTION    | Clearing *with* a non-clearing type
                | INVALID_CLEARANCE_AMOUNT    | Clearance amount is zero or negative
                | CLEARANCE_OVERFLOW          | Cleared more than was outstanding
Posting         | MISSING_LINE_ITEM           | Transaction has nothing to post
Configuration   | MISSING_SECTION_MAPPING     | Account type absent from section map
"""


class IFRSError(Exception):
    """
    Base exception for all IFRS ledger errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "IFRS_ERROR"


# Account-related exceptions


class AccountError(IFRSError):
    """Base exception for account-related errors."""

    code: str = "ACCOUNT_ERROR"


class MissingAccount(AccountError):
    """A report that is built for a single account was given none."""

    code: str = "MISSING_ACCOUNT"

    def __init__(self, report: str):
        self.report = report
        super().__init__(f"{report} requires an Account")


# Period-related exceptions


class PeriodError(IFRSError):
    """Base exception for reporting period errors."""

    code: str = "PERIOD_ERROR"


class MissingReportingPeriod(PeriodError):
    """No reporting period exists for the entity and calendar year."""

    code: str = "MISSING_REPORTING_PERIOD"

    def __init__(self, entity: str, year: int):
        self.entity = entity
        self.year = year
        super().__init__(
            f"{entity} has no reporting period defined for the year {year}"
        )


# Exchange rate exceptions


class ExchangeRateError(IFRSError):
    """Base exception for exchange rate errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class InvalidRate(ExchangeRateError):
    """
    Exchange rate is zero or negative.

    Amounts are normalized by dividing by the rate, so a zero rate is
    undefined and a negative one flips the sign of every posting.
    """

    code: str = "INVALID_RATE"

    def __init__(self, rate: str):
        self.rate = rate
        super().__init__(f"Exchange rate must be greater than zero, got {rate}")


# Clearance exceptions


class ClearanceError(IFRSError):
    """Base exception for clearing (assignment) errors."""

    code: str = "CLEARANCE_ERROR"


class UnclearableTransaction(ClearanceError):
    """The transaction type cannot have its amount cleared."""

    code: str = "UNCLEARABLE_TRANSACTION"

    def __init__(self, transaction_type: str, clearable_types: list[str]):
        self.transaction_type = transaction_type
        self.clearable_types = clearable_types
        super().__init__(
            f"{transaction_type} Transaction cannot be cleared. "
            f"Transaction to be cleared must be one of: "
            f"{', '.join(clearable_types)}"
        )


class UnassignableTransaction(ClearanceError):
    """The transaction type cannot be used to clear other transactions."""

    code: str = "UNASSIGNABLE_TRANSACTION"

    def __init__(self, transaction_type: str, assignable_types: list[str]):
        self.transaction_type = transaction_type
        self.assignable_types = assignable_types
        super().__init__(
            f"{transaction_type} Transaction cannot have amounts assigned. "
            f"Transaction to be assigned must be one of: "
            f"{', '.join(assignable_types)}"
        )


class InvalidClearanceAmount(ClearanceError):
    """Clearance amounts must be strictly positive."""

    code: str = "INVALID_CLEARANCE_AMOUNT"

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(f"Clearance amount must be greater than zero, got {amount}")


class ClearanceOverflow(ClearanceError):
    """
    More has been cleared than was outstanding.

    Either the cleared amounts recorded against a transaction exceed its
    original amount (data corruption upstream), or a new clearance would
    push the uncleared or unassigned balance below zero.
    """

    code: str = "CLEARANCE_OVERFLOW"

    def __init__(self, transaction_id: str, original: str, cleared: str):
        self.transaction_id = transaction_id
        self.original = original
        self.cleared = cleared
        super().__init__(
            f"Transaction {transaction_id} has cleared amount {cleared} "
            f"exceeding its original amount {original}"
        )


# Posting exceptions


class PostingError(IFRSError):
    """Base exception for ledger posting errors."""

    code: str = "POSTING_ERROR"


class MissingLineItem(PostingError):
    """A transaction must have at least one line item to be posted."""

    code: str = "MISSING_LINE_ITEM"

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction {transaction_id} has no line items to post"
        )


# Configuration exceptions


class ConfigurationError(IFRSError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class MissingSectionMapping(ConfigurationError):
    """An account type is mapped to no statement section, or to several."""

    code: str = "MISSING_SECTION_MAPPING"

    def __init__(self, account_types: list[str], reason: str = "has no section"):
        self.account_types = account_types
        self.reason = reason
        super().__init__(
            f"Account type(s) {', '.join(account_types)} {reason}"
        )
