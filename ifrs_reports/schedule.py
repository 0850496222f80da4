"""
Account Schedule (``ifrs_reports.schedule``).

Lists every opening balance and clearable transaction of one account that
still has an uncleared amount as at an end date, with running totals.
Used for receivable and payable ageing and for reconciling control
accounts to their subledgers.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from ifrs_config import get_config
from ifrs_engines.clearance import Clearable, clearance_amounts
from ifrs_kernel.domain.clock import Clock, SystemClock
from ifrs_kernel.domain.records import (
    ZERO,
    Account,
    AccountType,
    Transaction,
    TransactionType,
)
from ifrs_kernel.exceptions import MissingAccount
from ifrs_kernel.logging_config import get_logger
from ifrs_kernel.repository import TransactionRepository
from ifrs_reports.models import OutstandingItem, ScheduleResult, ScheduleTotals

logger = get_logger("reports.schedule")

OPENING_BALANCE = "Opening Balance"

SCHEDULE_TYPES: tuple[TransactionType, ...] = (
    TransactionType.CLIENT_INVOICE,
    TransactionType.SUPPLIER_BILL,
    TransactionType.JOURNAL_ENTRY,
)


def is_clearing_journal(account: Account, transaction: Transaction) -> bool:
    """
    Journal entries that clear rather than originate a receivable/payable.

    A credited journal against a receivable (or a debited one against a
    payable) reduces what is owed; it is already counted as a clearance
    elsewhere and is not itself outstanding.
    """
    if transaction.transaction_type != TransactionType.JOURNAL_ENTRY:
        return False
    if account.account_type == AccountType.RECEIVABLE:
        return bool(transaction.credited)
    if account.account_type == AccountType.PAYABLE:
        return not transaction.credited
    return False


class AccountSchedule:
    """Outstanding amounts of one account."""

    TITLE = "ACCOUNT_SCHEDULE"

    def __init__(
        self,
        repository: TransactionRepository,
        account: Account | None,
        currency: str | None = None,
        end_date: date | None = None,
        clock: Clock | None = None,
    ):
        if account is None:
            raise MissingAccount("Account Schedule")

        self.repository = repository
        self.account = account
        self.currency = currency
        self.end_date = end_date or (clock or SystemClock()).today()

    def get_transactions(self) -> ScheduleResult:
        """Build the schedule.  Each call starts from empty totals."""
        config = get_config()
        items: list[OutstandingItem] = []
        original = cleared = uncleared = ZERO

        def include(item: Clearable, label: str) -> None:
            nonlocal original, cleared, uncleared
            amounts = clearance_amounts(item, self.repository)
            if amounts.uncleared <= ZERO:
                return
            items.append(OutstandingItem(
                id=item.id,
                transaction_type=label,
                original_amount=amounts.original,
                cleared_amount=amounts.cleared,
                uncleared_amount=amounts.uncleared,
            ))
            original += amounts.original
            cleared += amounts.cleared
            uncleared += amounts.uncleared

        for balance in self.repository.find_balances_for_account(
            self.account.id, self.end_date.year,
        ):
            include(balance, OPENING_BALANCE)

        transactions = self.repository.find_transactions_for_account(
            self.account.id,
            SCHEDULE_TYPES,
            None,
            self.end_date,
            self.currency,
        )
        for transaction in transactions:
            if is_clearing_journal(self.account, transaction):
                continue
            include(transaction, config.transaction_label(transaction.transaction_type))

        result = ScheduleResult(
            account=self.account,
            currency=self.currency,
            end_date=self.end_date,
            transactions=tuple(items),
            totals=ScheduleTotals(
                original_amount=original,
                cleared_amount=cleared,
                uncleared_amount=uncleared,
            ),
        )
        logger.info(
            "account_schedule_built",
            extra={
                "account_id": str(self.account.id),
                "end_date": self.end_date,
                "outstanding_count": len(items),
                "uncleared_amount": uncleared,
            },
        )
        return result

    def outstanding(self) -> Decimal:
        """Total uncleared amount as at the end date."""
        return self.get_transactions().totals.uncleared_amount
