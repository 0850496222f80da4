"""
Posting -- Double-entry rules for transactions.

Responsibility:
    Expands a Transaction into the LedgerEntry pairs it produces.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O.  Used by the in-memory
    repository and by ``LedgerWriter`` before persisting entries.

Invariants enforced:
    - Every pair has one DEBIT and one CREDIT of equal amount, so the
      entries of any transaction always balance.
    - The main account is posted on the transaction's ``credited`` side;
      line item and VAT accounts are posted on the opposite side.

Failure modes:
    - MissingLineItem when a transaction has no line items.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from ifrs_kernel.domain.records import (
    BalanceType,
    LedgerEntry,
    Transaction,
)
from ifrs_kernel.exceptions import MissingLineItem


def _pair(
    transaction: Transaction,
    line_account: UUID,
    amount: Decimal,
) -> tuple[LedgerEntry, LedgerEntry]:
    if transaction.credited:
        post_side, folio_side = BalanceType.CREDIT, BalanceType.DEBIT
    else:
        post_side, folio_side = BalanceType.DEBIT, BalanceType.CREDIT

    post = LedgerEntry(
        transaction_id=transaction.id,
        post_account=transaction.account_id,
        folio_account=line_account,
        entry_type=post_side,
        amount=amount,
        date=transaction.date,
        exchange_rate=transaction.exchange_rate,
    )
    folio = LedgerEntry(
        transaction_id=transaction.id,
        post_account=line_account,
        folio_account=transaction.account_id,
        entry_type=folio_side,
        amount=amount,
        date=transaction.date,
        exchange_rate=transaction.exchange_rate,
    )
    return post, folio


def post(transaction: Transaction) -> tuple[LedgerEntry, ...]:
    """
    Produce the ledger entries for a transaction.

    For each line item: one pair for ``amount * quantity`` between the main
    account and the line account, and, when the line carries VAT, a second
    pair for the VAT amount between the main account and the VAT account.
    """
    if not transaction.line_items:
        raise MissingLineItem(str(transaction.id))

    entries: list[LedgerEntry] = []
    for item in transaction.line_items:
        entries.extend(_pair(transaction, item.account_id, item.net_amount))
        if item.vat is not None:
            entries.extend(_pair(transaction, item.vat.account_id, item.vat_amount))
    return tuple(entries)
