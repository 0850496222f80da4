"""
Module: ifrs_engines.clearance
Responsibility:
    Compute how much of a clearable transaction (invoice, bill, qualifying
    journal entry) or opening balance has been offset by clearing
    transactions, and validate new clearance links before they are recorded.

Architecture position:
    Engines -- pure calculation over records read from a
    ``TransactionRepository``.  Never writes to the repository.

Invariants enforced:
    - uncleared = original - cleared, and uncleared is never negative.
    - A clearance never exceeds the cleared item's outstanding amount nor
      the clearing transaction's unassigned amount.
    - All comparisons happen in the reporting currency.

Failure modes:
    - UnclearableTransaction when the cleared item is not a clearable type.
    - UnassignableTransaction when the clearing item is not a clearing type.
    - InvalidClearanceAmount when the clearance amount is not positive.
    - ClearanceOverflow when cleared amounts exceed the original amount.
    - InvalidRate from normalization of any amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ifrs_config import get_config
from ifrs_engines.exchange import normalize
from ifrs_kernel.domain.records import (
    ASSIGNABLE_TYPES,
    CLEARABLE_TYPES,
    ZERO,
    Balance,
    ClearanceLink,
    Transaction,
)
from ifrs_kernel.exceptions import (
    ClearanceOverflow,
    InvalidClearanceAmount,
    UnassignableTransaction,
    UnclearableTransaction,
)
from ifrs_kernel.logging_config import get_logger
from ifrs_kernel.repository import TransactionRepository

logger = get_logger("engines.clearance")

Clearable = Transaction | Balance


@dataclass(frozen=True)
class ClearanceAmounts:
    """Reporting currency amounts of one clearable item."""

    original: Decimal
    cleared: Decimal
    uncleared: Decimal


def _require_clearable(item: Clearable) -> None:
    if isinstance(item, Transaction) and not item.is_clearable:
        config = get_config()
        raise UnclearableTransaction(
            config.transaction_label(item.transaction_type),
            [config.transaction_label(t) for t in CLEARABLE_TYPES],
        )


def _require_assignable(item: Transaction) -> None:
    if not item.is_assignable:
        config = get_config()
        raise UnassignableTransaction(
            config.transaction_label(item.transaction_type),
            [config.transaction_label(t) for t in ASSIGNABLE_TYPES],
        )


def original_amount(item: Clearable) -> Decimal:
    """Item amount in the reporting currency."""
    return normalize(item.amount, item.exchange_rate)


def cleared_amount(item: Clearable, repository: TransactionRepository) -> Decimal:
    """Sum of all clearance links applied against ``item``, normalized."""
    _require_clearable(item)
    return sum(
        (
            normalize(link.amount, link.exchange_rate)
            for link in repository.find_clearance_links(item.id)
        ),
        ZERO,
    )


def assigned_amount(clearing: Transaction, repository: TransactionRepository) -> Decimal:
    """Sum of all clearance links made by ``clearing``, normalized."""
    return sum(
        (
            normalize(link.amount, link.exchange_rate)
            for link in repository.find_assignments(clearing.id)
        ),
        ZERO,
    )


def clearance_amounts(
    item: Clearable,
    repository: TransactionRepository,
) -> ClearanceAmounts:
    """
    Original, cleared and uncleared amounts of a clearable item.

    Raises:
        ClearanceOverflow: the recorded links clear more than the original.
    """
    original = original_amount(item)
    cleared = cleared_amount(item, repository)
    uncleared = original - cleared
    if uncleared < ZERO:
        logger.error(
            "clearance_overflow_detected",
            extra={
                "transaction_id": str(item.id),
                "original": original,
                "cleared": cleared,
            },
        )
        raise ClearanceOverflow(str(item.id), str(original), str(cleared))
    return ClearanceAmounts(original=original, cleared=cleared, uncleared=uncleared)


def clear(
    cleared: Clearable,
    clearing: Transaction,
    amount: Decimal,
    repository: TransactionRepository,
    on_date: date | None = None,
) -> ClearanceLink:
    """
    Build a validated clearance link applying ``amount`` of ``clearing``
    against ``cleared``.

    ``amount`` is in the clearing transaction's currency and is recorded
    with its exchange rate.  The caller persists the returned link.
    """
    _require_clearable(cleared)
    _require_assignable(clearing)
    if amount <= ZERO:
        raise InvalidClearanceAmount(str(amount))

    normalized = normalize(amount, clearing.exchange_rate)

    outstanding = clearance_amounts(cleared, repository).uncleared
    if normalized > outstanding:
        raise ClearanceOverflow(
            str(cleared.id),
            str(original_amount(cleared)),
            str(original_amount(cleared) - outstanding + normalized),
        )

    capacity = original_amount(clearing) - assigned_amount(clearing, repository)
    if normalized > capacity:
        raise ClearanceOverflow(
            str(clearing.id),
            str(original_amount(clearing)),
            str(original_amount(clearing) - capacity + normalized),
        )

    link = ClearanceLink(
        cleared_id=cleared.id,
        clearing_id=clearing.id,
        amount=amount,
        exchange_rate=clearing.exchange_rate,
        date=on_date or clearing.date,
    )
    logger.info(
        "clearance_link_built",
        extra={
            "cleared_id": str(cleared.id),
            "clearing_id": str(clearing.id),
            "amount": amount,
        },
    )
    return link
