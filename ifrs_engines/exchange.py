"""
Module: ifrs_engines.exchange
Responsibility:
    Normalize amounts held in a transaction currency to the reporting
    currency using the rate snapshot recorded with the transaction.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Failure modes:
    - InvalidRate when the rate is zero or negative.  ``ExchangeRate``
      rejects such rates at construction; the check here also covers
      rate objects built outside the records module.
"""

from __future__ import annotations

from decimal import Decimal

from ifrs_kernel.domain.records import ExchangeRate
from ifrs_kernel.exceptions import InvalidRate


def normalize(amount: Decimal, exchange_rate: ExchangeRate) -> Decimal:
    """Convert ``amount`` to the reporting currency: ``amount / rate``."""
    if exchange_rate.rate <= 0:
        raise InvalidRate(str(exchange_rate.rate))
    return amount / exchange_rate.rate
