"""Selectors for the ledger kernel (read side)."""

from ifrs_kernel.selectors.ledger_selector import LedgerSelector

__all__ = ["LedgerSelector"]
