"""Write-side services for the ledger kernel."""

from ifrs_kernel.services.ledger_writer import LedgerWriter

__all__ = ["LedgerWriter"]
