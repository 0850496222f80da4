"""
IFRS Kernel - double-entry ledger core.

Read-only bookkeeping kernel for IFRS statements with:
- Typed domain records for accounts, transactions, balances and periods
- Double-entry posting of line items and VAT
- Exchange rate snapshots on every posting
- A repository protocol with in-memory and SQLAlchemy implementations
"""

__version__ = "0.1.0"
