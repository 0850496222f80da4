"""
Pure calculation engines for the IFRS ledger.

- ``exchange``: reporting currency normalization
- ``clearance``: cleared/uncleared amounts of clearable items
- ``aggregation``: signed per-section account balances
- ``tracer``: IFRS_ENGINE_TRACE logging decorator
"""
