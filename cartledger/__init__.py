"""
Cart Ledger - Source Package

A command-line shopping-cart ledger backed by an append-only flat file.

DESIGN PRINCIPLES:
1. The ledger is append-only - entries are never mutated or deleted
2. Current stock is always derived (FIFO) from the full log
3. All money is stored in one reporting currency
4. Fail early, fail visibly - no partial appends
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Cart Ledger Team"
