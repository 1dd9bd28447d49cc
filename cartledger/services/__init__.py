"""
Services Package

External resources the cart ledger talks to. Currently only storage.
"""

from cartledger.services.storage import (
    FlatFileLedgerStorage,
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    init_ledger,
)

__all__ = [
    "FlatFileLedgerStorage",
    "InMemoryLedgerStorage",
    "LedgerStorageInterface",
    "init_ledger",
]
