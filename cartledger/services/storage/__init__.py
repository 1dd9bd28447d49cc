"""
Storage Services Package

Provides the abstract ledger interface and its implementations.
The flat file is the production backend; the in-memory store is for
tests and embedding.
"""

from cartledger.services.storage.interface import LedgerStorageInterface
from cartledger.services.storage.flat_file import (
    FIELD_DELIMITER,
    FlatFileLedgerStorage,
    init_ledger,
)
from cartledger.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Flat file implementation
    "FIELD_DELIMITER",
    "FlatFileLedgerStorage",
    "init_ledger",
    # In-memory implementation
    "InMemoryLedgerStorage",
]
