"""
Abstract Storage Interface

DESIGN DECISION: The ledger only ever needs two operations - read
everything once, and append one record. Anything that can do those two
things (a flat file, a list in memory, a database table) can back a cart.

Implementations hand out and accept RawRecord in the canonical field
order; whatever layout they use internally stays behind this interface.
"""

from abc import ABC, abstractmethod

from cartledger.models.entry import RawRecord


class LedgerStorageInterface(ABC):
    """
    Abstract interface for append-only ledger storage.
    
    Records are never updated or deleted.
    """
    
    @abstractmethod
    def load(self) -> list[RawRecord]:
        """
        Read every stored record in insertion order.
        
        Returns:
            Ordered list of raw records (blank records skipped)
            
        Raises:
            StorageUnavailable: If the backing store is missing or read-only
        """
        pass
    
    @abstractmethod
    def append(self, record: RawRecord) -> None:
        """
        Durably append one record to the end of the store.
        
        Args:
            record: The record to write
            
        Raises:
            StorageWriteError: If the write fails. Nothing is written.
        """
        pass
    
    @property
    def location(self) -> str:
        """Human-readable description of where records live."""
        return self.__class__.__name__
