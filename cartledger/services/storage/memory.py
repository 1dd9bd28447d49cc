"""In-memory ledger storage, for tests and embedding."""

from typing import Iterable, Optional

from cartledger.exceptions import StorageWriteError
from cartledger.models.entry import RawRecord
from cartledger.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Ledger kept in a Python list.
    
    Set fail_appends=True to simulate a disk that rejects writes.
    """
    
    def __init__(
        self,
        records: Optional[Iterable[RawRecord]] = None,
        fail_appends: bool = False,
    ):
        self._records: list[RawRecord] = list(records or [])
        self.fail_appends = fail_appends
    
    @property
    def records(self) -> tuple[RawRecord, ...]:
        return tuple(self._records)
    
    def load(self) -> list[RawRecord]:
        return [
            record for record in self._records
            if any(value.strip() for value in record.model_dump().values())
        ]
    
    def append(self, record: RawRecord) -> None:
        if self.fail_appends:
            raise StorageWriteError(self.location, "appends disabled")
        self._records.append(record)
