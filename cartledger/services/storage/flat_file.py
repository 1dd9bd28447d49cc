"""
Flat File Storage Implementation

One record per line, semicolon separated, in the on-disk field order:

    SKU;DESCRIPTION;QUANTITY;PRICE;CURRENCY

Note that DESCRIPTION and QUANTITY are swapped relative to RawRecord.
This module is the only place that knows about it.

TRADEOFFS:
- No locking: concurrent CLI invocations appending at the same time are
  not protected. Treat one invocation as exclusive owner of the file.
- No escaping: a ';' inside a field would shift the columns, so the
  writer rejects it instead.
"""

import os
from pathlib import Path
from typing import Union

from cartledger.exceptions import StorageUnavailable, StorageWriteError
from cartledger.models.entry import RawRecord
from cartledger.services.storage.interface import LedgerStorageInterface


FIELD_DELIMITER = ";"

# On-disk column order, by RawRecord field name
DISK_COLUMNS = [
    "sku",
    "description",
    "quantity",
    "price",
    "currency",
]


def record_to_line(record: RawRecord) -> str:
    """Serialize a record into one newline-terminated ledger line."""
    values = [getattr(record, column) for column in DISK_COLUMNS]
    for value in values:
        if FIELD_DELIMITER in value or "\n" in value:
            raise ValueError(
                f"Ledger fields cannot contain '{FIELD_DELIMITER}' or newlines: {value!r}"
            )
    return FIELD_DELIMITER.join(values) + "\n"


def line_to_record(line: str) -> RawRecord:
    """
    Parse one ledger line into a RawRecord.
    
    Short lines (e.g. removal records written by older tools without
    trailing delimiters) are padded with empty fields; extra fields are
    ignored.
    """
    parts = line.rstrip("\r\n").split(FIELD_DELIMITER)
    parts += [""] * (len(DISK_COLUMNS) - len(parts))
    return RawRecord(**dict(zip(DISK_COLUMNS, parts)))


class FlatFileLedgerStorage(LedgerStorageInterface):
    """
    Ledger stored in a plain text file.
    
    The file must already exist and be writable; see init_ledger().
    No handle is kept open between calls.
    """
    
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
    
    @property
    def path(self) -> Path:
        return self._path
    
    @property
    def location(self) -> str:
        return str(self._path)
    
    def is_available(self) -> bool:
        """True if the ledger file exists and can be appended to."""
        return self._path.is_file() and os.access(self._path, os.W_OK)
    
    def load(self) -> list[RawRecord]:
        if not self.is_available():
            raise StorageUnavailable(self._path)
        
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                lines = handle.readlines()
        except OSError as e:
            raise StorageUnavailable(self._path, reason=f"could not be read: {e}") from e
        
        return [line_to_record(line) for line in lines if line.strip()]
    
    def append(self, record: RawRecord) -> None:
        try:
            line = record_to_line(record)
        except ValueError as e:
            raise StorageWriteError(self._path, str(e)) from e

        try:
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as e:
            raise StorageWriteError(self._path, str(e)) from e


def init_ledger(path: Union[str, Path]) -> bool:
    """
    Create an empty ledger file (and its directory) if it does not exist.
    
    Returns:
        True if a new file was created, False if one was already there
    """
    path = Path(path)
    if path.exists():
        return False
    
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    except OSError as e:
        raise StorageWriteError(path, str(e)) from e
    return True
