"""
Cart Orchestrator

Ties storage, normalization, reconciliation and totals together into one
ledger session.

A Cart owns the in-memory entry log. The log is filled once from storage
when the cart is created and only grows afterwards, always in the same
order as the backing store:

1. Validate the request
2. Normalize it into an Entry (nothing changes if this fails)
3. Append to storage (nothing changes in memory if this fails)
4. Append to the in-memory log

Totals are recomputed from the full log every time they are asked for.
"""

from collections import OrderedDict
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from cartledger.audit import AuditLogger
from cartledger.config import CartSettings, get_settings
from cartledger.exceptions import (
    CartError,
    CorruptLedgerRecord,
    InsufficientStock,
    InvalidQuantity,
    SkuNotFound,
    StorageError,
    ValidationError,
)
from cartledger.models.entry import CartSummary, Entry, Lot, RawRecord
from cartledger.queries import build_summary, cart_total
from cartledger.reconciliation import entries_by_sku, remaining_lots_by_sku
from cartledger.services.storage import FlatFileLedgerStorage, LedgerStorageInterface
from cartledger.validation import EntryNormalizer, parse_currency, parse_price


HELP = OrderedDict([
    ("add", "SKU QUANTITY DESCRIPTION PRICE CURRENCY"),
    ("remove", "SKU QUANTITY"),
    ("view", "[--detail]"),
    ("init", ""),
    ("help", ""),
])


def _positive_int(value: Union[int, str]) -> int:
    try:
        quantity = int(str(value).strip())
    except ValueError:
        raise InvalidQuantity(value)
    if quantity <= 0:
        raise InvalidQuantity(value)
    return quantity


class Cart:
    """
    One ledger session: the entry log plus add/remove/total.
    
    Creating a Cart loads the whole ledger. A StorageError raised here is
    fatal; no operation should be served from a cart that failed to load.
    """
    
    def __init__(
        self,
        storage: LedgerStorageInterface,
        normalizer: Optional[EntryNormalizer] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._normalizer = normalizer or EntryNormalizer(audit_logger)
        self._entries: list[Entry] = []
        
        self._load()
    
    def _load(self) -> None:
        try:
            records = self._storage.load()
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(e)
            raise
        
        entries = []
        for line_number, record in enumerate(records, start=1):
            try:
                entries.append(self._normalizer.normalize(record))
            except ValidationError as e:
                error = CorruptLedgerRecord(line_number, e)
                if self._audit_logger:
                    self._audit_logger.log_storage_error(error)
                raise error from e
        
        self._entries = entries
        
        if self._audit_logger:
            self._audit_logger.log_ledger_loaded(
                path=self._storage.location,
                entry_count=len(entries),
            )
    
    @property
    def entries(self) -> tuple[Entry, ...]:
        """The in-memory log, oldest first."""
        return tuple(self._entries)
    
    def _commit(self, record: RawRecord, entry: Entry) -> None:
        try:
            self._storage.append(record)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(e)
            raise
        self._entries.append(entry)
    
    def _rejected(self, operation: str, sku: Optional[str], error: CartError) -> None:
        if self._audit_logger:
            self._audit_logger.log_entry_rejected(operation, sku, error)
    
    # =========================================================================
    # OPERATIONS
    # =========================================================================
    
    def add_to_cart(
        self,
        sku: str,
        description: str,
        quantity: Union[int, str],
        price: Union[Decimal, float, str],
        currency: str,
    ) -> Entry:
        """
        Add a lot of stock.
        
        Raises:
            InvalidQuantity: quantity is not a positive integer
            InvalidPrice: price is not a positive number
            ValidationError: any other normalization failure
            StorageError: the ledger could not be appended to
        """
        try:
            quantity = _positive_int(quantity)
            price = parse_price(price)
            currency = parse_currency(currency).value
            
            record = RawRecord(
                sku=str(sku).strip(),
                quantity=str(quantity),
                description=str(description).strip(),
                price=str(price),
                currency=currency,
            )
            entry = self._normalizer.normalize(record)
        except ValidationError as e:
            self._rejected("add", sku, e)
            raise
        
        self._commit(record, entry)
        
        if self._audit_logger:
            self._audit_logger.log_entry_added(
                sku=entry.sku,
                quantity=entry.quantity,
                unit_price=entry.unit_price,
            )
        return entry
    
    def remove_from_cart(self, sku: str, quantity: Union[int, str]) -> Entry:
        """
        Remove stock from a SKU.
        
        The request is checked against the signed sum of every quantity
        recorded for the SKU so far (additions minus earlier removals).
        
        Raises:
            InvalidQuantity: quantity is not a positive integer
            SkuNotFound: the SKU has no entries
            InsufficientStock: more requested than recorded
            StorageError: the ledger could not be appended to
        """
        sku = str(sku).strip()
        try:
            quantity = _positive_int(quantity)
            
            sku_entries = entries_by_sku(self._entries).get(sku)
            if not sku_entries:
                raise SkuNotFound(sku)
            
            stock = sum(entry.quantity for entry in sku_entries)
            if stock < quantity:
                raise InsufficientStock(sku, requested=quantity, available=stock)
            
            record = RawRecord(sku=sku, quantity=str(-abs(quantity)))
            entry = self._normalizer.normalize(record)
        except CartError as e:
            self._rejected("remove", sku, e)
            raise
        
        self._commit(record, entry)
        
        if self._audit_logger:
            self._audit_logger.log_entry_removed(sku=sku, quantity=quantity)
        return entry
    
    def remaining_lots(self) -> "OrderedDict[str, list[Lot]]":
        """Unconsumed lots per SKU, after FIFO matching."""
        return remaining_lots_by_sku(self._entries)
    
    def total(self) -> Decimal:
        """Value of everything left in the cart, in the reporting currency."""
        lots_by_sku = self.remaining_lots()
        total = cart_total(lots_by_sku)
        
        if self._audit_logger:
            self._audit_logger.log_total_computed(total=total, sku_count=len(lots_by_sku))
        return total
    
    def summary(self) -> CartSummary:
        """Per-SKU breakdown of remaining stock and value."""
        return build_summary(self.remaining_lots())
    
    @staticmethod
    def get_help() -> "OrderedDict[str, str]":
        return OrderedDict(HELP)


def create_cart(
    settings: Optional[CartSettings] = None,
    ledger_path: Optional[Union[str, Path]] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> Cart:
    """
    Factory function to create a cart backed by the ledger file.
    
    Args:
        settings: Settings to read the ledger path from (defaults to
                 get_settings())
        ledger_path: Overrides settings.ledger_path when given
        audit_logger: Audit logger to use (a new one by default)
    
    Raises:
        StorageError: If the ledger cannot be opened or is corrupt
    """
    settings = settings or get_settings()
    path = Path(ledger_path) if ledger_path is not None else settings.ledger_path
    
    return Cart(
        storage=FlatFileLedgerStorage(path),
        audit_logger=audit_logger or AuditLogger(),
    )
