"""
FIFO Reconciliation

Derives what is still in the cart from the append-only entry log.

For each SKU, every removal is summed into one amount to consume. That
amount is then eaten from the SKU's additions oldest first:

    additions  [10 @ 1.00, 5 @ 2.00]    removals [-12]
    to consume 12 -> first lot gone (2 left) -> second lot 5 - 2 = 3
    remaining  [3 @ 2.00]

Removals are matched against the total, not in event-time order: a
removal recorded before a later addition still consumes from the oldest
lot. A ledger that removes more than it ever added simply ends with no
lots for that SKU; a negative lot is never produced.
"""

from collections import OrderedDict
from typing import Iterable

from cartledger.models.entry import Entry, Lot


def entries_by_sku(entries: Iterable[Entry]) -> "OrderedDict[str, list[Entry]]":
    """
    Group entries by SKU.
    
    SKUs appear in order of first appearance, entries keep their
    original order within each group.
    """
    grouped: "OrderedDict[str, list[Entry]]" = OrderedDict()
    for entry in entries:
        grouped.setdefault(entry.sku, []).append(entry)
    return grouped


def remaining_lots(entries: Iterable[Entry]) -> list[Lot]:
    """Remaining lots for a single SKU's entries, oldest first."""
    entries = list(entries)
    
    to_consume = sum(abs(entry.quantity) for entry in entries if entry.is_removal)
    
    lots = []
    for entry in entries:
        if entry.is_removal:
            continue
        
        if to_consume == 0:
            lots.append(Lot.from_entry(entry))
            continue
        
        if to_consume >= entry.quantity:
            to_consume -= entry.quantity
            continue
        
        lots.append(Lot.from_entry(entry, quantity=entry.quantity - to_consume))
        to_consume = 0
    
    return lots


def remaining_lots_by_sku(entries: Iterable[Entry]) -> "OrderedDict[str, list[Lot]]":
    """
    Remaining lots for every SKU in the log.
    
    Every SKU that appears in the log has a key, even when all of its
    stock has been consumed (empty list).
    """
    return OrderedDict(
        (sku, remaining_lots(sku_entries))
        for sku, sku_entries in entries_by_sku(entries).items()
    )
