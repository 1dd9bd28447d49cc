"""
Total Aggregation

Deterministic sums over reconciled lots. Everything here is in the
reporting currency because every stored price already is.
"""

from decimal import Decimal
from typing import Iterable, Mapping

from cartledger.models.entry import CartSummary, Lot, SkuSummary


def lots_value(lots: Iterable[Lot]) -> Decimal:
    """Sum of quantity x unit price over the given lots."""
    return sum((lot.value for lot in lots), Decimal("0"))


def cart_total(lots_by_sku: Mapping[str, Iterable[Lot]]) -> Decimal:
    """Grand total over all SKUs."""
    return sum(
        (lots_value(lots) for lots in lots_by_sku.values()),
        Decimal("0"),
    )


def build_summary(lots_by_sku: Mapping[str, list[Lot]]) -> CartSummary:
    """
    Per-SKU breakdown plus grand total.
    
    SKUs with nothing left are omitted from the breakdown.
    """
    skus = []
    for sku, lots in lots_by_sku.items():
        if not lots:
            continue
        skus.append(SkuSummary(
            sku=sku,
            quantity=sum(lot.quantity for lot in lots),
            value=lots_value(lots),
            lots=list(lots),
        ))
    
    return CartSummary(
        skus=skus,
        total=sum((item.value for item in skus), Decimal("0")),
    )
