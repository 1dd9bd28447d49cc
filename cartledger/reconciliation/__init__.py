"""FIFO reconciliation package."""

from cartledger.reconciliation.fifo import (
    entries_by_sku,
    remaining_lots,
    remaining_lots_by_sku,
)

__all__ = ["entries_by_sku", "remaining_lots", "remaining_lots_by_sku"]
