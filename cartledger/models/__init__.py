"""
Data Models Package

This package contains all Pydantic models used by the cart ledger.
"""

from cartledger.models.entry import (
    CURRENCY_RATES,
    REPORTING_CURRENCY,
    CartSummary,
    Currency,
    Entry,
    Lot,
    RawRecord,
    SkuSummary,
    quantize_money,
)
from cartledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CURRENCY_RATES",
    "REPORTING_CURRENCY",
    "CartSummary",
    "Currency",
    "Entry",
    "Lot",
    "RawRecord",
    "SkuSummary",
    "quantize_money",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
