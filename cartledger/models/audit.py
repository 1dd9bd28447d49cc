"""
Audit Models for the Cart Ledger

Every change to the ledger (and every rejected change) produces an audit
event. Events are emitted as structured log lines; they are never stored
in the ledger itself.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    LEDGER_LOADED = "ledger_loaded"
    ENTRY_ADDED = "entry_added"
    ENTRY_REMOVED = "entry_removed"
    ENTRY_REJECTED = "entry_rejected"
    CURRENCY_CONVERTED = "currency_converted"
    STORAGE_ERROR = "storage_error"
    TOTAL_COMPUTED = "total_computed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""
    
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    
    sku: Optional[str] = Field(
        default=None,
        description="SKU the event relates to, if any"
    )
    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "sku": self.sku,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.entry_added(sku, quantity, unit_price)
        event = AuditEventBuilder.entry_rejected("add", sku, error)
    """
    
    @staticmethod
    def ledger_loaded(path: str, entry_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Ledger loaded with {entry_count} entries",
            details={
                "path": path,
                "entry_count": entry_count,
            },
        )
    
    @staticmethod
    def entry_added(sku: str, quantity: int, unit_price: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            sku=sku,
            description=f"Added {quantity} x {sku}",
            details={
                "quantity": quantity,
                "unit_price": str(unit_price),
            },
        )
    
    @staticmethod
    def entry_removed(sku: str, quantity: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REMOVED,
            sku=sku,
            description=f"Removed {quantity} x {sku}",
            details={
                "quantity": quantity,
            },
        )
    
    @staticmethod
    def entry_rejected(
        operation: str,
        sku: Optional[str],
        error_code: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.WARNING,
            sku=sku or None,
            description=f"{operation.capitalize()} rejected",
            details={
                "operation": operation,
            },
            error_code=error_code,
            error_message=error_message,
        )
    
    @staticmethod
    def currency_converted(
        sku: str,
        amount: Decimal,
        currency: str,
        converted: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_CONVERTED,
            severity=AuditSeverity.DEBUG,
            sku=sku,
            description=f"Converted {amount} {currency} to {converted}",
            details={
                "amount": str(amount),
                "currency": currency,
                "converted": str(converted),
            },
        )
    
    @staticmethod
    def storage_error(error_code: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description="Ledger storage failure",
            error_code=error_code,
            error_message=error_message,
        )
    
    @staticmethod
    def total_computed(total: Decimal, sku_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOTAL_COMPUTED,
            severity=AuditSeverity.DEBUG,
            description=f"Cart total computed: {total}",
            details={
                "total": str(total),
                "sku_count": sku_count,
            },
        )
