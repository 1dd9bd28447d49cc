"""
Audit Logger

Every change to the ledger, and every rejected change, is logged as one
structured line. Log output goes to stderr so it never mixes with the
CLI's answers on stdout.

The audit logger only observes: operations call it after their outcome
is decided, and nothing it logs feeds back into that outcome.
"""

import logging
import sys
from decimal import Decimal
from typing import Optional

import structlog

from cartledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def _configure_structlog(renderer) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Route structlog through stdlib logging from import time on
_configure_structlog(structlog.processors.JSONRenderer())


def configure_logging(level: str = "WARNING", fmt: str = "json") -> None:
    """
    Set the log level and renderer for the process.
    
    Args:
        level: Minimum stdlib level name (e.g. "INFO")
        fmt: "json" for machine-readable lines, "console" for humans
    """
    if fmt == "console":
        _configure_structlog(structlog.dev.ConsoleRenderer(colors=False))
    else:
        _configure_structlog(structlog.processors.JSONRenderer())
    
    # No-op when the root logger already has handlers (e.g. under pytest)
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.WARNING))


class AuditLogger:
    """
    Central audit logging service.
    
    Writes each AuditEvent at the stdlib level matching its severity.
    """
    
    def __init__(self, logger_name: str = "cartledger.audit"):
        self._logger = structlog.get_logger(logger_name)
    
    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()
        
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
    
    def log_ledger_loaded(self, path: str, entry_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(path=path, entry_count=entry_count))
    
    def log_entry_added(self, sku: str, quantity: int, unit_price: Decimal) -> None:
        """Log a successful addition."""
        self.log(AuditEventBuilder.entry_added(
            sku=sku,
            quantity=quantity,
            unit_price=unit_price,
        ))
    
    def log_entry_removed(self, sku: str, quantity: int) -> None:
        """Log a successful removal."""
        self.log(AuditEventBuilder.entry_removed(sku=sku, quantity=quantity))
    
    def log_entry_rejected(
        self,
        operation: str,
        sku: Optional[str],
        error: Exception,
    ) -> None:
        """Log an add/remove that was refused."""
        self.log(AuditEventBuilder.entry_rejected(
            operation=operation,
            sku=sku,
            error_code=getattr(error, "code", type(error).__name__),
            error_message=str(error),
        ))
    
    def log_currency_converted(
        self,
        sku: str,
        amount: Decimal,
        currency: str,
        converted: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.currency_converted(
            sku=sku,
            amount=amount,
            currency=currency,
            converted=converted,
        ))
    
    def log_storage_error(self, error: Exception) -> None:
        """Log a storage failure."""
        self.log(AuditEventBuilder.storage_error(
            error_code=getattr(error, "code", type(error).__name__),
            error_message=str(error),
        ))
    
    def log_total_computed(self, total: Decimal, sku_count: int) -> None:
        self.log(AuditEventBuilder.total_computed(total=total, sku_count=sku_count))
