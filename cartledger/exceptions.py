"""
Typed Exception Hierarchy for the Cart Ledger

Every failure the ledger can report has its own exception class with a
machine-readable ``code`` and the offending values as attributes, so
callers catch by type rather than by message.

    CartError (base)
    |
    +-- StorageError
    |   +-- StorageUnavailable      (fatal at startup)
    |   +-- StorageWriteError
    |   +-- CorruptLedgerRecord     (fatal at startup)
    |
    +-- ValidationError
    |   +-- MissingSku
    |   +-- ZeroOrInvalidQuantity
    |   +-- InvalidQuantity
    |   +-- InvalidPrice
    |   +-- InvalidCurrency
    |
    +-- SkuNotFound
    +-- InsufficientStock

Storage failures while loading abort the process. Everything else is
recoverable at the CLI boundary: the operation is rejected and the ledger
is left exactly as it was.
"""

from pathlib import Path
from typing import Optional, Union


class CartError(Exception):
    """Base exception for all cart ledger errors."""

    code: str = "CART_ERROR"


# =============================================================================
# STORAGE
# =============================================================================

class StorageError(CartError):
    """Base exception for storage operations."""

    code: str = "STORAGE_ERROR"


class StorageUnavailable(StorageError):
    """The ledger file is missing or not writable."""

    code: str = "STORAGE_UNAVAILABLE"

    def __init__(self, path: Path, reason: str = "not found or it is not writable"):
        self.path = path
        self.reason = reason
        super().__init__(f"Ledger file '{path}' {reason}")


class StorageWriteError(StorageError):
    """Appending a record to the ledger failed."""

    code: str = "STORAGE_WRITE_FAILED"

    def __init__(self, path: Union[str, Path], error: str):
        self.path = path
        self.error = error
        super().__init__(f"Could not write to ledger file '{path}': {error}")


class CorruptLedgerRecord(StorageError):
    """A stored line does not normalize into a valid entry."""

    code: str = "CORRUPT_LEDGER_RECORD"

    def __init__(self, line_number: int, cause: "ValidationError"):
        self.line_number = line_number
        self.cause = cause
        super().__init__(f"Ledger line {line_number} is invalid: {cause}")


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationError(CartError):
    """Base exception for entry validation."""

    code: str = "VALIDATION_ERROR"


class MissingSku(ValidationError):
    code: str = "MISSING_SKU"

    def __init__(self):
        super().__init__("No SKU")


class ZeroOrInvalidQuantity(ValidationError):
    code: str = "ZERO_OR_INVALID_QUANTITY"

    def __init__(self, quantity: object = None):
        self.quantity = quantity
        super().__init__("Quantity should not be zero")


class InvalidQuantity(ValidationError):
    """Quantity passed to add/remove must be a positive integer."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: object = None):
        self.quantity = quantity
        super().__init__("Quantity parameter invalid.")


class InvalidPrice(ValidationError):
    code: str = "INVALID_PRICE"

    def __init__(self, price: object = None):
        self.price = price
        super().__init__("Price parameter invalid.")


class InvalidCurrency(ValidationError):
    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: Optional[str], allowed: tuple[str, ...] = ()):
        self.currency = currency
        self.allowed = allowed
        message = "Currency parameter invalid"
        if allowed:
            message = f"Currency should be one of the following: {', '.join(allowed)}"
        super().__init__(message)


# =============================================================================
# BUSINESS RULES
# =============================================================================

class SkuNotFound(CartError):
    code: str = "SKU_NOT_FOUND"

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__("SKU not found.")


class InsufficientStock(CartError):
    """Removal request exceeds the stock recorded for the SKU."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, sku: str, requested: int, available: int):
        self.sku = sku
        self.requested = requested
        self.available = available
        super().__init__("Not enough in stock.")
