"""
Core Data Models for the Cart Ledger

These models define the strict schemas for everything that flows from the
ledger file to the cart total:

    RawRecord  -> what storage hands us (strings, unvalidated)
    Entry      -> one normalized ledger record (reporting currency)
    Lot        -> derived remaining stock of one addition after FIFO
    CartSummary -> the reporting view

DESIGN DECISION: RawRecord fields are always in the canonical in-memory
order (sku, quantity, description, price, currency). Any different order
on disk is the storage adapter's problem, never the core's.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)


# =============================================================================
# CURRENCIES - fixed, process-wide
# =============================================================================

class Currency(str, Enum):
    """Currencies the ledger accepts."""
    EUR = "EUR"
    GBP = "GBP"
    USD = "USD"


REPORTING_CURRENCY = Currency.EUR

# Units of each currency per one unit of the reporting currency:
# an amount in GBP divided by 0.88 gives the EUR amount.
CURRENCY_RATES: Mapping[Currency, Decimal] = MappingProxyType({
    Currency.EUR: Decimal("1.00"),
    Currency.GBP: Decimal("0.88"),
    Currency.USD: Decimal("1.14"),
})

CENT = Decimal("0.01")


def quantize_money(amount: Decimal) -> Decimal:
    """Round a monetary amount half-up to two fractional digits."""
    with localcontext() as ctx:
        # Room for every integer digit plus the two cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class RawRecord(BaseModel):
    """
    One ledger record as text fields, before validation.
    
    Removal records leave description, price and currency empty.
    """
    model_config = ConfigDict(frozen=True)
    
    sku: str = ""
    quantity: str = ""
    description: str = ""
    price: str = ""
    currency: str = ""


class Entry(BaseModel):
    """
    A normalized ledger entry.
    
    Positive quantity adds a lot at unit_price (always in the reporting
    currency). Negative quantity removes stock and carries nothing else.
    """
    model_config = ConfigDict(frozen=True)
    
    sku: str = Field(..., min_length=1)
    quantity: int
    description: str = ""
    unit_price: Optional[Decimal] = None
    currency: Optional[Currency] = None
    
    @model_validator(mode='after')
    def validate_invariants(self) -> 'Entry':
        if self.quantity == 0:
            raise ValueError("Entry quantity cannot be zero")
        
        if self.quantity < 0:
            if self.description or self.unit_price is not None or self.currency is not None:
                raise ValueError("Removal entries carry only sku and quantity")
            return self
        
        if self.unit_price is None or self.unit_price <= 0:
            raise ValueError("Addition entries need a positive unit price")
        if self.currency != REPORTING_CURRENCY:
            raise ValueError(
                f"Addition entries must be stored in {REPORTING_CURRENCY.value}"
            )
        return self
    
    @property
    def is_addition(self) -> bool:
        return self.quantity > 0
    
    @property
    def is_removal(self) -> bool:
        return self.quantity < 0


class Lot(BaseModel):
    """Remaining, unconsumed stock of one addition entry."""
    model_config = ConfigDict(frozen=True)
    
    sku: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., gt=0)
    description: str = ""
    
    @property
    def value(self) -> Decimal:
        return self.quantity * self.unit_price
    
    @classmethod
    def from_entry(cls, entry: Entry, quantity: Optional[int] = None) -> 'Lot':
        return cls(
            sku=entry.sku,
            quantity=entry.quantity if quantity is None else quantity,
            unit_price=entry.unit_price,
            description=entry.description,
        )


# =============================================================================
# REPORTING
# =============================================================================

class SkuSummary(BaseModel):
    """Remaining stock and value for one SKU."""
    
    sku: str
    quantity: int = Field(..., ge=0)
    value: Decimal = Field(..., ge=0)
    lots: list[Lot] = Field(default_factory=list)


class CartSummary(BaseModel):
    """Per-SKU breakdown and grand total, in the reporting currency."""
    
    currency: Currency = REPORTING_CURRENCY
    skus: list[SkuSummary] = Field(default_factory=list)
    total: Decimal = Decimal("0")
    
    @computed_field
    @property
    def sku_count(self) -> int:
        return len(self.skus)
