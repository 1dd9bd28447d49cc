"""
Entry Normalizer

Turns a RawRecord (strings, as typed by a user or read from disk) into a
validated Entry in the reporting currency.

Checks, in order:
1. SKU present
2. Quantity is a non-zero integer
3. Removals (quantity < 0): everything but sku/quantity is discarded
4. Additions: price > 0, currency recognized, amount converted

IMPORTANT: Normalization is all-or-nothing. It either returns a complete
Entry or raises a ValidationError; it never touches shared state, so a
rejected record leaves the cart exactly as it was.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import ValidationError as ModelValidationError

from cartledger.audit import AuditLogger
from cartledger.exceptions import (
    InvalidCurrency,
    InvalidPrice,
    MissingSku,
    ValidationError,
    ZeroOrInvalidQuantity,
)
from cartledger.models.entry import (
    CURRENCY_RATES,
    REPORTING_CURRENCY,
    Currency,
    Entry,
    RawRecord,
    quantize_money,
)


_INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Largest accepted unit price, in any currency
MAX_PRICE = Decimal("1000000000")


def parse_quantity(value: Union[str, int]) -> int:
    """Parse a signed, non-zero integer quantity."""
    if isinstance(value, bool):
        raise ZeroOrInvalidQuantity(value)
    if isinstance(value, int):
        quantity = value
    else:
        text = str(value).strip()
        if not _INTEGER_RE.match(text):
            raise ZeroOrInvalidQuantity(value)
        quantity = int(text)
    
    if quantity == 0:
        raise ZeroOrInvalidQuantity(value)
    return quantity


def parse_price(value: Union[str, Decimal, int, float]) -> Decimal:
    """Parse a strictly positive, finite decimal price up to MAX_PRICE."""
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidPrice(value)
    
    if not price.is_finite() or price <= 0 or price > MAX_PRICE:
        raise InvalidPrice(value)
    return price


def parse_currency(value: Optional[str]) -> Currency:
    """Uppercase and look up a currency code."""
    code = (value or "").strip().upper()
    try:
        return Currency(code)
    except ValueError:
        raise InvalidCurrency(value, allowed=tuple(c.value for c in Currency))


def convert_to_reporting_currency(
    amount: Decimal,
    currency: Union[Currency, str],
) -> Decimal:
    """
    Convert an amount into the reporting currency.
    
    amount / rate, rounded half-up to cents. Amounts already in the
    reporting currency are returned untouched.
    
    Raises:
        InvalidCurrency: If amount is not positive or currency is unknown
        InvalidPrice: If the converted amount rounds to zero
    """
    if amount <= 0:
        raise InvalidCurrency(str(currency))
    
    try:
        currency = Currency(currency)
    except ValueError:
        raise InvalidCurrency(str(currency))
    
    if currency == REPORTING_CURRENCY:
        return amount
    
    rate = CURRENCY_RATES[currency]
    converted = quantize_money(amount * 100 / rate / 100)
    if converted <= 0:
        raise InvalidPrice(amount)
    return converted


class EntryNormalizer:
    """
    Validates and canonicalizes raw ledger records.
    """
    
    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger
    
    def normalize(self, raw: RawRecord) -> Entry:
        """
        Validate a raw record and build the Entry it describes.
        
        Raises:
            MissingSku, ZeroOrInvalidQuantity, InvalidPrice, InvalidCurrency
        """
        sku = raw.sku.strip()
        if not sku:
            raise MissingSku()
        
        quantity = parse_quantity(raw.quantity)
        
        if quantity < 0:
            return Entry(sku=sku, quantity=quantity)
        
        price = parse_price(raw.price)
        currency = parse_currency(raw.currency)
        
        unit_price = convert_to_reporting_currency(price, currency)
        if currency != REPORTING_CURRENCY and self._audit_logger:
            self._audit_logger.log_currency_converted(
                sku=sku,
                amount=price,
                currency=currency.value,
                converted=unit_price,
            )
        
        try:
            return Entry(
                sku=sku,
                quantity=quantity,
                description=raw.description.strip(),
                unit_price=unit_price,
                currency=REPORTING_CURRENCY,
            )
        except ModelValidationError as e:
            raise ValidationError(str(e)) from e
