"""Entry validation package."""

from cartledger.validation.normalizer import (
    EntryNormalizer,
    convert_to_reporting_currency,
    parse_currency,
    parse_price,
    parse_quantity,
)

__all__ = [
    "EntryNormalizer",
    "convert_to_reporting_currency",
    "parse_currency",
    "parse_price",
    "parse_quantity",
]
