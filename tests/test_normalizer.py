"""Tests for entry normalization and currency conversion."""

import pytest
from decimal import Decimal

from cartledger.exceptions import (
    InvalidCurrency,
    InvalidPrice,
    MissingSku,
    ValidationError,
    ZeroOrInvalidQuantity,
)
from cartledger.models.entry import Currency, RawRecord
from cartledger.validation import (
    EntryNormalizer,
    convert_to_reporting_currency,
    parse_currency,
    parse_price,
    parse_quantity,
)
from cartledger.validation.normalizer import MAX_PRICE


@pytest.fixture
def normalizer():
    return EntryNormalizer()


class TestParsing:
    """Tests for the field parsers."""
    
    @pytest.mark.parametrize("value,expected", [
        ("5", 5),
        (" 12 ", 12),
        ("-3", -3),
        ("+7", 7),
        (4, 4),
    ])
    def test_parse_quantity(self, value, expected):
        assert parse_quantity(value) == expected
    
    @pytest.mark.parametrize("value", ["0", "", "abc", "1.5", "-0", 0, True])
    def test_parse_quantity_rejects(self, value):
        with pytest.raises(ZeroOrInvalidQuantity):
            parse_quantity(value)
    
    def test_parse_price(self):
        assert parse_price("19.99") == Decimal("19.99")
        assert parse_price(" 5 ") == Decimal("5")
    
    def test_parse_price_exponent_form(self):
        """Test scientific notation is read as a plain amount."""
        assert parse_price("1e2") == Decimal("100")
    
    def test_parse_price_upper_bound(self):
        assert parse_price(str(MAX_PRICE)) == MAX_PRICE
        with pytest.raises(InvalidPrice):
            parse_price(str(MAX_PRICE + 1))
    
    @pytest.mark.parametrize("value", ["0", "-1", "", "free", "NaN", "Infinity", "1e30"])
    def test_parse_price_rejects(self, value):
        with pytest.raises(InvalidPrice):
            parse_price(value)
    
    def test_parse_currency_uppercases(self):
        assert parse_currency(" usd ") == Currency.USD
    
    def test_parse_currency_rejects_unknown(self):
        """Test the error names the accepted codes."""
        with pytest.raises(InvalidCurrency, match="EUR, GBP, USD"):
            parse_currency("JPY")


class TestCurrencyConversion:
    """Tests for conversion into the reporting currency."""
    
    def test_usd_conversion(self):
        """Test 100 USD is 87.72 EUR."""
        assert convert_to_reporting_currency(Decimal("100"), "USD") == Decimal("87.72")
    
    def test_gbp_conversion(self):
        assert convert_to_reporting_currency(Decimal("10"), Currency.GBP) == Decimal("11.36")
    
    def test_rate_inverse(self):
        """Test one unit of rate converts to exactly one EUR."""
        assert convert_to_reporting_currency(Decimal("1.14"), "USD") == Decimal("1.00")
        assert convert_to_reporting_currency(Decimal("0.88"), "GBP") == Decimal("1.00")
    
    def test_reporting_currency_unchanged(self):
        """Test EUR amounts are returned as given."""
        assert convert_to_reporting_currency(Decimal("3.333"), "EUR") == Decimal("3.333")
    
    def test_non_positive_amount_rejected(self):
        with pytest.raises(InvalidCurrency):
            convert_to_reporting_currency(Decimal("0"), "USD")
    
    def test_amount_rounding_to_zero_rejected(self):
        """Test a positive amount worth less than half a cent is refused."""
        with pytest.raises(InvalidPrice):
            convert_to_reporting_currency(Decimal("0.001"), "USD")
    
    def test_smallest_convertible_amount(self):
        assert convert_to_reporting_currency(Decimal("0.01"), "USD") == Decimal("0.01")
    
    def test_unknown_currency_rejected(self):
        with pytest.raises(InvalidCurrency):
            convert_to_reporting_currency(Decimal("1"), "XXX")


class TestEntryNormalizer:
    """Tests for EntryNormalizer.normalize."""
    
    def test_addition_is_trimmed_and_typed(self, normalizer):
        entry = normalizer.normalize(RawRecord(
            sku="  A1 ",
            quantity=" 2 ",
            description="  Blue mug ",
            price=" 4.50 ",
            currency=" eur ",
        ))
        assert entry.sku == "A1"
        assert entry.quantity == 2
        assert entry.description == "Blue mug"
        assert entry.unit_price == Decimal("4.50")
        assert entry.currency == Currency.EUR
    
    def test_addition_in_foreign_currency_is_converted(self, normalizer):
        """Test the original currency is not retained."""
        entry = normalizer.normalize(RawRecord(
            sku="Y", quantity="1", price="100", currency="USD",
        ))
        assert entry.unit_price == Decimal("87.72")
        assert entry.currency == Currency.EUR
    
    def test_removal_discards_other_fields(self, normalizer):
        """Test removals keep only sku and quantity."""
        entry = normalizer.normalize(RawRecord(
            sku="A1", quantity="-4", description="ignored", price="9", currency="XXX",
        ))
        assert entry.quantity == -4
        assert entry.description == ""
        assert entry.unit_price is None
        assert entry.currency is None
    
    def test_missing_sku(self, normalizer):
        with pytest.raises(MissingSku, match="No SKU"):
            normalizer.normalize(RawRecord(sku="   ", quantity="1", price="1", currency="EUR"))
    
    def test_zero_quantity(self, normalizer):
        with pytest.raises(ZeroOrInvalidQuantity, match="should not be zero"):
            normalizer.normalize(RawRecord(sku="A1", quantity="0", price="1", currency="EUR"))
    
    def test_invalid_price(self, normalizer):
        with pytest.raises(InvalidPrice):
            normalizer.normalize(RawRecord(sku="A1", quantity="1", price="-2", currency="EUR"))
    
    def test_invalid_currency(self, normalizer):
        with pytest.raises(InvalidCurrency):
            normalizer.normalize(RawRecord(sku="A1", quantity="1", price="2", currency="BTC"))
    
    def test_price_too_small_after_conversion(self, normalizer):
        with pytest.raises(InvalidPrice):
            normalizer.normalize(RawRecord(sku="Y", quantity="1", price="0.001", currency="USD"))
    
    @pytest.mark.parametrize("currency", ["EUR", "USD"])
    def test_price_too_large(self, normalizer, currency):
        with pytest.raises(InvalidPrice):
            normalizer.normalize(RawRecord(sku="Y", quantity="1", price="1E+30", currency=currency))
    
    def test_all_failures_are_validation_errors(self, normalizer):
        """Test callers can catch every rejection with one type."""
        with pytest.raises(ValidationError):
            normalizer.normalize(RawRecord(sku="A1", quantity="x"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
