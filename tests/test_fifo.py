"""Tests for FIFO reconciliation and totals."""

import pytest
from decimal import Decimal

from cartledger.models.entry import Currency, Entry
from cartledger.queries import build_summary, cart_total
from cartledger.reconciliation import (
    entries_by_sku,
    remaining_lots,
    remaining_lots_by_sku,
)


def add(sku, quantity, price):
    return Entry(
        sku=sku,
        quantity=quantity,
        unit_price=Decimal(price),
        currency=Currency.EUR,
    )


def remove(sku, quantity):
    return Entry(sku=sku, quantity=-quantity)


class TestGrouping:
    
    def test_entries_by_sku_keeps_order(self):
        """Test SKUs keep first-seen order and entries keep log order."""
        log = [add("B", 1, "1"), add("A", 2, "1"), remove("B", 1), add("B", 3, "2")]
        grouped = entries_by_sku(log)
        assert list(grouped) == ["B", "A"]
        assert [e.quantity for e in grouped["B"]] == [1, -1, 3]


class TestRemainingLots:
    """Tests for the FIFO matching rule."""
    
    def test_fifo_consumes_oldest_lot_first(self):
        """Test 10 @ 1.00 and 5 @ 2.00 minus 12 leaves 3 @ 2.00."""
        lots = remaining_lots([add("X", 10, "1.00"), add("X", 5, "2.00"), remove("X", 12)])
        assert len(lots) == 1
        assert lots[0].quantity == 3
        assert lots[0].unit_price == Decimal("2.00")
    
    def test_no_removals_keeps_everything(self):
        lots = remaining_lots([add("X", 2, "1"), add("X", 4, "3")])
        assert [lot.quantity for lot in lots] == [2, 4]
    
    def test_exact_consumption_drops_lot(self):
        lots = remaining_lots([add("X", 5, "1"), add("X", 5, "2"), remove("X", 5)])
        assert [(lot.quantity, lot.unit_price) for lot in lots] == [(5, Decimal("2"))]
    
    def test_removals_are_matched_against_total_not_event_time(self):
        """Test a removal logged before a later addition still eats the oldest lot."""
        log = [add("X", 4, "1"), remove("X", 3), add("X", 6, "2"), remove("X", 2)]
        lots = remaining_lots(log)
        assert [(lot.quantity, lot.unit_price) for lot in lots] == [(5, Decimal("2"))]
    
    def test_over_consumption_yields_no_negative_lot(self):
        """Test a malformed ledger ends with nothing rather than negative stock."""
        lots = remaining_lots([add("X", 2, "1"), remove("X", 5)])
        assert lots == []
    
    def test_all_consumed_sku_is_still_keyed(self):
        lots_by_sku = remaining_lots_by_sku([add("X", 1, "1"), remove("X", 1), add("Y", 1, "3")])
        assert lots_by_sku["X"] == []
        assert lots_by_sku["Y"][0].quantity == 1
    
    def test_skus_do_not_interfere(self):
        log = [add("X", 3, "1"), add("Y", 3, "5"), remove("Y", 2)]
        lots_by_sku = remaining_lots_by_sku(log)
        assert lots_by_sku["X"][0].quantity == 3
        assert lots_by_sku["Y"][0].quantity == 1


class TestTotals:
    """Tests for aggregation over remaining lots."""
    
    def test_total_of_fifo_example(self):
        log = [add("X", 10, "1.00"), add("X", 5, "2.00"), remove("X", 12)]
        assert cart_total(remaining_lots_by_sku(log)) == Decimal("6.00")
    
    def test_total_across_skus(self):
        log = [add("X", 2, "1.50"), add("Y", 1, "87.72"), remove("X", 1)]
        assert cart_total(remaining_lots_by_sku(log)) == Decimal("89.22")
    
    def test_empty_total(self):
        assert cart_total({}) == Decimal("0")
    
    def test_summary_skips_empty_skus(self):
        log = [add("X", 1, "1"), remove("X", 1), add("Y", 2, "3"), add("Y", 1, "4")]
        summary = build_summary(remaining_lots_by_sku(log))
        assert summary.sku_count == 1
        assert summary.skus[0].sku == "Y"
        assert summary.skus[0].quantity == 3
        assert summary.skus[0].value == Decimal("10")
        assert summary.total == Decimal("10")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
