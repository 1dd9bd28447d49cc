"""Cart total and summary queries."""

from cartledger.queries.totals import build_summary, cart_total, lots_value

__all__ = ["build_summary", "cart_total", "lots_value"]
