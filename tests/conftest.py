"""
Shared fixtures for the cart ledger test suite.

No test touches the real tmp/cart.txt: file-backed tests use pytest's
tmp_path, everything else uses InMemoryLedgerStorage.
"""

import pytest

from cartledger.config import get_settings
from cartledger.models.entry import RawRecord
from cartledger.orchestrator import Cart
from cartledger.services.storage import InMemoryLedgerStorage


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env."""
    for name in ("CART_LEDGER_PATH", "CART_LOG_LEVEL", "CART_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger_file(tmp_path):
    """An empty, writable ledger file."""
    path = tmp_path / "cart.txt"
    path.touch()
    return path


@pytest.fixture
def memory_storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def cart(memory_storage):
    """An empty cart backed by memory."""
    return Cart(memory_storage)


def addition(sku, quantity, price, currency="EUR", description=""):
    """RawRecord for an addition, in canonical field order."""
    return RawRecord(
        sku=sku,
        quantity=str(quantity),
        description=description,
        price=str(price),
        currency=currency,
    )


def removal(sku, quantity):
    return RawRecord(sku=sku, quantity=str(-abs(quantity)))
