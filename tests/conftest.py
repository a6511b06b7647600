"""
Pytest fixtures shared across the service test suites.

Provides:
- A controllable nanosecond clock
- A fresh InventoryStore wired to that clock
- Helpers for building item arguments relative to the clock
"""

import pytest

from inventory_service.schemas import Category
from inventory_service.status import NANOS_PER_DAY, StatusPolicy
from inventory_service.store import InventoryStore

# 2026-01-01T00:00:00Z in nanoseconds
NOW = 1_767_225_600 * 1_000_000_000
DAY = NANOS_PER_DAY


class FakeClock:
    """Deterministic clock returning nanoseconds since the epoch."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int):
        self.now += nanos


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InventoryStore(policy=StatusPolicy(), clock=clock)


def item_args(item_id="A1", **overrides) -> dict:
    """Valid add_or_update keyword arguments, 30 days from NOW and well stocked."""
    args = {
        "item_id": item_id,
        "barcode": f"bc-{item_id}",
        "name": f"Item {item_id}",
        "category": None,
        "quantity": 50,
        "expiration_date": NOW + 30 * DAY,
        "price": 4.99,
        "actor": "clerk",
    }
    args.update(overrides)
    return args


@pytest.fixture
def populated_store(store):
    """Five items with mixed categories, stock and freshness."""
    store.add_or_update(**item_args("A1", barcode="123", name="Milk", category=Category.DAIRY,
                                    quantity=5, expiration_date=NOW + 2 * DAY, price=3.5))
    store.add_or_update(**item_args("A2", barcode="456", name="Whole Wheat Bread", category=Category.BAKERY,
                                    quantity=40, expiration_date=NOW + 3 * DAY, price=2.25))
    store.add_or_update(**item_args("A3", barcode="789", name="Apples", category=Category.PRODUCE,
                                    quantity=120, expiration_date=NOW + 20 * DAY, price=0.8))
    store.add_or_update(**item_args("A4", barcode="1234", name="Ground Beef", category=Category.MEAT,
                                    quantity=0, expiration_date=NOW - DAY, price=8.0))
    store.add_or_update(**item_args("A5", barcode="999", name="Chocolate Milk", category=Category.DAIRY,
                                    quantity=30, expiration_date=NOW - 2 * DAY, price=1.75))
    return store
