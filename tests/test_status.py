"""
Tests for status derivation.

Verifies:
- Each status in isolation
- Precedence: stock conditions beat freshness
- Threshold boundaries and custom policies
"""

import pytest

from inventory_service.schemas import ItemStatus
from inventory_service.status import StatusPolicy, derive_status

from conftest import DAY, NOW


class TestDeriveStatus:
    """Tests for derive_status with the default policy."""

    def test_active(self):
        assert derive_status(50, NOW + 30 * DAY, NOW) == ItemStatus.ACTIVE

    def test_out_of_stock(self):
        assert derive_status(0, NOW + 30 * DAY, NOW) == ItemStatus.OUT_OF_STOCK

    def test_low_stock_at_threshold(self):
        assert derive_status(10, NOW + 30 * DAY, NOW) == ItemStatus.LOW_STOCK

    def test_above_threshold_is_not_low_stock(self):
        assert derive_status(11, NOW + 30 * DAY, NOW) == ItemStatus.ACTIVE

    def test_expired_at_now(self):
        """Expiration exactly at now counts as expired."""
        assert derive_status(50, NOW, NOW) == ItemStatus.EXPIRED

    def test_expiring_soon_at_window_edge(self):
        assert derive_status(50, NOW + 7 * DAY, NOW) == ItemStatus.EXPIRING_SOON

    def test_just_outside_window_is_active(self):
        assert derive_status(50, NOW + 7 * DAY + 1, NOW) == ItemStatus.ACTIVE


class TestStatusPrecedence:
    """Stock-out and low stock are not masked by freshness."""

    def test_out_of_stock_beats_expired(self):
        assert derive_status(0, NOW - DAY, NOW) == ItemStatus.OUT_OF_STOCK

    def test_low_stock_beats_expiring_soon(self):
        assert derive_status(5, NOW + 2 * DAY, NOW) == ItemStatus.LOW_STOCK

    def test_low_stock_beats_expired(self):
        assert derive_status(3, NOW - DAY, NOW) == ItemStatus.LOW_STOCK

    def test_expired_beats_expiring_soon(self):
        assert derive_status(50, NOW - 1, NOW) == ItemStatus.EXPIRED


class TestStatusPolicy:
    """Tests for custom thresholds."""

    def test_from_days(self):
        policy = StatusPolicy.from_days(low_stock_threshold=3, expiring_soon_days=1)
        assert policy.low_stock_threshold == 3
        assert policy.expiring_soon_window == DAY

    @pytest.mark.parametrize(
        "quantity, expiration, expected",
        [
            (3, NOW + 30 * DAY, ItemStatus.LOW_STOCK),
            (4, NOW + 30 * DAY, ItemStatus.ACTIVE),
            (4, NOW + DAY, ItemStatus.EXPIRING_SOON),
            (4, NOW + 2 * DAY, ItemStatus.ACTIVE),
        ],
    )
    def test_custom_policy(self, quantity, expiration, expected):
        policy = StatusPolicy.from_days(low_stock_threshold=3, expiring_soon_days=1)
        assert derive_status(quantity, expiration, NOW, policy) == expected
