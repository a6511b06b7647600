"""
Item status derivation.

Stock conditions are checked before freshness, so an empty shelf is reported
as OutOfStock even when the (absent) goods would also be expired.
"""
from dataclasses import dataclass

from .schemas import ItemStatus

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_DAY = 86_400 * NANOS_PER_SECOND

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_EXPIRING_SOON_WINDOW = 7 * NANOS_PER_DAY


@dataclass(frozen=True)
class StatusPolicy:
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    expiring_soon_window: int = DEFAULT_EXPIRING_SOON_WINDOW # nanoseconds

    @classmethod
    def from_days(cls, low_stock_threshold: int, expiring_soon_days: int) -> "StatusPolicy":
        return cls(
            low_stock_threshold=low_stock_threshold,
            expiring_soon_window=expiring_soon_days * NANOS_PER_DAY,
        )


def days_to_nanos(days: int) -> int:
    return days * NANOS_PER_DAY


def derive_status(
    quantity: int,
    expiration_date: int,
    now: int,
    policy: StatusPolicy = StatusPolicy(),
) -> ItemStatus:
    """
    Map (quantity, expiration, now) to a status. First match wins:
    OutOfStock, LowStock, Expired, ExpiringSoon, Active.
    """
    if quantity == 0:
        return ItemStatus.OUT_OF_STOCK
    if quantity <= policy.low_stock_threshold:
        return ItemStatus.LOW_STOCK
    if expiration_date <= now:
        return ItemStatus.EXPIRED
    if expiration_date <= now + policy.expiring_soon_window:
        return ItemStatus.EXPIRING_SOON
    return ItemStatus.ACTIVE
