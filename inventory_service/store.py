"""
In-memory inventory store.

Owns the item table, the barcode index and each item's audit trail. Every
mutator validates its whole input before touching state, then updates the
table and the index together, so a failed call leaves nothing behind.

Operations are synchronous and never suspend; one store instance is created
per service lifespan and shared by request handlers.
"""
import logging
import math
import time
from typing import Callable, Iterable

from shared.exceptions import NotFoundError, ValidationError

from . import config
from .barcode_index import BarcodeIndex
from .schemas import AuditLog, Category, InventoryItem, PaginatedResult, SearchCriteria
from .status import StatusPolicy, days_to_nanos, derive_status

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

# Mutable fields compared when describing an update in the audit trail
TRACKED_FIELDS = ("barcode", "name", "category", "quantity", "expiration_date", "price")

# Path segments the HTTP surface uses for collection queries under /items
RESERVED_ITEM_IDS = ("search", "expiring", "low-stock", "by-barcode")


def _render(value) -> str:
    if isinstance(value, Category):
        return value.value
    return str(value)


class InventoryStore:

    def __init__(self, policy: StatusPolicy | None = None, clock: Clock = time.time_ns):
        self.policy = policy or StatusPolicy()
        self.clock = clock
        self._items: dict[str, InventoryItem] = {}
        self._index = BarcodeIndex()

    def __len__(self) -> int:
        return len(self._items)

    def item_ids(self) -> list[str]:
        return list(self._items)

    # --- Mutators ---

    def add_or_update(
        self,
        item_id: str,
        barcode: str,
        name: str,
        category: Category | None,
        quantity: int,
        expiration_date: int,
        price: float,
        actor: str,
    ) -> str:
        """Create the item if absent, otherwise overwrite its mutable fields."""
        self._validate(item_id, barcode, name, quantity, price)

        now = self.clock()
        status = derive_status(quantity, expiration_date, now, self.policy)
        existing = self._items.get(item_id)

        if existing is None:
            entry = AuditLog(
                timestamp=now,
                action="create",
                details=f"Created item '{name}' (barcode {barcode}, quantity {quantity}, price {price:.2f})",
                actor=actor,
            )
            trail = [entry]
        else:
            changes = [
                f"{field}: {_render(getattr(existing, field))} -> {_render(new)}"
                for field, new in zip(
                    TRACKED_FIELDS, (barcode, name, category, quantity, expiration_date, price)
                )
                if getattr(existing, field) != new
            ]
            entry = AuditLog(
                timestamp=now,
                action="update",
                details="; ".join(changes) if changes else "no field changes",
                actor=actor,
            )
            trail = [*existing.audit_trail, entry]

        item = InventoryItem(
            item_id=item_id,
            barcode=barcode,
            name=name,
            category=category,
            quantity=quantity,
            expiration_date=expiration_date,
            price=price,
            last_updated=now,
            status=status,
            audit_trail=trail,
        )

        # Table and index change together; nothing below can fail.
        if existing is not None and existing.barcode != barcode:
            self._index.discard(existing.barcode)
        self._items[item_id] = item
        self._index.put(barcode, item_id)

        if existing is None:
            logger.info(f"Created item '{item_id}' with barcode {barcode}, status {status.value}")
            return f"Item '{item_id}' created."
        logger.info(f"Updated item '{item_id}': {entry.details}")
        return f"Item '{item_id}' updated."

    def remove(self, item_id: str) -> str:
        item = self._items.get(item_id)
        if item is None:
            logger.warning(f"Attempted to remove non-existent item '{item_id}'")
            raise NotFoundError(item_id, kind="item")
        del self._items[item_id]
        self._index.discard(item.barcode)
        logger.info(f"Removed item '{item_id}' and barcode {item.barcode}")
        return f"Item '{item_id}' removed."

    # --- Lookups ---

    def get(self, item_id: str) -> InventoryItem:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(item_id, kind="item")
        return item.model_copy(deep=True)

    def get_by_barcode(self, barcode: str) -> InventoryItem:
        """Resolve through the index only; a table scan is never consulted."""
        item_id = self._index.lookup(barcode)
        if item_id is None:
            raise NotFoundError(barcode, kind="barcode")
        return self.get(item_id)

    def search(self, criteria: SearchCriteria) -> list[InventoryItem]:
        keyword = criteria.keyword.lower() if criteria.keyword else None
        matches = []
        for item in self._items.values():
            if keyword is not None and keyword not in item.name.lower() and criteria.keyword not in item.barcode:
                continue
            if criteria.category is not None and item.category != criteria.category:
                continue
            if criteria.status is not None and item.status != criteria.status:
                continue
            if criteria.min_quantity is not None and item.quantity < criteria.min_quantity:
                continue
            if criteria.max_price is not None and item.price > criteria.max_price:
                continue
            matches.append(item)
        return self._copies(matches)

    def list_paged(self, page: int | None = None, per_page: int | None = None) -> PaginatedResult:
        page = 1 if page is None else page
        per_page = config.DEFAULT_PER_PAGE if per_page is None else per_page
        if page < 1:
            raise ValidationError("page", "must be at least 1")
        if per_page < 1:
            raise ValidationError("per_page", "must be at least 1")

        items = list(self._items.values())
        start = (page - 1) * per_page
        return PaginatedResult(
            items=self._copies(items[start:start + per_page]),
            total=len(items),
            page=page,
            per_page=per_page,
        )

    def list_expiring_within(self, days_threshold: int) -> list[InventoryItem]:
        """Items expiring by now + days_threshold, whatever their stored status."""
        if days_threshold < 0:
            raise ValidationError("days_threshold", "must not be negative")
        cutoff = self.clock() + days_to_nanos(days_threshold)
        return self._copies(item for item in self._items.values() if item.expiration_date <= cutoff)

    def list_low_stock(self) -> list[InventoryItem]:
        threshold = self.policy.low_stock_threshold
        return self._copies(item for item in self._items.values() if item.quantity <= threshold)

    # --- Persistence Gateway access ---

    def export_state(self) -> tuple[list[tuple[str, InventoryItem]], list[tuple[str, str]]]:
        items = [(item_id, item.model_copy(deep=True)) for item_id, item in self._items.items()]
        return items, self._index.entries()

    def replace_state(self, items: list[tuple[str, InventoryItem]], index_entries: list[tuple[str, str]]):
        """Swap in a table and index wholesale. Callers verify consistency first."""
        self._items = {item_id: item.model_copy(deep=True) for item_id, item in items}
        self._index.replace_all(index_entries)

    # --- Helpers ---

    def _validate(self, item_id: str, barcode: str, name: str, quantity: int, price: float):
        if not item_id or not item_id.strip():
            raise ValidationError("item_id", "must not be blank")
        if item_id in RESERVED_ITEM_IDS:
            raise ValidationError("item_id", f"'{item_id}' is reserved")
        if not name or not name.strip():
            raise ValidationError("name", "must not be blank")
        if not barcode or not barcode.strip():
            raise ValidationError("barcode", "must not be blank")
        if quantity < 0:
            raise ValidationError("quantity", "must not be negative")
        if not (math.isfinite(price) and price > 0):
            raise ValidationError("price", "must be a finite number greater than 0")
        holder = self._index.lookup(barcode)
        if holder is not None and holder != item_id:
            raise ValidationError("barcode", f"already assigned to item '{holder}'")

    @staticmethod
    def _copies(items: Iterable[InventoryItem]) -> list[InventoryItem]:
        return [item.model_copy(deep=True) for item in items]
