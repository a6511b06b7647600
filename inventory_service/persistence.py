"""
Persistence gateway: serialize the whole store out before a restart and load
it back afterwards.

There is no incremental journal. `restore` refuses a snapshot whose barcode
index disagrees with its item table instead of repairing it, since this is
the last chance to catch drift before the service resumes serving.
"""
import logging

from shared.exceptions import IntegrityError

from .schemas import SerializedState
from .store import InventoryStore

logger = logging.getLogger(__name__)


def snapshot(store: InventoryStore) -> SerializedState:
    items, index_entries = store.export_state()
    logger.info(f"Snapshot taken: {len(items)} items, {len(index_entries)} barcode entries")
    return SerializedState(items=items, barcode_index=index_entries)


def verify(state: SerializedState):
    """Raise IntegrityError unless the index maps exactly the items' barcodes."""
    items_by_id = {}
    for key, item in state.items:
        if key != item.item_id:
            raise IntegrityError(f"table key '{key}' holds item '{item.item_id}'")
        if key in items_by_id:
            raise IntegrityError(f"item '{key}' appears more than once")
        items_by_id[key] = item

    indexed = {}
    for barcode, item_id in state.barcode_index:
        if barcode in indexed:
            raise IntegrityError(f"barcode {barcode} appears more than once in the index")
        item = items_by_id.get(item_id)
        if item is None:
            raise IntegrityError(f"barcode {barcode} points at missing item '{item_id}'")
        if item.barcode != barcode:
            raise IntegrityError(
                f"barcode {barcode} points at item '{item_id}', which holds barcode {item.barcode}"
            )
        indexed[barcode] = item_id

    for item_id, item in items_by_id.items():
        if indexed.get(item.barcode) != item_id:
            raise IntegrityError(f"item '{item_id}' barcode {item.barcode} is missing from the index")


def restore(store: InventoryStore, state: SerializedState):
    """Replace the store's table and index with the snapshot's, after verifying it."""
    verify(state)
    store.replace_state(state.items, state.barcode_index)
    logger.info(f"Restored {len(state.items)} items from snapshot")
