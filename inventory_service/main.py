from fastapi import FastAPI, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

# Use relative imports within the service package
from . import config, crud, database, persistence, schemas
from .status import StatusPolicy
from .store import InventoryStore
from shared.exceptions import IntegrityError
from shared.exception_handlers import setup_exception_handlers

# Configure logging basic setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
logger = logging.getLogger(__name__)


def build_store() -> InventoryStore:
    policy = StatusPolicy.from_days(config.LOW_STOCK_THRESHOLD, config.EXPIRING_SOON_WINDOW_DAYS)
    return InventoryStore(policy=policy)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Inventory Service starting up...")
    engine = database.build_engine(config.DATABASE_URL)
    logger.info("Checking/Creating database tables...")
    await database.create_tables(engine)
    session_factory = database.build_session_factory(engine)

    store = build_store()
    try:
        async with session_factory() as session:
            state = await crud.load_latest_snapshot(session)
        if state is not None:
            persistence.restore(store, state)
    except IntegrityError:
        logger.critical("Stored snapshot failed integrity check; refusing to start")
        await engine.dispose()
        raise
    except Exception as e:
        logger.critical(f"Could not load stored snapshot: {e}")
        await engine.dispose()
        raise

    app.state.store = store
    app.state.session_factory = session_factory
    logger.info(f"Inventory Service ready with {len(store)} items")
    yield

    logger.info("Inventory Service shutting down...")
    if config.SNAPSHOT_ON_SHUTDOWN:
        async with session_factory() as session:
            await crud.save_snapshot(session, persistence.snapshot(store))
    await engine.dispose() # Clean up engine resources


app = FastAPI(
    title="Inventory Service",
    description="Tracks items, barcodes, status and audit history.",
    version="0.1.0",
    lifespan=lifespan
)
setup_exception_handlers(app)


def get_store(request: Request) -> InventoryStore:
    return request.app.state.store


async def get_db_session(request: Request) -> AsyncSession:
    """FastAPI dependency to inject DB session."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Rolling back session due to error: {e}")
            await session.rollback()
            raise


@app.get("/health", tags=["Monitoring"], summary="Health Check")
async def health_check():
    return {"status": "healthy"}


# --- Queries (fixed paths are declared before /items/{item_id}) ---

@app.get(
    "/items",
    response_model=schemas.PaginatedResult,
    tags=["Queries"],
    summary="List Items Page"
)
async def list_items(
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None),
    store: InventoryStore = Depends(get_store)
):
    """Returns one page of items in table order; `total` counts all items."""
    return store.list_paged(page=page, per_page=per_page)


@app.get(
    "/items/search",
    response_model=List[schemas.InventoryItem],
    tags=["Queries"],
    summary="Search Items"
)
async def search_items(
    criteria: schemas.SearchCriteria = Depends(),
    store: InventoryStore = Depends(get_store)
):
    """All given criteria must match; omitted criteria match everything."""
    return store.search(criteria)


@app.get(
    "/items/expiring",
    response_model=List[schemas.InventoryItem],
    tags=["Queries"],
    summary="List Items Expiring Soon"
)
async def list_expiring(days: int = Query(...), store: InventoryStore = Depends(get_store)):
    return store.list_expiring_within(days)


@app.get(
    "/items/low-stock",
    response_model=List[schemas.InventoryItem],
    tags=["Queries"],
    summary="List Low Stock Items"
)
async def list_low_stock(store: InventoryStore = Depends(get_store)):
    return store.list_low_stock()


@app.get(
    "/items/by-barcode/{barcode}",
    response_model=schemas.InventoryItem,
    tags=["Queries"],
    summary="Get Item By Barcode"
)
async def read_item_by_barcode(barcode: str, store: InventoryStore = Depends(get_store)):
    return store.get_by_barcode(barcode)


# --- Item management ---

@app.put(
    "/items/{item_id}",
    response_model=schemas.Confirmation,
    tags=["Management"],
    summary="Create or Update Inventory Item"
)
async def add_or_update_item(
    item_id: str,
    item: schemas.InventoryItemWrite,
    store: InventoryStore = Depends(get_store)
):
    """Creates the item or overwrites its fields, appending one audit entry."""
    message = store.add_or_update(
        item_id=item_id,
        barcode=item.barcode,
        name=item.name,
        category=item.category,
        quantity=item.quantity,
        expiration_date=item.expiration_date,
        price=item.price,
        actor=item.actor,
    )
    return schemas.Confirmation(message=message)


@app.get(
    "/items/{item_id}",
    response_model=schemas.InventoryItem,
    tags=["Management"],
    summary="Get Inventory Item Details"
)
async def read_item(item_id: str, store: InventoryStore = Depends(get_store)):
    return store.get(item_id)


@app.delete(
    "/items/{item_id}",
    response_model=schemas.Confirmation,
    tags=["Management"],
    summary="Delete Inventory Item"
)
async def delete_item(item_id: str, store: InventoryStore = Depends(get_store)):
    """Deletes the item, its barcode entry and its audit trail."""
    return schemas.Confirmation(message=store.remove(item_id))


# --- Snapshot / restore ---

@app.post(
    "/admin/snapshot",
    response_model=schemas.SnapshotInfo,
    status_code=status.HTTP_201_CREATED,
    tags=["Persistence"],
    summary="Snapshot Store"
)
async def take_snapshot(
    store: InventoryStore = Depends(get_store),
    db: AsyncSession = Depends(get_db_session)
):
    """Serializes the full store and saves it as the newest snapshot."""
    state = persistence.snapshot(store)
    db_snapshot = await crud.save_snapshot(db, state)
    return schemas.SnapshotInfo(snapshot_id=db_snapshot.id, item_count=db_snapshot.item_count, state=state)


@app.post(
    "/admin/restore",
    response_model=schemas.Confirmation,
    tags=["Persistence"],
    summary="Restore Store"
)
async def restore_snapshot(state: schemas.SerializedState, store: InventoryStore = Depends(get_store)):
    """Replaces the whole store with the given state; inconsistent state is refused."""
    persistence.restore(store, state)
    return schemas.Confirmation(message=f"Restored {len(state.items)} items.")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inventory_service.main:app", host=config.APP_HOST, port=config.APP_PORT)
