from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from . import schemas, models
import logging

logger = logging.getLogger(__name__)


async def save_snapshot(db: AsyncSession, state: schemas.SerializedState) -> models.StoreSnapshot:
    """Stores a serialized store state as a new snapshot row."""
    db_snapshot = models.StoreSnapshot(
        item_count=len(state.items),
        payload=state.model_dump_json(),
    )
    db.add(db_snapshot)
    await db.commit()
    await db.refresh(db_snapshot)
    logger.info(f"Saved snapshot {db_snapshot.id} with {db_snapshot.item_count} items")
    return db_snapshot


async def load_latest_snapshot(db: AsyncSession) -> schemas.SerializedState | None:
    """Returns the newest stored snapshot, or None if none were ever saved."""
    stmt = select(models.StoreSnapshot).order_by(models.StoreSnapshot.id.desc()).limit(1)
    result = await db.execute(stmt)
    db_snapshot = result.scalars().first()
    if db_snapshot is None:
        logger.info("No stored snapshot found")
        return None
    logger.info(f"Loaded snapshot {db_snapshot.id} with {db_snapshot.item_count} items")
    return schemas.SerializedState.model_validate_json(db_snapshot.payload)
