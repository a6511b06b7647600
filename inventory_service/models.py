from sqlalchemy import Column, Integer, Text, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from .database import Base

class StoreSnapshot(Base):
    __tablename__ = "store_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    taken_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    item_count = Column(Integer, nullable=False)
    payload = Column(Text, nullable=False) # SerializedState as JSON

    __table_args__ = (
        CheckConstraint('item_count >= 0', name='store_snapshots_item_count_non_negative'),
    )

    def __repr__(self):
        return f"<StoreSnapshot(id={self.id}, item_count={self.item_count})>"
