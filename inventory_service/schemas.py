from pydantic import BaseModel, Field
from typing import List, Optional, Tuple
from enum import Enum


class Category(str, Enum):
    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT = "Meat"
    BAKERY = "Bakery"
    GROCERY = "Grocery"
    OTHER = "Other"


class ItemStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRING_SOON = "ExpiringSoon"
    EXPIRED = "Expired"
    LOW_STOCK = "LowStock"
    OUT_OF_STOCK = "OutOfStock"


class AuditLog(BaseModel):
    timestamp: int # ns since epoch
    action: str
    details: str
    actor: str


class InventoryItem(BaseModel):
    item_id: str
    barcode: str
    name: str
    category: Optional[Category] = None
    quantity: int
    expiration_date: int # ns since epoch
    price: float
    last_updated: int # ns since epoch
    status: ItemStatus
    audit_trail: List[AuditLog] = Field(default_factory=list)


# Request body for PUT /items/{item_id}; field rules are enforced by the store
class InventoryItemWrite(BaseModel):
    barcode: str
    name: str
    category: Optional[Category] = None
    quantity: int
    expiration_date: int
    price: float
    actor: str = Field(..., min_length=1)


class SearchCriteria(BaseModel):
    keyword: Optional[str] = None
    category: Optional[Category] = None
    status: Optional[ItemStatus] = None
    min_quantity: Optional[int] = None
    max_price: Optional[float] = None


class PaginatedResult(BaseModel):
    items: List[InventoryItem]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    per_page: int = Field(ge=1)


class Confirmation(BaseModel):
    message: str


class SerializedState(BaseModel):
    """Full store state: item table and barcode index, both in store order."""
    items: List[Tuple[str, InventoryItem]] = Field(default_factory=list)
    barcode_index: List[Tuple[str, str]] = Field(default_factory=list)


class SnapshotInfo(BaseModel):
    snapshot_id: int
    item_count: int
    state: SerializedState
