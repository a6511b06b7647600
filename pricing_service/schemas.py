from pydantic import BaseModel, Field
from typing import List, Optional


# Item fields read from the Inventory Service; other fields are ignored
class ItemSnapshot(BaseModel):
    item_id: str
    name: str
    quantity: int = Field(ge=0)
    expiration_date: int # ns since epoch
    price: float = Field(gt=0)


class PricingRule(BaseModel):
    name: str
    description: str
    active: bool = True


# Request body for PUT /rules/{name}
class PricingRuleUpdate(BaseModel):
    description: Optional[str] = None
    active: bool


# Response body
class PriceAdjustmentResult(BaseModel):
    item_id: str
    old_price: float = Field(gt=0)
    new_price: float = Field(ge=0)
    applied_rules: List[str] = Field(default_factory=list)
    transaction_id: str
