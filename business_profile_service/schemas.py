from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class BusinessType(str, Enum):
    SMALL_BUSINESS = "SmallBusiness"
    STARTUP = "Startup"
    ENTERPRISE = "Enterprise"
    FRANCHISE = "Franchise"


class BusinessCategory(str, Enum):
    SUPERMARKET = "Supermarket"
    GROCERY_STORE = "GroceryStore"
    RESTAURANT = "Restaurant"
    FOOD_CHAIN = "FoodChain"


# Request body for create and update
class BusinessProfileInput(BaseModel):
    owner: str
    business_name: str
    business_type: BusinessType
    business_category: BusinessCategory
    country: str
    address: str = ""
    registration_number: str
    phone_number: str
    email: str
    website_url: str
    logo_url: Optional[str] = None


class BusinessProfile(BusinessProfileInput):
    completed_steps: List[int] = Field(default_factory=list)
    created_at: int # ns since epoch
    updated_at: int


class Confirmation(BaseModel):
    message: str
