from pydantic import BaseModel, Field


# Request body for recording a transaction
class TransactionCreate(BaseModel):
    transaction_id: str
    action_type: str # e.g. "adjust_price", "add_item", "remove_item"
    details: str = ""
    actor: str


class Transaction(TransactionCreate):
    timestamp: int = Field(ge=0) # ns since epoch


class Confirmation(BaseModel):
    message: str
