from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
import datetime as dt
from enum import Enum

from .sales_schemas import PayoutIn

class EntryType(str, Enum):
    IN = "in"                  # Receive money
    OUT = "out"                # Pay money
    ADJ_DEBIT = "adj_debit"    # Add due
    ADJ_CREDIT = "adj_credit"  # Reduce due

# --- Advances ---
class AdvanceCreate(BaseModel):
    date: Optional[dt.date] = None
    customer_name: Optional[str] = None
    amount: float = 0.0
    method: str = "Cash"
    bill_no: Optional[str] = None
    payouts: List[PayoutIn] = []

# --- Party payments and manual adjustments ---
class PartyEntryCreate(BaseModel):
    type: EntryType = EntryType.OUT
    party_name: Optional[str] = None
    amount: float = 0.0
    date: Optional[dt.date] = None
    method: Optional[str] = None
    notes: Optional[str] = None

class PaymentResponse(BaseModel):
    id: int
    ts: datetime
    party_type: str
    customer_id: Optional[int] = None
    party_id: Optional[int] = None
    other_name: Optional[str] = None
    direction: str
    amount: float
    method: Optional[str] = None
    bill_no: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class RecipientName(BaseModel):
    name: str
