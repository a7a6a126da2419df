from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime
import datetime as dt

from ..models.enums import LedgerType
from ..utils.numbers import to_number

# --- Ledger rows (bill_transaction_ledger) ---

class LedgerRow(BaseModel):
    bill_no: Optional[str] = None
    customer_id: Optional[int] = None
    date: datetime
    type: LedgerType
    details: Optional[str] = None
    qty: Optional[float] = None
    price_per_unit: Optional[float] = None
    amount: float = 0.0 # Signed: Sale/Charge positive, Payment/Payout/Discount negative

    @validator("amount", pre=True)
    def coerce_amount(cls, v):
        return to_number(v)

    class Config:
        from_attributes = True

class Transaction(LedgerRow):
    running_balance: Optional[float] = None
    customer_name: Optional[str] = None

# --- Bill groups ---

class BillSummary(BaseModel):
    net: float = 0.0
    paid: float = 0.0
    balance: float = 0.0

class BillGroup(BaseModel):
    bill_no: Optional[str] = None # None for a standalone row
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    date: Optional[datetime] = None # Date of the first row on the bill
    executives: List[str] = []
    items: List[Transaction] = []
    summary: BillSummary = Field(default_factory=BillSummary)

    @property
    def is_standalone(self) -> bool:
        return not self.bill_no

class CustomerStatement(BaseModel):
    customer_id: int
    name: str
    opening_balance: float = 0.0
    current_balance: float = 0.0
    bills: List[BillGroup] = []

class DailyGroup(BaseModel):
    day: dt.date
    label: str
    bills: List[BillGroup] = []

# --- Supplier ledger ---

class SupplierTransaction(BaseModel):
    id: int
    supplier_id: int
    date: datetime
    type: str # Purchase, Payment, Refund
    details: Optional[str] = None
    bill_no: Optional[str] = None
    qty: Optional[float] = None
    unit: Optional[str] = None
    price_per_unit: Optional[float] = None
    amount: float = 0.0 # Signed: purchases and refunds raise what we owe, payments lower it
    running_balance: Optional[float] = None

    @validator("amount", pre=True)
    def coerce_amount(cls, v):
        return to_number(v)
