from pydantic import BaseModel
from typing import List, Optional, Dict, Any
from datetime import date, datetime

# --- Sale payload (posted directly or staged for approval) ---

class SaleRow(BaseModel):
    product_id: Optional[int] = None
    product: Optional[str] = None
    material: Optional[str] = None
    size: Optional[str] = None
    unit: Optional[str] = None
    qty: float = 0.0
    rate: float = 0.0

class CustomerPaymentIn(BaseModel):
    advance: float = 0.0
    paid_now: float = 0.0
    method: str = "Cash"

class PayoutIn(BaseModel):
    recipient_name: Optional[str] = None
    amount: float = 0.0
    method: str = "Cash"

class ExtraCharge(BaseModel):
    name: Optional[str] = None
    amount: float = 0.0

class DiscountIn(BaseModel):
    details: Optional[str] = None
    amount: float = 0.0

class SaleCreate(BaseModel):
    bill_no: Optional[str] = None
    bill_date: Optional[date] = None
    customer_name: Optional[str] = None
    is_new_customer: bool = False
    new_customer_opening_balance: float = 0.0
    executives: List[str] = []
    rows: List[SaleRow] = []
    customer_payment: Optional[CustomerPaymentIn] = None
    payouts: List[PayoutIn] = []
    gst: float = 0.0
    hamali: float = 0.0
    transport: float = 0.0
    extra_charges: List[ExtraCharge] = []
    discount: Optional[DiscountIn] = None

class SaleResult(BaseModel):
    success: bool = True
    customer_id: int
    bill_no: str
    stock_moves: int = 0
    payments: int = 0
    adjustments: int = 0

# --- Sales approvals ---

class ApprovalSummary(BaseModel):
    id: int
    bill_no: Optional[str] = None
    bill_date: Optional[date] = None
    customer_name: Optional[str] = None
    total_amount: float = 0.0
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ApprovalDetail(ApprovalSummary):
    executive: Optional[str] = None
    sale_data: Dict[str, Any]
    next_bill_no: Optional[str] = None
