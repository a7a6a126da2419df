from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime

# --- Products ---
class ProductResponse(BaseModel):
    id: int
    name: str
    material: Optional[str] = None
    size: Optional[str] = None
    unit: Optional[str] = None

    class Config:
        from_attributes = True

class ProductStock(ProductResponse):
    current_stock: float = 0.0

class ProductHistoryEntry(BaseModel):
    ts: datetime
    kind: str
    qty: float
    bill_no: Optional[str] = None
    supplier_name: Optional[str] = None
    customer_name: Optional[str] = None

class StockAdjustRequest(BaseModel):
    delta: float

class StockMoveResponse(BaseModel):
    id: int
    ts: datetime
    kind: str
    product_id: int
    qty: float
    price_per_unit: Optional[float] = None
    bill_no: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

# --- Purchases ---
class PurchaseRow(BaseModel):
    product: Optional[str] = None
    material: Optional[str] = None
    size: Optional[str] = None
    unit: Optional[str] = None
    qty: float = 0.0
    price: float = 0.0

class PurchaseCreate(BaseModel):
    supplier_name: Optional[str] = None
    bill_no: Optional[str] = None
    bill_date: Optional[date] = None
    rows: List[PurchaseRow] = []

class PurchaseResult(BaseModel):
    success: bool = True
    supplier_id: int
    stock_moves: int

class PurchaseTransaction(BaseModel):
    id: int
    ts: datetime
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    product_id: int
    product_name: str
    qty: float
    unit: Optional[str] = None
    price_per_unit: Optional[float] = None
    total_amount: float = 0.0
    bill_no: Optional[str] = None
