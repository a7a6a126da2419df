from pydantic import BaseModel
from typing import List, Optional

from .ledger_schemas import SupplierTransaction

# --- Customer ---
class CustomerSearchResult(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class CustomerTotal(BaseModel):
    id: int
    name: str
    opening_balance: float = 0.0
    balance: float = 0.0

# --- Supplier ("party") ---
class SupplierResponse(BaseModel):
    id: int
    name: str
    opening_balance: float = 0.0

    class Config:
        from_attributes = True

class PartyBalance(BaseModel):
    id: int
    name: str
    opening_balance: float = 0.0
    total_purchases: float = 0.0
    total_paid: float = 0.0
    balance: float = 0.0

class PartySummary(BaseModel):
    total_payable: float = 0.0
    total_overpaid: float = 0.0
    suppliers_with_due: int = 0
    total_suppliers: int = 0

class PartiesResponse(BaseModel):
    summary: PartySummary
    parties: List[PartyBalance]

class SupplierStatement(BaseModel):
    supplier: SupplierResponse
    opening_balance: float = 0.0
    balance: float = 0.0
    transactions: List[SupplierTransaction] = []
