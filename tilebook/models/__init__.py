# Models package - exports all models
from ..database import Base
from .enums import (
    StockMoveKind, PartyType, PaymentDirection,
    AdjustmentType, ApprovalStatus, LedgerType
)
from .party_models import Customer, Supplier
from .inventory_models import Product, StockMove
from .ledger_models import Payment, BillAdjustment
from .sales_models import SalesApproval

__all__ = [
    "Base",  # Re-exported from database
    "StockMoveKind",
    "PartyType",
    "PaymentDirection",
    "AdjustmentType",
    "ApprovalStatus",
    "LedgerType",
    "Customer",
    "Supplier",
    "Product",
    "StockMove",
    "Payment",
    "BillAdjustment",
    "SalesApproval",
]
