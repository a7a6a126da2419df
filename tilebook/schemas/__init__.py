# Schemas package - exports all Pydantic models
from .common_schemas import PaginatedResponse, MessageResponse
from .ledger_schemas import (
    LedgerRow, Transaction, BillSummary, BillGroup,
    CustomerStatement, DailyGroup, SupplierTransaction
)
from .party_schemas import (
    CustomerSearchResult, CustomerTotal,
    SupplierResponse, PartyBalance, PartySummary, PartiesResponse,
    SupplierStatement
)
from .sales_schemas import (
    SaleRow, CustomerPaymentIn, PayoutIn, ExtraCharge, DiscountIn,
    SaleCreate, SaleResult, ApprovalSummary, ApprovalDetail
)
from .payment_schemas import (
    EntryType, AdvanceCreate, PartyEntryCreate, PaymentResponse, RecipientName
)
from .inventory_schemas import (
    ProductResponse, ProductStock, ProductHistoryEntry, StockAdjustRequest,
    StockMoveResponse, PurchaseRow, PurchaseCreate, PurchaseResult,
    PurchaseTransaction
)

__all__ = [
    "PaginatedResponse",
    "MessageResponse",
    "LedgerRow",
    "Transaction",
    "BillSummary",
    "BillGroup",
    "CustomerStatement",
    "DailyGroup",
    "SupplierTransaction",
    "CustomerSearchResult",
    "CustomerTotal",
    "SupplierResponse",
    "PartyBalance",
    "PartySummary",
    "PartiesResponse",
    "SupplierStatement",
    "SaleRow",
    "CustomerPaymentIn",
    "PayoutIn",
    "ExtraCharge",
    "DiscountIn",
    "SaleCreate",
    "SaleResult",
    "ApprovalSummary",
    "ApprovalDetail",
    "EntryType",
    "AdvanceCreate",
    "PartyEntryCreate",
    "PaymentResponse",
    "RecipientName",
    "ProductResponse",
    "ProductStock",
    "ProductHistoryEntry",
    "StockAdjustRequest",
    "StockMoveResponse",
    "PurchaseRow",
    "PurchaseCreate",
    "PurchaseResult",
    "PurchaseTransaction",
]
