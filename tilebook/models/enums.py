import enum

class StockMoveKind(str, enum.Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    ADJUSTMENT_IN = "adjustment_in"
    ADJUSTMENT_OUT = "adjustment_out"

class PartyType(str, enum.Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    OTHERS = "others"

class PaymentDirection(str, enum.Enum):
    IN = "in"
    OUT = "out"

class AdjustmentType(str, enum.Enum):
    CHARGE = "charge"
    DISCOUNT = "discount"
    EXECUTIVE = "executive"

class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class LedgerType(str, enum.Enum):
    SALE = "Sale"
    PAYMENT = "Payment"
    PAYOUT = "Payout"
    CHARGE = "Charge"
    DISCOUNT = "Discount"
    EXECUTIVE = "Executive"
