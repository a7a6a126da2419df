from sqlalchemy import Column, Integer, String, ForeignKey, Float, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

# --- CASH MOVEMENTS & BILL ADJUSTMENTS ---

class Payment(Base):
    __tablename__ = "payments"
    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime, default=datetime.utcnow, index=True)
    party_type = Column(String, nullable=False) # customer, supplier, others
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    party_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True) # Supplier reference
    other_name = Column(String, nullable=True, index=True) # Free-text recipient
    direction = Column(String, nullable=False) # in, out
    amount = Column(Float, default=0.0) # Always stored unsigned
    method = Column(String, default="cash")
    bill_no = Column(String, nullable=True, index=True)
    notes = Column(Text, nullable=True)

    customer = relationship("Customer")
    supplier = relationship("Supplier")

class BillAdjustment(Base):
    __tablename__ = "bill_adjustments"
    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    bill_no = Column(String, nullable=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    type = Column(String, nullable=False) # charge, discount, executive
    details = Column(Text, nullable=True)
    amount = Column(Float, default=0.0) # Unsigned, the ledger applies the sign

    customer = relationship("Customer")
