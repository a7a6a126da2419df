from sqlalchemy import Column, Integer, String, Float, DateTime, Date, JSON
from datetime import datetime
from ..database import Base

# --- SALES APPROVALS ---

class SalesApproval(Base):
    __tablename__ = "sales_approvals"
    id = Column(Integer, primary_key=True, index=True)
    bill_no = Column(String, nullable=True, index=True)
    bill_date = Column(Date, nullable=True)
    customer_name = Column(String, nullable=True)
    executive = Column(String, nullable=True)
    total_amount = Column(Float, default=0.0)
    status = Column(String, default="pending", index=True) # pending -> approved | rejected
    sale_data = Column(JSON, nullable=False) # Staged sale payload, posted on approval
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
