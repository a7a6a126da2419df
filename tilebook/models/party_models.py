from sqlalchemy import Column, Integer, String, Float, DateTime
from datetime import datetime
from ..database import Base

# --- PARTIES ---

class Customer(Base):
    __tablename__ = "customers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    opening_balance = Column(Float, default=0.0) # Signed, positive means the customer owes us
    created_at = Column(DateTime, default=datetime.utcnow)

class Supplier(Base):
    __tablename__ = "suppliers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    opening_balance = Column(Float, default=0.0) # Signed, positive means we owe the supplier
    created_at = Column(DateTime, default=datetime.utcnow)
