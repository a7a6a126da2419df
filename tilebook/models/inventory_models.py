from sqlalchemy import Column, Integer, String, ForeignKey, Float, Text, DateTime, Date
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

# --- PRODUCTS & STOCK ---

class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    material = Column(String, nullable=True) # Tiles, Granite, Marble...
    size = Column(String, nullable=True)
    unit = Column(String, nullable=True) # box, sqft, piece
    created_at = Column(DateTime, default=datetime.utcnow)

class StockMove(Base):
    __tablename__ = "stock_moves"
    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime, default=datetime.utcnow, index=True)
    kind = Column(String, nullable=False) # purchase, sale, adjustment_in, adjustment_out
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    bill_no = Column(String, nullable=True, index=True)
    bill_date = Column(Date, nullable=True)
    qty = Column(Float, default=0.0)
    price_per_unit = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    product = relationship("Product")
    customer = relationship("Customer")
    supplier = relationship("Supplier")
