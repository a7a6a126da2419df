from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..schemas.inventory_schemas import (
    ProductResponse, ProductStock, ProductHistoryEntry,
    StockAdjustRequest, StockMoveResponse
)
from ..services.inventory_service import InventoryService
from ..services.ledger_queries import product_stock_live, product_history

router = APIRouter()

@router.get("", response_model=List[ProductResponse])
def search_products(q: Optional[str] = None, db: Session = Depends(get_db)):
    return InventoryService.search_products(db, q)

@router.get("/stock", response_model=List[ProductStock])
def list_stock(search: Optional[str] = None, db: Session = Depends(get_db)):
    return product_stock_live(db, search)

@router.get("/{product_id}/history", response_model=List[ProductHistoryEntry])
def get_product_history(product_id: int, db: Session = Depends(get_db)):
    try:
        InventoryService.get_product(db, product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return product_history(db, product_id)

@router.post("/{product_id}/adjust", response_model=StockMoveResponse)
def adjust_product_stock(product_id: int, request: StockAdjustRequest, db: Session = Depends(get_db)):
    try:
        return InventoryService.adjust_stock(db, product_id, request.delta)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
