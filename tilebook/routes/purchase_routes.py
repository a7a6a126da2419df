from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common_schemas import PaginatedResponse
from ..schemas.inventory_schemas import PurchaseCreate, PurchaseResult, PurchaseTransaction
from ..services.inventory_service import InventoryService, purchase_transaction_row
from ..utils.pagination import paginate

router = APIRouter()

@router.post("", response_model=PurchaseResult)
def create_purchase(purchase: PurchaseCreate, db: Session = Depends(get_db)):
    try:
        return InventoryService.record_purchase(db, purchase)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("", response_model=PaginatedResponse[PurchaseTransaction])
def list_purchases(page: int = 1, page_size: int = 20, db: Session = Depends(get_db)):
    result = paginate(InventoryService.purchase_transactions(db), page, page_size)
    result["items"] = [purchase_transaction_row(m) for m in result["items"]]
    return result
