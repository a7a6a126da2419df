from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..schemas.sales_schemas import SaleCreate, SaleResult
from ..services.sales_service import SalesService
from ..services.approval_service import ApprovalService

router = APIRouter()

@router.post("", response_model=SaleResult)
def create_sale(sale: SaleCreate, db: Session = Depends(get_db)):
    try:
        return SalesService.post_sale(db, sale)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/approve", response_model=SaleResult)
def approve_sale(
    approval_id: int,
    sale: Optional[SaleCreate] = None,
    db: Session = Depends(get_db)
):
    """Post a staged sale. A body replaces the staged payload (reviewer edits)."""
    try:
        return ApprovalService.approve(db, approval_id, sale)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
