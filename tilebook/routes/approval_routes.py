from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.sales_schemas import SaleCreate, ApprovalSummary, ApprovalDetail
from ..services.approval_service import ApprovalService
from ..services.sales_service import SalesService

router = APIRouter()

@router.get("", response_model=List[ApprovalSummary])
def list_pending_approvals(db: Session = Depends(get_db)):
    return ApprovalService.list_pending(db)

@router.post("", response_model=ApprovalSummary)
def stage_sale(sale: SaleCreate, db: Session = Depends(get_db)):
    try:
        SalesService.validate(sale)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ApprovalService.stage(db, sale)

@router.get("/{approval_id}", response_model=ApprovalDetail)
def get_approval(approval_id: int, db: Session = Depends(get_db)):
    try:
        approval = ApprovalService.get(db, approval_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    detail = ApprovalDetail.from_orm(approval).dict()
    detail["next_bill_no"] = ApprovalService.next_bill_no(db)
    return detail

@router.delete("/{approval_id}", response_model=ApprovalSummary)
def reject_approval(approval_id: int, db: Session = Depends(get_db)):
    try:
        return ApprovalService.reject(db, approval_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
