from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from ..database import get_db
from ..models import Payment
from ..schemas.common_schemas import MessageResponse
from ..schemas.payment_schemas import (
    AdvanceCreate, PartyEntryCreate, PaymentResponse, RecipientName
)
from ..services.payment_service import PaymentService

router = APIRouter()

@router.post("/advances", response_model=List[PaymentResponse])
def create_advance(advance: AdvanceCreate, db: Session = Depends(get_db)):
    try:
        return PaymentService.record_advance(db, advance)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/payments", response_model=PaymentResponse)
def create_supplier_payment(entry: PartyEntryCreate, db: Session = Depends(get_db)):
    try:
        return PaymentService.record_supplier_entry(db, entry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/payments/customers", response_model=MessageResponse)
def create_customer_entry(entry: PartyEntryCreate, db: Session = Depends(get_db)):
    try:
        record = PaymentService.record_customer_entry(db, entry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    kind = "Payment" if isinstance(record, Payment) else "Adjustment"
    return {"success": True, "message": f"{kind} recorded for {entry.party_name.strip()}"}

@router.get("/payouts", response_model=List[PaymentResponse])
def list_payouts(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    return PaymentService.list_payouts(db, start_date, end_date)

@router.get("/recipients/search", response_model=List[RecipientName])
def search_recipients(q: Optional[str] = None, db: Session = Depends(get_db)):
    return PaymentService.search_recipients(db, q)
