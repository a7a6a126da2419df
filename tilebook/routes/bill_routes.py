from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from ..database import get_db
from ..models import Customer
from ..schemas.ledger_schemas import DailyGroup
from ..services.ledger_queries import bill_transaction_ledger
from ..services.ledger_service import daily_bills, SORT_BILL_DESC

router = APIRouter()

@router.get("", response_model=List[DailyGroup])
def list_daily_bills(
    sort: str = SORT_BILL_DESC,
    min_bill: Optional[int] = None,
    max_bill: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """Bills of every customer grouped by day, newest day first."""
    rows = bill_transaction_ledger(db)
    names = {c.id: c.name for c in db.query(Customer.id, Customer.name)}
    try:
        return daily_bills(
            rows, names, sort_order=sort, min_bill=min_bill, max_bill=max_bill,
            today=datetime.utcnow().date(),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
