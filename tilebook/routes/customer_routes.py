from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models import Customer
from ..schemas.party_schemas import CustomerSearchResult, CustomerTotal
from ..schemas.ledger_schemas import CustomerStatement
from ..services.ledger_queries import bill_transaction_ledger, customer_totals
from ..services.ledger_service import customer_statement

router = APIRouter()

@router.get("", response_model=List[CustomerTotal])
def list_customers(
    search: Optional[str] = None,
    only_due: bool = False,
    db: Session = Depends(get_db)
):
    totals = customer_totals(db)
    if search:
        needle = search.lower()
        totals = [t for t in totals if needle in t["name"].lower()]
    if only_due:
        totals = [t for t in totals if t["balance"] > 0]
    return totals

@router.get("/search", response_model=List[CustomerSearchResult])
def search_customers(q: Optional[str] = None, db: Session = Depends(get_db)):
    if not q:
        return []
    return (
        db.query(Customer)
        .filter(Customer.name.ilike(f"%{q}%"))
        .order_by(Customer.name)
        .limit(5)
        .all()
    )

@router.get("/{customer_id}/ledger", response_model=CustomerStatement)
def get_customer_ledger(customer_id: int, db: Session = Depends(get_db)):
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    rows = bill_transaction_ledger(db, customer_id=customer_id)
    return customer_statement(customer, rows)
