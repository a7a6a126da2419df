from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Supplier
from ..schemas.party_schemas import PartiesResponse, SupplierStatement
from ..services.ledger_queries import supplier_transactions
from ..services.party_service import party_balances, party_summary, supplier_statement

router = APIRouter()

@router.get("", response_model=PartiesResponse)
def list_parties(db: Session = Depends(get_db)):
    suppliers = db.query(Supplier).order_by(Supplier.name).all()
    parties = party_balances(suppliers, supplier_transactions(db))
    return {"summary": party_summary(parties), "parties": parties}

@router.get("/{supplier_id}", response_model=SupplierStatement)
def get_party(supplier_id: int, db: Session = Depends(get_db)):
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier_statement(supplier, supplier_transactions(db, supplier_id))
