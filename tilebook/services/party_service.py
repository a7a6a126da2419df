"""Supplier ("party") balances and party lookups."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import Customer, Supplier
from ..schemas.ledger_schemas import SupplierTransaction
from ..schemas.party_schemas import (
    PartyBalance, PartySummary, SupplierResponse, SupplierStatement
)
from ..utils.numbers import to_number

logger = logging.getLogger(__name__)


def party_balances(suppliers: Iterable, transactions: Iterable[SupplierTransaction]) -> List[PartyBalance]:
    purchases = {}
    paid = {}
    for t in transactions:
        if t.type == "Purchase":
            purchases[t.supplier_id] = purchases.get(t.supplier_id, 0.0) + t.amount
        else:
            # Payments are negative and refunds positive, so paid = -amount
            paid[t.supplier_id] = paid.get(t.supplier_id, 0.0) - t.amount

    balances = []
    for s in suppliers:
        opening = to_number(s.opening_balance)
        total_purchases = purchases.get(s.id, 0.0)
        total_paid = paid.get(s.id, 0.0)
        balances.append(PartyBalance(
            id=s.id,
            name=s.name,
            opening_balance=opening,
            total_purchases=total_purchases,
            total_paid=total_paid,
            balance=opening + total_purchases - total_paid,
        ))
    return balances


def party_summary(parties: List[PartyBalance]) -> PartySummary:
    return PartySummary(
        total_payable=sum(max(p.balance, 0.0) for p in parties),
        total_overpaid=sum(max(-p.balance, 0.0) for p in parties),
        suppliers_with_due=sum(1 for p in parties if p.balance > 0),
        total_suppliers=len(parties),
    )


def supplier_statement(supplier, transactions: Iterable[SupplierTransaction]) -> SupplierStatement:
    opening = to_number(supplier.opening_balance)
    running = opening
    rows = []
    for t in transactions:
        running += t.amount
        rows.append(t.copy(update={"running_balance": running}))

    return SupplierStatement(
        supplier=SupplierResponse(id=supplier.id, name=supplier.name, opening_balance=opening),
        opening_balance=opening,
        balance=running,
        transactions=rows,
    )


# --- Find-or-create, used inside the posting flows (flush only, caller commits) ---

def find_customer(db: Session, name: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.name == name).first()


def get_or_create_customer(db: Session, name: str, opening_balance: float = 0.0) -> Customer:
    customer = find_customer(db, name)
    if customer:
        return customer
    customer = Customer(name=name, opening_balance=to_number(opening_balance))
    db.add(customer)
    db.flush()
    logger.info("Created customer '%s' (id=%s)", name, customer.id)
    return customer


def get_or_create_supplier(db: Session, name: str, ignore_case: bool = False) -> Supplier:
    query = db.query(Supplier)
    if ignore_case:
        query = query.filter(func.lower(Supplier.name) == name.lower())
    else:
        query = query.filter(Supplier.name == name)
    supplier = query.first()
    if supplier:
        return supplier
    supplier = Supplier(name=name, opening_balance=0.0)
    db.add(supplier)
    db.flush()
    logger.info("Created supplier '%s' (id=%s)", name, supplier.id)
    return supplier
