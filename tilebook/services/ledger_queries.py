"""
Read views over the ledger tables: signed bill ledger rows, customer
totals, supplier transactions and live product stock.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload

from ..models import (
    Customer, Product, StockMove, Payment, BillAdjustment,
    StockMoveKind, PartyType, PaymentDirection, AdjustmentType, LedgerType
)
from ..schemas.ledger_schemas import LedgerRow, SupplierTransaction
from ..utils.numbers import to_number

logger = logging.getLogger(__name__)


def _bill_customers(db: Session) -> Dict[str, int]:
    """First customer seen on each bill number, used to attribute 'others' payouts."""
    owners: Dict[str, int] = {}
    sources = (
        db.query(StockMove.bill_no, StockMove.customer_id)
        .filter(StockMove.kind == StockMoveKind.SALE.value)
        .order_by(StockMove.id),
        db.query(Payment.bill_no, Payment.customer_id)
        .filter(Payment.party_type == PartyType.CUSTOMER.value)
        .order_by(Payment.id),
        db.query(BillAdjustment.bill_no, BillAdjustment.customer_id)
        .order_by(BillAdjustment.id),
    )
    for query in sources:
        for bill_no, customer_id in query:
            if bill_no and customer_id and bill_no not in owners:
                owners[bill_no] = customer_id
    return owners


def bill_transaction_ledger(
    db: Session,
    customer_id: Optional[int] = None,
    descending: bool = False,
) -> List[LedgerRow]:
    rows: List[LedgerRow] = []

    # Sales
    sales = (
        db.query(StockMove)
        .options(joinedload(StockMove.product))
        .filter(StockMove.kind == StockMoveKind.SALE.value)
    )
    if customer_id is not None:
        sales = sales.filter(StockMove.customer_id == customer_id)
    for move in sales.order_by(StockMove.id).all():
        rows.append(LedgerRow(
            bill_no=move.bill_no,
            customer_id=move.customer_id,
            date=move.ts,
            type=LedgerType.SALE,
            details=move.product.name if move.product else None,
            qty=move.qty,
            price_per_unit=move.price_per_unit,
            amount=to_number(move.qty) * to_number(move.price_per_unit),
        ))

    # Payments and payouts
    owners = _bill_customers(db)
    payments = (
        db.query(Payment)
        .filter(Payment.party_type.in_([PartyType.CUSTOMER.value, PartyType.OTHERS.value]))
        .order_by(Payment.id)
        .all()
    )
    for p in payments:
        owner = p.customer_id or owners.get(p.bill_no)
        if owner is None:
            continue
        if customer_id is not None and owner != customer_id:
            continue
        if p.direction == PaymentDirection.IN.value:
            ledger_type = LedgerType.PAYMENT
            details = p.notes or f"{(p.method or 'cash').title()} payment"
        else:
            ledger_type = LedgerType.PAYOUT
            details = f"Paid to {p.other_name}" if p.other_name else (p.notes or "Payout")
        rows.append(LedgerRow(
            bill_no=p.bill_no,
            customer_id=owner,
            date=p.ts,
            type=ledger_type,
            details=details,
            amount=-to_number(p.amount),
        ))

    # Charges, discounts and executive labels
    adjustments = db.query(BillAdjustment)
    if customer_id is not None:
        adjustments = adjustments.filter(BillAdjustment.customer_id == customer_id)
    for adj in adjustments.order_by(BillAdjustment.id).all():
        if adj.type == AdjustmentType.CHARGE.value:
            ledger_type, amount = LedgerType.CHARGE, to_number(adj.amount)
        elif adj.type == AdjustmentType.DISCOUNT.value:
            ledger_type, amount = LedgerType.DISCOUNT, -to_number(adj.amount)
        elif adj.type == AdjustmentType.EXECUTIVE.value:
            ledger_type, amount = LedgerType.EXECUTIVE, 0.0
        else:
            logger.warning("bill_transaction_ledger: skipping adjustment %s with type '%s'", adj.id, adj.type)
            continue
        rows.append(LedgerRow(
            bill_no=adj.bill_no,
            customer_id=adj.customer_id,
            date=adj.created_at,
            type=ledger_type,
            details=adj.details,
            amount=amount,
        ))

    # Stable sort keeps source order for equal timestamps
    return sorted(rows, key=lambda r: r.date, reverse=descending)


def customer_totals(db: Session) -> List[dict]:
    balances: Dict[int, float] = {}
    for row in bill_transaction_ledger(db):
        balances[row.customer_id] = balances.get(row.customer_id, 0.0) + row.amount

    return [
        {
            "id": c.id,
            "name": c.name,
            "opening_balance": to_number(c.opening_balance),
            "balance": to_number(c.opening_balance) + balances.get(c.id, 0.0),
        }
        for c in db.query(Customer).order_by(Customer.name).all()
    ]


def _purchase_details(qty, product: Optional[Product]) -> Optional[str]:
    if product is None:
        return None
    quantity = f"{to_number(qty):g} {product.unit}" if product.unit else f"{to_number(qty):g}"
    return f"{quantity} of {product.name}"


def supplier_transactions(db: Session, supplier_id: Optional[int] = None) -> List[SupplierTransaction]:
    rows: List[SupplierTransaction] = []

    purchases = (
        db.query(StockMove)
        .options(joinedload(StockMove.product))
        .filter(StockMove.kind == StockMoveKind.PURCHASE.value, StockMove.supplier_id.isnot(None))
    )
    if supplier_id is not None:
        purchases = purchases.filter(StockMove.supplier_id == supplier_id)
    for move in purchases.order_by(StockMove.id).all():
        product = move.product
        rows.append(SupplierTransaction(
            id=move.id,
            supplier_id=move.supplier_id,
            date=move.ts,
            type="Purchase",
            details=_purchase_details(move.qty, product),
            bill_no=move.bill_no,
            qty=move.qty,
            unit=product.unit if product else None,
            price_per_unit=move.price_per_unit,
            amount=to_number(move.qty) * to_number(move.price_per_unit),
        ))

    payments = db.query(Payment).filter(
        Payment.party_type == PartyType.SUPPLIER.value, Payment.party_id.isnot(None)
    )
    if supplier_id is not None:
        payments = payments.filter(Payment.party_id == supplier_id)
    for p in payments.order_by(Payment.id).all():
        paid_out = p.direction == PaymentDirection.OUT.value
        rows.append(SupplierTransaction(
            id=p.id,
            supplier_id=p.party_id,
            date=p.ts,
            type="Payment" if paid_out else "Refund",
            details=p.notes or (p.method or "cash").title(),
            bill_no=p.bill_no,
            amount=-to_number(p.amount) if paid_out else to_number(p.amount),
        ))

    return sorted(rows, key=lambda r: r.date)


def product_stock_live(db: Session, search: Optional[str] = None) -> List[dict]:
    signed_qty = case(
        (StockMove.kind.in_([StockMoveKind.PURCHASE.value, StockMoveKind.ADJUSTMENT_IN.value]), StockMove.qty),
        (StockMove.kind.in_([StockMoveKind.SALE.value, StockMoveKind.ADJUSTMENT_OUT.value]), -StockMove.qty),
        else_=0,
    )
    query = (
        db.query(Product, func.coalesce(func.sum(signed_qty), 0).label("current_stock"))
        .outerjoin(StockMove, StockMove.product_id == Product.id)
        .group_by(Product.id)
    )
    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))

    return [
        {
            "id": p.id,
            "name": p.name,
            "material": p.material,
            "size": p.size,
            "unit": p.unit,
            "current_stock": to_number(stock),
        }
        for p, stock in query.order_by(Product.name).all()
    ]


def product_history(db: Session, product_id: int) -> List[dict]:
    moves = (
        db.query(StockMove)
        .options(joinedload(StockMove.supplier), joinedload(StockMove.customer))
        .filter(StockMove.product_id == product_id)
        .order_by(StockMove.ts.desc(), StockMove.id.desc())
        .all()
    )
    return [
        {
            "ts": m.ts,
            "kind": m.kind,
            "qty": to_number(m.qty),
            "bill_no": m.bill_no,
            "supplier_name": m.supplier.name if m.supplier else None,
            "customer_name": m.customer.name if m.customer else None,
        }
        for m in moves
    ]
