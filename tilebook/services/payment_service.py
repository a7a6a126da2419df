"""
Payment Service Layer
Customer advances, party payments and manual due adjustments.
"""

import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import (
    Payment, BillAdjustment,
    PartyType, PaymentDirection, AdjustmentType
)
from ..schemas.payment_schemas import AdvanceCreate, PartyEntryCreate, EntryType
from ..utils.numbers import to_number
from .party_service import get_or_create_customer, get_or_create_supplier

logger = logging.getLogger(__name__)

MANUAL_ADJUSTMENT_BILL = "ADJ"


def entry_timestamp(day: Optional[date]) -> datetime:
    return datetime.combine(day, time.min) if day else datetime.utcnow()


def _require_party(name: Optional[str], amount, label: str) -> str:
    name = (name or "").strip()
    if not name or to_number(amount) <= 0:
        raise ValueError(f"{label} and Amount are required.")
    return name


class PaymentService:

    @staticmethod
    def validate_advance(advance: AdvanceCreate):
        _require_party(advance.customer_name, advance.amount, "Customer Name")
        total_payouts = sum(
            to_number(p.amount) for p in advance.payouts
            if to_number(p.amount) > 0 and (p.recipient_name or "").strip()
        )
        if total_payouts > to_number(advance.amount):
            raise ValueError(
                f"Total payouts ({total_payouts:g}) cannot exceed the advance amount ({to_number(advance.amount):g})."
            )

    @staticmethod
    def record_advance(db: Session, advance: AdvanceCreate) -> List[Payment]:
        """Record a customer advance plus any payouts made out of it."""
        PaymentService.validate_advance(advance)
        ts = entry_timestamp(advance.date)
        bill_no = advance.bill_no or None

        try:
            customer = get_or_create_customer(db, advance.customer_name.strip())
            payments = [Payment(
                ts=ts,
                customer_id=customer.id,
                party_type=PartyType.CUSTOMER.value,
                direction=PaymentDirection.IN.value,
                amount=advance.amount,
                method=advance.method.lower(),
                bill_no=bill_no,
                notes="Advance Payment",
            )]
            for p in advance.payouts:
                if to_number(p.amount) <= 0 or not (p.recipient_name or "").strip():
                    continue
                payments.append(Payment(
                    ts=ts,
                    other_name=p.recipient_name.strip(),
                    party_type=PartyType.OTHERS.value,
                    direction=PaymentDirection.OUT.value,
                    amount=to_number(p.amount),
                    method=(p.method or "cash").lower(),
                    bill_no=bill_no,
                ))
            db.add_all(payments)
            db.commit()
            for payment in payments:
                db.refresh(payment)
        except Exception as e:
            logger.error("record_advance: failed for '%s': %s", advance.customer_name, e)
            db.rollback()
            raise

        logger.info("Recorded advance of %s from customer %s with %d payouts",
                    advance.amount, customer.id, len(payments) - 1)
        return payments

    @staticmethod
    def record_customer_entry(db: Session, entry: PartyEntryCreate):
        """Receive/pay money to a customer, or adjust their due on the ADJ bill."""
        name = _require_party(entry.party_name, entry.amount, "Party Name")
        ts = entry_timestamp(entry.date)
        notes = entry.notes or ""

        try:
            customer = get_or_create_customer(db, name)
            if entry.type in (EntryType.IN, EntryType.OUT):
                record = Payment(
                    ts=ts,
                    customer_id=customer.id,
                    party_type=PartyType.CUSTOMER.value,
                    direction=entry.type.value,
                    amount=entry.amount,
                    method=(entry.method or "cash").lower(),
                    notes=notes,
                )
            elif entry.type == EntryType.ADJ_DEBIT:
                record = BillAdjustment(
                    created_at=ts,
                    customer_id=customer.id,
                    type=AdjustmentType.CHARGE.value,
                    details=notes or "Manual Debit",
                    amount=entry.amount,
                    bill_no=MANUAL_ADJUSTMENT_BILL,
                )
            else:
                record = BillAdjustment(
                    created_at=ts,
                    customer_id=customer.id,
                    type=AdjustmentType.DISCOUNT.value,
                    details=notes or "Manual Credit",
                    amount=entry.amount,
                    bill_no=MANUAL_ADJUSTMENT_BILL,
                )
            db.add(record)
            db.commit()
            db.refresh(record)
        except Exception as e:
            logger.error("record_customer_entry: failed for '%s': %s", name, e)
            db.rollback()
            raise
        return record

    @staticmethod
    def record_supplier_entry(db: Session, entry: PartyEntryCreate) -> Payment:
        """Pay a supplier, take a refund, or adjust what we owe them."""
        name = _require_party(entry.party_name, entry.amount, "Party Name")
        ts = entry_timestamp(entry.date)
        notes = entry.notes or ""
        is_adjustment = entry.type in (EntryType.ADJ_DEBIT, EntryType.ADJ_CREDIT)

        try:
            supplier = get_or_create_supplier(db, name)
            payment = Payment(
                ts=ts,
                party_type=PartyType.SUPPLIER.value,
                customer_id=None,
                party_id=supplier.id,
                # A credit adjustment lowers what we owe, like paying
                direction=(
                    PaymentDirection.OUT.value
                    if entry.type in (EntryType.OUT, EntryType.ADJ_CREDIT)
                    else PaymentDirection.IN.value
                ),
                amount=entry.amount,
                method=(entry.method or "cash").lower(),
                notes=f"[Adjustment] {notes}" if is_adjustment else notes,
            )
            db.add(payment)
            db.commit()
            db.refresh(payment)
        except Exception as e:
            logger.error("record_supplier_entry: failed for '%s': %s", name, e)
            db.rollback()
            raise
        return payment

    @staticmethod
    def list_payouts(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[Payment]:
        query = db.query(Payment).filter(
            Payment.party_type == PartyType.OTHERS.value,
            Payment.direction == PaymentDirection.OUT.value,
        )
        if start_date:
            query = query.filter(Payment.ts >= datetime.combine(start_date, time.min))
        if end_date:
            query = query.filter(Payment.ts <= datetime.combine(end_date, time.max))
        return query.order_by(Payment.ts.desc(), Payment.id.desc()).all()

    @staticmethod
    def search_recipients(db: Session, q: Optional[str], limit: int = 10) -> List[dict]:
        if not q:
            return []
        names = (
            db.query(Payment.other_name)
            .filter(
                Payment.party_type == PartyType.OTHERS.value,
                Payment.other_name.isnot(None),
                Payment.other_name.ilike(f"%{q}%"),
            )
            .distinct()
            .order_by(Payment.other_name)
            .limit(limit)
            .all()
        )
        return [{"name": name} for (name,) in names]
