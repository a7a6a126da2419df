"""
Sales Service Layer
Posts a sale payload as stock moves, payments and bill adjustments.
"""

import logging
from datetime import datetime, time
from typing import List

from sqlalchemy.orm import Session

from ..models import (
    StockMove, Payment, BillAdjustment,
    StockMoveKind, PartyType, PaymentDirection, AdjustmentType
)
from ..schemas.sales_schemas import SaleCreate
from ..utils.numbers import to_number
from .party_service import find_customer, get_or_create_customer

logger = logging.getLogger(__name__)

FIXED_CHARGES = (("gst", "GST"), ("hamali", "Hamali"), ("transport", "Transport"))


def sale_timestamp(bill_date) -> datetime:
    if bill_date:
        return datetime.combine(bill_date, time.min)
    return datetime.utcnow()


def sale_total(sale: SaleCreate) -> float:
    """Bill total: items plus charges less discount."""
    items = sum(to_number(r.qty) * to_number(r.rate) for r in sale.rows)
    # Same rows _adjustments posts: only positive, named charges
    charges = sum(max(to_number(getattr(sale, field)), 0.0) for field, _ in FIXED_CHARGES)
    charges += sum(to_number(c.amount) for c in sale.extra_charges if c.name and to_number(c.amount) > 0)
    discount = to_number(sale.discount.amount) if sale.discount else 0.0
    return items + charges - max(discount, 0.0)


class SalesService:
    """Service class for posting sales"""

    @staticmethod
    def validate(sale: SaleCreate):
        if not (sale.bill_no or "").strip() or not (sale.customer_name or "").strip():
            raise ValueError("Bill Number and Customer Name are required.")

    @staticmethod
    def _resolve_customer(db: Session, sale: SaleCreate):
        opening = sale.new_customer_opening_balance if sale.is_new_customer else 0.0
        return get_or_create_customer(db, sale.customer_name.strip(), opening)

    @staticmethod
    def _stock_moves(sale: SaleCreate, customer_id: int, ts: datetime) -> List[StockMove]:
        return [
            StockMove(
                ts=ts,
                kind=StockMoveKind.SALE.value,
                customer_id=customer_id,
                bill_no=sale.bill_no,
                bill_date=sale.bill_date,
                product_id=r.product_id,
                qty=r.qty,
                price_per_unit=r.rate,
            )
            for r in sale.rows
            if r.product_id and to_number(r.qty) > 0
        ]

    @staticmethod
    def _payments(
        db: Session,
        sale: SaleCreate,
        customer_id: int,
        ts: datetime,
        resolve_payout_parties: bool,
    ) -> List[Payment]:
        payments = []

        cp = sale.customer_payment
        total_in = (to_number(cp.advance) + to_number(cp.paid_now)) if cp else 0.0
        if total_in > 0:
            payments.append(Payment(
                ts=ts,
                customer_id=customer_id,
                party_type=PartyType.CUSTOMER.value,
                direction=PaymentDirection.IN.value,
                amount=total_in,
                method=(cp.method or "cash").lower(),
                bill_no=sale.bill_no,
            ))

        for p in sale.payouts:
            recipient = (p.recipient_name or "").strip()
            if to_number(p.amount) <= 0 or not recipient:
                continue
            party = find_customer(db, recipient) if resolve_payout_parties else None
            if party:
                payments.append(Payment(
                    ts=ts,
                    party_type=PartyType.CUSTOMER.value,
                    customer_id=party.id,
                    direction=PaymentDirection.OUT.value,
                    amount=p.amount,
                    method="cash",
                    bill_no=sale.bill_no,
                ))
            else:
                payments.append(Payment(
                    ts=ts,
                    party_type=PartyType.OTHERS.value,
                    direction=PaymentDirection.OUT.value,
                    amount=p.amount,
                    method="cash",
                    other_name=p.recipient_name,
                    bill_no=sale.bill_no,
                ))
        return payments

    @staticmethod
    def _adjustments(sale: SaleCreate, customer_id: int, ts: datetime) -> List[BillAdjustment]:
        def adjustment(kind: AdjustmentType, details: str, amount: float) -> BillAdjustment:
            return BillAdjustment(
                created_at=ts,
                bill_no=sale.bill_no,
                customer_id=customer_id,
                type=kind.value,
                details=details,
                amount=amount,
            )

        adjustments = [
            adjustment(AdjustmentType.EXECUTIVE, name.strip(), 0.0)
            for name in sale.executives
            if name and name.strip()
        ]

        for field, label in FIXED_CHARGES:
            amount = to_number(getattr(sale, field))
            if amount > 0:
                adjustments.append(adjustment(AdjustmentType.CHARGE, label, amount))

        for c in sale.extra_charges:
            if c.name and to_number(c.amount) > 0:
                adjustments.append(adjustment(AdjustmentType.CHARGE, c.name, c.amount))

        if sale.discount and to_number(sale.discount.amount) > 0:
            adjustments.append(adjustment(
                AdjustmentType.DISCOUNT,
                sale.discount.details or "Discount",
                sale.discount.amount,
            ))
        return adjustments

    @staticmethod
    def post_sale(
        db: Session,
        sale: SaleCreate,
        resolve_payout_parties: bool = False,
        commit: bool = True,
    ) -> dict:
        """
        Record a sale: customer, stock moves, payments and bill adjustments.

        Every row goes into the current session transaction. With commit=False
        the caller finishes the transaction (the approval flow marks the
        approval in the same commit).
        """
        SalesService.validate(sale)
        ts = sale_timestamp(sale.bill_date)

        try:
            customer = SalesService._resolve_customer(db, sale)
            moves = SalesService._stock_moves(sale, customer.id, ts)
            payments = SalesService._payments(db, sale, customer.id, ts, resolve_payout_parties)
            adjustments = SalesService._adjustments(sale, customer.id, ts)

            db.add_all(moves + payments + adjustments)
            if commit:
                db.commit()
            else:
                db.flush()
        except Exception as e:
            logger.error("post_sale: bill %s failed, rolling back: %s", sale.bill_no, e)
            db.rollback()
            raise

        logger.info(
            "Posted bill %s for customer %s: %d moves, %d payments, %d adjustments",
            sale.bill_no, customer.id, len(moves), len(payments), len(adjustments),
        )
        return {
            "success": True,
            "customer_id": customer.id,
            "bill_no": sale.bill_no,
            "stock_moves": len(moves),
            "payments": len(payments),
            "adjustments": len(adjustments),
        }
