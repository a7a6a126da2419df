"""
Sales approvals: staged sales that are posted only after review.
pending -> approved | rejected, one way.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import SalesApproval, StockMove, ApprovalStatus, StockMoveKind
from ..schemas.sales_schemas import SaleCreate
from ..utils.numbers import bill_number_key
from .sales_service import SalesService, sale_total

logger = logging.getLogger(__name__)


class ApprovalService:

    @staticmethod
    def stage(db: Session, sale: SaleCreate) -> SalesApproval:
        executives = [e.strip() for e in sale.executives if e and e.strip()]
        approval = SalesApproval(
            bill_no=sale.bill_no,
            bill_date=sale.bill_date,
            customer_name=sale.customer_name,
            executive=executives[0] if executives else None,
            total_amount=sale_total(sale),
            status=ApprovalStatus.PENDING.value,
            # JSON mode turns dates into strings for the JSON column
            sale_data=sale.model_dump(mode="json"),
        )
        db.add(approval)
        db.commit()
        db.refresh(approval)
        logger.info("Staged sale approval %s for bill %s", approval.id, approval.bill_no)
        return approval

    @staticmethod
    def list_pending(db: Session) -> List[SalesApproval]:
        return (
            db.query(SalesApproval)
            .filter(SalesApproval.status == ApprovalStatus.PENDING.value)
            .order_by(SalesApproval.created_at, SalesApproval.id)
            .all()
        )

    @staticmethod
    def get(db: Session, approval_id: int, for_update: bool = False) -> SalesApproval:
        query = db.query(SalesApproval).filter(SalesApproval.id == approval_id)
        if for_update:
            query = query.with_for_update()
        approval = query.first()
        if not approval:
            raise LookupError("Approval not found")
        return approval

    @staticmethod
    def next_bill_no(db: Session) -> str:
        """Highest numeric bill number seen on sales or approvals, plus one."""
        numbers = [
            bill_number_key(bill_no)
            for (bill_no,) in db.query(StockMove.bill_no)
            .filter(StockMove.kind == StockMoveKind.SALE.value, StockMove.bill_no.isnot(None))
            .distinct()
        ]
        numbers += [
            bill_number_key(bill_no)
            for (bill_no,) in db.query(SalesApproval.bill_no)
            .filter(SalesApproval.bill_no.isnot(None))
        ]
        return str(max(numbers, default=0) + 1)

    @staticmethod
    def _ensure_pending(approval: SalesApproval):
        if approval.status != ApprovalStatus.PENDING.value:
            raise ValueError(f"Sale already processed (status: {approval.status})")

    @staticmethod
    def approve(db: Session, approval_id: int, sale: Optional[SaleCreate] = None) -> dict:
        """
        Post the staged sale (or the reviewer's edited version of it) and mark
        the approval approved, in one transaction.
        """
        approval = ApprovalService.get(db, approval_id, for_update=True)
        ApprovalService._ensure_pending(approval)

        if sale is None:
            sale = SaleCreate(**approval.sale_data)

        result = SalesService.post_sale(db, sale, resolve_payout_parties=True, commit=False)
        try:
            approval.status = ApprovalStatus.APPROVED.value
            approval.bill_no = sale.bill_no
            approval.updated_at = datetime.utcnow()
            db.commit()
        except Exception as e:
            logger.error("approve: approval %s failed on commit: %s", approval_id, e)
            db.rollback()
            raise

        logger.info("Approved sale approval %s (bill %s)", approval_id, sale.bill_no)
        return result

    @staticmethod
    def reject(db: Session, approval_id: int) -> SalesApproval:
        approval = ApprovalService.get(db, approval_id, for_update=True)
        ApprovalService._ensure_pending(approval)

        approval.status = ApprovalStatus.REJECTED.value
        approval.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(approval)
        logger.info("Rejected sale approval %s", approval_id)
        return approval
