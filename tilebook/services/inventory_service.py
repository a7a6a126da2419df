"""
Inventory Service Layer
Purchases from suppliers and manual stock corrections.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..models import Product, StockMove, StockMoveKind
from ..schemas.inventory_schemas import PurchaseCreate, PurchaseRow
from ..utils.numbers import to_number
from .party_service import get_or_create_supplier
from .sales_service import sale_timestamp

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def valid_purchase_rows(rows: List[PurchaseRow]) -> List[PurchaseRow]:
    return [
        r for r in rows
        if _clean(r.product) and to_number(r.qty) > 0 and to_number(r.price) > 0
    ]


def get_or_create_product(db: Session, row: PurchaseRow) -> Product:
    name, size, material = _clean(row.product), _clean(row.size), _clean(row.material)
    product = (
        db.query(Product)
        .filter(Product.name == name, Product.size == size, Product.material == material)
        .first()
    )
    if product:
        return product
    product = Product(name=name, size=size, material=material, unit=_clean(row.unit))
    db.add(product)
    db.flush()
    logger.info("Created product '%s' (size=%s, material=%s)", name, size, material)
    return product


class InventoryService:

    @staticmethod
    def search_products(db: Session, q: Optional[str] = None, limit: int = 10) -> List[Product]:
        query = db.query(Product)
        if q:
            query = query.filter(Product.name.ilike(f"%{q}%"))
        return query.order_by(Product.name).limit(limit).all()

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise LookupError("Product not found")
        return product

    @staticmethod
    def record_purchase(db: Session, purchase: PurchaseCreate) -> dict:
        """Record a supplier bill: one purchase move per valid row, one commit."""
        supplier_name = _clean(purchase.supplier_name)
        if not supplier_name:
            raise ValueError("Supplier Name is required.")
        rows = valid_purchase_rows(purchase.rows)
        if not rows:
            raise ValueError("Add at least one item with quantity and price.")

        ts = sale_timestamp(purchase.bill_date)
        try:
            supplier = get_or_create_supplier(db, supplier_name, ignore_case=True)
            moves = []
            for r in rows:
                product = get_or_create_product(db, r)
                moves.append(StockMove(
                    ts=ts,
                    kind=StockMoveKind.PURCHASE.value,
                    product_id=product.id,
                    supplier_id=supplier.id,
                    bill_no=_clean(purchase.bill_no),
                    bill_date=purchase.bill_date,
                    qty=r.qty,
                    price_per_unit=r.price,
                ))
            db.add_all(moves)
            db.commit()
        except Exception as e:
            logger.error("record_purchase: failed for supplier '%s': %s", supplier_name, e)
            db.rollback()
            raise

        logger.info("Recorded purchase from supplier %s: %d moves", supplier.id, len(moves))
        return {"success": True, "supplier_id": supplier.id, "stock_moves": len(moves)}

    @staticmethod
    def adjust_stock(db: Session, product_id: int, delta: float) -> StockMove:
        delta = to_number(delta)
        if delta == 0:
            raise ValueError("Adjustment must be a non-zero quantity.")
        InventoryService.get_product(db, product_id)

        move = StockMove(
            ts=datetime.utcnow(),
            kind=(StockMoveKind.ADJUSTMENT_IN if delta > 0 else StockMoveKind.ADJUSTMENT_OUT).value,
            product_id=product_id,
            qty=abs(delta),
            notes="Manual stock adjustment",
        )
        db.add(move)
        db.commit()
        db.refresh(move)
        logger.info("Adjusted stock of product %s by %s", product_id, delta)
        return move

    @staticmethod
    def purchase_transactions(db: Session):
        """Query for purchase moves, newest first. Left unexecuted for pagination."""
        return (
            db.query(StockMove)
            .options(joinedload(StockMove.product), joinedload(StockMove.supplier))
            .filter(StockMove.kind == StockMoveKind.PURCHASE.value)
            .order_by(StockMove.ts.desc(), StockMove.id.desc())
        )


def purchase_transaction_row(move: StockMove) -> dict:
    qty = to_number(move.qty)
    return {
        "id": move.id,
        "ts": move.ts,
        "supplier_id": move.supplier_id,
        "supplier_name": move.supplier.name if move.supplier else None,
        "product_id": move.product_id,
        "product_name": move.product.name if move.product else "",
        "qty": qty,
        "unit": move.product.unit if move.product else None,
        "price_per_unit": move.price_per_unit,
        "total_amount": qty * to_number(move.price_per_unit),
        "bill_no": move.bill_no,
    }
