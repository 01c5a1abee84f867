import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from exceptions import ConstraintViolation, NotFound
from models.items import Item
from models.stock_movements import StockMovement
from models.vouchers import VoucherType

logger = logging.getLogger("stock")

# Direction of stock movement per voucher type. Receipts and payments never touch stock.
STOCK_DIRECTIONS = {
    VoucherType.PURCHASE: 1,
    VoucherType.SALES: -1,
}


def moves_stock(voucher_type: VoucherType) -> bool:
    return voucher_type in STOCK_DIRECTIONS


def stock_delta(voucher_type: VoucherType, quantity: Decimal) -> Decimal:
    """Signed change to current_stock for one line of a voucher of this type."""
    return STOCK_DIRECTIONS.get(voucher_type, 0) * Decimal(quantity)


def is_low_stock(item) -> bool:
    """Recomputed on every read, never cached."""
    return Decimal(item.current_stock or 0) <= Decimal(item.reorder_level or 0)


def recompute_stock(opening_stock: Decimal, movements: Iterable) -> Decimal:
    """Stock from scratch: opening stock plus every (voucher_type, quantity) posting."""
    stock = Decimal(opening_stock or 0)
    for voucher_type, quantity in movements:
        stock += stock_delta(voucher_type, quantity)
    return stock


def apply_line_items(
    db: Session,
    company_id: int,
    voucher_type: VoucherType,
    line_items: Iterable,
    voucher_id: Optional[int] = None,
    changed_by: Optional[str] = None,
    allow_negative: bool = True,
) -> Dict[int, Decimal]:
    """
    Post voucher line items to item stock inside the caller's transaction.

    Items are row-locked in ascending id order before any change so
    concurrent postings to the same item cannot lose updates. Returns the
    new current_stock per touched item. The caller commits.
    """
    if not moves_stock(voucher_type):
        return {}

    line_items = list(line_items)
    item_ids = sorted({line.item_id for line in line_items})
    if not item_ids:
        return {}

    items = (
        db.query(Item)
        .filter(Item.id.in_(item_ids), Item.company_id == company_id)
        .order_by(Item.id.asc())
        .with_for_update()
        .all()
    )
    items_by_id = {item.id: item for item in items}
    missing = [item_id for item_id in item_ids if item_id not in items_by_id]
    if missing:
        raise NotFound(f"Item(s) {', '.join(str(i) for i in missing)} not found")

    for line in line_items:
        item = items_by_id[line.item_id]
        old_stock = Decimal(item.current_stock or 0)
        delta = stock_delta(voucher_type, line.quantity)
        new_stock = old_stock + delta
        if new_stock < 0 and not allow_negative:
            raise ConstraintViolation(
                f"Insufficient stock for item '{item.name}'. Available: {old_stock}, Requested: {line.quantity}"
            )
        item.current_stock = new_stock
        db.add(StockMovement(
            company_id=company_id,
            item_id=item.id,
            voucher_id=voucher_id,
            change_type=voucher_type.value,
            change_amount=delta,
            old_quantity=old_stock,
            new_quantity=new_stock,
            changed_by=changed_by,
        ))
        if new_stock < 0:
            logger.warning(f"Item {item.id} ('{item.name}') stock went negative: {new_stock}")

    db.flush()
    return {item_id: Decimal(items_by_id[item_id].current_stock) for item_id in item_ids}


def get_low_stock_items(db: Session, company_id: int):
    items = db.query(Item).filter(Item.company_id == company_id).order_by(Item.name.asc()).all()
    return [item for item in items if is_low_stock(item)]


def get_stock_movements(db: Session, company_id: int, item_id: int):
    return (
        db.query(StockMovement)
        .filter(StockMovement.company_id == company_id, StockMovement.item_id == item_id)
        .order_by(StockMovement.id.asc())
        .all()
    )
