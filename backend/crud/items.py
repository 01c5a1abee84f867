from sqlalchemy.orm import Session
import logging
from models.items import Item
from models.voucher_line_items import VoucherLineItem
from schemas.items import ItemCreate, ItemUpdate
from exceptions import ConstraintViolation, NotFound, ValidationError
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict

logger = logging.getLogger("items")

# Columns a PATCH may not clear
REQUIRED_FIELDS = ('name', 'unit', 'rate', 'opening_stock', 'reorder_level')

def get_item(db: Session, company_id: int, item_id: int):
    db_item = db.query(Item).filter(Item.id == item_id, Item.company_id == company_id).first()
    if db_item is None:
        raise NotFound(f"Item {item_id} not found")
    return db_item

def get_items(db: Session, company_id: int, skip: int = 0, limit: int = 100):
    return db.query(Item).filter(Item.company_id == company_id).order_by(Item.name.asc()).offset(skip).limit(limit).all()

def has_postings(db: Session, item_id: int) -> bool:
    return db.query(VoucherLineItem.id).filter(VoucherLineItem.item_id == item_id).first() is not None

def _check_name_available(db: Session, company_id: int, name: str):
    if db.query(Item).filter(Item.company_id == company_id, Item.name == name).first():
        raise ConstraintViolation(f"An item named '{name}' already exists")

def create_item(db: Session, company_id: int, item: ItemCreate, user_id: str):
    _check_name_available(db, company_id, item.name)
    db_item = Item(
        **item.model_dump(),
        current_stock=item.opening_stock,
        company_id=company_id,
        created_by=user_id,
        updated_by=user_id,
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    logger.info(f"Item '{db_item.name}' created with opening stock {db_item.opening_stock} for company {company_id}")
    return db_item

def update_item(db: Session, company_id: int, item_id: int, item: ItemUpdate, user_id: str):
    db_item = get_item(db, company_id, item_id)
    update_data = item.model_dump(exclude_unset=True)
    cleared = [field for field in REQUIRED_FIELDS if field in update_data and update_data[field] is None]
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")
    old_values = sqlalchemy_to_dict(db_item)

    if update_data.get('name') and update_data['name'] != db_item.name:
        _check_name_available(db, company_id, update_data['name'])

    if 'opening_stock' in update_data and update_data['opening_stock'] != db_item.opening_stock:
        if has_postings(db, item_id):
            raise ConstraintViolation("Opening stock cannot be changed once vouchers reference the item")
        # Nothing has been posted yet, so current stock is still the opening stock
        db_item.current_stock = update_data['opening_stock']

    for key, value in update_data.items():
        setattr(db_item, key, value)
    db_item.updated_by = user_id
    db.flush()

    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='items',
        record_id=item_id,
        changed_by=user_id,
        action='UPDATE',
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_item),
    ))
    db.commit()
    db.refresh(db_item)
    return db_item

def delete_item(db: Session, company_id: int, item_id: int, user_id: str):
    db_item = get_item(db, company_id, item_id)
    if has_postings(db, item_id):
        raise ConstraintViolation("Item cannot be deleted while vouchers reference it")

    old_values = sqlalchemy_to_dict(db_item)
    db.delete(db_item)
    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='items',
        record_id=item_id,
        changed_by=user_id,
        action='DELETE',
        old_values=old_values,
        new_values=None,
    ))
    db.commit()
    logger.info(f"Item (ID: {item_id}) deleted by user {user_id} for company {company_id}")
