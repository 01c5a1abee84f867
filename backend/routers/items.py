from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from schemas.items import Item, ItemCreate, ItemUpdate, StockMovement
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_current_company
from crud import items as crud_items
from crud import stock as crud_stock

router = APIRouter(prefix="/items", tags=["Items"])
logger = logging.getLogger("items")

@router.post("/", response_model=Item, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    """Create a new stock item. Its current stock starts at the opening stock."""
    new_item = crud_items.create_item(db, company.id, item, user_id=get_user_identifier(user))
    logger.info(f"Item '{new_item.name}' created by user {get_user_identifier(user)} for company {company.id}")
    return new_item

@router.get("/", response_model=List[Item])
def read_items(skip: int = 0, limit: int = 100, db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_items.get_items(db, company.id, skip=skip, limit=limit)

@router.get("/low-stock", response_model=List[Item])
def read_low_stock_items(db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Items whose current stock is at or below their reorder level."""
    return crud_stock.get_low_stock_items(db, company.id)

@router.get("/{item_id}", response_model=Item)
def read_item(item_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_items.get_item(db, company.id, item_id)

@router.get("/{item_id}/movements", response_model=List[StockMovement])
def read_item_movements(item_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Stock history of one item, oldest first."""
    crud_items.get_item(db, company.id, item_id)
    return crud_stock.get_stock_movements(db, company.id, item_id)

@router.patch("/{item_id}", response_model=Item)
def update_item(
    item_id: int,
    item: ItemUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    updated_item = crud_items.update_item(db, company.id, item_id, item, user_id=get_user_identifier(user))
    logger.info(f"Item (ID: {item_id}) updated by user {get_user_identifier(user)} for company {company.id}")
    return updated_item

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    crud_items.delete_item(db, company.id, item_id, user_id=get_user_identifier(user))
