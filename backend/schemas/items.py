from pydantic import BaseModel, computed_field
from typing import Optional
from decimal import Decimal
from datetime import datetime
from crud.stock import is_low_stock

class ItemBase(BaseModel):
    name: str
    unit: str # e.g., "kg", "pcs", "liters"
    rate: Decimal
    description: Optional[str] = None
    reorder_level: Decimal = Decimal(0)

class ItemCreate(ItemBase):
    # current_stock starts here and is then managed by voucher line items
    opening_stock: Decimal = Decimal(0)

class ItemUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    rate: Optional[Decimal] = None
    description: Optional[str] = None
    reorder_level: Optional[Decimal] = None
    # Rejected once any voucher line references the item
    opening_stock: Optional[Decimal] = None

class Item(ItemBase):
    id: int
    company_id: int
    opening_stock: Decimal
    current_stock: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def low_stock(self) -> bool:
        return is_low_stock(self)

    class Config:
        from_attributes = True

class StockMovement(BaseModel):
    id: int
    item_id: int
    voucher_id: Optional[int] = None
    change_type: str
    change_amount: Decimal
    old_quantity: Decimal
    new_quantity: Decimal
    changed_by: Optional[str] = None
    timestamp: datetime
    note: Optional[str] = None

    class Config:
        from_attributes = True
