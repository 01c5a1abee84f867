from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.vouchers import VoucherType

class VoucherLineItemCreate(BaseModel):
    item_id: int
    quantity: Decimal
    rate: Optional[Decimal] = None # Defaults to the item's rate

class VoucherLineItem(BaseModel):
    id: int
    item_id: int
    quantity: Decimal
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True

class VoucherCreate(BaseModel):
    voucher_type: VoucherType
    party_id: int
    date: date
    # Derived from line items when they are present
    amount: Optional[Decimal] = None
    narration: Optional[str] = None
    line_items: List[VoucherLineItemCreate] = []

class Voucher(BaseModel):
    id: int
    company_id: int
    voucher_type: VoucherType
    voucher_number: str
    party_id: int
    date: date
    amount: Decimal
    narration: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    line_items: List[VoucherLineItem] = []

    class Config:
        from_attributes = True

class NextVoucherNumber(BaseModel):
    voucher_type: VoucherType
    voucher_number: str
