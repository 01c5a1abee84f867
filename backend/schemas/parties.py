from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
from datetime import datetime
from models.parties import PartyRole

class PartyBase(BaseModel):
    name: str
    role: PartyRole
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    opening_balance: Decimal = Decimal(0)

class PartyCreate(PartyBase):
    pass

class PartyUpdate(BaseModel):
    name: Optional[str] = None
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    # Rejected once any voucher references the party
    opening_balance: Optional[Decimal] = None

class Party(PartyBase):
    id: int
    company_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
