from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional
from models.parties import PartyRole
from models.vouchers import VoucherType

# Party Ledger
class LedgerEntry(BaseModel):
    date: date
    voucher_id: Optional[int] = None
    voucher_number: str
    voucher_type: VoucherType
    narration: Optional[str] = None
    opening: Decimal
    debit: Decimal = Decimal(0)
    credit: Decimal = Decimal(0)
    balance: Decimal

class LedgerInconsistency(BaseModel):
    """A voucher whose type does not belong on this party's ledger (e.g. a sale to a supplier)."""
    voucher_id: Optional[int] = None
    voucher_number: str
    voucher_type: VoucherType
    reason: str

class LedgerProjection(BaseModel):
    opening_balance: Decimal
    entries: List[LedgerEntry]
    closing_balance: Decimal
    inconsistencies: List[LedgerInconsistency] = []

class PartyLedger(LedgerProjection):
    title: str
    party_id: int
    party_name: str
    role: PartyRole

# Balance Guard
class BalanceCheck(BaseModel):
    allowed: bool
    reason: Optional[str] = None
    current_balance: Optional[Decimal] = None
    projected_balance: Optional[Decimal] = None
