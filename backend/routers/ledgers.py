from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from decimal import Decimal

from database import get_db
from models.vouchers import VoucherType
from schemas.ledgers import PartyLedger, BalanceCheck
from utils.tenancy import get_current_company
from utils.excel import excel_response
from crud import ledgers as crud_ledgers
from crud import parties as crud_parties

router = APIRouter(prefix="/ledgers", tags=["Ledgers"])

@router.get("/parties/{party_id}", response_model=PartyLedger)
def read_party_ledger(party_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Running-balance ledger of a customer or supplier, replayed from the opening balance."""
    return crud_ledgers.get_party_ledger(db, company.id, party_id)

@router.get("/parties/{party_id}/check-payment", response_model=BalanceCheck)
def check_party_payment(party_id: int, amount: Decimal, db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Dry run of the supplier payment guard for a proposed amount. Nothing is written."""
    party = crud_parties.get_party(db, company.id, party_id)
    vouchers = crud_ledgers.get_party_vouchers(db, company.id, party_id)
    return crud_ledgers.check_payment(party, amount, vouchers, voucher_type=VoucherType.PAYMENT)

@router.get("/parties/{party_id}/export")
def export_party_ledger(party_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    ledger = crud_ledgers.get_party_ledger(db, company.id, party_id)
    rows = [{
        "Date": entry.date,
        "Voucher No": entry.voucher_number,
        "Type": entry.voucher_type.value,
        "Narration": entry.narration,
        "Opening": float(entry.opening),
        "Debit": float(entry.debit),
        "Credit": float(entry.credit),
        "Balance": float(entry.balance),
    } for entry in ledger.entries]
    rows.append({"Narration": "Closing balance", "Balance": float(ledger.closing_balance)})
    return excel_response(rows, f"ledger_{party_id}.xlsx", "Ledger")
