from datetime import date
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.vouchers import VoucherType
from schemas.vouchers import Voucher, VoucherCreate, NextVoucherNumber
from utils.auth_utils import get_current_user
from utils.tenancy import get_current_company
from crud import vouchers as crud_vouchers
from crud.voucher_numbers import next_voucher_number

router = APIRouter(prefix="/vouchers", tags=["Vouchers"])

@router.post("/", response_model=Voucher, status_code=status.HTTP_201_CREATED)
def create_voucher(
    voucher: VoucherCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    """
    Record a sales, purchase, receipt or payment voucher.

    The voucher number is assigned by the server. Payments that would
    take a supplier's balance below zero are rejected with 409.
    """
    return crud_vouchers.create_voucher(db, company.id, voucher, user)

@router.get("/", response_model=List[Voucher])
def read_vouchers(
    voucher_type: Optional[VoucherType] = None,
    party_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    company=Depends(get_current_company),
):
    return crud_vouchers.get_vouchers(
        db,
        company.id,
        voucher_type=voucher_type,
        party_id=party_id,
        start_date=start_date,
        end_date=end_date,
        skip=skip,
        limit=limit,
    )

@router.get("/next-number", response_model=NextVoucherNumber)
def read_next_voucher_number(voucher_type: VoucherType, db: Session = Depends(get_db), company=Depends(get_current_company)):
    """Preview only. The number actually assigned is decided when the voucher is created."""
    return NextVoucherNumber(voucher_type=voucher_type, voucher_number=next_voucher_number(db, company.id, voucher_type))

@router.get("/{voucher_id}", response_model=Voucher)
def read_voucher(voucher_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_vouchers.get_voucher(db, company.id, voucher_id)
