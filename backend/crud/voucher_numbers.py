"""
Voucher numbering.

Numbers are ``<PREFIX>-<NNNN>``: a fixed three letter prefix per voucher
type and a numeric suffix that starts at 1 and increases by exactly one
per voucher within a (company, voucher type). The next number is derived
from the most recently created voucher, so callers must hold the
sequence lock for the (company, type) until the new voucher is committed
(see ``crud.vouchers.create_voucher``).
"""
import logging
import re

from sqlalchemy.orm import Session

from exceptions import ConstraintViolation
from models.vouchers import Voucher, VoucherType

logger = logging.getLogger("voucher_numbers")

VOUCHER_PREFIXES = {
    VoucherType.SALES: "SAL",
    VoucherType.PURCHASE: "PUR",
    VoucherType.RECEIPT: "REC",
    VoucherType.PAYMENT: "PAY",
}

SUFFIX_WIDTH = 4

_NUMBER_PATTERN = re.compile(r"^([A-Z]{3})-(\d+)$")


def format_voucher_number(voucher_type: VoucherType, sequence: int) -> str:
    """``format_voucher_number(VoucherType.SALES, 7) == "SAL-0007"``. Width is a minimum."""
    if sequence < 1:
        raise ValueError(f"Voucher sequence must start at 1, got {sequence}")
    return f"{VOUCHER_PREFIXES[voucher_type]}-{sequence:0{SUFFIX_WIDTH}d}"


def parse_voucher_number(voucher_type: VoucherType, voucher_number: str) -> int:
    """
    Return the numeric suffix of a stored voucher number.

    A number that does not match the type's prefix and a numeric suffix
    means the stored history is corrupt. Guessing a value here could
    collide with or precede existing numbers, so it is raised instead.
    """
    match = _NUMBER_PATTERN.match(voucher_number or "")
    if match is None or match.group(1) != VOUCHER_PREFIXES[voucher_type]:
        raise ConstraintViolation(
            f"Cannot continue {voucher_type.value} numbering: last voucher number "
            f"'{voucher_number}' is not of the form {VOUCHER_PREFIXES[voucher_type]}-NNNN"
        )
    return int(match.group(2))


def get_last_voucher_number(db: Session, company_id: int, voucher_type: VoucherType):
    row = (
        db.query(Voucher.voucher_number)
        .filter(Voucher.company_id == company_id, Voucher.voucher_type == voucher_type)
        .order_by(Voucher.id.desc())
        .limit(1)
        .first()
    )
    return row.voucher_number if row else None


def next_voucher_number(db: Session, company_id: int, voucher_type: VoucherType) -> str:
    """Next number for (company, type): last created suffix + 1, or 0001 for the first voucher."""
    last_number = get_last_voucher_number(db, company_id, voucher_type)
    if last_number is None:
        return format_voucher_number(voucher_type, 1)
    next_number = format_voucher_number(voucher_type, parse_voucher_number(voucher_type, last_number) + 1)
    logger.debug(f"Company {company_id}: {last_number} -> {next_number}")
    return next_number
