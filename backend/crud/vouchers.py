"""
Voucher creation and lookup.

``create_voucher`` is the only write path for vouchers. Numbering, the
balance guard, line items and stock postings happen in one transaction
while the sequence, party and item locks are held, so either all of
them commit or none do. Vouchers are immutable once created.
"""
import logging
import os
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, selectinload

from crud import app_config as crud_app_config
from crud import ledgers, stock
from crud.voucher_numbers import next_voucher_number
from exceptions import ConstraintViolation, NotFound, StorageUnavailable, ValidationError
from models.companies import Company
from models.items import Item
from models.parties import Party, PartyRole
from models.voucher_line_items import VoucherLineItem
from models.vouchers import Voucher, VoucherType
from schemas.vouchers import VoucherCreate
from utils import locks
from utils.auth_utils import get_user_identifier

load_dotenv()

logger = logging.getLogger("vouchers")

# Extra attempts after losing a voucher-number race to another process
VOUCHER_NUMBER_MAX_RETRIES = int(os.getenv("VOUCHER_NUMBER_MAX_RETRIES", "3"))

# Which party role each voucher type is drawn against
PARTY_ROLES = {
    VoucherType.SALES: PartyRole.CUSTOMER,
    VoucherType.RECEIPT: PartyRole.CUSTOMER,
    VoucherType.PURCHASE: PartyRole.SUPPLIER,
    VoucherType.PAYMENT: PartyRole.SUPPLIER,
}

# Scales of the amount, rate and quantity columns
CENTS = Decimal("0.01")
QUANTITY_STEP = Decimal("0.001")


def _fits_scale(value: Decimal, step: Decimal) -> bool:
    return value == value.quantize(step)


def validate_voucher(voucher: VoucherCreate) -> None:
    """Shape checks that need no database access. Raises ValidationError."""
    if voucher.amount is not None and voucher.amount < 0:
        raise ValidationError("Voucher amount must not be negative")
    if voucher.amount is not None and not _fits_scale(voucher.amount, CENTS):
        raise ValidationError("Voucher amount must have at most 2 decimal places")

    if voucher.line_items and not stock.moves_stock(voucher.voucher_type):
        raise ValidationError(f"{voucher.voucher_type.value.capitalize()} vouchers cannot carry line items")

    if not voucher.line_items and voucher.amount is None:
        raise ValidationError("Voucher amount is required when there are no line items")

    for index, line in enumerate(voucher.line_items, start=1):
        if line.quantity is None or line.quantity <= 0:
            raise ValidationError(f"Line {index}: quantity must be greater than zero")
        if line.rate is not None and line.rate < 0:
            raise ValidationError(f"Line {index}: rate must not be negative")
        if not _fits_scale(line.quantity, QUANTITY_STEP):
            raise ValidationError(f"Line {index}: quantity must have at most 3 decimal places")
        if line.rate is not None and not _fits_scale(line.rate, CENTS):
            raise ValidationError(f"Line {index}: rate must have at most 2 decimal places")


def _build_line_items(db: Session, company_id: int, voucher: VoucherCreate):
    """Resolve line items against the company's items and return (lines, total)."""
    item_ids = {line.item_id for line in voucher.line_items}
    items = {
        item.id: item
        for item in db.query(Item).filter(Item.id.in_(item_ids), Item.company_id == company_id).all()
    }

    lines = []
    total = Decimal(0)
    for line in voucher.line_items:
        item = items.get(line.item_id)
        if item is None:
            raise NotFound(f"Item {line.item_id} not found")
        rate = line.rate if line.rate is not None else Decimal(item.rate)
        # Voucher amount is the sum of the rounded line amounts
        amount = (line.quantity * rate).quantize(CENTS, rounding=ROUND_HALF_UP)
        total += amount
        lines.append(VoucherLineItem(item_id=item.id, quantity=line.quantity, rate=rate, amount=amount))
    return lines, total


def _post_voucher(db: Session, company_id: int, voucher: VoucherCreate, user_identifier: str) -> Voucher:
    """One attempt at writing the voucher. Leaves the transaction open for the caller to commit."""
    if db.query(Company.id).filter(Company.id == company_id).first() is None:
        raise NotFound(f"Company {company_id} not found")

    party = (
        db.query(Party)
        .filter(Party.id == voucher.party_id, Party.company_id == company_id)
        .with_for_update()
        .first()
    )
    if party is None:
        raise NotFound(f"Party {voucher.party_id} not found")

    expected_role = PARTY_ROLES[voucher.voucher_type]
    if party.role != expected_role:
        raise ValidationError(
            f"{voucher.voucher_type.value.capitalize()} vouchers must be drawn against a {expected_role.value}, "
            f"'{party.name}' is a {party.role.value}"
        )

    lines, line_total = _build_line_items(db, company_id, voucher)
    if lines:
        if voucher.amount is not None and Decimal(voucher.amount) != line_total:
            raise ValidationError(
                f"Voucher amount {voucher.amount} does not match the sum of its line items {line_total}"
            )
        amount = line_total
    else:
        amount = Decimal(voucher.amount)

    if voucher.voucher_type == VoucherType.PAYMENT:
        check = ledgers.check_payment(party, amount, ledgers.get_party_vouchers(db, company_id, party.id))
    elif voucher.voucher_type == VoucherType.RECEIPT and crud_app_config.get_flag(
        db, company_id, crud_app_config.GUARD_CUSTOMER_RECEIPTS
    ):
        check = ledgers.check_receipt(party, amount, ledgers.get_party_vouchers(db, company_id, party.id))
    else:
        check = None
    if check is not None and not check.allowed:
        logger.warning(f"Balance guard rejected {voucher.voucher_type.value} for party {party.id}: {check.reason}")
        raise ConstraintViolation(check.reason)

    db_voucher = Voucher(
        company_id=company_id,
        voucher_type=voucher.voucher_type,
        voucher_number=next_voucher_number(db, company_id, voucher.voucher_type),
        party_id=party.id,
        date=voucher.date,
        amount=amount,
        narration=voucher.narration,
        created_by=user_identifier,
    )
    db.add(db_voucher)
    db.flush() # Flush to get db_voucher.id before adding line items

    for line in lines:
        line.voucher_id = db_voucher.id
        db.add(line)

    if lines:
        stock.apply_line_items(
            db,
            company_id,
            voucher.voucher_type,
            lines,
            voucher_id=db_voucher.id,
            changed_by=user_identifier,
            allow_negative=crud_app_config.get_flag(db, company_id, crud_app_config.ALLOW_NEGATIVE_STOCK),
        )
    return db_voucher


def _is_voucher_number_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "_company_type_voucher_number_uc" in message or "vouchers.voucher_number" in message


def create_voucher(db: Session, company_id: int, voucher: VoucherCreate, user: dict) -> Voucher:
    """
    Number, guard and persist a voucher with its line items and stock postings.

    Raises ValidationError, NotFound, ConstraintViolation or
    StorageUnavailable. On any of them the session is rolled back and
    nothing has been written.
    """
    validate_voucher(voucher)
    user_identifier = get_user_identifier(user)

    keys = [locks.sequence_key(company_id, voucher.voucher_type), locks.party_key(voucher.party_id)]
    keys += [locks.item_key(line.item_id) for line in voucher.line_items]

    attempt = 0
    with locks.hold(*keys):
        while True:
            try:
                db_voucher = _post_voucher(db, company_id, voucher, user_identifier)
                db.commit()
                break
            except IntegrityError as e:
                db.rollback()
                if _is_voucher_number_conflict(e) and attempt < VOUCHER_NUMBER_MAX_RETRIES:
                    attempt += 1
                    logger.warning(
                        f"Voucher number conflict for company {company_id} ({voucher.voucher_type.value}), "
                        f"retrying ({attempt}/{VOUCHER_NUMBER_MAX_RETRIES})"
                    )
                    continue
                raise ConstraintViolation(f"Voucher could not be saved: {e.orig}") from e
            except OperationalError as e:
                db.rollback()
                logger.error(f"Record store unavailable while creating voucher for company {company_id}: {e}")
                raise StorageUnavailable("Record store unavailable, nothing was saved. Retry the request.") from e
            except BaseException:
                db.rollback()
                raise

    db.refresh(db_voucher)
    logger.info(
        f"Voucher {db_voucher.voucher_number} (ID: {db_voucher.id}) of {db_voucher.amount} created for party "
        f"{db_voucher.party_id} by user {user_identifier} for company {company_id}"
    )
    return db_voucher


def get_voucher(db: Session, company_id: int, voucher_id: int) -> Voucher:
    db_voucher = (
        db.query(Voucher)
        .options(selectinload(Voucher.line_items))
        .filter(Voucher.id == voucher_id, Voucher.company_id == company_id)
        .first()
    )
    if db_voucher is None:
        raise NotFound(f"Voucher {voucher_id} not found")
    return db_voucher


def get_vouchers(
    db: Session,
    company_id: int,
    voucher_type: Optional[VoucherType] = None,
    party_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
):
    """Newest first, with optional filters."""
    query = db.query(Voucher).filter(Voucher.company_id == company_id)
    if voucher_type:
        query = query.filter(Voucher.voucher_type == voucher_type)
    if party_id:
        query = query.filter(Voucher.party_id == party_id)
    if start_date:
        query = query.filter(Voucher.date >= start_date)
    if end_date:
        query = query.filter(Voucher.date <= end_date)
    return (
        query.options(selectinload(Voucher.line_items))
        .order_by(Voucher.date.desc(), Voucher.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
