from sqlalchemy.orm import Session
from typing import Optional
import logging
from models.parties import Party, PartyRole
from models.vouchers import Voucher
from schemas.parties import PartyCreate, PartyUpdate
from exceptions import ConstraintViolation, NotFound, ValidationError
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict

logger = logging.getLogger("parties")

# Columns a PATCH may not clear
REQUIRED_FIELDS = ('name', 'opening_balance')

def get_party(db: Session, company_id: int, party_id: int):
    db_party = db.query(Party).filter(Party.id == party_id, Party.company_id == company_id).first()
    if db_party is None:
        raise NotFound(f"Party {party_id} not found")
    return db_party

def get_parties(db: Session, company_id: int, role: Optional[PartyRole] = None, skip: int = 0, limit: int = 100):
    query = db.query(Party).filter(Party.company_id == company_id)
    if role:
        query = query.filter(Party.role == role)
    return query.order_by(Party.name.asc()).offset(skip).limit(limit).all()

def has_vouchers(db: Session, party_id: int) -> bool:
    return db.query(Voucher.id).filter(Voucher.party_id == party_id).first() is not None

def _check_name_available(db: Session, company_id: int, role: PartyRole, name: str):
    existing = db.query(Party).filter(Party.company_id == company_id, Party.role == role, Party.name == name).first()
    if existing:
        raise ConstraintViolation(f"A {role.value} named '{name}' already exists")

def create_party(db: Session, company_id: int, party: PartyCreate, user_id: str):
    _check_name_available(db, company_id, party.role, party.name)
    db_party = Party(**party.model_dump(), company_id=company_id, created_by=user_id)
    db.add(db_party)
    db.commit()
    db.refresh(db_party)
    logger.info(f"{db_party.role.value.capitalize()} '{db_party.name}' created by user {user_id} for company {company_id}")
    return db_party

def update_party(db: Session, company_id: int, party_id: int, party: PartyUpdate, user_id: str):
    db_party = get_party(db, company_id, party_id)
    update_data = party.model_dump(exclude_unset=True)
    cleared = [field for field in REQUIRED_FIELDS if field in update_data and update_data[field] is None]
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")

    # The ledger is replayed from the opening balance, so it is frozen once vouchers exist
    if 'opening_balance' in update_data and update_data['opening_balance'] != db_party.opening_balance:
        if has_vouchers(db, party_id):
            raise ConstraintViolation("Opening balance cannot be changed once vouchers reference the party")

    if update_data.get('name') and update_data['name'] != db_party.name:
        _check_name_available(db, company_id, db_party.role, update_data['name'])

    old_values = sqlalchemy_to_dict(db_party)
    for key, value in update_data.items():
        setattr(db_party, key, value)
    db_party.updated_by = user_id
    db.flush()

    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='parties',
        record_id=party_id,
        changed_by=user_id,
        action='UPDATE',
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_party),
    ))
    db.commit()
    db.refresh(db_party)
    logger.info(f"Party (ID: {party_id}) updated by user {user_id} for company {company_id}")
    return db_party

def delete_party(db: Session, company_id: int, party_id: int, user_id: str):
    db_party = get_party(db, company_id, party_id)
    if has_vouchers(db, party_id):
        raise ConstraintViolation("Party cannot be deleted while vouchers reference it")

    old_values = sqlalchemy_to_dict(db_party)
    db.delete(db_party)
    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='parties',
        record_id=party_id,
        changed_by=user_id,
        action='DELETE',
        old_values=old_values,
        new_values=None,
    ))
    db.commit()
    logger.info(f"Party (ID: {party_id}) deleted by user {user_id} for company {company_id}")
