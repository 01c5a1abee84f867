from sqlalchemy.orm import Session
from models.companies import Company
from schemas.companies import CompanyCreate, CompanyUpdate
from exceptions import NotFound, ValidationError
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict

def get_company(db: Session, company_id: int):
    db_company = db.query(Company).filter(Company.id == company_id).first()
    if db_company is None:
        raise NotFound(f"Company {company_id} not found")
    return db_company

def get_company_for_user(db: Session, company_id: int, user_id: str):
    db_company = db.query(Company).filter(Company.id == company_id, Company.user_id == user_id).first()
    if db_company is None:
        raise NotFound(f"Company {company_id} not found")
    return db_company

def get_companies_for_user(db: Session, user_id: str):
    return db.query(Company).filter(Company.user_id == user_id).order_by(Company.id.asc()).all()

def create_company(db: Session, company: CompanyCreate, user_id: str):
    db_company = Company(**company.model_dump(), user_id=user_id, created_by=user_id)
    db.add(db_company)
    db.commit()
    db.refresh(db_company)
    return db_company

def update_company(db: Session, company_id: int, company: CompanyUpdate, user_id: str):
    db_company = get_company_for_user(db, company_id, user_id)
    update_data = company.model_dump(exclude_unset=True)
    if 'name' in update_data and update_data['name'] is None:
        raise ValidationError("Field(s) cannot be null: name")
    old_values = sqlalchemy_to_dict(db_company)
    for key, value in update_data.items():
        setattr(db_company, key, value)
    db_company.updated_by = user_id
    db.flush()
    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='companies',
        record_id=company_id,
        changed_by=user_id,
        action='UPDATE',
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_company),
    ))
    db.commit()
    db.refresh(db_company)
    return db_company
