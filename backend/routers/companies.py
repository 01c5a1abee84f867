from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from schemas.companies import Company, CompanyCreate, CompanyUpdate
from utils.auth_utils import get_current_user, get_user_identifier
from crud import companies as crud_companies

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger("companies")

@router.post("/", response_model=Company, status_code=status.HTTP_201_CREATED)
def create_company(company: CompanyCreate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    db_company = crud_companies.create_company(db, company, user_id=get_user_identifier(user))
    logger.info(f"Company '{db_company.name}' (ID: {db_company.id}) created by user {get_user_identifier(user)}")
    return db_company

@router.get("/", response_model=List[Company])
def read_companies(db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    return crud_companies.get_companies_for_user(db, get_user_identifier(user))

@router.get("/{company_id}", response_model=Company)
def read_company(company_id: int, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    return crud_companies.get_company_for_user(db, company_id, get_user_identifier(user))

@router.patch("/{company_id}", response_model=Company)
def update_company(company_id: int, company: CompanyUpdate, db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    db_company = crud_companies.update_company(db, company_id, company, user_id=get_user_identifier(user))
    logger.info(f"Company (ID: {company_id}) updated by user {get_user_identifier(user)}")
    return db_company
