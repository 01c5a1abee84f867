from fastapi import Depends, Header
from sqlalchemy.orm import Session

from database import get_db
from crud import companies as crud_companies
from utils.auth_utils import get_current_user, get_user_identifier


def get_company_id(x_company_id: int = Header(...)) -> int:
    return x_company_id


def get_current_company(
    company_id: int = Depends(get_company_id),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Resolve the X-Company-ID header to a company owned by the current user."""
    return crud_companies.get_company_for_user(db, company_id, get_user_identifier(user))
