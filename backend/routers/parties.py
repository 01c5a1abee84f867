from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from models.parties import PartyRole
from schemas.parties import Party, PartyCreate, PartyUpdate
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_current_company
from crud import parties as crud_parties

router = APIRouter(prefix="/parties", tags=["Parties"])

@router.post("/", response_model=Party, status_code=status.HTTP_201_CREATED)
def create_party(
    party: PartyCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    return crud_parties.create_party(db, company.id, party, user_id=get_user_identifier(user))

@router.get("/", response_model=List[Party])
def read_parties(
    role: Optional[PartyRole] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    company=Depends(get_current_company),
):
    """List customers and suppliers, optionally only one role."""
    return crud_parties.get_parties(db, company.id, role=role, skip=skip, limit=limit)

@router.get("/{party_id}", response_model=Party)
def read_party(party_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_parties.get_party(db, company.id, party_id)

@router.patch("/{party_id}", response_model=Party)
def update_party(
    party_id: int,
    party: PartyUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    return crud_parties.update_party(db, company.id, party_id, party, user_id=get_user_identifier(user))

@router.delete("/{party_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_party(
    party_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    crud_parties.delete_party(db, company.id, party_id, user_id=get_user_identifier(user))
