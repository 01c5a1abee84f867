from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from schemas.app_config import AppConfigUpdate, AppConfigOut
from schemas.audit_log import AuditLog
from crud import app_config as crud_app_config
from crud import audit_log as crud_audit_log
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_current_company

router = APIRouter(prefix="/app-config", tags=["App Config"])

@router.get("/", response_model=List[AppConfigOut])
def get_configs(db: Session = Depends(get_db), company=Depends(get_current_company)):
    # Always lists every known setting, defaults included
    return crud_app_config.get_settings(db, company.id)

@router.put("/{name}", response_model=AppConfigOut)
def set_config(
    name: str,
    config: AppConfigUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company=Depends(get_current_company),
):
    return crud_app_config.set_config(db, company.id, name, config, user_id=get_user_identifier(user))

@router.get("/audit-logs", response_model=List[AuditLog], tags=["Audit"])
def read_audit_logs(table_name: str, record_id: int, db: Session = Depends(get_db), company=Depends(get_current_company)):
    return crud_audit_log.get_audit_logs(db, company.id, table_name, record_id)
