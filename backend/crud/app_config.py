from sqlalchemy.orm import Session
from models.app_config import AppConfig
from schemas.app_config import AppConfigUpdate, AppConfigOut
from exceptions import ValidationError
import logging

# Audit imports
from crud.audit_log import create_audit_log
from schemas.audit_log import AuditLogCreate
from utils import sqlalchemy_to_dict

logger = logging.getLogger("app_config")

# Per-company business settings and their defaults.
# The defaults reproduce how the books have always behaved: stock may go
# negative on oversell and customer receipts are not checked against the
# receivable balance.
ALLOW_NEGATIVE_STOCK = "allow_negative_stock"
GUARD_CUSTOMER_RECEIPTS = "guard_customer_receipts"

DEFAULTS = {
    ALLOW_NEGATIVE_STOCK: "true",
    GUARD_CUSTOMER_RECEIPTS: "false",
}

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def get_config(db: Session, company_id: int, name: str = None):
    if name:
        return db.query(AppConfig).filter(AppConfig.name == name, AppConfig.company_id == company_id).first()
    return db.query(AppConfig).filter(AppConfig.company_id == company_id).all()


def get_settings(db: Session, company_id: int):
    """All known settings for a company, stored values overriding defaults."""
    stored = {c.name: c for c in get_config(db, company_id)}
    settings = []
    for name, default in DEFAULTS.items():
        if name in stored:
            settings.append(AppConfigOut.model_validate(stored[name]))
        else:
            settings.append(AppConfigOut(name=name, value=default))
    return settings


def get_flag(db: Session, company_id: int, name: str) -> bool:
    db_config = get_config(db, company_id, name)
    value = db_config.value if db_config else DEFAULTS[name]
    return value.strip().lower() in _TRUE_VALUES


def set_config(db: Session, company_id: int, name: str, config: AppConfigUpdate, user_id: str):
    """Create or update a setting by name."""
    if name not in DEFAULTS:
        raise ValidationError(f"Unknown setting '{name}'. Known settings: {', '.join(sorted(DEFAULTS))}")
    value = config.value.strip().lower()
    if value not in _TRUE_VALUES | _FALSE_VALUES:
        raise ValidationError(f"Setting '{name}' expects a boolean value, got '{config.value}'")
    value = "true" if value in _TRUE_VALUES else "false"

    db_config = get_config(db, company_id, name)
    if db_config is None:
        db_config = AppConfig(name=name, value=value, company_id=company_id, created_by=user_id)
        db.add(db_config)
        db.flush()
        action, old_values = 'CREATE', {}
    else:
        old_values = sqlalchemy_to_dict(db_config)
        db_config.value = value
        db_config.updated_by = user_id
        db.flush()
        action = 'UPDATE'

    create_audit_log(db, AuditLogCreate(
        company_id=company_id,
        table_name='app_config',
        record_id=db_config.id,
        changed_by=user_id,
        action=action,
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_config),
    ))
    db.commit()
    db.refresh(db_config)
    logger.info(f"Setting '{name}' set to '{value}' for company {company_id} by user {user_id}")
    return db_config
