from sqlalchemy import Column, DateTime, String
from utils.timezone import now


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Ledger records are never soft-deleted: vouchers are immutable, and
    parties/items can only be deleted while nothing references them.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=now)
    updated_at = Column(DateTime(timezone=True), onupdate=now)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
