from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin

class Item(Base, TimestampMixin):
    __tablename__ = "items"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_item_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    unit = Column(String, nullable=False) # e.g., "kg", "pcs", "liters"
    rate = Column(Numeric(14, 2), default=0, nullable=False) # Default unit price
    opening_stock = Column(Numeric(14, 3), default=0, nullable=False)
    current_stock = Column(Numeric(14, 3), default=0, nullable=False) # Mutated only by voucher line items
    reorder_level = Column(Numeric(14, 3), default=0, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="items")
    line_items = relationship("VoucherLineItem", back_populates="item")
    movements = relationship("StockMovement", back_populates="item")
