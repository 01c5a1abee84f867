from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from utils.timezone import now

class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    voucher_id = Column(Integer, ForeignKey("vouchers.id"), nullable=True)
    change_type = Column(String, nullable=False)  # "purchase" or "sales"
    change_amount = Column(Numeric(14, 3), nullable=False) # Positive or negative
    old_quantity = Column(Numeric(14, 3), nullable=False)
    new_quantity = Column(Numeric(14, 3), nullable=False)
    changed_by = Column(String, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=now)
    note = Column(String, nullable=True)

    item = relationship("Item", back_populates="movements")
