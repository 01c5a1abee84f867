from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from database import Base

class VoucherLineItem(Base):
    __tablename__ = "voucher_line_items"

    id = Column(Integer, primary_key=True, index=True)
    voucher_id = Column(Integer, ForeignKey("vouchers.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    quantity = Column(Numeric(14, 3), nullable=False)
    rate = Column(Numeric(14, 2), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False) # quantity * rate, stored for convenience

    # Relationships
    voucher = relationship("Voucher", back_populates="line_items")
    item = relationship("Item", back_populates="line_items")
