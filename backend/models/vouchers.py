from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin

class VoucherType(str, enum.Enum):
    SALES = "sales"
    PURCHASE = "purchase"
    RECEIPT = "receipt"
    PAYMENT = "payment"

class Voucher(Base, TimestampMixin):
    __tablename__ = "vouchers"
    __table_args__ = (
        UniqueConstraint('company_id', 'voucher_type', 'voucher_number', name='_company_type_voucher_number_uc'),
    )

    id = Column(Integer, primary_key=True, index=True) # Creation order
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    voucher_type = Column(Enum(VoucherType), nullable=False, index=True)
    voucher_number = Column(String, nullable=False) # e.g. SAL-0007, sequential per company and type
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    narration = Column(Text, nullable=True)

    # Relationships
    company = relationship("Company", back_populates="vouchers")
    party = relationship("Party", back_populates="vouchers")
    line_items = relationship("VoucherLineItem", back_populates="voucher", cascade="all, delete-orphan", order_by="VoucherLineItem.id")
