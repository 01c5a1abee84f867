from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin

class PartyRole(str, enum.Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"

class Party(Base, TimestampMixin):
    __tablename__ = "parties"
    __table_args__ = (UniqueConstraint('company_id', 'role', 'name', name='_company_party_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    role = Column(Enum(PartyRole), nullable=False)
    name = Column(String, nullable=False)
    mobile_number = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    # Receivable (customer) or payable (supplier) balance before the first voucher
    opening_balance = Column(Numeric(14, 2), default=0, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="parties")
    vouchers = relationship("Voucher", back_populates="party")
