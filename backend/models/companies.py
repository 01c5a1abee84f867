from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin

class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True) # Owner, the identity provider's subject
    name = Column(String, nullable=False)
    mobile_number = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    email = Column(String, nullable=True)

    # Relationships
    parties = relationship("Party", back_populates="company")
    items = relationship("Item", back_populates="company")
    vouchers = relationship("Voucher", back_populates="company")
