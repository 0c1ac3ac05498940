from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from leasekeeper.database.init import Base


class Tenant(Base):
    """A lease between a landlord and a tenant for one property."""

    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id"), index=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    rent_amount = Column(Float, nullable=False)
    rent_start = Column(Date, nullable=False)
    rent_duration = Column(String(50), nullable=False)  # "12 months", "2 years"
    rent_end = Column(Date, nullable=False)
    last_payment_date = Column(Date, nullable=True)
    next_payment_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    documents = Column(JSON, default=list)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property")
