from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from leasekeeper.database.init import Base


class Renovation(Base):
    __tablename__ = "renovations"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), index=True, nullable=False)
    type = Column(String(100), nullable=False)  # fencing, repainting, roofing
    description = Column(String(2000), nullable=True)
    cost = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now())
    documents = Column(JSON, default=list)

    property = relationship("Property", back_populates="renovations")


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String(200), index=True, nullable=False)
    description = Column(String(2000), nullable=True)
    address = Column(String(255), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    land_documents = Column(JSON, default=list)
    property_images = Column(JSON, default=list)
    popular_places = Column(JSON, default=list)
    total_renovation_cost = Column(Float, default=0, nullable=False)
    purchase_price = Column(Float, nullable=True)
    estimated_value = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    renovations = relationship(
        "Renovation", back_populates="property", cascade="all, delete-orphan"
    )
    landlord = relationship("User")
