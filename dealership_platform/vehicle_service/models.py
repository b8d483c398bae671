from sqlalchemy import Column, Integer, String, DateTime, Enum, Numeric, Index
from datetime import datetime

from .db import Base

VEHICLE_STATUSES = ("available", "sold", "maintenance")


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(50), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(30), nullable=False)
    plate = Column(String(7), unique=True, index=True, nullable=False)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    status = Column(Enum(*VEHICLE_STATUSES, name="vehicle_status"), default="available", nullable=False)
    # users.id in the User Service database; not a live foreign key
    created_by = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('ix_vehicles_status_price', 'status', 'price'),
        Index('ix_vehicles_created_at', 'created_at'),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "plate": self.plate,
            "price": self.price,
            "status": self.status,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate={self.plate}, status={self.status})>"
