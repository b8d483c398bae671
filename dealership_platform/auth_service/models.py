from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime

from .db import Base


class Credential(Base):
    """
    Auth Service view of the users table owned by the User Service.

    The column layout matches ``user_service.models.User`` so either service
    can create the table first.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(Enum("admin", "user", name="user_role"), default="user", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Credential(id={self.id}, email={self.email}, role={self.role})>"
