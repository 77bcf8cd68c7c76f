"""
User Model - acting user for attribution and order ownership
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from mugshop.core import Base
from .base import UUIDMixin, TimestampMixin

class AppUser(Base, UUIDMixin, TimestampMixin):
    """Application User"""
    __tablename__ = "app_user"

    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(320))
    full_name = Column(String(200))
    hashed_password = Column(String(255))
    role = Column(String(20), default="user", nullable=False)  # user, admin
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    orders = relationship("Order", back_populates="owner")
