"""
Product Catalog Model
"""
from sqlalchemy import Column, String, Integer, Boolean, Text
from sqlalchemy.orm import relationship
from mugshop.core import Base
from .base import UUIDMixin, TimestampMixin

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Master (mugs and accessories)"""
    __tablename__ = "product"

    sku = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_price = Column(Integer, nullable=False)  # Minor currency units (cents)
    category = Column(String(100), index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    stock_record = relationship("Stock", back_populates="product", uselist=False, cascade="all, delete-orphan")
    stock_movements = relationship("StockMovement", back_populates="product")
    order_items = relationship("OrderItem", back_populates="product")
