"""
Stock & Inventory Models
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mugshop.core import Base
from .base import UUIDMixin, utcnow

class MovementType(str, enum.Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    RETURN = "return"

class Stock(Base, UUIDMixin):
    """Current on-hand quantity, one row per product"""
    __tablename__ = "stock"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, unique=True, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    minimum_level = Column(Integer, default=10)  # Advisory low-stock threshold
    last_updated = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="stock_record")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_stock_quantity_non_negative"),
    )

class StockMovement(Base, UUIDMixin):
    """Stock Movement Ledger (append-only)"""
    __tablename__ = "stock_movement"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id", ondelete="SET NULL"), index=True)

    # Movement info
    movement_type = Column(String(20), nullable=False)  # purchase, sale, adjustment, return
    quantity = Column(Integer, nullable=False)  # Always positive, direction implied by type
    reason = Column(Text)

    # Metadata
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"))

    # Relationships
    product = relationship("Product", back_populates="stock_movements")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_movement_quantity_positive"),
        Index("ix_stock_movement_product_created", "product_id", "created_at"),
    )
