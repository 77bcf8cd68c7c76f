"""
Order Models
"""
import enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from mugshop.core import Base
from .base import UUIDMixin, TimestampMixin, utcnow

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class Order(Base, UUIDMixin, TimestampMixin):
    """Order Header"""
    __tablename__ = "orders"

    order_number = Column(String(50), unique=True, nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False, index=True)

    # Customer
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(320))
    customer_phone = Column(String(20))

    # Status
    status = Column(String(20), default=OrderStatus.PENDING.value, nullable=False, index=True)

    # Amounts (minor currency units)
    subtotal = Column(Integer, default=0, nullable=False)  # Items + services
    discount = Column(Integer, default=0, nullable=False)  # Derived discount amount
    discount_percentage = Column(Integer, default=0, nullable=False)  # 0-100, 0 means fixed discount
    total = Column(Integer, default=0, nullable=False)  # subtotal - discount

    notes = Column(Text)

    # Relationships
    owner = relationship("AppUser", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    services = relationship("OrderServiceLine", back_populates="order", cascade="all, delete-orphan")
    designs = relationship("DesignUpload", back_populates="order", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("discount_percentage >= 0 AND discount_percentage <= 100", name="ck_orders_discount_percentage"),
    )

class OrderItem(Base, UUIDMixin):
    """Order Item/Line"""
    __tablename__ = "order_item"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)  # Captured when the item is added
    subtotal = Column(Integer, nullable=False)  # quantity * unit_price

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
    )

class OrderServiceLine(Base, UUIDMixin):
    """Add-on service charged on an order (engraving, gift wrap, ...)"""
    __tablename__ = "order_service"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    service_name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="services")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_order_service_price_non_negative"),
    )

class DesignUpload(Base, UUIDMixin):
    """Customer artwork attached to an order"""
    __tablename__ = "design_upload"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_url = Column(Text, nullable=False)
    file_size = Column(Integer, nullable=False)  # Bytes
    mime_type = Column(String(100))
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="designs")
