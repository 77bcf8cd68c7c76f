from .base import TimestampMixin, UUIDMixin
from .user import AppUser
from .product import Product
from .stock import Stock, StockMovement, MovementType
from .order import Order, OrderItem, OrderServiceLine, DesignUpload, OrderStatus
from .audit import AuditLog

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin",
    # User
    "AppUser",
    # Product
    "Product",
    # Stock
    "Stock", "StockMovement", "MovementType",
    # Order
    "Order", "OrderItem", "OrderServiceLine", "DesignUpload", "OrderStatus",
    # Audit
    "AuditLog",
]
