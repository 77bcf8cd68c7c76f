# Services Package
from .pricing import Discount, OrderTotals, compute_order_totals, apply_discount, recompute_after_line_change
from .inventory_service import InventoryService
from .product_service import ProductService
from .order_service import OrderService
from .order_line_service import OrderLineService
from .design_service import DesignService

__all__ = [
    "Discount",
    "OrderTotals",
    "compute_order_totals",
    "apply_discount",
    "recompute_after_line_change",
    "InventoryService",
    "ProductService",
    "OrderService",
    "OrderLineService",
    "DesignService",
]
