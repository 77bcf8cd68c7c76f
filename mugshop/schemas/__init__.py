# Pydantic Schemas Package
from .order import (
    OrderCreate, OrderStatusUpdate, OrderTotalUpdate, DiscountRequest, CheckoutRequest,
    OrderItemCreate, OrderServiceCreate, OrderResponse, OrderDetailResponse, OrderSummaryResponse,
    OrderItemResponse, OrderServiceResponse, DesignUploadResponse,
)
from .product import ProductCreate, ProductUpdate, ProductResponse
from .stock import (
    StockInitialize, StockSetQuantity, StockDecrease, StockIncrease,
    StockResponse, StockMovementResponse,
)

__all__ = [
    "OrderCreate", "OrderStatusUpdate", "OrderTotalUpdate", "DiscountRequest", "CheckoutRequest",
    "OrderItemCreate", "OrderServiceCreate", "OrderResponse", "OrderDetailResponse", "OrderSummaryResponse",
    "OrderItemResponse", "OrderServiceResponse", "DesignUploadResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "StockInitialize", "StockSetQuantity", "StockDecrease", "StockIncrease",
    "StockResponse", "StockMovementResponse",
]
