"""
Order Schemas
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID

from mugshop.models.order import OrderStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

class OrderCreate(BaseModel):
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None

class OrderStatusUpdate(BaseModel):
    status: OrderStatus

class OrderTotalUpdate(BaseModel):
    subtotal: int = Field(ge=0)
    discount: int = Field(default=0, ge=0)
    discount_percentage: int = Field(default=0, ge=0, le=100)

class DiscountRequest(BaseModel):
    discount_type: Literal["fixed", "percentage"]
    value: int = Field(ge=0)

    @model_validator(mode="after")
    def check_percentage_range(self):
        if self.discount_type == "percentage" and self.value > 100:
            raise ValueError("Percentage discount must be between 0 and 100")
        return self

class CheckoutRequest(BaseModel):
    discount: Optional[DiscountRequest] = None

class OrderItemCreate(BaseModel):
    product_id: UUID
    quantity: int = Field(gt=0)
    unit_price: Optional[int] = Field(default=None, gt=0)  # Defaults to product base price

class OrderServiceCreate(BaseModel):
    service_name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: int = Field(ge=0)

class OrderItemResponse(BaseModel):
    id: UUID
    order_id: UUID
    product_id: UUID
    quantity: int
    unit_price: int
    subtotal: int

    class Config:
        from_attributes = True

class OrderServiceResponse(BaseModel):
    id: UUID
    order_id: UUID
    service_name: str
    description: Optional[str]
    price: int

    class Config:
        from_attributes = True

class DesignUploadResponse(BaseModel):
    id: UUID
    order_id: UUID
    file_name: str
    file_url: str
    file_size: int
    mime_type: Optional[str]
    uploaded_at: Optional[datetime]

    class Config:
        from_attributes = True

class OrderResponse(BaseModel):
    id: UUID
    order_number: str
    user_id: UUID
    customer_name: str
    customer_email: Optional[str]
    customer_phone: Optional[str]
    status: str
    subtotal: int
    discount: int
    discount_percentage: int
    total: int
    notes: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

class OrderDetailResponse(OrderResponse):
    items: List[OrderItemResponse] = []
    services: List[OrderServiceResponse] = []
    designs: List[DesignUploadResponse] = []

class OrderSummaryResponse(OrderResponse):
    item_count: int = 0
    service_count: int = 0
