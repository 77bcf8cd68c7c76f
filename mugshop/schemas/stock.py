"""
Stock Schemas
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime
from uuid import UUID

class StockInitialize(BaseModel):
    quantity: int = Field(ge=0)
    minimum_level: int = Field(default=10, ge=0)

class StockSetQuantity(BaseModel):
    quantity: int = Field(ge=0)
    reason: Optional[str] = None

class StockDecrease(BaseModel):
    quantity: int = Field(gt=0)
    order_id: Optional[UUID] = None

class StockIncrease(BaseModel):
    quantity: int = Field(gt=0)
    reason: Optional[str] = None
    movement_type: Literal["adjustment", "purchase", "return"] = "adjustment"
    order_id: Optional[UUID] = None

class StockResponse(BaseModel):
    id: UUID
    product_id: UUID
    quantity: int
    minimum_level: Optional[int]
    last_updated: Optional[datetime]

    class Config:
        from_attributes = True

class StockMovementResponse(BaseModel):
    id: UUID
    product_id: UUID
    order_id: Optional[UUID]
    movement_type: str
    quantity: int
    reason: Optional[str]
    created_by: Optional[UUID]
    created_at: datetime

    class Config:
        from_attributes = True
