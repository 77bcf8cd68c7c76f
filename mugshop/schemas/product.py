"""
Product Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: int = Field(gt=0)  # cents
    sku: str = Field(min_length=1, max_length=100)
    category: Optional[str] = None
    initial_stock: Optional[int] = Field(default=None, ge=0)

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    base_price: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "base_price", "is_active")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError("must not be null")
        return v

class ProductResponse(BaseModel):
    id: UUID
    sku: str
    name: str
    description: Optional[str]
    base_price: int
    category: Optional[str]
    is_active: bool
    stock: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
