"""
Products API - catalog management
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from mugshop.core import get_db
from mugshop.models import AppUser, Product
from mugshop.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from mugshop.services import ProductService, InventoryService
from .auth import get_current_active_user

router = APIRouter(prefix="/products", tags=["Products"])


def product_response(db: Session, product: Product) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    response.stock = InventoryService.get_quantity(db, product.id)
    return response


@router.post("", response_model=ProductResponse)
def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    product = ProductService.create_product(db, data, created_by=current_user.id)
    return product_response(db, product)


@router.get("", response_model=List[ProductResponse])
def list_products(
    category: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    products = ProductService.get_products(db, category, is_active, search)
    return [product_response(db, p) for p in products]


@router.get("/sku/{sku}", response_model=ProductResponse)
def get_product_by_sku(sku: str, db: Session = Depends(get_db)):
    return product_response(db, ProductService.get_product_by_sku(db, sku))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    return product_response(db, ProductService.get_product_by_id(db, product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    product = ProductService.update_product(db, product_id, data)
    return product_response(db, product)


@router.delete("/{product_id}")
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    ProductService.delete_product(db, product_id)
    return {"success": True}
