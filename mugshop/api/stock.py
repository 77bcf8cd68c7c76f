"""
Stock API - quantities and the movement ledger
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from mugshop.core import get_db
from mugshop.core.exceptions import NotFoundError
from mugshop.models import AppUser, MovementType
from mugshop.schemas.stock import (
    StockInitialize, StockSetQuantity, StockDecrease, StockIncrease,
    StockResponse, StockMovementResponse,
)
from mugshop.services import InventoryService
from .auth import get_current_active_user

router = APIRouter(prefix="/stock", tags=["Stock"])


@router.get("/movements", response_model=List[StockMovementResponse])
def list_movements(
    product_id: Optional[UUID] = Query(None),
    order_id: Optional[UUID] = Query(None),
    movement_type: Optional[MovementType] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    return InventoryService.list_movements(
        db, product_id, order_id, movement_type.value if movement_type else None, limit
    )


@router.get("/low", response_model=List[StockResponse])
def list_low_stock(db: Session = Depends(get_db)):
    return InventoryService.list_low_stock(db)


@router.get("/{product_id}", response_model=StockResponse)
def get_stock(product_id: UUID, db: Session = Depends(get_db)):
    stock = InventoryService.get_stock(db, product_id)
    if not stock:
        raise NotFoundError("Stock for product", product_id)
    return stock


@router.post("/{product_id}/initialize", response_model=StockResponse)
def initialize_stock(
    product_id: UUID,
    data: StockInitialize,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return InventoryService.initialize(
        db, product_id, data.quantity, data.minimum_level, created_by=current_user.id
    )


@router.put("/{product_id}", response_model=StockResponse)
def set_stock_quantity(
    product_id: UUID,
    data: StockSetQuantity,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return InventoryService.set_quantity(
        db, product_id, data.quantity, reason=data.reason, created_by=current_user.id
    )


@router.post("/{product_id}/decrease")
def decrease_stock(
    product_id: UUID,
    data: StockDecrease,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    stock = InventoryService.decrease(
        db, product_id, data.quantity, order_id=data.order_id, created_by=current_user.id
    )
    return {"success": True, "quantity": stock.quantity}


@router.post("/{product_id}/increase")
def increase_stock(
    product_id: UUID,
    data: StockIncrease,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    stock = InventoryService.increase(
        db, product_id, data.quantity,
        reason=data.reason,
        movement_type=MovementType(data.movement_type),
        order_id=data.order_id,
        created_by=current_user.id
    )
    return {"success": True, "quantity": stock.quantity}
