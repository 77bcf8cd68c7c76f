"""
Orders API - orders, their items and add-on services
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from mugshop.core import get_db
from mugshop.models import AppUser, Order, OrderStatus
from mugshop.schemas.order import (
    OrderCreate, OrderStatusUpdate, OrderTotalUpdate, DiscountRequest, CheckoutRequest,
    OrderItemCreate, OrderServiceCreate,
    OrderResponse, OrderDetailResponse, OrderSummaryResponse,
    OrderItemResponse, OrderServiceResponse, DesignUploadResponse,
)
from mugshop.services import Discount, OrderService, OrderLineService, DesignService
from .auth import get_current_active_user

router = APIRouter(prefix="/orders", tags=["Orders"])


def order_detail(db: Session, order: Order) -> OrderDetailResponse:
    response = OrderDetailResponse.model_validate(order)
    response.items = [OrderItemResponse.model_validate(i) for i in OrderLineService.get_items(db, order.id)]
    response.services = [OrderServiceResponse.model_validate(s) for s in OrderLineService.get_services(db, order.id)]
    response.designs = [DesignUploadResponse.model_validate(d) for d in DesignService.get_designs(db, order.id)]
    return response


def to_discount(data: DiscountRequest) -> Discount:
    if data.discount_type == "percentage":
        return Discount.percentage(data.value)
    return Discount.fixed(data.value)


# ===================== ORDERS =====================

@router.post("", response_model=OrderResponse)
def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderService.create_order(db, data, user_id=current_user.id)


@router.get("", response_model=List[OrderSummaryResponse])
def list_orders(
    user_id: Optional[UUID] = Query(None),
    status: Optional[OrderStatus] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    orders = OrderService.get_orders(
        db,
        user_id=user_id or current_user.id,
        status=status.value if status else None,
        limit=limit,
        offset=offset
    )

    results = []
    for order in orders:
        summary = OrderSummaryResponse.model_validate(order)
        summary.item_count = len(order.items)
        summary.service_count = len(order.services)
        results.append(summary)
    return results


@router.get("/number/{order_number}", response_model=OrderDetailResponse)
def get_order_by_number(order_number: str, db: Session = Depends(get_db)):
    return order_detail(db, OrderService.get_order_by_number(db, order_number))


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(order_id: UUID, db: Session = Depends(get_db)):
    return order_detail(db, OrderService.get_order_by_id(db, order_id))


@router.post("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderService.update_status(db, order_id, data.status.value, performed_by=current_user.id)


@router.post("/{order_id}/total", response_model=OrderResponse)
def update_order_total(
    order_id: UUID,
    data: OrderTotalUpdate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderService.update_total(
        db, order_id, data.subtotal, data.discount, data.discount_percentage,
        performed_by=current_user.id
    )


@router.post("/{order_id}/discount", response_model=OrderResponse)
def apply_order_discount(
    order_id: UUID,
    data: DiscountRequest,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderService.apply_discount(db, order_id, to_discount(data), performed_by=current_user.id)


@router.post("/{order_id}/checkout", response_model=OrderDetailResponse)
def checkout_order(
    order_id: UUID,
    data: Optional[CheckoutRequest] = None,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    discount = to_discount(data.discount) if data and data.discount else None
    order = OrderService.checkout(db, order_id, discount, performed_by=current_user.id)
    return order_detail(db, order)


@router.delete("/{order_id}")
def delete_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    OrderService.delete_order(db, order_id, performed_by=current_user.id)
    return {"success": True}


# ===================== ORDER ITEMS =====================

@router.post("/{order_id}/items", response_model=OrderItemResponse)
def add_order_item(
    order_id: UUID,
    data: OrderItemCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderLineService.add_item(db, order_id, data)


@router.get("/{order_id}/items", response_model=List[OrderItemResponse])
def list_order_items(order_id: UUID, db: Session = Depends(get_db)):
    return OrderLineService.get_items(db, order_id)


@router.delete("/{order_id}/items/{item_id}")
def remove_order_item(
    order_id: UUID,
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    OrderLineService.remove_item(db, order_id, item_id)
    return {"success": True}


# ===================== ORDER SERVICES =====================

@router.post("/{order_id}/services", response_model=OrderServiceResponse)
def add_order_service(
    order_id: UUID,
    data: OrderServiceCreate,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    return OrderLineService.add_service(db, order_id, data)


@router.get("/{order_id}/services", response_model=List[OrderServiceResponse])
def list_order_services(order_id: UUID, db: Session = Depends(get_db)):
    return OrderLineService.get_services(db, order_id)


@router.delete("/{order_id}/services/{service_id}")
def remove_order_service(
    order_id: UUID,
    service_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    OrderLineService.remove_service(db, order_id, service_id)
    return {"success": True}
