"""
Order Line Service - items and add-on services on an order

Every add/remove refreshes the order totals before committing.
"""
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from mugshop.core.exceptions import NotFoundError
from mugshop.models import OrderItem, OrderServiceLine, Product
from mugshop.schemas.order import OrderItemCreate, OrderServiceCreate
from .order_service import OrderService
from .pricing import recompute_after_line_change

logger = logging.getLogger(__name__)

class OrderLineService:
    """Order items / order services business logic"""

    @staticmethod
    def get_items(db: Session, order_id: UUID) -> List[OrderItem]:
        return db.query(OrderItem).filter(OrderItem.order_id == order_id).order_by(OrderItem.created_at).all()

    @staticmethod
    def get_services(db: Session, order_id: UUID) -> List[OrderServiceLine]:
        return db.query(OrderServiceLine).filter(OrderServiceLine.order_id == order_id).order_by(OrderServiceLine.created_at).all()

    @staticmethod
    def add_item(db: Session, order_id: UUID, item_data: OrderItemCreate) -> OrderItem:
        """Add a product line; the unit price is captured now and never re-derived"""
        order = OrderService.get_order_by_id(db, order_id)

        product = db.query(Product).filter(Product.id == item_data.product_id).first()
        if not product:
            raise NotFoundError("Product", item_data.product_id)

        unit_price = item_data.unit_price if item_data.unit_price is not None else product.base_price

        item = OrderItem(
            order_id=order.id,
            product_id=product.id,
            quantity=item_data.quantity,
            unit_price=unit_price,
            subtotal=item_data.quantity * unit_price
        )
        db.add(item)

        recompute_after_line_change(db, order.id)
        db.commit()
        db.refresh(item)

        logger.info(f"Item {product.sku} x{item.quantity} added to {order.order_number}")
        return item

    @staticmethod
    def remove_item(db: Session, order_id: UUID, item_id: UUID) -> bool:
        item = db.query(OrderItem).filter(
            OrderItem.id == item_id,
            OrderItem.order_id == order_id
        ).first()
        if not item:
            raise NotFoundError("Order item", item_id)

        db.delete(item)

        recompute_after_line_change(db, order_id)
        db.commit()
        return True

    @staticmethod
    def add_service(db: Session, order_id: UUID, service_data: OrderServiceCreate) -> OrderServiceLine:
        order = OrderService.get_order_by_id(db, order_id)

        service = OrderServiceLine(
            order_id=order.id,
            service_name=service_data.service_name,
            description=service_data.description,
            price=service_data.price
        )
        db.add(service)

        recompute_after_line_change(db, order.id)
        db.commit()
        db.refresh(service)

        logger.info(f"Service '{service.service_name}' added to {order.order_number}")
        return service

    @staticmethod
    def remove_service(db: Session, order_id: UUID, service_id: UUID) -> bool:
        service = db.query(OrderServiceLine).filter(
            OrderServiceLine.id == service_id,
            OrderServiceLine.order_id == order_id
        ).first()
        if not service:
            raise NotFoundError("Order service", service_id)

        db.delete(service)

        recompute_after_line_change(db, order_id)
        db.commit()
        return True
