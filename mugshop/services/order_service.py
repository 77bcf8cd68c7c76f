"""
Order Service - Business Logic for Orders
"""
from sqlalchemy.orm import Session
from collections import OrderedDict
from typing import List, Optional
from uuid import UUID
from datetime import datetime
import logging

from mugshop.core.exceptions import ConflictError, NotFoundError
from mugshop.models import Order, OrderItem, OrderServiceLine, AuditLog, OrderStatus
from mugshop.schemas.order import OrderCreate
from .inventory_service import InventoryService
from .pricing import Discount, apply_discount, compute_order_totals

logger = logging.getLogger(__name__)

class OrderService:
    """Order business logic"""

    @staticmethod
    def _audit(db: Session, order: Order, action: str, before: dict, after: dict, performed_by: Optional[UUID]) -> None:
        db.add(AuditLog(
            table_name="orders",
            record_id=str(order.id),
            action=action,
            performed_by=performed_by,
            before_data=before,
            after_data=after
        ))

    @staticmethod
    def _totals_snapshot(order: Order) -> dict:
        return {
            "subtotal": order.subtotal,
            "discount": order.discount,
            "discount_percentage": order.discount_percentage,
            "total": order.total,
        }

    @staticmethod
    def generate_order_number(db: Session) -> str:
        """ORD-YYYYMMDD-NNNN, sequential per day"""
        today = datetime.now().strftime("%Y%m%d")
        count = db.query(Order).filter(Order.order_number.like(f"ORD-{today}-%")).count()

        sequence = count + 1
        order_number = f"ORD-{today}-{sequence:04d}"
        while db.query(Order.id).filter(Order.order_number == order_number).first():
            sequence += 1
            order_number = f"ORD-{today}-{sequence:04d}"
        return order_number

    @staticmethod
    def get_orders(
        db: Session,
        user_id: Optional[UUID] = None,
        status: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Order]:
        """Get orders with filters and pagination, newest first"""
        query = db.query(Order)

        if user_id:
            query = query.filter(Order.user_id == user_id)

        if status and status != "all":
            query = query.filter(Order.status == status)

        return query.order_by(Order.created_at.desc())\
            .offset(offset)\
            .limit(limit)\
            .all()

    @staticmethod
    def get_order_by_id(db: Session, order_id: UUID) -> Order:
        """Get order by ID"""
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def get_order_by_number(db: Session, order_number: str) -> Order:
        """Get order by its human readable number"""
        order = db.query(Order).filter(Order.order_number == order_number).first()
        if not order:
            raise NotFoundError("Order", order_number)
        return order

    @staticmethod
    def create_order(db: Session, order_data: OrderCreate, user_id: UUID) -> Order:
        """Create an empty order owned by the acting user"""
        order = Order(
            order_number=OrderService.generate_order_number(db),
            user_id=user_id,
            customer_name=order_data.customer_name,
            customer_email=order_data.customer_email,
            customer_phone=order_data.customer_phone,
            notes=order_data.notes,
            status=OrderStatus.PENDING.value,
            subtotal=0,
            discount=0,
            discount_percentage=0,
            total=0
        )

        db.add(order)
        db.commit()
        db.refresh(order)

        logger.info(f"Order created: {order.order_number} for {order.customer_name}")
        return order

    @staticmethod
    def update_status(db: Session, order_id: UUID, new_status: str, performed_by: Optional[UUID] = None) -> Order:
        """Set any status; there is no enforced transition graph"""
        order = OrderService.get_order_by_id(db, order_id)
        new_status = OrderStatus(new_status).value

        old_status = order.status
        order.status = new_status

        OrderService._audit(
            db, order, "STATUS_CHANGE",
            {"status": old_status}, {"status": new_status}, performed_by
        )

        db.commit()
        db.refresh(order)

        logger.info(f"Order {order.order_number} status {old_status} -> {new_status}")
        return order

    @staticmethod
    def update_total(
        db: Session,
        order_id: UUID,
        subtotal: int,
        discount: int = 0,
        discount_percentage: int = 0,
        performed_by: Optional[UUID] = None
    ) -> Order:
        """
        Store a caller-supplied subtotal and discount.

        The discount pair goes through the pricing engine, so a percentage
        is re-derived from the subtotal and a fixed amount is capped at it.
        """
        order = OrderService.get_order_by_id(db, order_id)
        before = OrderService._totals_snapshot(order)

        order.subtotal = subtotal
        apply_discount(order, Discount.from_fields(discount, discount_percentage))

        OrderService._audit(db, order, "TOTAL", before, OrderService._totals_snapshot(order), performed_by)

        db.commit()
        db.refresh(order)
        return order

    @staticmethod
    def apply_discount(db: Session, order_id: UUID, discount: Discount, performed_by: Optional[UUID] = None) -> Order:
        """Apply a discount against the currently stored subtotal"""
        order = OrderService.get_order_by_id(db, order_id)
        before = OrderService._totals_snapshot(order)

        apply_discount(order, discount)

        OrderService._audit(db, order, "DISCOUNT", before, OrderService._totals_snapshot(order), performed_by)

        db.commit()
        db.refresh(order)

        logger.info(f"Discount {discount.kind}={discount.value} applied to {order.order_number}: total={order.total}")
        return order

    @staticmethod
    def checkout(
        db: Session,
        order_id: UUID,
        discount: Optional[Discount] = None,
        performed_by: Optional[UUID] = None
    ) -> Order:
        """
        Finalize a pending order in one transaction.

        Totals are recomputed from the current lines, stock is taken for
        every item and the order moves to processing. If any product is
        short, nothing is written.
        """
        order = OrderService.get_order_by_id(db, order_id)
        if order.status != OrderStatus.PENDING.value:
            raise ConflictError(f"Order {order.order_number} is {order.status}, only pending orders can be checked out")

        try:
            items = db.query(OrderItem).filter(OrderItem.order_id == order.id).all()
            services = db.query(OrderServiceLine).filter(OrderServiceLine.order_id == order.id).all()

            if discount is None:
                discount = Discount.from_fields(order.discount, order.discount_percentage)
            totals = compute_order_totals(items, services, discount)

            quantities = OrderedDict()
            for item in items:
                quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

            for product_id, quantity in quantities.items():
                InventoryService.decrease(
                    db, product_id, quantity, order_id=order.id, created_by=performed_by, commit=False
                )

            before = {"status": order.status, **OrderService._totals_snapshot(order)}

            order.subtotal = totals.subtotal
            order.discount = totals.discount
            order.discount_percentage = totals.discount_percentage
            order.total = totals.total
            order.status = OrderStatus.PROCESSING.value

            OrderService._audit(
                db, order, "CHECKOUT",
                before, {"status": order.status, **OrderService._totals_snapshot(order)}, performed_by
            )

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(order)
        logger.info(f"Order {order.order_number} checked out: {len(quantities)} products, total={order.total}")
        return order

    @staticmethod
    def delete_order(db: Session, order_id: UUID, performed_by: Optional[UUID] = None) -> bool:
        """Delete an order together with its items, services and designs"""
        order = OrderService.get_order_by_id(db, order_id)

        OrderService._audit(
            db, order, "DELETE",
            {"order_number": order.order_number, "status": order.status, **OrderService._totals_snapshot(order)},
            {}, performed_by
        )
        db.delete(order)
        db.commit()

        logger.info(f"Order deleted: {order.order_number}")
        return True
