"""
Pricing Engine - order subtotal, discount and total

All amounts are integers in minor currency units. A discount is either a
fixed amount or a percentage of the subtotal and is turned into a single
amount when it is evaluated, so the stored amount/percentage pair can never
disagree. The derived discount never exceeds the subtotal, which keeps
totals non-negative.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from mugshop.core.exceptions import NotFoundError
from mugshop.models import Order, OrderItem, OrderServiceLine

logger = logging.getLogger(__name__)

FIXED = "fixed"
PERCENTAGE = "percentage"


@dataclass(frozen=True)
class Discount:
    """Tagged discount: kind is 'fixed' (value in cents) or 'percentage' (0-100)"""
    kind: str
    value: int

    def __post_init__(self):
        if self.kind not in (FIXED, PERCENTAGE):
            raise ValueError(f"Unknown discount kind: {self.kind}")
        if self.value < 0:
            raise ValueError("Discount must not be negative")
        if self.kind == PERCENTAGE and self.value > 100:
            raise ValueError("Percentage discount must be between 0 and 100")

    @classmethod
    def fixed(cls, amount: int) -> "Discount":
        return cls(FIXED, amount)

    @classmethod
    def percentage(cls, pct: int) -> "Discount":
        return cls(PERCENTAGE, pct)

    @classmethod
    def none(cls) -> "Discount":
        return cls(FIXED, 0)

    @classmethod
    def from_fields(cls, discount: Optional[int], discount_percentage: Optional[int]) -> "Discount":
        """Map a stored (amount, percentage) pair; a non-zero percentage wins"""
        if discount_percentage:
            return cls.percentage(discount_percentage)
        return cls.fixed(discount or 0)

    @property
    def stored_percentage(self) -> int:
        return self.value if self.kind == PERCENTAGE else 0

    def amount_for(self, subtotal: int) -> int:
        """Discount amount in cents for the given subtotal, never above it"""
        if subtotal <= 0:
            return 0
        if self.kind == PERCENTAGE:
            # Round half up without going through floats
            return (subtotal * self.value + 50) // 100
        return min(self.value, subtotal)


@dataclass(frozen=True)
class OrderTotals:
    items_total: int
    services_total: int
    subtotal: int
    discount: int
    discount_percentage: int
    total: int


def compute_order_totals(items: Iterable, services: Iterable, discount: Optional[Discount] = None) -> OrderTotals:
    """
    Sum item subtotals and service prices, then subtract the discount.

    `items` need a `subtotal` attribute, `services` a `price` attribute.
    """
    discount = discount or Discount.none()

    items_total = sum(item.subtotal for item in items)
    services_total = sum(service.price for service in services)
    subtotal = items_total + services_total

    discount_amount = discount.amount_for(subtotal)

    return OrderTotals(
        items_total=items_total,
        services_total=services_total,
        subtotal=subtotal,
        discount=discount_amount,
        discount_percentage=discount.stored_percentage,
        total=subtotal - discount_amount,
    )


def apply_discount(order: Order, discount: Discount) -> Order:
    """
    Overwrite the order's discount and recompute total from the stored subtotal.

    Lines are not re-read; callers that changed items or services use
    recompute_after_line_change instead. The caller commits.
    """
    subtotal = order.subtotal or 0
    amount = discount.amount_for(subtotal)

    order.discount = amount
    order.discount_percentage = discount.stored_percentage
    order.total = subtotal - amount
    return order


def recompute_after_line_change(db: Session, order_id: UUID) -> Order:
    """
    Re-read all items and services of an order and refresh its totals,
    keeping the existing discount. A fixed discount is clamped to the new
    subtotal and a percentage is re-derived from it. The caller commits.
    """
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order", order_id)

    db.flush()
    items = db.query(OrderItem).filter(OrderItem.order_id == order_id).all()
    services = db.query(OrderServiceLine).filter(OrderServiceLine.order_id == order_id).all()

    discount = Discount.from_fields(order.discount, order.discount_percentage)
    totals = compute_order_totals(items, services, discount)

    order.subtotal = totals.subtotal
    order.discount = totals.discount
    order.discount_percentage = totals.discount_percentage
    order.total = totals.total

    logger.debug(f"Recomputed order {order.order_number}: subtotal={totals.subtotal} discount={totals.discount} total={totals.total}")
    return order
