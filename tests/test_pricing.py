"""Tests for order totals and discounts."""

from types import SimpleNamespace

import pytest

from mugshop.models import Order, OrderItem, OrderServiceLine
from mugshop.services.pricing import (
    Discount,
    apply_discount,
    compute_order_totals,
    recompute_after_line_change,
)
from mugshop.core.exceptions import NotFoundError


def item(subtotal):
    return SimpleNamespace(subtotal=subtotal)


def service(price):
    return SimpleNamespace(price=price)


class TestDiscount:
    def test_fixed_discount_is_capped_at_subtotal(self):
        assert Discount.fixed(500).amount_for(2000) == 500
        assert Discount.fixed(5000).amount_for(2000) == 2000

    def test_percentage_rounds_half_up(self):
        assert Discount.percentage(10).amount_for(3000) == 300
        # 1234 * 15% = 185.1
        assert Discount.percentage(15).amount_for(1234) == 185
        # 150 * 5% = 7.5
        assert Discount.percentage(5).amount_for(150) == 8

    def test_full_percentage_discount(self):
        assert Discount.percentage(100).amount_for(4321) == 4321

    def test_zero_subtotal_has_no_discount(self):
        assert Discount.fixed(500).amount_for(0) == 0
        assert Discount.percentage(50).amount_for(0) == 0

    @pytest.mark.parametrize("kind,value", [("fixed", -1), ("percentage", -5), ("percentage", 101), ("coupon", 10)])
    def test_invalid_discounts_are_rejected(self, kind, value):
        with pytest.raises(ValueError):
            Discount(kind, value)

    def test_from_fields_prefers_percentage(self):
        assert Discount.from_fields(300, 10) == Discount.percentage(10)
        assert Discount.from_fields(300, 0) == Discount.fixed(300)
        assert Discount.from_fields(None, None) == Discount.none()


class TestComputeOrderTotals:
    def test_sums_items_and_services(self):
        totals = compute_order_totals([item(3000), item(1500)], [service(500), service(0)])

        assert totals.items_total == 4500
        assert totals.services_total == 500
        assert totals.subtotal == 5000
        assert totals.discount == 0
        assert totals.total == 5000

    def test_total_is_subtotal_minus_discount(self):
        totals = compute_order_totals([item(3000)], [service(700)], Discount.fixed(1000))

        assert totals.subtotal == 3700
        assert totals.discount == 1000
        assert totals.total == totals.subtotal - totals.discount == 2700

    def test_total_never_goes_negative(self):
        totals = compute_order_totals([item(1000)], [], Discount.fixed(2500))

        assert totals.discount == 1000
        assert totals.total == 0

    def test_percentage_is_reported(self):
        totals = compute_order_totals([item(3000)], [], Discount.percentage(10))

        assert totals.discount == 300
        assert totals.discount_percentage == 10
        assert totals.total == 2700

    def test_empty_order(self):
        totals = compute_order_totals([], [])
        assert totals.subtotal == 0
        assert totals.total == 0


class TestApplyDiscount:
    def test_uses_stored_subtotal(self):
        order = Order(subtotal=3000, discount=0, discount_percentage=0, total=3000)

        apply_discount(order, Discount.percentage(10))

        assert order.discount == 300
        assert order.discount_percentage == 10
        assert order.total == 2700

    def test_fixed_discount_resets_percentage(self):
        order = Order(subtotal=3000, discount=300, discount_percentage=10, total=2700)

        apply_discount(order, Discount.fixed(1000))

        assert order.discount == 1000
        assert order.discount_percentage == 0
        assert order.total == 2000


class TestRecomputeAfterLineChange:
    def test_reads_current_lines(self, db, user, make_product):
        product = make_product(base_price=1500)
        order = Order(order_number="ORD-TEST-0001", user_id=user.id, customer_name="Ana",
                      subtotal=0, discount=0, discount_percentage=0, total=0)
        db.add(order)
        db.commit()

        db.add(OrderItem(order_id=order.id, product_id=product.id, quantity=2, unit_price=1500, subtotal=3000))
        db.add(OrderServiceLine(order_id=order.id, service_name="Engraving", price=800))

        recompute_after_line_change(db, order.id)
        db.commit()

        assert order.subtotal == 3800
        assert order.total == 3800

    def test_keeps_percentage_discount(self, db, user, make_product):
        product = make_product()
        order = Order(order_number="ORD-TEST-0002", user_id=user.id, customer_name="Ana",
                      subtotal=0, discount=0, discount_percentage=20, total=0)
        db.add(order)
        db.commit()

        db.add(OrderItem(order_id=order.id, product_id=product.id, quantity=1, unit_price=5000, subtotal=5000))
        recompute_after_line_change(db, order.id)
        db.commit()

        assert order.discount == 1000
        assert order.discount_percentage == 20
        assert order.total == 4000

    def test_unknown_order(self, db):
        from uuid import uuid4

        with pytest.raises(NotFoundError):
            recompute_after_line_change(db, uuid4())
