"""Tests for InventoryService - stock levels and the movement ledger."""

import threading
from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from mugshop.core import Base
from mugshop.core.exceptions import ConflictError, InsufficientStockError, NotFoundError
from mugshop.models import MovementType, Order, Product, StockMovement
from mugshop.services import InventoryService


def movements_for(db, product_id):
    return db.query(StockMovement).filter(StockMovement.product_id == product_id).all()


@pytest.fixture
def file_sessions(tmp_path):
    """
    Session factory on a file-backed SQLite database, so every session gets
    its own connection. Seeded with one product holding 5 units.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = factory()
    try:
        product = Product(sku="MUG-RACE", name="Race Mug", base_price=1500)
        session.add(product)
        session.commit()
        InventoryService.initialize(session, product.id, 5)
        product_id = product.id
    finally:
        session.close()

    yield SimpleNamespace(new=factory, product_id=product_id)
    engine.dispose()


class TestInitialize:
    def test_creates_stock_and_purchase_movement(self, db, make_product):
        product = make_product()

        stock = InventoryService.initialize(db, product.id, 25, minimum_level=5)

        assert stock.quantity == 25
        assert stock.minimum_level == 5
        movements = movements_for(db, product.id)
        assert len(movements) == 1
        assert movements[0].movement_type == MovementType.PURCHASE.value
        assert movements[0].quantity == 25
        assert movements[0].reason == "Initial stock"

    def test_zero_quantity_writes_no_movement(self, db, make_product):
        product = make_product()

        stock = InventoryService.initialize(db, product.id, 0)

        assert stock.quantity == 0
        assert stock.minimum_level == 10
        assert movements_for(db, product.id) == []

    def test_second_initialize_conflicts(self, db, make_product):
        product = make_product(stock=5)

        with pytest.raises(ConflictError):
            InventoryService.initialize(db, product.id, 10)

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            InventoryService.initialize(db, uuid4(), 10)

    def test_negative_quantity_rejected(self, db, make_product):
        product = make_product()
        with pytest.raises(ValueError):
            InventoryService.initialize(db, product.id, -1)


class TestDecrease:
    def test_decrease_logs_sale(self, db, make_product):
        product = make_product(stock=10)

        stock = InventoryService.decrease(db, product.id, 3)

        assert stock.quantity == 7
        sales = [m for m in movements_for(db, product.id) if m.movement_type == "sale"]
        assert len(sales) == 1
        assert sales[0].quantity == 3
        assert sales[0].reason == "Sale"

    def test_decrease_to_exactly_zero(self, db, make_product):
        product = make_product(stock=4)

        stock = InventoryService.decrease(db, product.id, 4)

        assert stock.quantity == 0

    def test_insufficient_stock_changes_nothing(self, db, make_product):
        product = make_product(stock=2)

        with pytest.raises(InsufficientStockError) as exc_info:
            InventoryService.decrease(db, product.id, 3)

        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2
        db.rollback()
        assert InventoryService.get_quantity(db, product.id) == 2
        assert all(m.movement_type != "sale" for m in movements_for(db, product.id))

    def test_product_without_stock_is_insufficient(self, db, make_product):
        product = make_product()

        with pytest.raises(InsufficientStockError) as exc_info:
            InventoryService.decrease(db, product.id, 1)

        assert exc_info.value.available is None

    def test_reason_names_the_order(self, db, user, make_product):
        product = make_product(stock=10)
        order = Order(order_number="ORD-20260101-0001", user_id=user.id, customer_name="Ana",
                      subtotal=0, discount=0, discount_percentage=0, total=0)
        db.add(order)
        db.commit()

        InventoryService.decrease(db, product.id, 2, order_id=order.id)

        sale = InventoryService.list_movements(db, order_id=order.id)[0]
        assert sale.reason == "Sale for order ORD-20260101-0001"
        assert sale.order_id == order.id

    def test_unknown_order(self, db, make_product):
        product = make_product(stock=10)
        with pytest.raises(NotFoundError):
            InventoryService.decrease(db, product.id, 1, order_id=uuid4())

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(self, db, make_product, quantity):
        product = make_product(stock=10)
        with pytest.raises(ValueError):
            InventoryService.decrease(db, product.id, quantity)

    def test_stale_read_cannot_oversell(self, file_sessions):
        product_id = file_sessions.product_id
        first = file_sessions.new()
        second = file_sessions.new()
        try:
            # Both sessions have seen 5 units
            assert InventoryService.get_quantity(first, product_id) == 5
            assert InventoryService.get_quantity(second, product_id) == 5

            InventoryService.decrease(first, product_id, 4)

            with pytest.raises(InsufficientStockError) as exc_info:
                InventoryService.decrease(second, product_id, 4)
            assert exc_info.value.available == 1
            second.rollback()

            assert InventoryService.get_quantity(second, product_id) == 1
            sales = InventoryService.list_movements(second, product_id=product_id, movement_type="sale")
            assert [m.quantity for m in sales] == [4]
        finally:
            first.close()
            second.close()

    def test_concurrent_decreases_do_not_both_succeed(self, file_sessions):
        product_id = file_sessions.product_id
        outcomes = []

        def worker():
            session = file_sessions.new()
            try:
                InventoryService.decrease(session, product_id, 3)
                outcomes.append("ok")
            except InsufficientStockError:
                session.rollback()
                outcomes.append("short")
            finally:
                session.close()

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(outcomes) == ["ok", "short"]
        session = file_sessions.new()
        try:
            assert InventoryService.get_quantity(session, product_id) == 2
        finally:
            session.close()


class TestIncrease:
    def test_increase_defaults_to_adjustment(self, db, make_product):
        product = make_product(stock=3)

        stock = InventoryService.increase(db, product.id, 7)

        assert stock.quantity == 10
        last = InventoryService.list_movements(db, product_id=product.id, movement_type="adjustment")[0]
        assert last.quantity == 7
        assert last.reason == "Stock adjustment"

    def test_return_movement(self, db, make_product):
        product = make_product(stock=3)

        InventoryService.increase(db, product.id, 1, reason="Customer return", movement_type=MovementType.RETURN)

        returns = InventoryService.list_movements(db, product_id=product.id, movement_type="return")
        assert len(returns) == 1
        assert returns[0].reason == "Customer return"

    def test_sale_is_not_an_increase(self, db, make_product):
        product = make_product(stock=3)
        with pytest.raises(ValueError):
            InventoryService.increase(db, product.id, 1, movement_type=MovementType.SALE)

    def test_requires_stock_record(self, db, make_product):
        product = make_product()
        with pytest.raises(NotFoundError):
            InventoryService.increase(db, product.id, 5)


class TestSetQuantity:
    def test_correction_is_logged_as_adjustment(self, db, make_product):
        product = make_product(stock=10)

        stock = InventoryService.set_quantity(db, product.id, 4, reason="Broken in storage")

        assert stock.quantity == 4
        adjustment = InventoryService.list_movements(db, product_id=product.id, movement_type="adjustment")[0]
        assert adjustment.quantity == 6
        assert adjustment.reason == "Stock corrected from 10 to 4: Broken in storage"

    def test_upward_correction(self, db, make_product):
        product = make_product(stock=2)

        InventoryService.set_quantity(db, product.id, 9)

        adjustment = InventoryService.list_movements(db, product_id=product.id, movement_type="adjustment")[0]
        assert adjustment.quantity == 7

    def test_same_quantity_is_a_no_op(self, db, make_product):
        product = make_product(stock=5)

        InventoryService.set_quantity(db, product.id, 5)

        assert InventoryService.list_movements(db, product_id=product.id, movement_type="adjustment") == []

    def test_negative_rejected(self, db, make_product):
        product = make_product(stock=5)
        with pytest.raises(ValueError):
            InventoryService.set_quantity(db, product.id, -1)

    def test_missing_stock(self, db, make_product):
        product = make_product()
        with pytest.raises(NotFoundError):
            InventoryService.set_quantity(db, product.id, 3)


class TestQueries:
    def test_movements_with_equal_timestamps_have_a_stable_order(self, db, make_product):
        product = make_product()
        stamp = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        for quantity in (1, 2, 3, 4):
            db.add(StockMovement(product_id=product.id, movement_type="adjustment",
                                 quantity=quantity, created_at=stamp))
        db.commit()

        movements = InventoryService.list_movements(db, product_id=product.id)

        assert [m.id for m in movements] == sorted((m.id for m in movements), reverse=True)
        assert [m.id for m in InventoryService.list_movements(db, product_id=product.id, limit=2)] == \
            [m.id for m in movements[:2]]

    def test_quantity_of_product_without_stock(self, db, make_product):
        product = make_product()
        assert InventoryService.get_quantity(db, product.id) == 0
        assert InventoryService.get_stock(db, product.id) is None

    def test_low_stock_uses_minimum_level(self, db, make_product):
        low = make_product(stock=3, minimum_level=5)
        at_level = make_product(stock=5, minimum_level=5)
        plenty = make_product(stock=50, minimum_level=5)

        product_ids = {s.product_id for s in InventoryService.list_low_stock(db)}

        assert low.id in product_ids
        assert at_level.id in product_ids
        assert plenty.id not in product_ids

    def test_movements_filter_and_limit(self, db, make_product):
        product = make_product(stock=20)
        other = make_product(stock=20)
        for _ in range(3):
            InventoryService.decrease(db, product.id, 1)

        sales = InventoryService.list_movements(db, product_id=product.id, movement_type="sale")
        assert len(sales) == 3
        assert all(m.product_id == product.id for m in sales)

        assert len(InventoryService.list_movements(db, limit=2)) == 2
        assert len(InventoryService.list_movements(db, product_id=other.id)) == 1
