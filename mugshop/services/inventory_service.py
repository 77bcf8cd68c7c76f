"""
Inventory Service - stock quantities and the movement ledger

Every quantity change is a single conditional UPDATE plus one movement row
written in the same transaction, so concurrent requests cannot both consume
the same units.
"""
from sqlalchemy.orm import Session
from sqlalchemy import update
from typing import List, Optional
from uuid import UUID
import logging

from mugshop.core.exceptions import ConflictError, InsufficientStockError, NotFoundError
from mugshop.models import Stock, StockMovement, MovementType, Product, Order

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_LEVEL = 10

class InventoryService:
    """Stock/Inventory business logic"""

    @staticmethod
    def get_stock(db: Session, product_id: UUID) -> Optional[Stock]:
        """Get stock record for a product"""
        return db.query(Stock).filter(Stock.product_id == product_id).populate_existing().first()

    @staticmethod
    def get_quantity(db: Session, product_id: UUID) -> int:
        """Current quantity, 0 when the product has no stock record"""
        stock = InventoryService.get_stock(db, product_id)
        return stock.quantity if stock else 0

    @staticmethod
    def _finish(db: Session, commit: bool) -> None:
        if commit:
            db.commit()
        else:
            db.flush()

    @staticmethod
    def _add_movement(
        db: Session,
        product_id: UUID,
        movement_type: MovementType,
        quantity: int,
        reason: Optional[str],
        order_id: Optional[UUID] = None,
        created_by: Optional[UUID] = None
    ) -> StockMovement:
        movement = StockMovement(
            product_id=product_id,
            order_id=order_id,
            movement_type=movement_type.value,
            quantity=quantity,
            reason=reason,
            created_by=created_by
        )
        db.add(movement)
        return movement

    @staticmethod
    def initialize(
        db: Session,
        product_id: UUID,
        quantity: int,
        minimum_level: int = DEFAULT_MINIMUM_LEVEL,
        created_by: Optional[UUID] = None,
        commit: bool = True
    ) -> Stock:
        """Create the stock record for a product that has none"""
        if quantity < 0:
            raise ValueError("Initial quantity must not be negative")

        if not db.query(Product.id).filter(Product.id == product_id).first():
            raise NotFoundError("Product", product_id)

        if InventoryService.get_stock(db, product_id):
            raise ConflictError(f"Stock already initialized for product {product_id}")

        stock = Stock(
            product_id=product_id,
            quantity=quantity,
            minimum_level=minimum_level if minimum_level is not None else DEFAULT_MINIMUM_LEVEL
        )
        db.add(stock)

        if quantity > 0:
            InventoryService._add_movement(
                db, product_id, MovementType.PURCHASE, quantity, "Initial stock", created_by=created_by
            )

        InventoryService._finish(db, commit)
        if commit:
            db.refresh(stock)

        logger.info(f"Stock initialized for product {product_id}: quantity={quantity}")
        return stock

    @staticmethod
    def decrease(
        db: Session,
        product_id: UUID,
        quantity: int,
        order_id: Optional[UUID] = None,
        created_by: Optional[UUID] = None,
        commit: bool = True
    ) -> Stock:
        """
        Take units out of stock for a sale.

        Raises InsufficientStockError without touching anything when the
        product has no stock record or fewer than `quantity` units.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        reason = "Sale"
        if order_id:
            order = db.query(Order).filter(Order.id == order_id).first()
            if not order:
                raise NotFoundError("Order", order_id)
            reason = f"Sale for order {order.order_number}"

        result = db.execute(
            update(Stock)
            .where(Stock.product_id == product_id, Stock.quantity >= quantity)
            .values(quantity=Stock.quantity - quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            stock = InventoryService.get_stock(db, product_id)
            available = stock.quantity if stock else None
            logger.warning(f"Insufficient stock for product {product_id}: requested={quantity} available={available}")
            raise InsufficientStockError(product_id, quantity, available)

        InventoryService._add_movement(
            db, product_id, MovementType.SALE, quantity, reason, order_id=order_id, created_by=created_by
        )
        InventoryService._finish(db, commit)

        stock = InventoryService.get_stock(db, product_id)
        logger.info(f"Stock decreased for product {product_id}: -{quantity} -> {stock.quantity}")
        return stock

    @staticmethod
    def increase(
        db: Session,
        product_id: UUID,
        quantity: int,
        reason: Optional[str] = None,
        movement_type: MovementType = MovementType.ADJUSTMENT,
        order_id: Optional[UUID] = None,
        created_by: Optional[UUID] = None,
        commit: bool = True
    ) -> Stock:
        """Put units back into stock; the stock record must already exist"""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        movement_type = MovementType(movement_type)
        if movement_type == MovementType.SALE:
            raise ValueError("Sales must go through decrease()")

        if order_id and not db.query(Order.id).filter(Order.id == order_id).first():
            raise NotFoundError("Order", order_id)

        result = db.execute(
            update(Stock)
            .where(Stock.product_id == product_id)
            .values(quantity=Stock.quantity + quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise NotFoundError("Stock for product", product_id)

        InventoryService._add_movement(
            db, product_id, movement_type, quantity, reason or "Stock adjustment",
            order_id=order_id, created_by=created_by
        )
        InventoryService._finish(db, commit)

        stock = InventoryService.get_stock(db, product_id)
        logger.info(f"Stock increased for product {product_id}: +{quantity} ({movement_type.value}) -> {stock.quantity}")
        return stock

    @staticmethod
    def set_quantity(
        db: Session,
        product_id: UUID,
        new_quantity: int,
        reason: Optional[str] = None,
        created_by: Optional[UUID] = None,
        commit: bool = True
    ) -> Stock:
        """
        Administrative correction to an absolute quantity.

        Logged as an adjustment movement of |new - old| units. The write is
        conditional on the quantity read just before it; a concurrent change
        in between raises ConflictError.
        """
        if new_quantity < 0:
            raise ValueError("Quantity must not be negative")

        stock = InventoryService.get_stock(db, product_id)
        if not stock:
            raise NotFoundError("Stock for product", product_id)

        old_quantity = stock.quantity
        if new_quantity == old_quantity:
            return stock

        result = db.execute(
            update(Stock)
            .where(Stock.product_id == product_id, Stock.quantity == old_quantity)
            .values(quantity=new_quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError(f"Stock for product {product_id} changed concurrently, retry the correction")

        note = f"Stock corrected from {old_quantity} to {new_quantity}"
        if reason:
            note = f"{note}: {reason}"

        InventoryService._add_movement(
            db, product_id, MovementType.ADJUSTMENT, abs(new_quantity - old_quantity), note, created_by=created_by
        )
        InventoryService._finish(db, commit)

        logger.info(f"Stock for product {product_id} set {old_quantity} -> {new_quantity}")
        return InventoryService.get_stock(db, product_id)

    @staticmethod
    def list_movements(
        db: Session,
        product_id: Optional[UUID] = None,
        order_id: Optional[UUID] = None,
        movement_type: Optional[str] = None,
        limit: int = 100
    ) -> List[StockMovement]:
        """Get stock movements, most recent first"""
        query = db.query(StockMovement)

        if product_id:
            query = query.filter(StockMovement.product_id == product_id)

        if order_id:
            query = query.filter(StockMovement.order_id == order_id)

        if movement_type:
            query = query.filter(StockMovement.movement_type == movement_type)

        return query.order_by(StockMovement.created_at.desc(), StockMovement.id.desc()).limit(limit).all()

    @staticmethod
    def list_low_stock(db: Session) -> List[Stock]:
        """Stock records at or below their minimum level (advisory)"""
        return db.query(Stock).filter(
            Stock.minimum_level.isnot(None),
            Stock.quantity <= Stock.minimum_level
        ).order_by(Stock.quantity).all()
