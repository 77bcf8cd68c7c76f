"""
Product Service - Business Logic for the catalog
"""
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional
from uuid import UUID
import logging

from mugshop.core.exceptions import ConflictError, NotFoundError
from mugshop.models import Product, StockMovement, OrderItem
from mugshop.schemas.product import ProductCreate, ProductUpdate
from .inventory_service import InventoryService

logger = logging.getLogger(__name__)

class ProductService:
    """Product business logic"""

    @staticmethod
    def get_products(
        db: Session,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None
    ) -> List[Product]:
        """Get products with filters"""
        query = db.query(Product)

        if category:
            query = query.filter(Product.category == category)

        if is_active is not None:
            query = query.filter(Product.is_active == is_active)

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Product.sku.ilike(search_term),
                    Product.name.ilike(search_term)
                )
            )

        return query.order_by(Product.name).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: UUID) -> Product:
        """Get product by ID"""
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def get_product_by_sku(db: Session, sku: str) -> Product:
        """Get product by SKU"""
        product = db.query(Product).filter(Product.sku == sku).first()
        if not product:
            raise NotFoundError("Product with SKU", sku)
        return product

    @staticmethod
    def create_product(db: Session, product_data: ProductCreate, created_by: Optional[UUID] = None) -> Product:
        """Create new product, optionally with its initial stock"""
        if db.query(Product.id).filter(Product.sku == product_data.sku).first():
            raise ConflictError(f"SKU {product_data.sku} already exists")

        product = Product(
            sku=product_data.sku,
            name=product_data.name,
            description=product_data.description,
            base_price=product_data.base_price,
            category=product_data.category
        )

        db.add(product)
        db.flush()

        if product_data.initial_stock is not None:
            InventoryService.initialize(
                db, product.id, product_data.initial_stock, created_by=created_by, commit=False
            )

        db.commit()
        db.refresh(product)

        logger.info(f"Product created: {product.sku} ({product.id})")
        return product

    @staticmethod
    def update_product(db: Session, product_id: UUID, product_data: ProductUpdate) -> Product:
        """Update product"""
        product = ProductService.get_product_by_id(db, product_id)

        for field, value in product_data.model_dump(exclude_unset=True).items():
            setattr(product, field, value)

        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product_id: UUID) -> bool:
        """
        Physically delete a product and its stock record.

        Products that appear on orders or in the movement ledger keep their
        history; deactivate those instead.
        """
        product = ProductService.get_product_by_id(db, product_id)

        in_orders = db.query(OrderItem.id).filter(OrderItem.product_id == product_id).first()
        in_ledger = db.query(StockMovement.id).filter(StockMovement.product_id == product_id).first()
        if in_orders or in_ledger:
            raise ConflictError(f"Product {product.sku} has order or stock history, deactivate it instead")

        db.delete(product)
        db.commit()

        logger.info(f"Product deleted: {product.sku} ({product_id})")
        return True
