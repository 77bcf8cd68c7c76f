"""
Seed a demo catalog with stock
Usage: python scripts/seed_catalog.py
"""
import sys
import os
sys.path.append(os.getcwd())

from mugshop.core import SessionLocal, Base, engine
from mugshop.schemas.product import ProductCreate
from mugshop.services import ProductService
from mugshop.core.exceptions import ConflictError

DEMO_PRODUCTS = [
    ProductCreate(name="Classic White Mug 325ml", sku="MUG-WHITE-325", base_price=1500, category="ceramic", initial_stock=50),
    ProductCreate(name="Magic Color-Changing Mug", sku="MUG-MAGIC-325", base_price=2900, category="ceramic", initial_stock=20),
    ProductCreate(name="Enamel Camp Mug", sku="MUG-ENAMEL-350", base_price=3500, category="enamel", initial_stock=15),
    ProductCreate(name="Mug Gift Box", sku="BOX-GIFT-01", base_price=800, category="packaging", initial_stock=100),
]

def seed_catalog():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        for product_data in DEMO_PRODUCTS:
            try:
                product = ProductService.create_product(db, product_data)
                print(f"Created {product.sku} ({product.id})")
            except ConflictError:
                db.rollback()
                print(f"Skipped {product_data.sku}, already exists")
    finally:
        db.close()

if __name__ == "__main__":
    seed_catalog()
