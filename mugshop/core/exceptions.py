"""
Domain Errors - raised by services, translated to HTTP responses in main.py
"""
from typing import Optional


class MugShopError(Exception):
    """Base class for business errors"""
    status_code = 400
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MugShopError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: Optional[object] = None):
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(MugShopError):
    status_code = 409
    code = "insufficient_stock"

    def __init__(self, product_id: object, requested: int, available: Optional[int] = None):
        if available is None:
            message = f"Insufficient stock for product {product_id}: requested {requested}, no stock record"
        else:
            message = f"Insufficient stock for product {product_id}: requested {requested}, available {available}"
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ConflictError(MugShopError):
    status_code = 409
    code = "conflict"


class ValidationFailedError(MugShopError):
    status_code = 422
    code = "validation_failed"


class PersistenceUnavailableError(MugShopError):
    status_code = 503
    code = "persistence_unavailable"
