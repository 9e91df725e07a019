"""
Error types raised by the repositories and services.

Repositories raise StoreFault for anything that goes wrong talking to the
database. Services wrap it into an operation-specific error; domain errors
(not found, insufficient stock, validation) are raised as themselves so the
API layer can pick the right status code.
"""
from typing import Optional


class StoreFault(Exception):
    """Exception raised by repositories when the database operation fails."""
    pass


class ProductServiceError(Exception):
    """Base class for errors surfaced by the service layer."""
    pass


class ProductNotFoundError(ProductServiceError):
    """Exception raised when the requested product doesn't exist."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class InsufficientStockError(ProductServiceError):
    """Exception raised when a decrement would drive stock below zero."""

    def __init__(self, product_id: int, available: Optional[int] = None, requested: Optional[int] = None):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        message = f"Insufficient stock for product {product_id}"
        if available is not None and requested is not None:
            message += f". Available: {available}, Requested: {requested}"
        super().__init__(message)


class ValidationError(ProductServiceError):
    """Exception raised when an argument fails a business rule check."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class RetrievalError(ProductServiceError):
    """Exception raised when products or stock could not be read."""
    pass


class CreationError(ProductServiceError):
    """Exception raised when a product could not be created."""
    pass


class UpdateError(ProductServiceError):
    """Exception raised when a product could not be updated."""
    pass


class DeletionError(ProductServiceError):
    """Exception raised when a product could not be deleted."""
    pass


class StockUpdateError(ProductServiceError):
    """Exception raised when a stock adjustment could not be applied."""
    pass
