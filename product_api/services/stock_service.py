from sqlalchemy.orm import Session
import logging

from product_api.repositories.product_repository import ProductRepository
from product_api.repositories.stock_repository import StockRepository
from product_api.services.exceptions import (
    StoreFault,
    ProductNotFoundError,
    InsufficientStockError,
    ValidationError,
    RetrievalError,
    StockUpdateError,
)

logger = logging.getLogger(__name__)


class StockService:
    """
    Service class for stock adjustments.

    Decrements are all-or-nothing: either the full quantity is taken or
    nothing changes. The check and the write happen in one conditional
    UPDATE in the repository, so concurrent requests cannot oversell.
    """

    def __init__(
        self,
        db: Session,
        stock_repository: StockRepository = None,
        product_repository: ProductRepository = None,
    ):
        self.db = db
        self.stock_repository = stock_repository or StockRepository(db)
        self.product_repository = product_repository or ProductRepository(db)

    def get_stock(self, product_id: int) -> int:
        """Get the current stock of a product."""
        try:
            stock = self.stock_repository.get_by_product_id(product_id)
        except StoreFault as e:
            logger.error(f"Error fetching stock for product ID {product_id}: {e}")
            raise RetrievalError(f"An error occurred while retrieving stock for product {product_id}.") from e

        if stock is None:
            raise ProductNotFoundError(product_id)
        return stock.quantity

    def decrement(self, product_id: int, quantity: int) -> int:
        """
        Take ``quantity`` units out of a product's stock.

        Returns:
            The new stock level

        Raises:
            ValidationError: If quantity is not positive
            ProductNotFoundError: If product doesn't exist
            InsufficientStockError: If stock is lower than quantity
            StockUpdateError: If the store fails
        """
        self._check_quantity(quantity)
        logger.info(f"Decreasing stock for product ID {product_id} by {quantity}")
        try:
            new_stock = self.stock_repository.decrement(product_id, quantity)
            if new_stock is None:
                available = self._current_quantity(product_id)
                logger.warning(
                    f"Stock decrement failed. Not enough stock for product ID {product_id} "
                    f"(available: {available}, requested: {quantity})"
                )
                raise InsufficientStockError(product_id, available, quantity)
        except StoreFault as e:
            logger.error(f"Error decrementing stock for product ID {product_id}: {e}")
            raise StockUpdateError(f"An error occurred while decrementing stock for product {product_id}.") from e

        logger.info(f"Stock decremented for product ID {product_id}. New stock: {new_stock}")
        return new_stock

    def add_to_stock(self, product_id: int, quantity: int) -> int:
        """
        Add ``quantity`` units to a product's stock. There is no upper bound.

        Returns:
            The new stock level
        """
        self._check_quantity(quantity)
        logger.info(f"Adding {quantity} to stock for product ID {product_id}")
        try:
            new_stock = self.stock_repository.increment(product_id, quantity)
            if new_stock is None:
                self._current_quantity(product_id)
                raise StockUpdateError(f"Stock for product {product_id} could not be updated.")
        except StoreFault as e:
            logger.error(f"Error adding stock for product ID {product_id}: {e}")
            raise StockUpdateError(f"An error occurred while adding stock for product {product_id}.") from e

        logger.info(f"Stock added for product ID {product_id}. New stock: {new_stock}")
        return new_stock

    def _current_quantity(self, product_id: int) -> int:
        """
        Explain why an adjustment matched no row.

        Raises ProductNotFoundError when the product is gone and
        StockUpdateError when the product has no stock row; otherwise
        returns the quantity that was too low.
        """
        if not self.product_repository.exists(product_id):
            logger.warning(f"Stock update failed. Product with ID {product_id} not found")
            raise ProductNotFoundError(product_id)

        stock = self.stock_repository.get_by_product_id(product_id)
        if stock is None:
            logger.error(f"Stock update failed. Product with ID {product_id} has no stock record")
            raise StockUpdateError(f"No stock record for product {product_id}.")
        return stock.quantity

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero")
