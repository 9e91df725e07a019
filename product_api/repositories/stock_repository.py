from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from product_api.models.product import Product
from product_api.models.stock import Stock
from product_api.services.exceptions import StoreFault

logger = logging.getLogger(__name__)


class StockRepository:
    """
    Data access for Stock rows.

    STOCK ADJUSTMENT STRATEGY:
    ==========================
    Quantities are never read, modified in Python and written back. Each
    adjustment is one conditional UPDATE:

        UPDATE stocks SET quantity = quantity - :q
        WHERE product_id = :id AND quantity >= :q

    The database takes a row lock for the UPDATE and re-evaluates the WHERE
    clause against the committed row, so of two concurrent decrements that
    together exceed the stock, the second one matches zero rows. The
    denormalized products.stock column is moved by the same delta inside
    the same transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_product_id(self, product_id: int) -> Optional[Stock]:
        try:
            return self.db.query(Stock).filter(Stock.product_id == product_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching stock for product {product_id}: {e}")
            raise StoreFault(f"Error retrieving stock for product ID {product_id}") from e

    def decrement(self, product_id: int, quantity: int) -> Optional[int]:
        """
        Atomically take ``quantity`` units out of stock.

        Returns:
            The new quantity, or None if no stock row exists for the product
            or it holds fewer than ``quantity`` units (nothing is changed)
        """
        return self._apply_delta(product_id, -quantity)

    def increment(self, product_id: int, quantity: int) -> Optional[int]:
        """
        Atomically add ``quantity`` units to stock.

        Returns:
            The new quantity, or None if no stock row exists for the product
        """
        return self._apply_delta(product_id, quantity)

    def _apply_delta(self, product_id: int, delta: int) -> Optional[int]:
        try:
            query = self.db.query(Stock).filter(Stock.product_id == product_id)
            if delta < 0:
                query = query.filter(Stock.quantity >= -delta)

            updated = query.update(
                {Stock.quantity: Stock.quantity + delta},
                synchronize_session=False,
            )
            if not updated:
                self.db.rollback()
                return None

            self.db.query(Product).filter(Product.id == product_id).update(
                {Product.stock: Product.stock + delta},
                synchronize_session=False,
            )
            new_quantity = (
                self.db.query(Stock.quantity)
                .filter(Stock.product_id == product_id)
                .scalar()
            )
            self.db.commit()
            return new_quantity
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error adjusting stock for product {product_id} by {delta}: {e}")
            raise StoreFault(f"Error updating stock for product ID {product_id}") from e
