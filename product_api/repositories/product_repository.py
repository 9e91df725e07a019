from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError
from typing import Callable, List, Optional
import logging

from product_api.config import get_settings
from product_api.models.product import Product
from product_api.models.stock import Stock
from product_api.services.exceptions import StoreFault
from product_api.utils.ids import generate_product_id

logger = logging.getLogger(__name__)

settings = get_settings()


class ProductRepository:
    """
    Data access for Product rows.

    Write methods commit on success and roll back on failure. Every
    SQLAlchemy error is re-raised as StoreFault.
    """

    def __init__(
        self,
        db: Session,
        id_generator: Callable[[], int] = generate_product_id,
        max_id_attempts: int = None,
    ):
        self.db = db
        self.id_generator = id_generator
        if max_id_attempts is None:
            max_id_attempts = settings.ID_ALLOCATION_MAX_ATTEMPTS
        self.max_id_attempts = max_id_attempts

    def get_all(self) -> List[Product]:
        try:
            return self.db.query(Product).order_by(Product.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching all products: {e}")
            raise StoreFault("Error fetching all products") from e

    def get_by_id(self, product_id: int) -> Optional[Product]:
        try:
            return self.db.query(Product).filter(Product.id == product_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product with ID {product_id}: {e}")
            raise StoreFault(f"Error fetching product with ID {product_id}") from e

    def exists(self, product_id: int) -> bool:
        try:
            return self.db.query(Product.id).filter(Product.id == product_id).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of product {product_id}: {e}")
            raise StoreFault("Error checking product existence") from e

    def add(self, product: Product) -> Product:
        """
        Insert a product, allocating its id.

        A random candidate id is tried and the primary key constraint decides
        whether it is free. On a collision the transaction is rolled back and
        a new candidate is drawn, up to ``max_id_attempts`` times. The Stock
        row is created in the same transaction once the id is settled.

        Raises:
            StoreFault: On a database error or when no free id was found
        """
        try:
            for attempt in range(1, self.max_id_attempts + 1):
                candidate = self.id_generator()
                product.id = candidate
                self.db.add(product)
                try:
                    self.db.flush()
                except (IntegrityError, FlushError):
                    self.db.rollback()
                    if not self.exists(candidate):
                        # Not an id collision; some other constraint failed.
                        raise
                    logger.warning(
                        f"Product id {candidate} already taken "
                        f"(attempt {attempt}/{self.max_id_attempts})"
                    )
                    continue

                product.stock_record = Stock(quantity=product.stock)
                self.db.commit()
                self.db.refresh(product)
                return product
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error adding product: {e}")
            raise StoreFault("Error adding product") from e

        raise StoreFault(
            f"Could not allocate a unique product id after {self.max_id_attempts} attempts"
        )

    def update(self, product: Product) -> Product:
        """
        Persist the changes made to an already-loaded product.

        Only modified columns are written. The Stock row is touched only when
        ``stock`` itself was changed, so an update that leaves stock alone
        cannot overwrite a concurrent adjustment with the value loaded earlier.
        """
        try:
            stock_changed = inspect(product).attrs.stock.history.has_changes()
            if product.stock_record is None:
                product.stock_record = Stock(quantity=product.stock)
            elif stock_changed:
                product.stock_record.quantity = product.stock
            self.db.commit()
            self.db.refresh(product)
            return product
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating product {product.id}: {e}")
            raise StoreFault(f"Error updating product with ID {product.id}") from e

    def delete(self, product_id: int) -> None:
        """Remove the product and its stock row if present."""
        try:
            product = self.db.query(Product).filter(Product.id == product_id).first()
            if product:
                self.db.delete(product)
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting product {product_id}: {e}")
            raise StoreFault(f"Error deleting product with ID {product_id}") from e
