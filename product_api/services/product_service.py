from sqlalchemy.orm import Session
from typing import Optional, List
import logging

from product_api.models.product import Product
from product_api.repositories.product_repository import ProductRepository
from product_api.schemas.product import ProductCreate, ProductUpdate
from product_api.services.exceptions import (
    StoreFault,
    ProductNotFoundError,
    RetrievalError,
    CreationError,
    UpdateError,
    DeletionError,
)

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service class for Product CRUD operations.

    This service handles:
    - Creating new products (id allocated by the repository)
    - Reading products
    - Partial updates (only non-null fields are applied)
    - Deleting products

    Store faults are wrapped into an operation-specific error;
    ProductNotFoundError is raised as itself.
    """

    def __init__(self, db: Session, repository: ProductRepository = None):
        self.db = db
        self.repository = repository or ProductRepository(db)

    def list(self) -> List[Product]:
        """Get every product, ordered by id."""
        logger.info("Fetching all products")
        try:
            return self.repository.get_all()
        except StoreFault as e:
            logger.error(f"Error fetching all products: {e}")
            raise RetrievalError("An error occurred while retrieving products.") from e

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """
        Get a product by ID.

        Returns:
            Product instance or None if not found
        """
        logger.info(f"Fetching product with ID: {product_id}")
        try:
            product = self.repository.get_by_id(product_id)
        except StoreFault as e:
            logger.error(f"Error fetching product with ID {product_id}: {e}")
            raise RetrievalError(f"An error occurred while retrieving product {product_id}.") from e

        if product is None:
            logger.warning(f"Product with ID {product_id} not found")
        return product

    def create(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            product_data: Product creation data

        Returns:
            Created product instance with its assigned id
        """
        logger.info(f"Creating new product: {product_data.model_dump_json()}")
        product = Product(
            name=product_data.name,
            description=product_data.description,
            price=product_data.price,
            stock=product_data.stock,
        )
        try:
            product = self.repository.add(product)
        except StoreFault as e:
            logger.error(f"Error creating product: {e}")
            raise CreationError("An error occurred while creating the product.") from e

        logger.info(f"Product created successfully with ID: {product.id}")
        return product

    def update(self, product_id: int, product_data: ProductUpdate) -> Product:
        """
        Update an existing product.

        Args:
            product_id: ID of product to update
            product_data: Update data (only non-None fields are updated)

        Returns:
            Updated product

        Raises:
            ProductNotFoundError: If product doesn't exist
            UpdateError: If the store fails
        """
        logger.info(f"Updating product with ID: {product_id}")
        try:
            if not self.repository.exists(product_id):
                logger.warning(f"Update failed. Product with ID {product_id} does not exist")
                raise ProductNotFoundError(product_id)

            product = self.repository.get_by_id(product_id)

            # Update only provided fields
            update_data = product_data.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    setattr(product, field, value)

            product = self.repository.update(product)
        except StoreFault as e:
            logger.error(f"Error updating product with ID {product_id}: {e}")
            raise UpdateError(f"An error occurred while updating product {product_id}.") from e

        logger.info(f"Product with ID {product_id} updated successfully")
        return product

    def delete(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If product doesn't exist
            DeletionError: If the store fails
        """
        logger.info(f"Deleting product with ID: {product_id}")
        try:
            if not self.repository.exists(product_id):
                logger.warning(f"Delete failed. Product with ID {product_id} does not exist")
                raise ProductNotFoundError(product_id)

            self.repository.delete(product_id)
        except StoreFault as e:
            logger.error(f"Error deleting product with ID {product_id}: {e}")
            raise DeletionError(f"An error occurred while deleting product {product_id}.") from e

        logger.info(f"Product with ID {product_id} deleted successfully")
