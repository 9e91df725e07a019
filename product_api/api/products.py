from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from typing import List

from product_api.database import get_db
from product_api.services.product_service import ProductService
from product_api.services.stock_service import StockService
from product_api.services.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
)
from product_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from product_api.schemas.stock import StockResponse

router = APIRouter(prefix="/products", tags=["Products"])


def _require_positive_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Quantity must be greater than zero."
        )


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
    description="Get every product, ordered by ID."
)
def list_products(db: Session = Depends(get_db)):
    """Get all products."""
    service = ProductService(db)
    return service.list()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get detailed information about a specific product."
)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get a product by ID."""
    service = ProductService(db)
    product = service.get_by_id(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )

    return product


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. The ID is assigned by the service."
)
def create_product(
    product_data: ProductCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **name**: Product name (required)
    - **price**: Product price, must be positive (required)
    - **description**: Free-form description (optional)
    - **stock**: Initial stock quantity, must be non-negative (default 0)

    The response carries a Location header pointing at the new product.
    """
    service = ProductService(db)
    product = service.create(product_data)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update a product",
    description="Update product details. Only provided fields will be updated."
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a product.

    Partial updates are supported - only include fields you want to change.
    """
    service = ProductService(db)

    try:
        service.update(product_id, product_data)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product and its stock record by ID."
)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Delete a product."""
    service = ProductService(db)

    try:
        service.delete(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{product_id}/stock",
    response_model=StockResponse,
    summary="Get product stock",
    description="Get the current stock level of a product."
)
def get_stock(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get the stock of a product."""
    service = StockService(db)

    try:
        stock = service.get_stock(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return StockResponse(product_id=product_id, stock=stock)


@router.put(
    "/decrement-stock/{product_id}/{quantity}",
    response_model=StockResponse,
    summary="Decrement stock",
    description="""
    Take a quantity out of a product's stock.

    **Race Condition Handling:**
    The check and the write are one conditional UPDATE, so when several
    requests compete for the last units only the ones that fit succeed.
    The others receive a 409 error with an 'Insufficient stock' message.
    """
)
def decrement_stock(
    product_id: int,
    quantity: int,
    db: Session = Depends(get_db)
):
    """
    Decrement the stock of a product.

    - **quantity**: Units to remove, must be greater than zero
    """
    _require_positive_quantity(quantity)
    service = StockService(db)

    try:
        stock = service.decrement(product_id, quantity)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InsufficientStockError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return StockResponse(product_id=product_id, stock=stock)


@router.put(
    "/add-to-stock/{product_id}/{quantity}",
    response_model=StockResponse,
    summary="Add to stock",
    description="Add a quantity to a product's stock. There is no upper bound."
)
def add_to_stock(
    product_id: int,
    quantity: int,
    db: Session = Depends(get_db)
):
    """
    Add to the stock of a product.

    - **quantity**: Units to add, must be greater than zero
    """
    _require_positive_quantity(quantity)
    service = StockService(db)

    try:
        stock = service.add_to_stock(product_id, quantity)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return StockResponse(product_id=product_id, stock=stock)
