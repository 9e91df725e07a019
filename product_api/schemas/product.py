from decimal import Decimal
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, ConfigDict, PlainSerializer

# Prices are kept as Decimal internally but rendered as JSON numbers.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Price = Field(..., gt=0, max_digits=12, decimal_places=2, description="Product price (must be positive)")


class ProductCreate(ProductBase):
    """
    Schema for creating a new product.

    Ids are assigned by the service; an ``id`` in the request body is ignored.
    """
    stock: int = Field(0, ge=0, description="Initial stock (must be non-negative)")


class ProductUpdate(BaseModel):
    """Schema for updating an existing product. All fields are optional."""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2, description="Product price")
    stock: Optional[int] = Field(None, ge=0, description="Available stock")


class ProductResponse(ProductBase):
    """Schema for product response including all fields."""
    id: int
    stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
