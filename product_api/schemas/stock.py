from pydantic import BaseModel, Field


class StockResponse(BaseModel):
    """Current stock level of a product after a read or an adjustment."""
    product_id: int = Field(..., description="ID of the product")
    stock: int = Field(..., ge=0, description="Available stock")
