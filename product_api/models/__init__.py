from product_api.models.product import Product
from product_api.models.stock import Stock

__all__ = ["Product", "Stock"]
