from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from product_api.database import Base


class Stock(Base):
    """
    Authoritative stock quantity for a product.

    Product.stock is a denormalized copy that is written in the same
    transaction as every change to quantity.
    """
    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    quantity = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="stock_record")

    __table_args__ = (
        CheckConstraint('quantity >= 0', name='check_quantity_non_negative'),
    )

    def __repr__(self):
        return f"<Stock(product_id={self.product_id}, quantity={self.quantity})>"
