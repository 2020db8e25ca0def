"""
Product model for a tenant's catalogue
"""

from sqlalchemy import Column, String, Text, ForeignKey, Numeric
from sqlalchemy.orm import relationship, validates
from decimal import Decimal

from invoice_it.models.base import BaseModel

class Product(BaseModel):
    """
    Product offered by a business, priced per unit
    """
    __tablename__ = "products"

    user_id = Column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning business account"
    )

    title = Column(
        String(500),
        nullable=False,
        index=True,
        comment="Product title"
    )

    price = Column(
        Numeric(12, 2),
        nullable=False,
        comment="Current unit price"
    )

    description = Column(
        Text,
        nullable=True,
        comment="Free-form product description"
    )

    # Relationships
    owner = relationship("User", back_populates="products")
    quotation_items = relationship("QuotationItem", back_populates="product")

    @validates('price')
    def validate_price(self, key: str, price) -> Decimal:
        """
        Prices are non-negative
        """
        price = Decimal(str(price))
        if price < 0:
            raise ValueError("Price cannot be negative")
        return price

    def __repr__(self) -> str:
        return f"<Product(title={self.title}, price={self.price})>"
