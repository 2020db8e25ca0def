"""
Quotation and quotation line models
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship, validates
from decimal import Decimal

from invoice_it.models.base import BaseModel

# Largest value a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

class Quotation(BaseModel):
    """
    Priced proposal from a business to one of its customers.
    grand_total is stored, not derived on read.
    """
    __tablename__ = "quotations"

    user_id = Column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Issuing business account"
    )

    customer_id = Column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Customer the quotation is addressed to"
    )

    grand_total = Column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Sum of line amounts"
    )

    # Relationships
    owner = relationship("User", back_populates="quotations")
    customer = relationship("Customer", back_populates="quotations")
    items = relationship(
        "QuotationItem",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="QuotationItem.id",
    )

    def recalculate_total(self) -> Decimal:
        """
        Recompute grand_total from the current lines
        """
        self.grand_total = sum((item.amount for item in self.items), Decimal("0"))
        return self.grand_total

    def __repr__(self) -> str:
        return f"<Quotation(id={self.id}, customer_id={self.customer_id}, total={self.grand_total})>"


class QuotationItem(BaseModel):
    """
    One quotation line. Name and price are snapshots taken when the line is
    written, so later product edits do not change issued quotations.
    """
    __tablename__ = "quotation_items"

    quotation_id = Column(
        ForeignKey("quotations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    product_id = Column(
        ForeignKey("products.id"),
        nullable=False,
        index=True
    )

    product_name = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    quotation = relationship("Quotation", back_populates="items")
    product = relationship("Product", back_populates="quotation_items")

    @validates('quantity')
    def validate_quantity(self, key: str, quantity: int) -> int:
        if quantity is None or quantity <= 0:
            raise ValueError("Quantity must be positive")
        return quantity

    @classmethod
    def snapshot(cls, product_id: int, product_name: str, quantity: int, price) -> "QuotationItem":
        """
        Build a line with amount fixed to quantity * price
        """
        price = Decimal(str(price))
        return cls(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            price=price,
            amount=price * quantity,
        )

    def __repr__(self) -> str:
        return f"<QuotationItem(product={self.product_name}, qty={self.quantity}, amount={self.amount})>"

