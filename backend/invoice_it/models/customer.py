"""
Customer model: a client of a business account
"""

from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from invoice_it.models.base import BaseModel

class Customer(BaseModel):
    __tablename__ = "customers"

    user_id = Column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Business account this customer belongs to"
    )

    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False, comment="Invoices are sent here")
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="customers")
    quotations = relationship("Quotation", back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer(name={self.name}, email={self.email})>"
