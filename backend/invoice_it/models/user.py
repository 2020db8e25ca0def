"""
User model for business accounts (tenants)
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship, validates

from invoice_it.models.base import BaseModel

class User(BaseModel):
    """
    Business account owning products, customers and quotations
    """
    __tablename__ = "users"

    name = Column(
        String(255),
        nullable=False,
        comment="Account holder name"
    )

    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email, unique across accounts"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="bcrypt password hash"
    )

    phone = Column(
        String(50),
        nullable=True,
        comment="Business contact phone"
    )

    business_name = Column(
        String(255),
        nullable=False,
        comment="Name printed on quotations and invoices"
    )

    address = Column(
        Text,
        nullable=True,
        comment="Business postal address"
    )

    gstin = Column(
        String(15),
        nullable=True,
        comment="GST identification number"
    )

    # Relationships
    products = relationship("Product", back_populates="owner", cascade="all, delete-orphan")
    customers = relationship("Customer", back_populates="owner", cascade="all, delete-orphan")
    quotations = relationship("Quotation", back_populates="owner", cascade="all, delete-orphan")

    @validates('email')
    def validate_email(self, key: str, email: str) -> str:
        """
        Normalise email case; format is checked by the request schema
        """
        if not email:
            raise ValueError("Email cannot be empty")
        return email.lower()

    @validates('gstin')
    def validate_gstin(self, key: str, gstin: str) -> str:
        return gstin.strip().upper() if gstin else gstin

    def __repr__(self) -> str:
        return f"<User(email={self.email}, business={self.business_name})>"
