"""
Database models package
"""

from .base import Base, BaseModel
from .user import User
from .product import Product
from .customer import Customer
from .quotation import Quotation, QuotationItem

__all__ = [
    "Base", "BaseModel", "User", "Product", "Customer", "Quotation", "QuotationItem"
]
