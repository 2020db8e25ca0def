"""
Pydantic schemas for API request/response validation
"""

from .common import Money, Price
from .user import UserCreate, UserLogin, UserResponse, LoginResponse, TokenValidation
from .product import ProductCreate, ProductUpdate, ProductResponse
from .customer import CustomerCreate, CustomerUpdate, CustomerResponse, CustomerList
from .quotation import (
    QuotationItemIn, QuotationCreate, QuotationUpdate, QuotationItemResponse,
    QuotationResponse, QuotationWithCustomer, QuotationSummary, QuotationDetail
)

__all__ = [
    "Money", "Price",
    # User schemas
    "UserCreate", "UserLogin", "UserResponse", "LoginResponse", "TokenValidation",
    # Product schemas
    "ProductCreate", "ProductUpdate", "ProductResponse",
    # Customer schemas
    "CustomerCreate", "CustomerUpdate", "CustomerResponse", "CustomerList",
    # Quotation schemas
    "QuotationItemIn", "QuotationCreate", "QuotationUpdate", "QuotationItemResponse",
    "QuotationResponse", "QuotationWithCustomer", "QuotationSummary", "QuotationDetail"
]
