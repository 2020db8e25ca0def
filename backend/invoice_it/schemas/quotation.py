"""
Pydantic schemas for quotations and their line items
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from invoice_it.schemas.common import Money, Price
from invoice_it.schemas.customer import CustomerResponse

class QuotationItemIn(BaseModel):
    """
    One requested line. price and product_name default to the product's
    current price and title when omitted.
    """

    product_id: int = Field(..., description="Product being quoted")
    quantity: int = Field(..., gt=0, le=1_000_000, description="Units quoted")
    price: Optional[Price] = Field(None, description="Unit price override")
    product_name: Optional[str] = Field(None, min_length=1, max_length=500)

class QuotationCreate(BaseModel):
    """Schema for creating a quotation"""

    customer_id: int = Field(..., description="Customer the quotation is addressed to")
    items: List[QuotationItemIn] = Field(..., min_length=1)

class QuotationUpdate(BaseModel):
    """Schema for editing a quotation; the item list replaces the stored one"""

    items: List[QuotationItemIn] = Field(..., min_length=1)
    customer_id: Optional[int] = Field(None, description="Re-address the quotation to another customer")

class QuotationItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    price: Money
    amount: Money

    class Config:
        from_attributes = True

class QuotationResponse(BaseModel):
    """Schema for quotation API responses"""

    id: int
    user_id: int
    customer_id: int
    grand_total: Money
    created_at: datetime
    updated_at: datetime
    items: List[QuotationItemResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True

class QuotationWithCustomer(QuotationResponse):
    customer: CustomerResponse

class QuotationSummary(BaseModel):
    """Dashboard row"""

    id: int
    created_at: datetime
    grand_total: Money
    customer: str = Field(..., description="Customer name")

class QuotationDetail(BaseModel):
    """Flattened quotation view with both parties' contact details"""

    id: int
    created_at: datetime
    grand_total: Money
    business_name: str
    user_address: Optional[str] = None
    user_phone: Optional[str] = None
    user_email: str
    user_gstin: Optional[str] = None
    customer_name: str
    customer_phone: Optional[str] = None
    customer_email: str
    customer_address: Optional[str] = None
    items: List[QuotationItemResponse]
