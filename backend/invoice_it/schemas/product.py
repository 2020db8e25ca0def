"""
Pydantic schemas for Product model validation
"""

from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime

from invoice_it.schemas.common import Price

class ProductBase(BaseModel):
    """Base product schema with common fields"""

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Product title",
        examples=["Steel Rack, 5 shelves"]
    )

    price: Price = Field(
        ...,
        description="Unit price",
        examples=[2499.00]
    )

    description: Optional[str] = Field(
        None,
        description="Free-form product description"
    )

class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass

class ProductUpdate(BaseModel):
    """Schema for updating a product; omitted fields keep their stored value"""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    price: Optional[Price] = None
    description: Optional[str] = None

    @validator('title', 'price')
    def reject_null(cls, v):
        """title and price may be omitted but not cleared"""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class ProductResponse(ProductBase):
    """Schema for product API responses"""

    id: int = Field(..., description="Unique product identifier")
    user_id: int = Field(..., description="Owning business account")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
