"""
Pydantic schemas for Customer model validation
"""

from pydantic import BaseModel, Field, EmailStr, validator
from typing import Optional, List
from datetime import datetime

class CustomerBase(BaseModel):
    """Base customer schema with common fields"""

    name: str = Field(..., min_length=1, max_length=255, description="Customer name")
    email: EmailStr = Field(..., description="Invoices are sent to this address")
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

class CustomerCreate(CustomerBase):
    pass

class CustomerUpdate(BaseModel):
    """Schema for updating a customer; omitted fields keep their stored value"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

    @validator('name', 'email')
    def reject_null(cls, v):
        """name and email may be omitted but not cleared"""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class CustomerResponse(CustomerBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CustomerList(BaseModel):
    """Schema for paginated customer list responses"""

    customers: List[CustomerResponse] = Field(..., description="Customers on this page")
    total: int = Field(..., description="Total number of customers")
    page: int = Field(1, description="Current page number")
    limit: int = Field(10, description="Items per page")
