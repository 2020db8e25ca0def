"""
Pydantic schemas for User registration, login and profile responses
"""

from pydantic import BaseModel, Field, validator, EmailStr
from typing import Optional
from datetime import datetime

class UserBase(BaseModel):
    """Business profile fields shared by requests and responses"""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Account holder name",
        examples=["Asha Verma"]
    )

    email: EmailStr = Field(
        ...,
        description="Login email",
        examples=["asha@verma-traders.in"]
    )

    business_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name printed on quotations and invoices",
        examples=["Verma Traders"]
    )

    phone: Optional[str] = Field(None, max_length=50, description="Business contact phone")
    address: Optional[str] = Field(None, description="Business postal address")

    gstin: Optional[str] = Field(
        None,
        max_length=15,
        description="GST identification number",
        examples=["27AAPFU0939F1ZV"]
    )

    @validator('gstin')
    def normalize_gstin(cls, v):
        """Store GSTIN upper-cased without surrounding whitespace"""
        return v.strip().upper() if v else v

class UserCreate(UserBase):
    """Schema for registering a new business account"""

    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt only uses the first 72 bytes
        description="Plaintext password, hashed before storage"
    )

class UserLogin(BaseModel):
    """Schema for login requests"""

    email: EmailStr
    password: str = Field(..., min_length=1)

class UserResponse(UserBase):
    """Public view of a user, never includes the password hash"""

    id: int
    created_at: datetime

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    message: str
    user: UserResponse

class TokenValidation(BaseModel):
    """Result of validating the session cookie"""

    valid: bool
    user_id: Optional[int] = None
    email: Optional[str] = None
