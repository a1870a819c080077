"""Checkout and order schemas for API validation."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal


class CustomerInfo(BaseModel):
    """Customer details collected on the checkout page."""
    email: str = Field(..., min_length=3, max_length=255, description="Contact email")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500, description="Street address")
    address2: Optional[str] = Field(None, max_length=500, description="Apartment, suite, etc.")
    postal_code: str = Field(..., min_length=1, max_length=20)
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field("Tunisia", max_length=100)
    phone: str = Field(..., min_length=1, max_length=30)

    @field_validator('email', 'first_name', 'last_name', 'address', 'postal_code', 'city', 'phone')
    @classmethod
    def validate_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class CheckoutRequest(BaseModel):
    """Checkout payload: customer details and the chosen payment method."""
    customer: CustomerInfo
    payment_method: Literal["cod", "card"] = Field("card", description="Cash on delivery or card")


class OrderItemResponse(BaseModel):
    """Order item response model."""
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order response model."""
    id: int
    session_id: str
    first_name: str
    last_name: str
    city: str
    payment_method: str
    subtotal: float
    shipping_fee: float
    fiscal_stamp: float
    total_amount: float
    total_formatted: str
    status: str
    created_at: str
    items: List[OrderItemResponse]
