"""Catalog schemas for API validation."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime


class Specification(BaseModel):
    """A named product specification, e.g. Volume: 30ml."""
    name: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., max_length=255)


class ProductBase(BaseModel):
    """Base product schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    brand: Optional[str] = Field(None, max_length=100, description="Laboratory or brand")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=3, description="Unit price in dinars")
    old_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=3, description="Previous price shown struck through")
    discount: Optional[int] = Field(None, ge=0, le=100, description="Displayed discount percentage")
    category: Optional[str] = Field(None, max_length=100, description="Category name")
    promo: bool = Field(False, description="Whether the product is on promotion")
    quantity: int = Field(0, ge=0, description="Available stock quantity")
    image_url: Optional[str] = Field(None, max_length=500, description="Primary product image URL")
    images: List[str] = Field(default_factory=list, description="Gallery image URLs")
    specifications: List[Specification] = Field(default_factory=list, description="Ordered specifications")


class ProductCreate(ProductBase):
    """Schema for creating a new product; the id comes from the catalog."""
    id: int = Field(..., gt=0, description="Catalog product id")


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    brand: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=3)
    old_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=3)
    discount: Optional[int] = Field(None, ge=0, le=100)
    category: Optional[str] = Field(None, max_length=100)
    promo: Optional[bool] = None
    quantity: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    images: Optional[List[str]] = None
    specifications: Optional[List[Specification]] = None

    @field_validator('name', 'price', 'promo', 'quantity', mode='before')
    @classmethod
    def reject_null(cls, v):
        # These columns are NOT NULL; omit the field to leave it unchanged
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ProductResponse(ProductBase):
    """Schema for product response."""
    id: int
    is_discounted: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator('images', 'specifications', mode='before')
    @classmethod
    def null_as_empty(cls, v):
        return v or []

    class Config:
        from_attributes = True


class CategoryBase(BaseModel):
    """Category with its ordered sub-categories."""
    name: str = Field(..., min_length=1, max_length=100, description="Unique category name")
    sub_categories: List[str] = Field(default_factory=list, description="Ordered sub-category names")

    @field_validator('name')
    @classmethod
    def validate_not_empty(cls, v):
        if not v.strip():
            raise ValueError("Category name cannot be empty")
        return v.strip()


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""
    pass


class CategoryResponse(CategoryBase):
    """Schema for category response."""

    class Config:
        from_attributes = True
