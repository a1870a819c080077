"""Catalog models for the storefront."""
from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from pharmanature.data.database.connection import Base


class Product(Base):
    """Product model representing items in the pharmacy catalog."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    name = Column(String(255), nullable=False, index=True)
    brand = Column(String(100), nullable=True, index=True)
    description = Column(Text, nullable=True)

    # Pricing (3 decimals, millimes)
    price = Column(Numeric(10, 3), nullable=False)
    old_price = Column(Numeric(10, 3), nullable=True)
    discount = Column(Integer, nullable=True)  # Display percentage, never recomputed
    promo = Column(Boolean, default=False, nullable=False)

    # Category name, not a foreign key
    category = Column(String(100), nullable=True, index=True)

    # Inventory
    quantity = Column(Integer, default=0, nullable=False)

    # Media
    image_url = Column(String(500), nullable=True)
    images = Column(JSON, nullable=True)  # Array of image URLs

    specifications = Column(JSON, nullable=True)  # [{"name": "Volume", "value": "30ml"}]

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_discounted(self) -> bool:
        """True when an old price above the current price is shown."""
        return self.old_price is not None and self.old_price > self.price

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class Category(Base):
    """Category model; products reference it by name."""

    __tablename__ = "categories"

    name = Column(String(100), primary_key=True)
    sub_categories = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Category(name='{self.name}')>"
