"""Database data layer package."""
from .connection import engine, SessionLocal, get_db, Base
from .product_model import Product, Category
from .order_models import Order, OrderItem
from .offers_model import OffersConfigRecord, get_offers_record
from .product_schema import ProductCreate, ProductUpdate, ProductResponse, CategoryCreate, CategoryResponse

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "Product",
    "Category",
    "Order",
    "OrderItem",
    "OffersConfigRecord",
    "get_offers_record",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "CategoryCreate",
    "CategoryResponse"
]
