"""Utility functions for the application."""
from .cart import Cart, CartItem, CartManager, format_amount
from .offers import resolve_config, select_grid_products, select_deal_of_the_day

__all__ = [
    "Cart",
    "CartItem",
    "CartManager",
    "format_amount",
    "resolve_config",
    "select_grid_products",
    "select_deal_of_the_day"
]
