"""
Database models
"""
from .customer import Customer, CartItem
from .product import Product

__all__ = [
    "Customer",
    "CartItem",
    "Product",
]
