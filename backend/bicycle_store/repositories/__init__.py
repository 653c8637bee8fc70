"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from bicycle_store.repositories.customer_repository import CustomerRepository
from bicycle_store.repositories.product_repository import ProductRepository

__all__ = [
    'CustomerRepository',
    'ProductRepository'
]
