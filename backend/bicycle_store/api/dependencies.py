"""
FastAPI dependencies wiring services to a per-request database session

Tests replace these through app.dependency_overrides.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from bicycle_store.core.database import get_db
from bicycle_store.repositories.customer_repository import CustomerRepository
from bicycle_store.repositories.product_repository import ProductRepository
from bicycle_store.services.customer_service import CustomerService
from bicycle_store.services.product_service import ProductService


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(CustomerRepository(db))


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db))
