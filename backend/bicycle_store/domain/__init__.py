"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from bicycle_store.domain.customer import (
    BillingAndShippingAddress,
    CartItem,
    Customer,
    CustomerLookup,
    LookupStatus,
    PasswordChangeResult,
    PasswordResetRequest,
    PasswordUpdateRequest,
)
from bicycle_store.domain.product import Product

__all__ = [
    'BillingAndShippingAddress',
    'CartItem',
    'Customer',
    'CustomerLookup',
    'LookupStatus',
    'PasswordChangeResult',
    'PasswordResetRequest',
    'PasswordUpdateRequest',
    'Product',
]
