"""
Product Service
Catalog and cart line lookups
"""
from typing import List, Optional, Tuple

from bicycle_store.domain.customer import CartItem
from bicycle_store.domain.product import Product
from bicycle_store.repositories.product_repository import ProductRepository


class ProductService:
    """Read access to products and cart lines"""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def list_products(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        return self.repository.find_all(
            category=category,
            is_active=is_active,
            limit=limit,
            offset=offset
        )

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.repository.find_by_id(product_id)

    def find_order_by_id(self, item_id: int) -> Optional[CartItem]:
        """Find a cart line (pending order) by ID"""
        return self.repository.find_cart_item_by_id(item_id)
