"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and cart lines and returns
domain models.
"""
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bicycle_store.domain.customer import CartItem
from bicycle_store.domain.product import Product
from bicycle_store.models.customer import CartItem as CartItemRecord
from bicycle_store.models.product import Product as ProductRecord


class ProductRepository:
    """
    Repository for Product data access

    All queries for products are centralized here.
    Returns Product domain models, not ORM rows.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _map_row_to_product(row: ProductRecord) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            category=row.category,
            price=row.price,
            stock=row.stock,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """
        Find product by ID

        Returns:
            Product or None if not found
        """
        row = self.db.get(ProductRecord, product_id)
        if not row:
            return None
        return self._map_row_to_product(row)

    def find_all(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters

        Args:
            category: Filter by category
            is_active: Filter by active status
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        conditions = []
        if category:
            conditions.append(ProductRecord.category == category)
        if is_active is not None:
            conditions.append(ProductRecord.is_active == is_active)

        total = self.db.scalar(
            select(func.count()).select_from(ProductRecord).where(*conditions)
        )

        rows = self.db.scalars(
            select(ProductRecord)
            .where(*conditions)
            .order_by(ProductRecord.name)
            .limit(limit)
            .offset(offset)
        ).all()

        return [self._map_row_to_product(row) for row in rows], total

    def find_cart_item_by_id(self, item_id: int) -> Optional[CartItem]:
        """
        Find a cart line by ID, whichever cart it belongs to

        Returns:
            CartItem or None if not found
        """
        row = self.db.get(CartItemRecord, item_id)
        if not row:
            return None

        return CartItem(
            id=row.id,
            product_id=row.product_id,
            product_name=row.product.name if row.product else None,
            quantity=row.quantity,
            unit_price=row.unit_price,
        )
