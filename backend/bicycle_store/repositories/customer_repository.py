"""
Customer Repository - Data Access Layer for Customers

Handles all database queries for customers and their shopping carts and
returns Customer domain models.
"""
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bicycle_store.domain.customer import BillingAndShippingAddress, CartItem, Customer
from bicycle_store.models.customer import Customer as CustomerRecord
from bicycle_store.models.customer import CartItem as CartItemRecord
from bicycle_store.models.product import Product as ProductRecord


class CustomerRepository:
    """
    Repository for Customer data access

    All queries for customers are centralized here.
    Returns Customer domain models, not ORM rows.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _map_cart_item(row: CartItemRecord) -> CartItem:
        return CartItem(
            id=row.id,
            product_id=row.product_id,
            product_name=row.product.name if row.product else None,
            quantity=row.quantity,
            unit_price=row.unit_price,
        )

    @classmethod
    def _map_row_to_customer(cls, row: CustomerRecord) -> Customer:
        """
        Helper method to map an ORM row to the Customer domain model.

        The inline address columns become a BillingAndShippingAddress, or None
        when no address column is set.
        """
        address = None
        if any([row.address_country, row.address_street, row.address_postal_code, row.address_city]):
            address = BillingAndShippingAddress(
                country=row.address_country,
                street_address=row.address_street,
                postal_code=row.address_postal_code,
                city=row.address_city,
            )

        return Customer(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            password=row.password_hash,
            address=address,
            shopping_cart=[cls._map_cart_item(item) for item in row.cart_items],
        )

    @staticmethod
    def _apply_address(row: CustomerRecord, address: Optional[BillingAndShippingAddress]) -> None:
        address = address or BillingAndShippingAddress()
        row.address_country = address.country
        row.address_street = address.street_address
        row.address_postal_code = address.postal_code
        row.address_city = address.city

    def _get(self, customer_id: int) -> Optional[CustomerRecord]:
        return self.db.get(CustomerRecord, customer_id)

    def find_all(self) -> List[Customer]:
        """Return every customer, ordered by ID"""
        rows = self.db.scalars(select(CustomerRecord).order_by(CustomerRecord.id)).all()
        return [self._map_row_to_customer(row) for row in rows]

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        """
        Find customer by ID

        Returns:
            Customer or None if not found
        """
        row = self._get(customer_id)
        if not row:
            return None
        return self._map_row_to_customer(row)

    def find_by_email(self, email: str) -> Optional[Customer]:
        """
        Find customer by email (case-insensitive)

        Returns:
            Customer or None if not found
        """
        row = self.db.scalars(
            select(CustomerRecord).where(func.lower(CustomerRecord.email) == email.lower())
        ).first()
        if not row:
            return None
        return self._map_row_to_customer(row)

    def product_exists(self, product_id: int) -> bool:
        return self.db.get(ProductRecord, product_id) is not None

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Check if another customer already uses this email"""
        query = select(CustomerRecord.id).where(func.lower(CustomerRecord.email) == email.lower())
        if exclude_id is not None:
            query = query.where(CustomerRecord.id != exclude_id)
        return self.db.scalars(query).first() is not None

    def create(self, customer: Customer, password_hash: str) -> Customer:
        """
        Insert a new customer with an empty cart

        Returns:
            The stored customer, with its new ID
        """
        row = CustomerRecord(
            first_name=customer.first_name.strip(),
            last_name=customer.last_name.strip(),
            email=customer.email.strip(),
            password_hash=password_hash,
        )
        self._apply_address(row, customer.address)

        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(row)
        return self._map_row_to_customer(row)

    def save(self, customer_id: int, customer: Customer, password_hash: Optional[str] = None) -> Optional[Customer]:
        """
        Overwrite a stored customer with the given state

        The cart is synchronized: stored lines missing from customer.shopping_cart
        are deleted, kept lines take the new quantity, lines without an ID are
        inserted.

        Args:
            customer_id: ID of the customer to overwrite
            customer: New customer state
            password_hash: New password hash, or None to keep the stored one

        Returns:
            The stored customer, or None if not found
        """
        row = self._get(customer_id)
        if not row:
            return None

        try:
            row.first_name = customer.first_name.strip()
            row.last_name = customer.last_name.strip()
            row.email = customer.email.strip()
            if password_hash:
                row.password_hash = password_hash
            self._apply_address(row, customer.address)

            kept = {item.id: item for item in customer.shopping_cart if item.id is not None}
            for line in list(row.cart_items):
                if line.id in kept:
                    line.quantity = kept[line.id].quantity
                else:
                    row.cart_items.remove(line)

            for item in customer.shopping_cart:
                if item.id is None:
                    row.cart_items.append(CartItemRecord(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                    ))

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(row)
        return self._map_row_to_customer(row)

    def update_password(self, customer_id: int, password_hash: str) -> bool:
        """Replace the stored password hash. Returns False if customer not found"""
        row = self._get(customer_id)
        if not row:
            return False

        try:
            row.password_hash = password_hash
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True

    def delete(self, customer_id: int) -> bool:
        """Delete customer and cart. Returns False if customer not found"""
        row = self._get(customer_id)
        if not row:
            return False

        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True
