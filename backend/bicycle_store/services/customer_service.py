"""
Customer Service
Business rules for customer accounts: registration, updates, password
reset/change and cart persistence

Validation failures are reported as error message strings, identity lookups
and password changes as explicit result values. The API layer maps both to
HTTP statuses.
"""
import logging
import secrets
import string
from typing import List, Optional

from bicycle_store.core.auth import hash_password, is_password_hash, verify_password
from bicycle_store.core.config import settings
from bicycle_store.domain.customer import (
    Customer,
    CustomerLookup,
    LookupStatus,
    PasswordChangeResult,
)
from bicycle_store.repositories.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = string.ascii_letters + string.digits


class CustomerService:
    """
    Service for customer accounts

    Handles:
    - Customer lookup (by ID, by email)
    - Registration and updates with validation
    - Password hashing, reset and change
    - Deletion
    """

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    def list_all(self) -> List[Customer]:
        return self.repository.find_all()

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.repository.find_by_id(customer_id)

    def find_by_email(self, email: str) -> Optional[Customer]:
        if not email:
            return None
        return self.repository.find_by_email(email)

    def lookup_by_email(self, email: str) -> CustomerLookup:
        """
        Look up a customer by identity email

        Returns:
            CustomerLookup with status FOUND, NOT_FOUND, or INVALID when the
            stored customer does not pass validation
        """
        customer = self.find_by_email(email)
        if customer is None:
            return CustomerLookup(status=LookupStatus.NOT_FOUND)
        if not customer.is_valid():
            return CustomerLookup(status=LookupStatus.INVALID, customer=customer)
        return CustomerLookup(status=LookupStatus.FOUND, customer=customer)

    def add(self, customer: Customer) -> Optional[str]:
        """
        Register a new customer

        Args:
            customer: Customer with plaintext password

        Returns:
            None on success, error message otherwise
        """
        if not customer.is_valid():
            logger.warning("Rejected registration: customer is not valid")
            return "Customer is not valid"

        if self.repository.email_taken(customer.email):
            logger.warning(f"Rejected registration: email {customer.email} already exists")
            return f"Customer with email {customer.email} already exists"

        stored = self.repository.create(customer, hash_password(customer.password))
        logger.info(f"Registered customer {stored.id} ({stored.email})")
        return None

    def update(self, customer_id: int, customer: Customer) -> Optional[str]:
        """
        Overwrite a customer's data

        A plaintext password is hashed, an existing hash is stored as is, and
        a missing password keeps the stored one. New cart lines must
        reference an existing product.

        Returns:
            None on success, error message otherwise
        """
        existing = self.repository.find_by_id(customer_id)
        if existing is None:
            return f"Customer with id {customer_id} not found"

        password_hash = None
        if customer.password:
            if is_password_hash(customer.password):
                password_hash = customer.password
            else:
                password_hash = hash_password(customer.password)

        candidate = customer.model_copy(update={"password": password_hash or existing.password})
        if not candidate.is_valid():
            logger.warning(f"Rejected update of customer {customer_id}: customer is not valid")
            return "Customer is not valid"

        if self.repository.email_taken(customer.email, exclude_id=customer_id):
            logger.warning(f"Rejected update of customer {customer_id}: email {customer.email} already exists")
            return f"Customer with email {customer.email} already exists"

        for item in customer.shopping_cart:
            if item.id is None and not self.repository.product_exists(item.product_id):
                logger.warning(f"Rejected update of customer {customer_id}: unknown product {item.product_id}")
                return f"Product with id {item.product_id} not found"

        self.repository.save(customer_id, candidate, password_hash=password_hash)
        logger.info(f"Updated customer {customer_id}")
        return None

    def delete(self, customer_id: int) -> None:
        if self.repository.delete(customer_id):
            logger.info(f"Deleted customer {customer_id}")
        else:
            logger.debug(f"Delete ignored, customer {customer_id} does not exist")

    def generate_password(self) -> str:
        length = settings.PASSWORD_RESET_LENGTH
        return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))

    def reset_password(self, email: str) -> Optional[str]:
        """
        Replace a customer's password with a generated one

        Returns:
            The new plaintext password, or None if the customer is missing or
            invalid
        """
        lookup = self.lookup_by_email(email)
        if not lookup.found:
            logger.warning(f"Password reset refused for {email}: {lookup.status.value}")
            return None

        new_password = self.generate_password()
        if not self.repository.update_password(lookup.customer.id, hash_password(new_password)):
            return None

        logger.info(f"Password reset for customer {lookup.customer.id}")
        return new_password

    def change_password(self, email: str, old_password: str, new_password: str) -> PasswordChangeResult:
        """
        Change a customer's password after checking the old one

        Returns:
            UPDATED, MISMATCH when old_password is wrong, or INVALID_CUSTOMER
            when the customer is missing or invalid
        """
        lookup = self.lookup_by_email(email)
        if not lookup.found:
            return PasswordChangeResult.INVALID_CUSTOMER

        customer = lookup.customer
        if not verify_password(old_password, customer.password):
            logger.warning(f"Password change refused for customer {customer.id}: old password mismatch")
            return PasswordChangeResult.MISMATCH

        self.repository.update_password(customer.id, hash_password(new_password))
        logger.info(f"Password changed for customer {customer.id}")
        return PasswordChangeResult.UPDATED

    def authenticate(self, email: str, password: str) -> Optional[Customer]:
        """Return the customer if email and password match, None otherwise"""
        customer = self.find_by_email(email)
        if customer is None or not verify_password(password, customer.password):
            return None
        return customer
