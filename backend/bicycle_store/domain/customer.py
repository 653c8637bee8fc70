"""
Customer Domain Models

Customer, billing/shipping address and shopping cart entities, plus the
explicit result types the customer service hands back to the API layer.

JSON field names are camelCase (firstName, streetAddress, ...) to stay
compatible with existing web clients; snake_case input is accepted too.
"""
from enum import Enum
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase field names"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_encoders={
            Decimal: float,
            datetime: lambda v: v.isoformat()
        }
    )


class BillingAndShippingAddress(CamelModel):
    """Address used both for billing and shipping"""

    country: Optional[str] = Field(None, description="Country")
    street_address: Optional[str] = Field(None, description="Street and house number")
    postal_code: Optional[str] = Field(None, description="Postal code")
    city: Optional[str] = Field(None, description="City")


class CartItem(CamelModel):
    """
    Line in a shopping cart

    Fields:
        id: Cart line ID (None for lines not yet stored)
        product_id: Product catalog ID
        product_name: Product name, from the catalog
        quantity: Number of units
        unit_price: Price per unit when added to the cart
    """

    id: Optional[int] = Field(None, description="Cart line ID")
    product_id: int = Field(..., description="Product catalog ID")
    product_name: Optional[str] = Field(None, description="Product name")
    quantity: int = Field(1, description="Quantity", ge=1)
    unit_price: Optional[Decimal] = Field(None, description="Price per unit", ge=0)


class Customer(CamelModel):
    """
    Customer domain model

    The password holds the bcrypt hash once stored. It is accepted as input
    (registration, update) but never serialized in responses.
    """

    id: Optional[int] = Field(None, description="Customer ID")
    first_name: str = Field("", description="First name")
    last_name: str = Field("", description="Last name")
    email: str = Field("", description="Email, used as login identity")
    password: Optional[str] = Field(None, description="Password or password hash", exclude=True)
    address: Optional[BillingAndShippingAddress] = Field(None, description="Billing and shipping address")
    shopping_cart: List[CartItem] = Field(default_factory=list, description="Cart lines")

    def is_valid(self) -> bool:
        """Check that names are filled in, email is well formed and a password is set"""
        if not self.first_name.strip() or not self.last_name.strip():
            return False
        if not self.password:
            return False
        try:
            validate_email(self.email, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    def remove_from_shopping_cart(self, item: Optional[CartItem]) -> None:
        """Remove a cart line; unknown or missing lines are ignored"""
        if item is None or item.id is None:
            return
        self.shopping_cart = [line for line in self.shopping_cart if line.id != item.id]


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


class CustomerLookup(BaseModel):
    """Outcome of looking up a customer by identity"""

    status: LookupStatus
    customer: Optional[Customer] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def exists(self) -> bool:
        """Customer exists, valid or not"""
        return self.customer is not None


class PasswordChangeResult(str, Enum):
    UPDATED = "updated"
    MISMATCH = "mismatch"
    INVALID_CUSTOMER = "invalid_customer"


class PasswordResetRequest(CamelModel):
    email: str


class PasswordUpdateRequest(CamelModel):
    old_password: str
    new_password: str
