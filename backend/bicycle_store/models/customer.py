"""
Customer and shopping cart tables
"""
from sqlalchemy import Column, Integer, String, DateTime, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from bicycle_store.core.database import Base


class Customer(Base):
    """
    Registered customer, identified by email at login
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Billing and shipping address (1:1, stored inline)
    address_country = Column(String(100))
    address_street = Column(String(255))
    address_postal_code = Column(String(20))
    address_city = Column(String(100))

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    cart_items = relationship(
        "CartItem",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )


class CartItem(Base):
    """
    Line in a customer's shopping cart (a pending order of one product)
    """
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), index=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(DECIMAL(12, 2))

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    customer = relationship("Customer", back_populates="cart_items")
    product = relationship("Product", back_populates="cart_items")
