"""
Customers API Endpoints
Customer account management: registration, lookup, address, password
reset/change, updates, deletion and cart line removal

Endpoints that act on "the authenticated customer" get the caller's email
from the bearer token through the get_current_email dependency. Messages are
returned as text/plain, status-only responses carry no body.
"""
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import PlainTextResponse

from bicycle_store.api.dependencies import get_customer_service, get_product_service
from bicycle_store.core.auth import get_current_email
from bicycle_store.domain.customer import (
    BillingAndShippingAddress,
    Customer,
    PasswordChangeResult,
    PasswordResetRequest,
    PasswordUpdateRequest,
)
from bicycle_store.services.customer_service import CustomerService
from bicycle_store.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Customer])
def get_all_customers(customer_service: CustomerService = Depends(get_customer_service)):
    """List all customers"""
    return customer_service.list_all()


@router.get("/authenticated-customer", response_model=Customer)
def get_logged_in_customer(
    email: str = Depends(get_current_email),
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Get the customer that is logged in, or 404"""
    lookup = customer_service.lookup_by_email(email)
    if not lookup.exists:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return lookup.customer


@router.get("/authenticated-address", response_model=BillingAndShippingAddress)
def get_address_of_customer(
    email: str = Depends(get_current_email),
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Get the logged in customer's billing and shipping address, or 404"""
    lookup = customer_service.lookup_by_email(email)
    if not lookup.exists:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return lookup.customer.address or BillingAndShippingAddress()


@router.post("/authenticated-address", response_class=PlainTextResponse)
def update_address_of_customer(
    address: BillingAndShippingAddress,
    email: str = Depends(get_current_email),
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Replace the logged in customer's address"""
    lookup = customer_service.lookup_by_email(email)
    if not lookup.exists:
        return PlainTextResponse("Address could not be found", status_code=status.HTTP_404_NOT_FOUND)

    customer = lookup.customer
    customer.address = address
    error_message = customer_service.update(customer.id, customer)
    if error_message is not None:
        logger.warning(f"Address update rejected for {email}: {error_message}")
        return PlainTextResponse("Address could not be found", status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse("Address updated", status_code=status.HTTP_200_OK)


@router.post("", response_class=PlainTextResponse)
def register_new_customer(
    customer: Customer,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Register a new customer. 400 with the reason if rejected"""
    error_message = customer_service.add(customer)
    if error_message is not None:
        return PlainTextResponse(error_message, status_code=status.HTTP_400_BAD_REQUEST)

    return PlainTextResponse(
        f"Customer {customer.first_name} {customer.last_name} added",
        status_code=status.HTTP_200_OK
    )


@router.post("/reset-password", response_class=PlainTextResponse)
def reset_password(
    request: PasswordResetRequest,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """
    Reset the password of the customer with the given email

    Returns the generated password, 404 if no customer has that email,
    500 if a new password could not be set.
    """
    if customer_service.find_by_email(request.email) is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    generated_password = customer_service.reset_password(request.email)
    if generated_password is None:
        logger.error(f"Password reset failed for existing customer {request.email}")
        return PlainTextResponse(
            "Password could not be reset",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return PlainTextResponse(generated_password, status_code=status.HTTP_200_OK)


@router.post("/update-password", response_class=PlainTextResponse)
def update_password(
    request: PasswordUpdateRequest,
    email: str = Depends(get_current_email),
    customer_service: CustomerService = Depends(get_customer_service)
):
    """
    Change the logged in customer's password

    200 when the old password matches, 401 when it does not,
    404 when the customer is missing or not valid.
    """
    result = customer_service.change_password(email, request.old_password, request.new_password)

    if result == PasswordChangeResult.UPDATED:
        return Response(status_code=status.HTTP_200_OK)
    if result == PasswordChangeResult.MISMATCH:
        return PlainTextResponse("Old password doesent match", status_code=status.HTTP_401_UNAUTHORIZED)
    return PlainTextResponse("Given customer is not valid", status_code=status.HTTP_404_NOT_FOUND)


@router.delete("/deleteProductInCart", response_class=PlainTextResponse)
def delete_product_in_cart(
    item_id: int = Body(...),
    email: str = Depends(get_current_email),
    customer_service: CustomerService = Depends(get_customer_service),
    product_service: ProductService = Depends(get_product_service)
):
    """
    Remove a line from the logged in customer's cart

    The body is the bare JSON integer ID of the cart line. Removing a line that
    is not in the cart succeeds without changes.
    """
    lookup = customer_service.lookup_by_email(email)
    if not lookup.found:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    customer = lookup.customer
    customer.remove_from_shopping_cart(product_service.find_order_by_id(item_id))
    if customer_service.update(customer.id, customer) is not None:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{customer_id}", response_model=Customer)
def get_one_customer(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Get one customer by ID, or 404"""
    customer = customer_service.find_by_id(customer_id)
    if customer is None:
        return PlainTextResponse("Customer not found", status_code=status.HTTP_404_NOT_FOUND)
    return customer


@router.put("/{customer_id}", response_class=PlainTextResponse)
def update_customer(
    customer_id: int,
    customer: Customer,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Overwrite a customer. 400 with the reason if rejected"""
    error_message = customer_service.update(customer_id, customer)
    if error_message is not None:
        return PlainTextResponse(error_message, status_code=status.HTTP_400_BAD_REQUEST)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Delete a customer and their cart"""
    customer_service.delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
