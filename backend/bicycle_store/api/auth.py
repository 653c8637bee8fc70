"""
Authentication API endpoints
- Login: exchanges email and password for a JWT bearer token
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from bicycle_store.api.dependencies import get_customer_service
from bicycle_store.core.auth import create_access_token
from bicycle_store.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


class AuthenticationRequest(BaseModel):
    email: str
    password: str


class AuthenticationResponse(BaseModel):
    jwt: str


@router.post("/authenticate", response_model=AuthenticationResponse)
def authenticate(
    credentials: AuthenticationRequest,
    customer_service: CustomerService = Depends(get_customer_service)
):
    """Issue a bearer token for valid credentials, 401 otherwise"""
    customer = customer_service.authenticate(credentials.email, credentials.password)
    if customer is None:
        logger.warning(f"Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"}
        )

    token = create_access_token(
        user_id=customer.id,
        email=customer.email,
        name=f"{customer.first_name} {customer.last_name}"
    )
    return AuthenticationResponse(jwt=token)
