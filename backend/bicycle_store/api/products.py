"""
Products API Endpoints
Read-only access to the product catalog
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bicycle_store.api.dependencies import get_product_service
from bicycle_store.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def get_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    is_active: Optional[bool] = Query(None, description="Filter by active status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    product_service: ProductService = Depends(get_product_service)
):
    """Get all products with optional filters"""
    try:
        products, total = product_service.list_products(
            category=category,
            is_active=is_active,
            limit=limit,
            offset=offset
        )

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except Exception as e:
        logger.error(f"Error fetching products: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/{product_id}")
def get_product(
    product_id: int,
    product_service: ProductService = Depends(get_product_service)
):
    """Get a single product by ID"""
    try:
        product = product_service.find_by_id(product_id)

        if not product:
            raise HTTPException(status_code=404, detail="Product not found")

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")
