"""
Purchases API Endpoints.

Endpoint for pricing a purchase (package + variants + coupon).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_catalog
from api.errors import http_error_for
from api.models import ErrorResponse, PurchaseRequest, PurchaseResponse
from domain.catalog_lookup import CatalogLookupService
from domain.errors import DomainError
from services.purchase_service import create_purchase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/purchases",
    response_model=PurchaseResponse,
    summary="Price Purchase",
    description="Resolve a package, its variants and a coupon, and compute subtotal and total.",
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def price_purchase(
    request: PurchaseRequest,
    catalog: CatalogLookupService = Depends(get_catalog),
):
    """
    Price a purchase.

    **How it works:**
    1. Looks up the package by code (404 if unknown)
    2. Resolves variant codes against the package (404 if unknown)
    3. Looks up the coupon; an unknown coupon is ignored
    4. Caps the coupon discount at the subtotal

    **Example request:**
    ```json
    {
      "package_code": "wellcheck",
      "variants": ["vitamin_d"],
      "coupon_code": "SPRING"
    }
    ```

    **Response:**
    The purchase with `subtotal_in_cents`, `subtotal`, `total_in_cents` and `total`.
    """
    try:
        purchase = create_purchase(
            request.package_code,
            organization=request.organization,
            variants=request.variants,
            coupon_code=request.coupon_code,
            catalog=catalog,
        )
        return PurchaseResponse(**purchase.as_dict())

    except DomainError as e:
        logger.info(f"Purchase rejected: {e}")
        raise http_error_for(e)
    except Exception as e:
        logger.exception("Failed to price purchase")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to price purchase: {str(e)}"
        )
