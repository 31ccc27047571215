"""
Quotes API Endpoints.

Endpoints for calculating itemized purchase quotes.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_catalog
from api.errors import http_error_for
from api.models import ErrorResponse, PurchaseRequest, QuoteLineItem, QuoteResponse
from domain.catalog_lookup import CatalogLookupService
from domain.errors import DomainError
from services.purchase_service import PurchaseRequest as ServicePurchaseRequest, quote_purchase

router = APIRouter()


@router.post(
    "/quotes",
    response_model=QuoteResponse,
    summary="Calculate Purchase Quote",
    description="Calculate an itemized quote for a package with variants and a coupon.",
    responses={404: {"model": ErrorResponse}},
)
def calculate_quote(
    request: PurchaseRequest,
    catalog: CatalogLookupService = Depends(get_catalog),
):
    """
    Calculate an itemized quote.

    Returns one line for the package and one per variant, the applied coupon
    discount, subtotal and total.
    """
    try:
        quote = quote_purchase(
            ServicePurchaseRequest(
                package_code=request.package_code,
                organization=request.organization,
                variant_codes=list(request.variants),
                coupon_code=request.coupon_code,
            ),
            catalog=catalog,
        )
    except DomainError as e:
        raise http_error_for(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to calculate quote: {str(e)}"
        )

    return QuoteResponse(
        package_code=quote.package_code,
        organization=quote.organization,
        items=[
            QuoteLineItem(
                kind=line.kind,
                code=line.code,
                name=line.name,
                cost_in_cents=line.cost_in_cents,
                cost=line.cost,
            )
            for line in quote.lines
        ],
        coupon_code=quote.coupon_code,
        discount_in_cents=quote.discount_in_cents,
        subtotal_in_cents=quote.subtotal_in_cents,
        subtotal=quote.subtotal,
        total_in_cents=quote.total_in_cents,
        total=quote.total,
        currency=quote.currency,
        created_at=quote.created_at,
    )
