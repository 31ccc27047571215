"""
Purchase service for building purchases against the Emerald catalog.

Handles:
- Choosing the catalog (the configured Emerald repository unless one is given)
- Building a Purchase from raw codes
- Pricing it into a quote
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from domain.catalog import Coupon, Package
from domain.catalog_lookup import CatalogLookupService
from domain.purchase import Purchase
from services.pricing_service import PurchaseQuote, calculate_purchase_quote

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PurchaseRequest:
    """
    Request to price a package with optional variants and a coupon code.
    """
    package_code: str
    organization: Optional[str] = None
    variant_codes: List[str] = field(default_factory=list)
    coupon_code: Optional[str] = None


def resolve_catalog(catalog: Optional[CatalogLookupService]) -> CatalogLookupService:
    if catalog is not None:
        return catalog
    from repositories.catalog_repository import get_default_catalog

    return get_default_catalog()


def create_purchase(
    package_or_code: Union[Package, str],
    *,
    organization: Optional[str] = None,
    variants: Optional[List[str]] = None,
    coupon_code: Union[str, Coupon, None] = None,
    catalog: Optional[CatalogLookupService] = None,
) -> Purchase:
    """
    Build a Purchase, looking codes up in the given catalog or the Emerald one.

    Raises:
        PackageNotFoundError: If the package code is unknown
        InvalidArgumentError: If variants is not a list

    Example:
        purchase = create_purchase("wellcheck", variants=["vitamin_d"], coupon_code="SPRING")
    """
    return Purchase(
        package_or_code,
        catalog=resolve_catalog(catalog),
        organization=organization,
        variants=variants,
        coupon_code=coupon_code,
    )


def quote_purchase(
    request: PurchaseRequest,
    catalog: Optional[CatalogLookupService] = None,
) -> PurchaseQuote:
    """
    Build the requested purchase and price it.

    Process:
    1. Look up the package (PackageNotFoundError if unknown)
    2. Resolve variant codes against the package (VariantNotFoundError if unknown)
    3. Look up the coupon; an unknown coupon simply isn't applied
    4. Return the itemized quote

    Example:
        quote = quote_purchase(PurchaseRequest(package_code="wellcheck", variant_codes=["vitamin_b"]))
        print(f"Subtotal ${quote.subtotal:.2f}, total ${quote.total:.2f}")
    """
    purchase = create_purchase(
        request.package_code,
        organization=request.organization,
        variants=list(request.variant_codes),
        coupon_code=request.coupon_code,
        catalog=catalog,
    )
    quote = calculate_purchase_quote(purchase)

    if request.coupon_code is not None and quote.coupon_code is None:
        logger.info(
            f"Quote for '{request.package_code}' priced without coupon '{request.coupon_code}'",
            extra={"package_code": request.package_code, "coupon_code": request.coupon_code},
        )

    return quote


__all__ = [
    "PurchaseRequest",
    "resolve_catalog",
    "create_purchase",
    "quote_purchase",
]
