"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Catalog Models
# ============================================================================

class VariantResponse(BaseModel):
    """Single variant (add-on) of a package."""
    code: str
    name: str
    cost_in_cents: int


class PackageResponse(BaseModel):
    """Single package in API response."""
    code: str
    name: str
    description: Optional[str] = None
    cost_in_cents: int
    cost: float
    active: Optional[bool] = None
    variants: List[VariantResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "code": "wellcheck",
                "name": "Baseline",
                "description": "Get started with WellnessFX",
                "cost_in_cents": 14900,
                "cost": 149.0,
                "active": True,
                "variants": [
                    {"code": "vitamin_d", "name": "Vitamin D", "cost_in_cents": 4000}
                ]
            }
        }


class PackageListResponse(BaseModel):
    """Response for package listing."""
    items: List[PackageResponse]
    total_count: int


class CouponResponse(BaseModel):
    """Coupon as attached to a purchase (discount already capped)."""
    code: str
    discount_in_cents: int
    product_key: Optional[str] = None
    organization: Optional[str] = None
    description: Optional[str] = None


# ============================================================================
# Purchase Models
# ============================================================================

class PurchaseRequest(BaseModel):
    """Request to price a purchase."""
    package_code: str = Field(
        ...,
        min_length=1,
        description="Code of the package to purchase"
    )
    organization: Optional[str] = Field(
        None,
        description="Organization used to scope the coupon lookup"
    )
    variants: List[str] = Field(
        default_factory=list,
        description="Codes of the variants to add"
    )
    coupon_code: Optional[str] = Field(
        None,
        description="Coupon code; unknown codes are ignored"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "package_code": "wellcheck",
                "organization": "acme",
                "variants": ["vitamin_d", "vitamin_b"],
                "coupon_code": "SPRING"
            }
        }


class PurchaseResponse(BaseModel):
    """Purchase with freshly computed pricing."""
    package: PackageResponse
    variants: List[VariantResponse]
    coupon: Optional[CouponResponse] = None
    organization: Optional[str] = None
    subtotal_in_cents: int
    subtotal: float
    total_in_cents: int
    total: float


class QuoteLineItem(BaseModel):
    """Single line item in a quote."""
    kind: str  # "package" or "variant"
    code: str
    name: str
    cost_in_cents: int
    cost: float


class QuoteResponse(BaseModel):
    """Response with itemized quote details."""
    package_code: str
    organization: Optional[str] = None
    items: List[QuoteLineItem]
    coupon_code: Optional[str] = None
    discount_in_cents: int
    subtotal_in_cents: int
    subtotal: float
    total_in_cents: int
    total: float
    currency: str
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "package_code": "wellcheck",
                "organization": None,
                "items": [],
                "coupon_code": "SPRING",
                "discount_in_cents": 1500,
                "subtotal_in_cents": 19900,
                "subtotal": 199.0,
                "total_in_cents": 18400,
                "total": 184.0,
                "currency": "USD",
                "created_at": "2025-01-01T12:00:00Z"
            }
        }


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "PACKAGE_NOT_FOUND",
                "detail": "Package not found: wellcheck",
                "status_code": 404
            }
        }
