"""
Pricing service for building purchase quotes.

Turns a Purchase into an itemized, immutable quote: one line for the package,
one per variant, and the coupon discount.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from domain.money import cents_to_dollars
from domain.purchase import Purchase


@dataclass(frozen=True, slots=True)
class QuoteLine:
    """
    Single priced line of a quote (the package or one variant).
    """
    kind: str  # package, variant
    code: str
    name: str
    cost_in_cents: int

    @property
    def cost(self) -> float:
        return cents_to_dollars(self.cost_in_cents)


@dataclass(frozen=True, slots=True)
class PurchaseQuote:
    """
    Snapshot of a purchase's pricing.

    Includes:
    - Itemized package and variant lines
    - Subtotal (package + variants)
    - Coupon discount as attached (already capped at the subtotal)
    - Total (subtotal - discount)
    """
    package_code: str
    organization: Optional[str]
    lines: List[QuoteLine]
    coupon_code: Optional[str]
    discount_in_cents: int
    subtotal_in_cents: int
    total_in_cents: int
    currency: str
    created_at: datetime

    @property
    def subtotal(self) -> float:
        return cents_to_dollars(self.subtotal_in_cents)

    @property
    def total(self) -> float:
        return cents_to_dollars(self.total_in_cents)

    @property
    def discount(self) -> float:
        return cents_to_dollars(self.discount_in_cents)


def calculate_purchase_quote(purchase: Purchase) -> PurchaseQuote:
    """
    Calculate a quote for the purchase as it stands right now.

    Args:
        purchase: Purchase to price

    Returns:
        PurchaseQuote with itemized pricing

    Raises:
        VariantNotFoundError: If one of the purchase's variant codes is unknown

    Example:
        quote = calculate_purchase_quote(purchase)
        print(f"Total: ${quote.total:.2f} ({len(quote.lines)} lines)")
    """
    package = purchase.package
    variants = purchase.variants

    lines: List[QuoteLine] = [
        QuoteLine(
            kind="package",
            code=package.code,
            name=package.name,
            cost_in_cents=package.cost_in_cents,
        )
    ]
    for variant in variants:
        lines.append(QuoteLine(
            kind="variant",
            code=variant.code,
            name=variant.name,
            cost_in_cents=variant.cost_in_cents,
        ))

    coupon = purchase.coupon

    return PurchaseQuote(
        package_code=package.code,
        organization=purchase.organization,
        lines=lines,
        coupon_code=coupon.code if coupon is not None else None,
        discount_in_cents=coupon.discount_in_cents if coupon is not None else 0,
        subtotal_in_cents=purchase.subtotal_in_cents,
        total_in_cents=purchase.total_in_cents,
        currency="USD",
        created_at=datetime.now(timezone.utc),
    )


__all__ = [
    "QuoteLine",
    "PurchaseQuote",
    "calculate_purchase_quote",
]
