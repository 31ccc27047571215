"""
Domain: Purchase aggregate.

A Purchase is one package plus the chosen variants and an optional coupon. It
owns all pricing for the purchase.

Contract excerpts implemented here:
- The package is resolved once, when the purchase is built. An unknown package
  code is an error (PackageNotFoundError).
- Variants may be given as raw codes. Codes are resolved against the package's
  own variant list every time `variants` is read, so a code appended later is
  picked up by the next read. An unknown code is an error (VariantNotFoundError)
  raised by the read, and a failed read leaves the stored variants untouched.
- Coupons given by code are looked up through the catalog. An unknown coupon
  code silently means "no coupon". A looked-up discount is capped at the
  subtotal as it stands when the coupon is attached; later variant changes do
  not re-cap it.
- subtotal/total are always computed from current state, never cached.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from .catalog import Coupon, Package, Variant
from .catalog_lookup import CatalogLookupService
from .errors import InvalidArgumentError, PackageNotFoundError, VariantNotFoundError
from .money import cents_to_dollars

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Unresolved:
    """A variant still known only by its code."""

    code: str


@dataclass(frozen=True, slots=True)
class Resolved:
    """A variant that has been matched against the package."""

    variant: Variant


VariantSlot = Union[Unresolved, Resolved]


def _to_slot(value: Any) -> VariantSlot:
    if isinstance(value, Variant):
        return Resolved(value)
    return Unresolved(value)


class Purchase:
    """
    Mutable purchase of a package with optional variants and coupon.

    Args:
        package_or_code: A Package, or the package code to look up
        catalog: Lookup service used for package and coupon codes
        organization: Scopes coupon lookups (not validated)
        variants: Variant codes and/or Variant objects (default: none)
        coupon_code: Coupon code to look up, or a Coupon (default: none)

    Raises:
        PackageNotFoundError: If package_or_code is a code the catalog doesn't know
        InvalidArgumentError: If variants is not a list/tuple
        VariantNotFoundError: If coupon_code finds a coupon and a variant code is
            unknown (capping the discount needs the subtotal)

    Example:
        purchase = Purchase(
            "wellcheck",
            catalog=catalog,
            variants=["vitamin_d"],
            coupon_code="SPRING",
        )
        print(f"Total: ${purchase.total:.2f}")
    """

    def __init__(
        self,
        package_or_code: Union[Package, str],
        *,
        catalog: CatalogLookupService,
        organization: Optional[str] = None,
        variants: Optional[Sequence[Union[str, Variant]]] = None,
        coupon_code: Union[str, Coupon, None] = None,
    ) -> None:
        self.catalog = catalog
        self.package = self._resolve_package(package_or_code)
        self.organization = organization

        self._variants: list[VariantSlot] = []
        self._coupon: Optional[Coupon] = None

        self.variants = variants if variants is not None else []
        self.coupon = coupon_code

    def _resolve_package(self, package_or_code: Union[Package, str]) -> Package:
        if isinstance(package_or_code, Package):
            return package_or_code

        package = self.catalog.lookup_package(package_or_code)
        if package is None:
            raise PackageNotFoundError(package_or_code)
        return package

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    @property
    def variants(self) -> list[Variant]:
        """
        Resolved variants, in the order they were given.

        Raises:
            VariantNotFoundError: If a stored code isn't a variant of the package
        """

        resolved: list[VariantSlot] = []
        for slot in self._variants:
            if isinstance(slot, Resolved):
                resolved.append(slot)
                continue

            variant = self.package.find_variant_by_code(slot.code)
            if variant is None:
                raise VariantNotFoundError(str(slot.code))
            resolved.append(Resolved(variant))

        # Only commit once every code resolved
        self._variants = resolved
        return [slot.variant for slot in resolved]

    @variants.setter
    def variants(self, variants: Sequence[Union[str, Variant]]) -> None:
        if isinstance(variants, (str, bytes)) or not isinstance(variants, Sequence):
            raise InvalidArgumentError(
                f"variants must be a list, got {type(variants).__name__}"
            )
        self._variants = [_to_slot(v) for v in variants]

    def add_variant(self, variant_or_code: Union[str, Variant]) -> None:
        """Append a variant (or its code); a code is resolved on the next read."""
        self._variants.append(_to_slot(variant_or_code))

    # ------------------------------------------------------------------
    # Coupon
    # ------------------------------------------------------------------

    @property
    def coupon(self) -> Optional[Coupon]:
        return self._coupon

    @coupon.setter
    def coupon(self, coupon_or_code: Union[str, Coupon, None]) -> None:
        if coupon_or_code is None or isinstance(coupon_or_code, Coupon):
            self._coupon = coupon_or_code
            return

        found = self.catalog.lookup_coupon(
            coupon_or_code, self.package.code, self.organization
        )
        if found is None:
            logger.info(
                f"Coupon '{coupon_or_code}' not found for package '{self.package.code}'",
                extra={"coupon_code": coupon_or_code, "organization": self.organization},
            )
            self._coupon = None
            return

        # Can't discount more than the purchase is worth. The cap is applied to
        # a copy so other holders of the looked-up coupon keep its face value.
        subtotal_in_cents = self.subtotal_in_cents
        if found.discount_in_cents > subtotal_in_cents:
            logger.info(
                f"Coupon '{found.code}' discount capped at subtotal",
                extra={
                    "coupon_code": found.code,
                    "original_discount_in_cents": found.discount_in_cents,
                    "subtotal_in_cents": subtotal_in_cents,
                },
            )
        self._coupon = replace(
            found, discount_in_cents=min(found.discount_in_cents, subtotal_in_cents)
        )

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    @property
    def subtotal_in_cents(self) -> int:
        """Package cost plus variant costs; ignores the coupon."""
        return self.package.cost_in_cents + sum(v.cost_in_cents for v in self.variants)

    @property
    def total_in_cents(self) -> int:
        if self.coupon is None:
            return self.subtotal_in_cents
        return self.subtotal_in_cents - self.coupon.discount_in_cents

    @property
    def subtotal(self) -> float:
        return cents_to_dollars(self.subtotal_in_cents)

    @property
    def total(self) -> float:
        return cents_to_dollars(self.total_in_cents)

    def as_dict(self) -> dict[str, Any]:
        """Serialize the purchase with freshly computed pricing fields."""

        return {
            "package": self.package.as_dict(),
            "variants": [v.as_dict() for v in self.variants],
            "coupon": self.coupon.as_dict() if self.coupon is not None else None,
            "organization": self.organization,
            "subtotal_in_cents": self.subtotal_in_cents,
            "subtotal": self.subtotal,
            "total_in_cents": self.total_in_cents,
            "total": self.total,
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Purchase):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Purchase(package={self.package.code!r}, "
            f"variants={len(self._variants)}, "
            f"coupon={self.coupon.code if self.coupon else None!r}, "
            f"organization={self.organization!r})"
        )


__all__ = ["Purchase", "Resolved", "Unresolved", "VariantSlot"]
