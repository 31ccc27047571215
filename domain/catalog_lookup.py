"""Catalog lookup interface (repository pattern).

Lookups must be swappable and return domain models. Implementations never
raise for transport or parse failures: every failure is reported as None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable, Optional

from .catalog import Coupon, Package


class CatalogLookupService(ABC):
    """Interface for resolving catalog codes into domain objects."""

    @abstractmethod
    def lookup_package(self, code: str) -> Optional[Package]:
        """Return the package with this code, or None if not found."""
        ...

    @abstractmethod
    def list_packages(self) -> Optional[list[Package]]:
        """Return all packages in catalog order, or None if the listing failed."""
        ...

    @abstractmethod
    def lookup_coupon(
        self,
        code: str,
        product_key: str,
        organization: Optional[str],
    ) -> Optional[Coupon]:
        """Return the coupon issued for this product key/organization, or None."""
        ...


class InMemoryCatalog(CatalogLookupService):
    """
    Catalog held in process memory.

    Coupons are matched on code and product key. A coupon stored without an
    organization applies to every organization; otherwise the organization
    must match exactly. Each coupon lookup returns a fresh copy.
    """

    def __init__(
        self,
        packages: Iterable[Package] = (),
        coupons: Iterable[Coupon] = (),
    ) -> None:
        self._packages: dict[str, Package] = {}
        self._coupons: list[Coupon] = []
        for package in packages:
            self.add_package(package)
        for coupon in coupons:
            self.add_coupon(coupon)

    def add_package(self, package: Package) -> None:
        self._packages[package.code] = package

    def add_coupon(self, coupon: Coupon) -> None:
        self._coupons.append(coupon)

    def lookup_package(self, code: str) -> Optional[Package]:
        return self._packages.get(code)

    def list_packages(self) -> Optional[list[Package]]:
        return list(self._packages.values())

    def lookup_coupon(
        self,
        code: str,
        product_key: str,
        organization: Optional[str],
    ) -> Optional[Coupon]:
        for coupon in self._coupons:
            if coupon.code != code or coupon.product_key != product_key:
                continue
            if coupon.organization and coupon.organization != organization:
                continue
            return replace(coupon)
        return None


__all__ = ["CatalogLookupService", "InMemoryCatalog"]
