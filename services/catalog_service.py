"""
Catalog service for browsing packages.
"""

from __future__ import annotations

from typing import List, Optional

from domain.catalog import Package
from domain.catalog_lookup import CatalogLookupService
from services.purchase_service import resolve_catalog


class CatalogUnavailableError(Exception):
    """Raised when the package listing can't be fetched from the catalog."""
    pass


def list_packages(
    active_only: bool = False,
    catalog: Optional[CatalogLookupService] = None,
) -> List[Package]:
    """
    List packages in catalog order.

    Args:
        active_only: Drop packages that aren't active (default: False)
        catalog: Lookup service (default: the Emerald repository)

    Raises:
        CatalogUnavailableError: If the catalog couldn't list its packages

    Example:
        for package in list_packages(active_only=True):
            print(f"{package.code}: ${package.cost:.2f}")
    """
    packages = resolve_catalog(catalog).list_packages()
    if packages is None:
        raise CatalogUnavailableError("Package listing is unavailable")

    if active_only:
        return [p for p in packages if p.is_active()]
    return list(packages)


def get_package(code: str, catalog: Optional[CatalogLookupService] = None) -> Optional[Package]:
    """Look up one package by code; None if the catalog doesn't know it."""
    return resolve_catalog(catalog).lookup_package(code)


__all__ = [
    "CatalogUnavailableError",
    "list_packages",
    "get_package",
]
