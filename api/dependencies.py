"""
Dependency providers for FastAPI.

Routers receive the catalog through `Depends(get_catalog)` so tests can swap in
an in-memory catalog with `app.dependency_overrides`.
"""

from domain.catalog_lookup import CatalogLookupService
from services.purchase_service import resolve_catalog


def get_catalog() -> CatalogLookupService:
    """
    Provide the catalog lookup service.

    Returns:
        The configured Emerald repository
    """
    return resolve_catalog(None)
