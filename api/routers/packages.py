"""
Packages API Endpoints.

Endpoints for browsing the Emerald package catalog.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_catalog
from api.models import ErrorResponse, PackageListResponse, PackageResponse
from domain.catalog_lookup import CatalogLookupService
from services.catalog_service import CatalogUnavailableError, get_package, list_packages

router = APIRouter()


@router.get(
    "/packages",
    response_model=PackageListResponse,
    summary="List Packages",
    description="List catalog packages, optionally only the active ones.",
    responses={503: {"model": ErrorResponse}},
)
def get_packages(
    active_only: bool = Query(False, description="Only return active packages"),
    catalog: CatalogLookupService = Depends(get_catalog),
):
    """
    List packages in catalog order.

    **Example usage:**
    - All packages: `GET /api/v1/packages`
    - Active only: `GET /api/v1/packages?active_only=true`
    """
    try:
        packages = list_packages(active_only=active_only, catalog=catalog)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return PackageListResponse(
        items=[PackageResponse(**p.as_dict()) for p in packages],
        total_count=len(packages),
    )


@router.get(
    "/packages/{code}",
    response_model=PackageResponse,
    summary="Get Package",
    description="Look up a single package by its code.",
    responses={404: {"model": ErrorResponse}},
)
def get_package_by_code(
    code: str,
    catalog: CatalogLookupService = Depends(get_catalog),
):
    """
    Look up a package by its code ("product key").
    """
    package = get_package(code, catalog=catalog)
    if package is None:
        raise HTTPException(status_code=404, detail=f"Package not found: {code}")

    return PackageResponse(**package.as_dict())
