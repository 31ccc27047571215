"""
Catalog repository backed by the Emerald HTTP API.

Looks up packages and coupons by code. Every failure (connection error,
timeout, non-2xx status, malformed JSON, missing fields) is logged and reported
as None, never raised.

Endpoints:
- GET /emerald_api/packages/show/{code}
- GET /emerald_api/packages/index
- GET /emerald_api/coupons/show/{code}?product_key=...&organization=...
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from domain.catalog import Coupon, Package
from domain.catalog_lookup import CatalogLookupService
from repositories import client

logger = logging.getLogger(__name__)

# Errors raised while turning a response body into domain objects
_PARSE_ERRORS = (ValueError, TypeError, KeyError, AttributeError)


class EmeraldCatalogRepository(CatalogLookupService):
    """
    Catalog lookups over the Emerald HTTP API.

    Args:
        base_url: Service base URL (default: the configured EMERALD_URL)
        session: HTTP session (default: the shared session from repositories.client)
        timeout: Request timeout in seconds (default: EMERALD_TIMEOUT)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if base_url is not None:
            self.base_url = base_url.rstrip("/")
            self.session = session or client.build_session()
        else:
            self.base_url = client.get_url()
            self.session = session or client.get_session()
        self.timeout = timeout if timeout is not None else client.get_timeout()

    def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Optional[Any]:
        url = f"{self.base_url}{path}"
        try:
            logger.debug(f"Requesting {url}")
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Emerald request failed for {path}: {e}")
            return None

        if not response.ok:
            logger.debug(f"Emerald returned {response.status_code} for {path}")
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Emerald returned invalid JSON for {path}: {e}")
            return None

    def lookup_package(self, code: str) -> Optional[Package]:
        """
        Look up a package by its code ("product key" on Emerald).

        Returns:
            Package or None if not found
        """

        data = self._get_json(f"/emerald_api/packages/show/{quote(code, safe='')}")
        if data is None:
            return None

        try:
            return Package.from_mapping(data)
        except _PARSE_ERRORS as e:
            logger.warning(f"Malformed package payload for '{code}': {e}")
            return None

    def list_packages(self) -> Optional[list[Package]]:
        """
        List all packages on Emerald.

        Returns:
            Packages in the order Emerald lists them, or None on failure
        """

        data = self._get_json("/emerald_api/packages/index")
        if data is None:
            return None

        try:
            if not isinstance(data, list):
                raise TypeError(f"expected a list of packages, got {type(data).__name__}")
            packages = [Package.from_mapping(row) for row in data]
        except _PARSE_ERRORS as e:
            logger.warning(f"Malformed package listing: {e}")
            return None

        logger.info(f"Retrieved {len(packages)} packages from Emerald")
        return packages

    def lookup_coupon(
        self,
        code: str,
        product_key: str,
        organization: Optional[str],
    ) -> Optional[Coupon]:
        """
        Look up a coupon by its code, scoped to a product key and organization.

        Returns:
            A new Coupon on every call, or None if not found
        """

        params: dict[str, Any] = {"product_key": product_key}
        if organization is not None:
            params["organization"] = organization

        data = self._get_json(f"/emerald_api/coupons/show/{quote(code, safe='')}", params=params)
        if data is None:
            return None

        try:
            return Coupon.from_mapping(data)
        except _PARSE_ERRORS as e:
            logger.warning(f"Malformed coupon payload for '{code}': {e}")
            return None


_default_catalog: Optional[EmeraldCatalogRepository] = None


def get_default_catalog() -> EmeraldCatalogRepository:
    """Process-wide repository using the configured Emerald connection."""

    global _default_catalog
    if _default_catalog is None:
        _default_catalog = EmeraldCatalogRepository()
    return _default_catalog


__all__ = ["EmeraldCatalogRepository", "get_default_catalog"]
