"""
Tests for `services/pricing_service.py`, `services/purchase_service.py` and
`services/catalog_service.py`.
"""

from __future__ import annotations

from typing import Optional

import pytest

from domain.catalog import Coupon, Package
from domain.catalog_lookup import InMemoryCatalog
from domain.errors import PackageNotFoundError, VariantNotFoundError
from domain.purchase import Purchase
from services import purchase_service
from services.catalog_service import CatalogUnavailableError, get_package, list_packages
from services.pricing_service import calculate_purchase_quote
from services.purchase_service import PurchaseRequest, create_purchase, quote_purchase


class BrokenCatalog(InMemoryCatalog):
    """Catalog whose listing always fails."""

    def list_packages(self) -> Optional[list[Package]]:
        return None


def test_quote_itemizes_package_and_variants(catalog: InMemoryCatalog) -> None:
    purchase = Purchase("wellcheck", catalog=catalog, variants=["vitamin_d", "vitamin_b"], coupon_code="test")

    quote = calculate_purchase_quote(purchase)

    assert [(line.kind, line.code, line.cost_in_cents) for line in quote.lines] == [
        ("package", "wellcheck", 14900),
        ("variant", "vitamin_d", 4000),
        ("variant", "vitamin_b", 1000),
    ]
    assert quote.coupon_code == "test"
    assert quote.discount_in_cents == 1500
    assert quote.subtotal_in_cents == 19900
    assert quote.total_in_cents == 18400
    assert quote.subtotal == 199.0
    assert quote.total == 184.0
    assert quote.discount == 15.0
    assert quote.currency == "USD"
    assert quote.created_at.tzinfo is not None


def test_quote_purchase_without_coupon(catalog: InMemoryCatalog) -> None:
    quote = quote_purchase(PurchaseRequest(package_code="wellcheck", coupon_code="missing"), catalog=catalog)

    assert quote.coupon_code is None
    assert quote.discount_in_cents == 0
    assert quote.total_in_cents == quote.subtotal_in_cents == 14900


def test_quote_purchase_caps_large_coupon(mock_package: Package) -> None:
    catalog = InMemoryCatalog(
        packages=[mock_package],
        coupons=[Coupon(code="FREE", discount_in_cents=9999999, product_key="wellcheck")],
    )

    quote = quote_purchase(PurchaseRequest(package_code="wellcheck", coupon_code="FREE"), catalog=catalog)

    assert quote.discount_in_cents == 14900
    assert quote.total_in_cents == 0


def test_quote_purchase_unknown_package(catalog: InMemoryCatalog) -> None:
    with pytest.raises(PackageNotFoundError):
        quote_purchase(PurchaseRequest(package_code="unknown_code"), catalog=catalog)


def test_quote_purchase_unknown_variant(catalog: InMemoryCatalog) -> None:
    with pytest.raises(VariantNotFoundError):
        quote_purchase(PurchaseRequest(package_code="wellcheck", variant_codes=["asdfasdf"]), catalog=catalog)


def test_create_purchase_uses_default_catalog(monkeypatch: pytest.MonkeyPatch, catalog: InMemoryCatalog) -> None:
    import repositories.catalog_repository as catalog_repository

    monkeypatch.setattr(catalog_repository, "get_default_catalog", lambda: catalog)

    purchase = create_purchase("wellcheck", variants=["vitamin_b"])

    assert purchase.catalog is catalog
    assert purchase.subtotal_in_cents == 15900


def test_resolve_catalog_prefers_given_catalog(catalog: InMemoryCatalog) -> None:
    assert purchase_service.resolve_catalog(catalog) is catalog


def test_list_packages_filters_inactive(mock_package: Package) -> None:
    inactive = Package(code="retired", name="Retired", cost_in_cents=100, active=False)
    catalog = InMemoryCatalog(packages=[mock_package, inactive])

    assert [p.code for p in list_packages(catalog=catalog)] == ["wellcheck", "retired"]
    assert [p.code for p in list_packages(active_only=True, catalog=catalog)] == ["wellcheck"]


def test_list_packages_unavailable() -> None:
    with pytest.raises(CatalogUnavailableError):
        list_packages(catalog=BrokenCatalog())


def test_get_package(catalog: InMemoryCatalog, mock_package: Package) -> None:
    assert get_package("wellcheck", catalog=catalog) is mock_package
    assert get_package("missing", catalog=catalog) is None
