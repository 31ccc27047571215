"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import domain,
repositories, services and api.
"""

import sys
from pathlib import Path

import pytest

# Add the project directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.catalog import Coupon, Package  # noqa: E402
from domain.catalog_lookup import InMemoryCatalog  # noqa: E402


# Tests depend on these values.
def build_mock_package() -> Package:
    return Package.from_mapping({
        "id": 1,
        "code": "wellcheck",
        "name": "Baseline",
        "description": "Get started with WellnessFX",
        "active": True,
        "cost_in_cents": 14900,
        "created_at": "2012-05-29T17:25:52Z",
        "updated_at": "2012-05-29T17:25:52Z",
        "variants": [
            {"name": "Vitamin D", "cost_in_cents": 4000, "code": "vitamin_d"},
            {"name": "Vitamin B", "cost_in_cents": 1000, "code": "vitamin_b"},
        ],
    })


def build_mock_coupon() -> Coupon:
    return Coupon.from_mapping({
        "code": "test",
        "created_at": "2012-05-29T20:31:22Z",
        "description": "Test coupon",
        "discount_in_cents": 1500,
        "id": 1,
        "organization": "",
        "product_key": "wellcheck",
        "updated_at": "2012-05-29T20:31:22Z",
    })


@pytest.fixture
def mock_package() -> Package:
    return build_mock_package()


@pytest.fixture
def mock_coupon() -> Coupon:
    return build_mock_coupon()


@pytest.fixture
def catalog(mock_package: Package, mock_coupon: Coupon) -> InMemoryCatalog:
    return InMemoryCatalog(packages=[mock_package], coupons=[mock_coupon])
