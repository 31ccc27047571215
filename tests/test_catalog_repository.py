"""
Tests for `repositories/catalog_repository.py`.

The HTTP session is replaced by a fake, so no network is used. Covers:
- Successful package, listing and coupon lookups hydrate domain objects.
- Non-2xx responses, connection errors, timeouts, invalid JSON and malformed
  payloads are all reported as None.
- Coupon lookups send product_key and organization as query parameters.
"""

from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from domain.catalog import Coupon, Package
from repositories.catalog_repository import EmeraldCatalogRepository

BASE_URL = "https://emerald.example.com"

PACKAGE_PAYLOAD = {
    "id": 1,
    "code": "wellcheck",
    "name": "Baseline",
    "description": "Get started with WellnessFX",
    "active": True,
    "cost_in_cents": 14900,
    "variants": [
        {"name": "Vitamin D", "cost_in_cents": 4000, "code": "vitamin_d"},
        {"name": "Vitamin B", "cost_in_cents": 1000, "code": "vitamin_b"},
    ],
}

COUPON_PAYLOAD = {
    "code": "test",
    "description": "Test coupon",
    "discount_in_cents": 1500,
    "organization": "",
    "product_key": "wellcheck",
}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, params: Optional[dict[str, Any]] = None, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def make_repository(session: FakeSession) -> EmeraldCatalogRepository:
    return EmeraldCatalogRepository(base_url=BASE_URL + "/", session=session, timeout=5)  # type: ignore[arg-type]


def test_lookup_package_success() -> None:
    session = FakeSession(FakeResponse(payload=PACKAGE_PAYLOAD))

    package = make_repository(session).lookup_package("wellcheck")

    assert isinstance(package, Package)
    assert package.code == "wellcheck"
    assert package.find_variant_by_code("vitamin_d").cost_in_cents == 4000
    assert session.calls == [{
        "url": f"{BASE_URL}/emerald_api/packages/show/wellcheck",
        "params": None,
        "timeout": 5,
    }]


def test_lookup_package_escapes_code() -> None:
    session = FakeSession(FakeResponse(status_code=404))

    make_repository(session).lookup_package("a/b c")

    assert session.calls[0]["url"] == f"{BASE_URL}/emerald_api/packages/show/a%2Fb%20c"


def test_lookup_package_not_found() -> None:
    session = FakeSession(FakeResponse(status_code=404, payload={"error": "not found"}))

    assert make_repository(session).lookup_package("asdfasdf") is None


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("timed out"),
    ],
)
def test_lookup_package_transport_error_is_not_found(error: Exception) -> None:
    session = FakeSession(error=error)

    assert make_repository(session).lookup_package("wellcheck") is None


def test_lookup_package_invalid_json_is_not_found() -> None:
    session = FakeSession(FakeResponse(invalid_json=True))

    assert make_repository(session).lookup_package("wellcheck") is None


@pytest.mark.parametrize(
    "payload",
    [
        {"code": "wellcheck"},
        {"code": "wellcheck", "cost_in_cents": "14900"},
        ["not", "a", "package"],
        {"code": "wellcheck", "cost_in_cents": 100, "variants": [{"code": "x"}]},
    ],
)
def test_lookup_package_malformed_payload_is_not_found(payload: Any) -> None:
    session = FakeSession(FakeResponse(payload=payload))

    assert make_repository(session).lookup_package("wellcheck") is None


def test_list_packages_success() -> None:
    second = dict(PACKAGE_PAYLOAD, code="premium", cost_in_cents=29900, active=False, variants=[])
    session = FakeSession(FakeResponse(payload=[PACKAGE_PAYLOAD, second]))

    packages = make_repository(session).list_packages()

    assert [p.code for p in packages] == ["wellcheck", "premium"]
    assert [p.cost for p in packages] == [149.0, 299.0]
    assert session.calls[0]["url"] == f"{BASE_URL}/emerald_api/packages/index"


def test_list_packages_failure_returns_none() -> None:
    assert make_repository(FakeSession(FakeResponse(status_code=500))).list_packages() is None
    assert make_repository(FakeSession(error=requests.ConnectionError())).list_packages() is None
    assert make_repository(FakeSession(FakeResponse(payload={"code": "x"}))).list_packages() is None


def test_lookup_coupon_sends_product_key_and_organization() -> None:
    session = FakeSession(FakeResponse(payload=COUPON_PAYLOAD))

    coupon = make_repository(session).lookup_coupon("test", "wellcheck", "acme")

    assert coupon == Coupon(
        code="test",
        discount_in_cents=1500,
        product_key="wellcheck",
        organization="",
        description="Test coupon",
    )
    assert session.calls[0]["url"] == f"{BASE_URL}/emerald_api/coupons/show/test"
    assert session.calls[0]["params"] == {"product_key": "wellcheck", "organization": "acme"}


def test_lookup_coupon_without_organization() -> None:
    session = FakeSession(FakeResponse(payload=COUPON_PAYLOAD))

    make_repository(session).lookup_coupon("test", "wellcheck", None)

    assert session.calls[0]["params"] == {"product_key": "wellcheck"}


def test_lookup_coupon_returns_new_object_per_call() -> None:
    repository = make_repository(FakeSession(FakeResponse(payload=COUPON_PAYLOAD)))

    first = repository.lookup_coupon("test", "wellcheck", None)
    second = repository.lookup_coupon("test", "wellcheck", None)

    assert first == second
    assert first is not second


def test_lookup_coupon_failures_return_none() -> None:
    assert make_repository(FakeSession(FakeResponse(status_code=404))).lookup_coupon("x", "wellcheck", None) is None
    assert make_repository(FakeSession(error=requests.Timeout())).lookup_coupon("x", "wellcheck", None) is None
    assert make_repository(FakeSession(FakeResponse(invalid_json=True))).lookup_coupon("x", "wellcheck", None) is None
    assert make_repository(FakeSession(FakeResponse(payload={"code": "x"}))).lookup_coupon("x", "wellcheck", None) is None


def test_explicit_base_url_needs_no_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify a repository built with base_url alone works without EMERALD_URL."""

    from repositories import client

    client.reset()
    monkeypatch.delenv("EMERALD_URL", raising=False)

    repository = EmeraldCatalogRepository(base_url="https://explicit.example.com/")

    assert repository.base_url == "https://explicit.example.com"
    assert isinstance(repository.session, requests.Session)
    assert repository.session.headers["Accept"] == "application/json"
    assert client._session is None
    client.reset()


def test_default_base_url_still_requires_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    from repositories import client

    client.reset()
    monkeypatch.delenv("EMERALD_URL", raising=False)

    with pytest.raises(RuntimeError, match="EMERALD_URL"):
        EmeraldCatalogRepository()
    client.reset()
