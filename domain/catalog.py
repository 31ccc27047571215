"""
Domain: Catalog entities (Package, Variant, Coupon).

Contract excerpts implemented here:
- A Package is a purchasable product identified by its code ("product key").
- A Variant is an add-on priced independently of its Package. Variant codes are
  unique within their owning Package.
- A Coupon is a discount issued against one product key (and optionally an
  organization).
- All amounts are integer cents.

Entities are hydrated from lookup responses field by field. Only the keys listed
in each entity's allow-list are read; anything else in the payload (ids,
timestamps, ...) is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from .money import cents_to_dollars, require_cents


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _optional_str(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    return _require_str(name, value)


def _require_key(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing required field: {key}")
    return data[key]


@dataclass(frozen=True, slots=True)
class Variant:
    """
    Immutable add-on belonging to exactly one Package.
    """

    code: str
    name: str
    cost_in_cents: int

    def __post_init__(self) -> None:
        require_cents("cost_in_cents", self.cost_in_cents)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Variant":
        return cls(
            code=_require_str("code", _require_key(data, "code")),
            name=_require_str("name", data.get("name", "")),
            cost_in_cents=require_cents("cost_in_cents", _require_key(data, "cost_in_cents")),
        )

    def as_dict(self) -> dict[str, Any]:
        return {"code": self.code, "name": self.name, "cost_in_cents": self.cost_in_cents}


@dataclass(frozen=True, slots=True)
class Package:
    """
    Purchasable product with a fixed price and an ordered list of variants.

    Invariants:
    - cost_in_cents is a non-negative integer.
    - No two variants share a code.

    Equality is structural: two packages built from the same payload compare equal.
    """

    code: str
    name: str
    cost_in_cents: int
    description: Optional[str] = None
    active: Optional[bool] = None
    variants: Tuple[Variant, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        require_cents("cost_in_cents", self.cost_in_cents)
        # Lists from callers are frozen into a tuple so the package owns its variants
        object.__setattr__(self, "variants", tuple(self.variants))

        seen: set[str] = set()
        for variant in self.variants:
            if not isinstance(variant, Variant):
                raise TypeError(f"variants must contain Variant objects, got {type(variant).__name__}")
            if variant.code in seen:
                raise ValueError(f"duplicate variant code in package {self.code}: {variant.code}")
            seen.add(variant.code)

    @classmethod
    def from_mapping(cls, data: "Mapping[str, Any] | Package") -> "Package":
        """
        Build a Package from a lookup response, or copy another Package.

        Raises:
            ValueError: If a required field is missing or a variant code repeats
            TypeError: If a field has the wrong type
        """

        if isinstance(data, Package):
            data = data.as_dict()

        raw_variants: Iterable[Any] = data.get("variants") or ()
        if isinstance(raw_variants, (str, bytes)) or not isinstance(raw_variants, (list, tuple)):
            raise TypeError("variants must be a list")

        return cls(
            code=_require_str("code", _require_key(data, "code")),
            name=_require_str("name", data.get("name", "")),
            description=_optional_str("description", data.get("description")),
            cost_in_cents=require_cents("cost_in_cents", _require_key(data, "cost_in_cents")),
            active=data.get("active"),
            variants=tuple(
                v if isinstance(v, Variant) else Variant.from_mapping(v)
                for v in raw_variants
            ),
        )

    def copy(self) -> "Package":
        return Package.from_mapping(self)

    @property
    def cost(self) -> float:
        """Package price in dollars (display only)."""
        return cents_to_dollars(self.cost_in_cents)

    def is_active(self) -> bool:
        return bool(self.active)

    def find_variant_by_code(self, variant_code: str) -> Optional[Variant]:
        """
        Return the first variant whose code matches exactly, or None.

        Never raises; callers decide whether a missing variant is an error.
        """

        for variant in self.variants:
            if variant.code == variant_code:
                return variant
        return None

    def as_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "cost_in_cents": self.cost_in_cents,
            "cost": self.cost,
            "active": self.active,
            "variants": [v.as_dict() for v in self.variants],
        }


@dataclass(slots=True)
class Coupon:
    """
    Discount issued against a product key.

    Not frozen: a Purchase lowers discount_in_cents to its subtotal when the
    coupon is attached by code.
    """

    code: str
    discount_in_cents: int
    product_key: Optional[str] = None
    organization: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        require_cents("discount_in_cents", self.discount_in_cents)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Coupon":
        return cls(
            code=_require_str("code", _require_key(data, "code")),
            discount_in_cents=require_cents("discount_in_cents", _require_key(data, "discount_in_cents")),
            product_key=_optional_str("product_key", data.get("product_key")),
            organization=_optional_str("organization", data.get("organization")),
            description=_optional_str("description", data.get("description")),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "discount_in_cents": self.discount_in_cents,
            "product_key": self.product_key,
            "organization": self.organization,
            "description": self.description,
        }


__all__ = ["Variant", "Package", "Coupon"]
