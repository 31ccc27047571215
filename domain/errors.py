"""Domain error codes for purchase pricing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
    VARIANT_NOT_FOUND = "VARIANT_NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class PackageNotFoundError(DomainError):
    """Raised when a purchase is built from a package code the catalog doesn't know."""

    def __init__(self, package_code: str) -> None:
        super().__init__(
            code=ErrorCode.PACKAGE_NOT_FOUND,
            message=f"Package not found: {package_code}",
        )
        self.package_code = package_code


class VariantNotFoundError(DomainError):
    """Raised when a variant code can't be resolved against the purchase's package."""

    def __init__(self, variant_code: str) -> None:
        super().__init__(
            code=ErrorCode.VARIANT_NOT_FOUND,
            message=f"Variant not found: {variant_code}",
        )
        self.variant_code = variant_code


class InvalidArgumentError(DomainError, TypeError):
    """Raised when an argument has the wrong shape (e.g. variants that aren't a list)."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ARGUMENT,
            message=message,
        )


__all__ = [
    "ErrorCode",
    "DomainError",
    "PackageNotFoundError",
    "VariantNotFoundError",
    "InvalidArgumentError",
]
