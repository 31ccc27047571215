"""
Domain: Money conversion (pure).

Integer cents are the canonical representation of every amount in the
catalog. Dollars are derived only for display.
"""

from __future__ import annotations

from typing import Optional


def cents_to_dollars(cents: Optional[int]) -> Optional[float]:
    """
    Convert an amount in cents to float dollars.

    Uses plain float division; no rounding is applied.

    Example:
        cents_to_dollars(14900)
        # Returns 149.0
    """

    if cents is None:
        return None
    return cents / 100.0


def require_cents(name: str, value: object) -> int:
    """
    Enforces that a cents amount is a non-negative integer.

    bool is rejected even though it is an int subclass.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer amount in cents, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


__all__ = ["cents_to_dollars", "require_cents"]
