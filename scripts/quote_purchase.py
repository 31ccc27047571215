#!/usr/bin/env python3
"""
Purchase Quote Script

Prices a package with optional variants and a coupon against the Emerald
catalog configured by EMERALD_URL (or --url).

Usage:
    python quote_purchase.py wellcheck
    python quote_purchase.py wellcheck --variant vitamin_d --variant vitamin_b
    python quote_purchase.py wellcheck --coupon SPRING --organization acme
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import DomainError
from repositories import client
from services.purchase_service import PurchaseRequest, quote_purchase


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Price an Emerald package purchase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python quote_purchase.py wellcheck
  python quote_purchase.py wellcheck --variant vitamin_d --coupon SPRING
        """
    )

    parser.add_argument(
        "package_code",
        help="Code of the package to price"
    )

    parser.add_argument(
        "--variant",
        "-v",
        action="append",
        default=[],
        dest="variants",
        help="Variant code to add (repeatable)"
    )

    parser.add_argument(
        "--coupon",
        "-c",
        help="Coupon code to apply"
    )

    parser.add_argument(
        "--organization",
        "-o",
        help="Organization used for the coupon lookup"
    )

    parser.add_argument(
        "--url",
        help="Emerald base URL (default: EMERALD_URL)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log lookup details"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.url:
        client.configure(args.url)

    try:
        quote = quote_purchase(PurchaseRequest(
            package_code=args.package_code,
            organization=args.organization,
            variant_codes=args.variants,
            coupon_code=args.coupon,
        ))
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print("=" * 50)
    print(f"QUOTE: {quote.package_code}")
    print("=" * 50)
    for line in quote.lines:
        print(f"{line.kind:<8} {line.name:<28} ${line.cost:>9.2f}")
    print("-" * 50)
    print(f"{'Subtotal':<37} ${quote.subtotal:>9.2f}")
    if quote.coupon_code:
        print(f"{'Coupon ' + quote.coupon_code:<37} -${quote.discount:>8.2f}")
    elif args.coupon:
        print(f"Coupon '{args.coupon}' not found; no discount applied")
    print(f"{'Total':<37} ${quote.total:>9.2f}")
    print("=" * 50)

    return 0


if __name__ == "__main__":
    sys.exit(main())
