#!/usr/bin/env python3
"""
List packages on the Emerald catalog.

Usage:
    python list_packages.py
    python list_packages.py --active-only
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories import client
from services.catalog_service import CatalogUnavailableError, list_packages


def main() -> int:
    parser = argparse.ArgumentParser(description="List Emerald packages")
    parser.add_argument("--active-only", action="store_true", help="Only show active packages")
    parser.add_argument("--url", help="Emerald base URL (default: EMERALD_URL)")
    args = parser.parse_args()

    if args.url:
        client.configure(args.url)

    try:
        packages = list_packages(active_only=args.active_only)
    except (CatalogUnavailableError, RuntimeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for package in packages:
        status = "active" if package.is_active() else "inactive"
        print(f"{package.code:<20} {package.name:<28} ${package.cost:>9.2f}  ({status})")
        for variant in package.variants:
            print(f"    + {variant.code:<16} {variant.name:<24} {variant.cost_in_cents:>7}c")

    print(f"\n{len(packages)} package(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
