#!/usr/bin/env python3
"""
Register a customer in whichever backend the app would select.

Usage:
  python scripts/add_customer.py --name "Jane Doe" --phone 555-0100 [--style Fade --style "Beard Trim"] [--notes "..."]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon.repositories.factory import build_repository
from salon.services.customer_service import CustomerService, CustomerServiceError


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a salon customer")
    ap.add_argument("--name", required=True, help="Customer name")
    ap.add_argument("--phone", required=True, help="Phone number (must be unique)")
    ap.add_argument("--style", action="append", default=[], help="Preferred style (repeatable)")
    ap.add_argument("--notes", default="", help="Free-text notes")
    args = ap.parse_args()

    svc = CustomerService(build_repository())
    try:
        customer = svc.create_customer(args.name, args.phone, args.style, args.notes)
    except CustomerServiceError as exc:
        raise SystemExit(f"Error: {exc}")
    if not customer:
        raise SystemExit("Error: customer could not be stored")
    print(f"OK: customer registered ({svc.backend_name})")
    print(f"  ID: {customer.id}")
    print(f"  Name: {customer.name}")
    print(f"  Phone: {customer.phone_number}")
    if customer.preferred_styles:
        print(f"  Styles: {', '.join(customer.preferred_styles)}")


if __name__ == "__main__":
    main()
