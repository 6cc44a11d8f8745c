"""One-off migration script: customers.json -> SQL database."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# make the salon package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon.core.config import get_settings
from salon.db.create_tables import create_all
from salon.domain.customers import Customer
from salon.repositories.json_storage import load
from salon.repositories.sql_repository import SQLCustomerRepository


def migrate(data_file: Path) -> int:
    if not data_file.exists():
        raise SystemExit(f"File not found: {data_file}")
    create_all()
    repo = SQLCustomerRepository()
    count = 0
    for item in load(data_file):
        customer = Customer.from_dict(item)
        if not customer.id:
            continue
        repo.sync_customer(customer)
        count += 1
    return count


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy JSON customer records into DATABASE_URL")
    ap.add_argument("--file", help="Path to customers.json (default: DATA_FILE setting)")
    args = ap.parse_args()
    data_file = Path(args.file) if args.file else get_settings().data_file
    count = migrate(data_file)
    print(f"Migrated {count} customers from {data_file}.")


if __name__ == "__main__":
    main()
