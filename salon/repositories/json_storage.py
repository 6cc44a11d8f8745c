"""
JSON file persistence adapter.

The whole customer list lives in memory and is mirrored to a single
pretty-printed UTF-8 file. Every mutation rewrites the full file, which is
fine for a single salon but grows with customers x visits.

A per-instance lock serializes read-modify-write cycles inside one process.
Two processes pointed at the same file still race: the last full overwrite
wins.

Callers always receive copies of the stored records; only the repository
methods change the in-memory list.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Optional

from salon.domain.customers import Customer, ServiceVisit, new_customer_id, utc_now
from salon.repositories.base import normalize_changes

logger = logging.getLogger(__name__)


def load(path: Path) -> list:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of customers")
    return data


def save(path: Path, records: list) -> None:
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")


class JsonCustomerRepository:
    """Customer storage backed by one JSON file."""

    backend_name = "json"

    def __init__(self, data_file: Path | str) -> None:
        self.data_file = Path(data_file)
        self._lock = threading.Lock()
        self._customers: list[Customer] = []
        self._load()

    # -------------------------- file io --------------------------
    def _load(self) -> None:
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            if not self.data_file.exists():
                save(self.data_file, [])
                self._customers = []
                return
            self._customers = [Customer.from_dict(item) for item in load(self.data_file)]
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.error("Error loading customers from %s: %s", self.data_file, exc)
            self._customers = []

    def _save(self) -> None:
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            save(self.data_file, [customer.to_dict() for customer in self._customers])
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving customers to %s: %s", self.data_file, exc)

    def _find(self, customer_id: str) -> Optional[Customer]:
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        return None

    # -------------------------- reads --------------------------
    def list_all(self) -> list[Customer]:
        return copy.deepcopy(sorted(self._customers, key=lambda c: c.name))

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        return copy.deepcopy(self._find(customer_id))

    def get_by_phone(self, phone_number: str) -> Optional[Customer]:
        for customer in self._customers:
            if customer.phone_number == phone_number:
                return copy.deepcopy(customer)
        return None

    def search_by_name(self, term: str) -> list[Customer]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        matches = [c for c in self._customers if needle in c.name.lower()]
        return copy.deepcopy(sorted(matches, key=lambda c: c.name))

    # -------------------------- writes --------------------------
    def create(
        self,
        name: str,
        phone_number: str,
        preferred_styles: list[str] | None = None,
        notes: str = "",
    ) -> Optional[Customer]:
        customer = Customer(
            id=new_customer_id(),
            name=name,
            phone_number=phone_number,
            preferred_styles=list(preferred_styles or []),
            service_history=[],
            notes=notes or "",
        )
        with self._lock:
            self._customers.append(customer)
            self._save()
        return copy.deepcopy(customer)

    def update(self, customer_id: str, fields: Mapping[str, Any]) -> Optional[Customer]:
        changes = normalize_changes(fields)
        with self._lock:
            customer = self._find(customer_id)
            if not customer:
                return None
            if "name" in changes:
                customer.name = changes["name"]
            if "phone_number" in changes:
                customer.phone_number = changes["phone_number"]
            if "preferred_styles" in changes:
                customer.update_preferred_styles(changes["preferred_styles"])
            if "notes" in changes:
                customer.update_notes(changes["notes"])
            self._save()
            return copy.deepcopy(customer)

    def add_visit(self, customer_id: str, services_taken: list[str], notes: str = "") -> Optional[ServiceVisit]:
        with self._lock:
            customer = self._find(customer_id)
            if not customer:
                return None
            visit = ServiceVisit(date=utc_now(), services_taken=list(services_taken), notes=notes or "")
            customer.add_service_visit(visit)
            self._save()
            return copy.deepcopy(visit)

    def delete(self, customer_id: str) -> bool:
        with self._lock:
            remaining = [c for c in self._customers if c.id != customer_id]
            if len(remaining) == len(self._customers):
                return False
            self._customers = remaining
            self._save()
            return True
