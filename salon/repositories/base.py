"""
Contract shared by every customer storage backend.

Both ``JsonCustomerRepository`` and ``SQLCustomerRepository`` satisfy this
protocol structurally; services hold one instance chosen at startup.

Lookups never raise: a missing record (or a storage failure) comes back as
``None``, ``[]`` or ``False``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from salon.domain.customers import Customer, ServiceVisit

# Partial-update keys accepted by ``update`` mapped to Customer attributes.
UPDATABLE_FIELDS = {
    "name": "name",
    "phoneNumber": "phone_number",
    "phone_number": "phone_number",
    "preferredStyles": "preferred_styles",
    "preferred_styles": "preferred_styles",
    "notes": "notes",
}


def normalize_changes(fields: Mapping[str, Any] | None) -> dict:
    """Keep the known, truthy fields of a partial update keyed by attribute name."""
    changes: dict = {}
    for key, value in (fields or {}).items():
        attr = UPDATABLE_FIELDS.get(key)
        if attr and value:
            changes[attr] = list(value) if attr == "preferred_styles" else value
    return changes


@runtime_checkable
class CustomerRepository(Protocol):
    backend_name: str

    def list_all(self) -> list[Customer]:
        """All customers ordered by name."""

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        ...

    def get_by_phone(self, phone_number: str) -> Optional[Customer]:
        ...

    def search_by_name(self, term: str) -> list[Customer]:
        """Case-insensitive substring match on name; blank terms match nothing."""

    def create(
        self,
        name: str,
        phone_number: str,
        preferred_styles: list[str] | None = None,
        notes: str = "",
    ) -> Optional[Customer]:
        ...

    def update(self, customer_id: str, fields: Mapping[str, Any]) -> Optional[Customer]:
        ...

    def add_visit(self, customer_id: str, services_taken: list[str], notes: str = "") -> Optional[ServiceVisit]:
        ...

    def delete(self, customer_id: str) -> bool:
        ...
