"""Customer use cases (validation, uniqueness) on top of the active repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from salon.domain.customers import Customer, ServiceVisit
from salon.repositories.base import CustomerRepository


class CustomerServiceError(Exception):
    """Base exception for customer workflows."""


class InvalidCustomerError(CustomerServiceError):
    """Raised when required customer fields are missing."""


class InvalidVisitError(CustomerServiceError):
    """Raised when a visit payload has the wrong shape."""


class DuplicatePhoneError(CustomerServiceError):
    """Raised when the phone number already belongs to another customer."""


class CustomerService:
    """Validates requests and forwards them to the repository chosen at startup.

    Not-found keeps the repository sentinels (``None`` / ``False``); only
    invalid input and phone conflicts raise.
    """

    def __init__(self, repository: CustomerRepository) -> None:
        self.repository = repository

    @property
    def backend_name(self) -> str:
        return getattr(self.repository, "backend_name", "unknown")

    def normalize(self, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    def list_customers(self) -> list[Customer]:
        return self.repository.list_all()

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.repository.get_by_id(customer_id)

    def get_customer_by_phone(self, phone_number: str) -> Optional[Customer]:
        return self.repository.get_by_phone(self.normalize(phone_number))

    def search_customers(self, term: str) -> list[Customer]:
        return self.repository.search_by_name(self.normalize(term))

    def create_customer(
        self,
        name: Any,
        phone_number: Any,
        preferred_styles: Any = None,
        notes: Any = "",
    ) -> Optional[Customer]:
        name_value = self.normalize(name)
        phone_value = self.normalize(phone_number)
        if not name_value or not phone_value:
            raise InvalidCustomerError("Name and phone number are required")
        self._check_styles(preferred_styles)
        if self.repository.get_by_phone(phone_value):
            raise DuplicatePhoneError("Customer with this phone number already exists")
        return self.repository.create(
            name_value,
            phone_value,
            preferred_styles or [],
            notes if isinstance(notes, str) else "",
        )

    def _text_field(self, changes: Mapping[str, Any], *keys: str) -> Optional[str]:
        for key in keys:
            value = changes.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise InvalidCustomerError(f"{keys[0]} must be a string")
            return value
        return None

    def _check_styles(self, styles: Any) -> None:
        if styles is None:
            return
        if not isinstance(styles, list) or not all(isinstance(s, str) for s in styles):
            raise InvalidCustomerError("Preferred styles must be a list")

    def update_customer(self, customer_id: str, fields: Mapping[str, Any] | None) -> Optional[Customer]:
        fields = fields or {}
        name = self._text_field(fields, "name")
        phone = self._text_field(fields, "phoneNumber", "phone_number")
        notes = self._text_field(fields, "notes")
        styles = fields.get("preferredStyles", fields.get("preferred_styles"))
        self._check_styles(styles)

        changes: dict = {}
        if name is not None:
            changes["name"] = name.strip()
        if phone is not None:
            changes["phoneNumber"] = phone.strip()
        if notes is not None:
            changes["notes"] = notes
        if styles is not None:
            changes["preferredStyles"] = styles
        if changes.get("phoneNumber"):
            owner = self.repository.get_by_phone(changes["phoneNumber"])
            if owner and owner.id != customer_id:
                raise DuplicatePhoneError("Customer with this phone number already exists")
        return self.repository.update(customer_id, changes)

    def add_visit(self, customer_id: str, services_taken: Any, notes: Any = "") -> Optional[ServiceVisit]:
        if not isinstance(services_taken, list):
            raise InvalidVisitError("Services taken must be an array")
        return self.repository.add_visit(customer_id, services_taken, notes if isinstance(notes, str) else "")

    def delete_customer(self, customer_id: str) -> bool:
        return self.repository.delete(customer_id)
