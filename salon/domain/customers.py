"""Customer and service visit records shared by both storage backends."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional
import uuid


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_customer_id() -> str:
    return uuid.uuid4().hex


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    text = str(value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


@dataclass
class ServiceVisit:
    """One dated record of the services performed for a customer."""

    date: datetime
    services_taken: list[str] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "date": as_utc(self.date).isoformat(),
            "servicesTaken": list(self.services_taken),
            "notes": self.notes or "",
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceVisit":
        return cls(
            date=parse_timestamp(data.get("date")),
            services_taken=list(data.get("servicesTaken") or []),
            notes=data.get("notes") or "",
        )


@dataclass
class Customer:
    """A salon client: contact info, preferences, notes and visit history."""

    id: str
    name: str
    phone_number: str
    preferred_styles: list[str] = field(default_factory=list)
    service_history: list[ServiceVisit] = field(default_factory=list)
    notes: str = ""

    def add_service_visit(self, visit: ServiceVisit) -> None:
        self.service_history.append(visit)

    def update_preferred_styles(self, styles: list[str]) -> None:
        self.preferred_styles = styles

    def update_notes(self, notes: str) -> None:
        self.notes = notes

    @property
    def last_visit(self) -> Optional[ServiceVisit]:
        if not self.service_history:
            return None
        return self.service_history[-1]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phoneNumber": self.phone_number,
            "preferredStyles": list(self.preferred_styles),
            "notes": self.notes or "",
            "serviceHistory": [visit.to_dict() for visit in self.service_history],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Customer":
        history = data.get("serviceHistory") or []
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            phone_number=data.get("phoneNumber") or "",
            preferred_styles=list(data.get("preferredStyles") or []),
            service_history=[ServiceVisit.from_dict(item) for item in history if isinstance(item, Mapping)],
            notes=data.get("notes") or "",
        )
