"""Domain records (customers, service visits)."""

from .customers import Customer, ServiceVisit

__all__ = ["Customer", "ServiceVisit"]
