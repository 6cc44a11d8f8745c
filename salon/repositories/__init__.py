"""
Persistence adapters.

These modules encapsulate how customer records are stored and retrieved
(JSON file or SQL database). Services depend on the ``CustomerRepository``
protocol rather than on either backend.
"""

from .base import CustomerRepository
from .factory import build_repository
from .json_storage import JsonCustomerRepository
from .sql_repository import SQLCustomerRepository

__all__ = [
    "CustomerRepository",
    "JsonCustomerRepository",
    "SQLCustomerRepository",
    "build_repository",
]
