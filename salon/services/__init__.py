"""
High-level use cases for the salon API.

Service modules orchestrate the active repository to implement business rules
(required fields, phone uniqueness, visit shape). Routers call these services
instead of touching the storage backends directly.
"""
