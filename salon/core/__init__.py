"""
Core utilities shared across the salon API.

This package hosts configuration helpers (env vars, data paths) and the
logging setup. Routers, services and repositories depend on these primitives
instead of reading the environment themselves.
"""
