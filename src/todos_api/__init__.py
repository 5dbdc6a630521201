"""
Todos API - a minimal in-memory todo service.

This package provides:
- An in-memory todo store with CRUD rules
- A FastAPI HTTP layer with OpenAPI documentation
"""

__version__ = "1.0.0"
