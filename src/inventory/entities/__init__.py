"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: API schemas and validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .product import ProductPublic, ProductRepository, ProductTable

__all__ = ["ProductPublic", "ProductRepository", "ProductTable"]
