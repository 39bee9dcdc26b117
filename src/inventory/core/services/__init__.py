"""Core services exports."""

from .database.db_session import DbSessionService
from .pagination import PageRequest
from .product_service import ProductService

__all__ = [
    "DbSessionService",
    "PageRequest",
    "ProductService",
]
