"""Entity package: Product."""

from .entity import ProductCreate, ProductPage, ProductPublic, QuantityUpdate
from .repository import ProductRepository, locked_product_statement
from .table import ProductTable

__all__ = [
    "ProductCreate",
    "ProductPage",
    "ProductPublic",
    "ProductRepository",
    "ProductTable",
    "QuantityUpdate",
    "locked_product_statement",
]
