"""Product API router with create, list, quantity update and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.inventory.api.http.deps import get_product_service
from src.inventory.core.services import ProductService
from src.inventory.core.services.database.db_utils import MAX_SQL_INTEGER
from src.inventory.entities.product import (
    ProductCreate,
    ProductPage,
    ProductPublic,
    QuantityUpdate,
)

router = APIRouter(prefix="/products", tags=["products"])

ProductId = Annotated[int, Path(ge=1, le=MAX_SQL_INTEGER, description="Product id")]


@router.post("", response_model=ProductPublic, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductPublic:
    """Create a new product."""
    return service.create_product(product)


@router.get("", response_model=ProductPage)
async def list_products(
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Page size, capped at 100"),
    service: ProductService = Depends(get_product_service),
) -> ProductPage:
    """List products, newest first.

    Unparsable ``page``/``limit`` values fall back to their defaults instead
    of failing the request.
    """
    return await service.list_products(page, limit)


@router.put("/{product_id}/quantity", response_model=ProductPublic)
def update_quantity(
    product_id: ProductId,
    update: QuantityUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductPublic:
    """Set a product's quantity under a row lock."""
    return service.update_quantity(product_id, update.quantity)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Delete a product under a row lock."""
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
