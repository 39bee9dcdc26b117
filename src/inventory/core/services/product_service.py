"""Product operations: create, list, quantity update and delete."""

import asyncio
from collections.abc import Callable
from typing import TypeVar

from loguru import logger
from starlette.concurrency import run_in_threadpool

from src.inventory.core.errors import (
    DuplicateNameError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from src.inventory.core.services.database.db_session import DbSessionService
from src.inventory.core.services.database.db_utils import is_duplicate_key_error
from src.inventory.core.services.pagination import PageRequest
from src.inventory.entities.product import (
    ProductCreate,
    ProductPage,
    ProductPublic,
    ProductRepository,
    ProductTable,
)
from src.inventory.runtime.config.config_data import PaginationConfig

T = TypeVar("T")

Mutation = Callable[[ProductRepository, ProductTable], T]
Precondition = Callable[[ProductTable], None]


class ProductService:
    """Business operations on products.

    Updates and deletes share one locked read-modify-write sequence,
    ``_mutate_locked``; creates and listings talk to the store directly.
    """

    def __init__(
        self,
        database_service: DbSessionService,
        pagination: PaginationConfig | None = None,
    ) -> None:
        self._db = database_service
        self._pagination = pagination or PaginationConfig()

    def create_product(self, data: ProductCreate) -> ProductPublic:
        try:
            with self._db.transaction() as session:
                product = ProductRepository(session).create(data)
        except StorageError as err:
            if err.__cause__ is not None and is_duplicate_key_error(err.__cause__):
                logger.info("Rejected duplicate product name {!r}", data.name)
                raise DuplicateNameError() from err.__cause__
            raise

        logger.info("Created product {} ({!r})", product.id, product.name)
        return product

    async def list_products(
        self, page: str | int | None = None, limit: str | int | None = None
    ) -> ProductPage:
        """Fetch one page and the total count concurrently.

        The two reads run on separate sessions, so the total may be marginally
        stale relative to the page.
        """
        request = PageRequest.from_query(
            page,
            limit,
            default_limit=self._pagination.default_limit,
            max_limit=self._pagination.max_limit,
        )
        products, total = await asyncio.gather(
            run_in_threadpool(self._read_page, request),
            run_in_threadpool(self._read_count),
        )
        return ProductPage(
            products=products,
            total=total,
            page=request.page,
            page_size=request.limit,
        )

    def _read_page(self, request: PageRequest) -> list[ProductPublic]:
        with self._db.read_session() as session:
            return ProductRepository(session).list_page(request.offset, request.limit)

    def _read_count(self) -> int:
        with self._db.read_session() as session:
            return ProductRepository(session).count()

    def update_quantity(self, product_id: int, quantity: int) -> ProductPublic:
        def non_negative(_row: ProductTable) -> None:
            if quantity < 0:
                raise ValidationError("Quantity cannot be negative.")

        product = self._mutate_locked(
            product_id,
            lambda repo, row: repo.set_quantity(row, quantity),
            precondition=non_negative,
        )
        logger.info("Set quantity of product {} to {}", product_id, quantity)
        return product

    def delete_product(self, product_id: int) -> None:
        self._mutate_locked(product_id, lambda repo, row: repo.delete(row))
        logger.info("Deleted product {}", product_id)

    def _mutate_locked(
        self,
        product_id: int,
        mutation: Mutation[T],
        precondition: Precondition | None = None,
    ) -> T:
        """Lock a product row, check it, mutate it and commit.

        ``NotFoundError`` when the row is absent, whatever ``precondition``
        raises when it rejects the row. Either way nothing is written and the
        connection goes back to the pool.
        """
        with self._db.transaction() as session:
            repo = ProductRepository(session)
            row = repo.get_for_update(product_id)
            if row is None:
                raise NotFoundError()
            if precondition is not None:
                precondition(row)
            return mutation(repo, row)

    def count_products(self) -> int:
        """Total number of stored products."""
        return self._read_count()
