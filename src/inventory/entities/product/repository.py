"""Product repository for data access operations."""

from sqlalchemy import func
from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from .entity import ProductCreate, ProductPublic
from .table import ProductTable


def locked_product_statement(product_id: int) -> SelectOfScalar[ProductTable]:
    """``SELECT ... FOR UPDATE`` on one product row."""
    return (
        select(ProductTable)
        .where(ProductTable.id == product_id)
        .with_for_update()
    )


class ProductRepository:
    """Repository for Product entity data access operations.

    Every method works inside the caller's session; committing and rolling
    back is the caller's job.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, data: ProductCreate) -> ProductPublic:
        """Insert a product and return the stored row."""
        row = ProductTable(name=data.name, price=data.price, quantity=data.quantity)
        self.session.add(row)
        self.session.flush()
        self.session.refresh(row)
        return ProductPublic.model_validate(row)

    def get_for_update(self, product_id: int) -> ProductTable | None:
        """Read a product and hold its row lock until the transaction ends."""
        return self.session.exec(locked_product_statement(product_id)).first()

    def set_quantity(self, row: ProductTable, quantity: int) -> ProductPublic:
        row.quantity = quantity
        self.session.add(row)
        self.session.flush()
        self.session.refresh(row)
        return ProductPublic.model_validate(row)

    def delete(self, row: ProductTable) -> None:
        self.session.delete(row)
        self.session.flush()

    def list_page(self, offset: int, limit: int) -> list[ProductPublic]:
        """Products newest first; ``id`` breaks ties between equal timestamps."""
        statement = (
            select(ProductTable)
            .order_by(col(ProductTable.created_at).desc(), col(ProductTable.id).desc())
            .offset(offset)
            .limit(limit)
        )
        rows = self.session.exec(statement).all()
        return [ProductPublic.model_validate(row) for row in rows]

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(ProductTable)).one()
