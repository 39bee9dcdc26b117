"""Unit tests for the product schemas, table and repository."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.dialects import postgresql
from sqlmodel import Session

from src.inventory.entities.product import (
    ProductCreate,
    ProductPage,
    ProductPublic,
    ProductRepository,
    ProductTable,
    QuantityUpdate,
    locked_product_statement,
)


class TestProductCreate:
    def test_valid_payload(self):
        data = ProductCreate.model_validate({"name": "bolt", "price": 0.5, "quantity": 100})
        assert data.name == "bolt"
        assert data.price == 0.5
        assert data.quantity == 100

    def test_integer_price_becomes_float(self):
        data = ProductCreate.model_validate({"name": "bolt", "price": 2, "quantity": 1})
        assert isinstance(data.price, float)

    def test_whole_float_quantity_accepted(self):
        data = ProductCreate.model_validate({"name": "bolt", "price": 1, "quantity": 5.0})
        assert data.quantity == 5
        assert isinstance(data.quantity, int)

    @pytest.mark.parametrize(
        "payload",
        [
            {"price": 0.5, "quantity": 1},
            {"name": "bolt", "quantity": 1},
            {"name": "bolt", "price": 0.5},
            {"name": "", "price": 0.5, "quantity": 1},
            {"name": 42, "price": 0.5, "quantity": 1},
            {"name": "bolt", "price": "0.5", "quantity": 1},
            {"name": "bolt", "price": 0.5, "quantity": "1"},
            {"name": "bolt", "price": True, "quantity": 1},
            {"name": "bolt", "price": 0.5, "quantity": 1.5},
            {"name": "bolt", "price": float("inf"), "quantity": 1},
        ],
    )
    def test_rejected_payloads(self, payload):
        with pytest.raises(PydanticValidationError):
            ProductCreate.model_validate(payload)


class TestQuantityUpdate:
    def test_negative_is_left_to_the_service(self):
        assert QuantityUpdate.model_validate({"quantity": -3}).quantity == -3

    @pytest.mark.parametrize("value", ["10", None, False, 2.5])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(PydanticValidationError):
            QuantityUpdate.model_validate({"quantity": value})


class TestProductPublic:
    def test_equality_covers_every_field(self):
        fields = {"id": 1, "name": "bolt", "price": 0.5, "quantity": 100}
        first = ProductPublic(**fields, created_at=datetime(2024, 1, 1, tzinfo=UTC))
        later = ProductPublic(**fields, created_at=datetime(2024, 1, 2, tzinfo=UTC))

        assert first != later
        assert first == first.model_copy()


class TestProductPage:
    def test_serializes_page_size_by_alias(self):
        page = ProductPage(products=[], total=0, page=1, page_size=10)
        assert page.model_dump(by_alias=True) == {
            "products": [],
            "total": 0,
            "page": 1,
            "pageSize": 10,
        }


def test_locked_statement_uses_for_update():
    sql = str(locked_product_statement(7).compile(dialect=postgresql.dialect()))
    assert "FOR UPDATE" in sql
    assert "products.id = " in sql


class TestProductRepository:
    def test_create_and_count(self, session: Session):
        repo = ProductRepository(session)

        product = repo.create(ProductCreate(name="bolt", price=0.5, quantity=100))
        session.commit()

        assert isinstance(product, ProductPublic)
        assert product.id is not None
        assert repo.count() == 1

    def test_get_for_update(self, session: Session):
        repo = ProductRepository(session)
        product = repo.create(ProductCreate(name="bolt", price=0.5, quantity=100))

        row = repo.get_for_update(product.id)

        assert isinstance(row, ProductTable)
        assert row.name == "bolt"
        assert repo.get_for_update(product.id + 100) is None

    def test_set_quantity_and_delete(self, session: Session):
        repo = ProductRepository(session)
        product = repo.create(ProductCreate(name="bolt", price=0.5, quantity=100))
        row = repo.get_for_update(product.id)

        updated = repo.set_quantity(row, 7)
        assert updated.quantity == 7

        repo.delete(row)
        assert repo.count() == 0

    def test_list_page_orders_newest_first(self, session: Session):
        repo = ProductRepository(session)
        for name in ("a", "b", "c"):
            repo.create(ProductCreate(name=name, price=1, quantity=1))

        assert [p.name for p in repo.list_page(0, 10)] == ["c", "b", "a"]
        assert [p.name for p in repo.list_page(1, 1)] == ["b"]
