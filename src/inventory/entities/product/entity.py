"""Entity: Product request and response schemas."""

import math
from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


def _integral(value: int | float) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("quantity must be a whole number")
        return int(value)
    return value


class ProductCreate(BaseModel):
    """Body of a create request.

    Values must already be JSON numbers and strings; nothing is coerced from
    text, and booleans are not numbers here.
    """

    name: StrictStr = Field(min_length=1, description="Unique product name")
    price: StrictInt | StrictFloat = Field(description="Unit price")
    quantity: StrictInt | StrictFloat = Field(description="Units in stock")

    @field_validator("price")
    @classmethod
    def _finite_price(cls, value: int | float) -> float:
        if not math.isfinite(value):
            raise ValueError("price must be a finite number")
        return float(value)

    @field_validator("quantity")
    @classmethod
    def _whole_quantity(cls, value: int | float) -> int:
        return _integral(value)


class QuantityUpdate(BaseModel):
    """Body of a quantity update; the sign is checked against the locked row."""

    quantity: StrictInt | StrictFloat = Field(description="New quantity in stock")

    @field_validator("quantity")
    @classmethod
    def _whole_quantity(cls, value: int | float) -> int:
        return _integral(value)


class ProductPublic(BaseModel):
    """A stored product as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    quantity: int
    created_at: datetime


class ProductPage(BaseModel):
    """One page of products plus the total number of stored products."""

    model_config = ConfigDict(populate_by_name=True)

    products: list[ProductPublic]
    total: int
    page: int
    page_size: int = Field(alias="pageSize")
