# inventory_api/schemas/product_schema.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, StringConstraints
from pydantic import ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 100

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)]
Description = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX_LENGTH)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=CATEGORY_MAX_LENGTH)]
# Numeric(18, 2) column: more than 2 decimal places would be rounded on save
Price = Annotated[Decimal, Field(gt=0, max_digits=18, decimal_places=2)]
StockQuantity = Annotated[int, Field(ge=0)]


class ProductCreate(CamelModel):
    name: ProductName
    description: Optional[Description] = None
    price: Price
    stock_quantity: StockQuantity
    category: Category


class ProductUpdate(CamelModel):
    """Partial update; only fields the client sent are applied (see model_fields_set)."""

    name: Optional[ProductName] = None
    description: Optional[Description] = None
    price: Optional[Price] = None
    stock_quantity: Optional[StockQuantity] = None
    category: Optional[Category] = None

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _empty_text_is_no_change(cls, value):
        # text fields cannot be cleared; "" leaves the stored value alone
        return None if value == "" else value


class ProductOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock_quantity: int
    category: str
    is_active: bool
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)

    @field_serializer("created_at", "updated_at")
    def _as_utc(self, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; every stored timestamp is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PagedResult(CamelModel):
    items: List[ProductOut]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_page(cls, page) -> "PagedResult":
        return cls(
            items=[ProductOut.model_validate(p) for p in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
        )
