import math
from dataclasses import dataclass, field
from typing import List, Optional

from inventory_api.config import settings
from inventory_api.models.product import LOW_STOCK_THRESHOLD, Product
from inventory_api.repositories.product_repo import ProductQuery
from inventory_api.services.product_service import ProductValidationException
from inventory_api.validators.product_validator import validate_paging

# public sort key -> Product attribute
SORT_FIELDS = {
    "name": "name",
    "price": "price",
    "stock": "stock_quantity",
    "category": "category",
    "created": "created_at",
}
DEFAULT_SORT = "name"


def resolve_sort_field(sort_by: Optional[str]) -> str:
    key = (sort_by or "").strip().lower()
    return SORT_FIELDS.get(key, SORT_FIELDS[DEFAULT_SORT])


@dataclass
class ProductQueryParams:
    category: Optional[str] = None
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_descending: bool = False
    page: int = 1
    page_size: int = field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)


@dataclass
class Page:
    items: List[Product]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


class CatalogueService:
    """Read side of the catalogue. Only active products are ever returned."""

    def __init__(self, repo):
        self.repo = repo

    def list_products(self, params: ProductQueryParams) -> Page:
        """
        Filter, sort and paginate active products.

        Category and search filters are ANDed together. Ties on the sort key
        fall back to id ascending so consecutive pages never overlap. A page
        past the end yields no items but keeps the requested page number.
        """
        violations = validate_paging(params.page, params.page_size)
        if violations:
            raise ProductValidationException(violations)

        query = ProductQuery(
            category=params.category or None,
            search=params.search or None,
            sort_field=resolve_sort_field(params.sort_by),
            descending=params.sort_descending,
            offset=(params.page - 1) * params.page_size,
            limit=params.page_size,
        )
        items, total = self.repo.search(query)
        return Page(items=items, total_count=total, page=params.page, page_size=params.page_size)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.repo.get_active(product_id)

    def list_low_stock(self) -> List[Product]:
        return self.repo.list_low_stock(LOW_STOCK_THRESHOLD)
