from dataclasses import dataclass
from typing import List, Optional, Tuple

from inventory_api.models.product import Product
from inventory_api.utils.transactions import write_transaction
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

LIKE_ESCAPE = "\\"


@dataclass
class ProductQuery:
    """A filtered, sorted range scan over active products."""

    category: Optional[str] = None
    search: Optional[str] = None
    sort_field: str = "name"
    descending: bool = False
    offset: int = 0
    limit: int = 10


def _escape_like(term: str) -> str:
    # the search term is a plain substring, not a LIKE pattern
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, product_id: int) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.is_active == True)
            .first()
        )

    def search(self, query: ProductQuery) -> Tuple[List[Product], int]:
        qry = self.db.query(Product).filter(Product.is_active == True)
        if query.category:
            qry = qry.filter(func.lower(Product.category) == func.lower(query.category))
        if query.search:
            like = f"%{_escape_like(query.search)}%"
            qry = qry.filter(
                or_(
                    Product.name.ilike(like, escape=LIKE_ESCAPE),
                    Product.description.ilike(like, escape=LIKE_ESCAPE),
                )
            )
        total = qry.with_entities(func.count(Product.id)).scalar() or 0
        if query.offset >= total:
            # past the last row; also keeps huge offsets out of the SQL
            return [], total

        column = getattr(Product, query.sort_field)
        primary = column.desc() if query.descending else column.asc()
        items = (
            qry.order_by(primary, Product.id.asc())
            .offset(query.offset)
            .limit(query.limit)
            .all()
        )
        return items, total

    def list_low_stock(self, threshold: int) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.is_active == True, Product.stock_quantity < threshold)
            .order_by(Product.id.asc())
            .all()
        )

    def add(self, product: Product) -> Product:
        with write_transaction(self.db):
            self.db.add(product)
        self.db.refresh(product)
        return product

    def save(self, product: Product) -> Product:
        with write_transaction(self.db):
            self.db.add(product)
        self.db.refresh(product)
        return product
