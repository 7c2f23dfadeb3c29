from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from inventory_api.db import Base

LOW_STOCK_THRESHOLD = 5


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stock_is_low(stock_quantity: int) -> bool:
    return stock_quantity < LOW_STOCK_THRESHOLD


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(18, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    category = Column(String(100), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def is_low_stock(self) -> bool:
        # derived on read, never stored
        return stock_is_low(self.stock_quantity)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
