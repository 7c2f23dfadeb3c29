import logging
from typing import Any, Dict, List, Optional

from inventory_api.models.product import Product, utcnow
from inventory_api.schemas.product_schema import ProductCreate, ProductUpdate
from inventory_api.validators.product_validator import (
    Violation,
    effective_changes,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)


class ProductValidationException(Exception):
    def __init__(self, violations: List[Violation]):
        super().__init__("Validation failed")
        self.violations = violations


class ProductService:
    """
    Write side of the catalogue: create, partial update and soft delete.

    `repo` is any object with the ProductRepository methods (get_active, add,
    save). Each operation touches a single row.
    """

    def __init__(self, repo):
        self.repo = repo

    def create(self, fields: Dict[str, Any]) -> Product:
        violations = validate_create(fields)
        if violations:
            raise ProductValidationException(violations)

        data = ProductCreate.model_validate(fields)
        now = utcnow()
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            stock_quantity=data.stock_quantity,
            category=data.category,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product = self.repo.add(product)
        logger.info("Created product id=%s name=%r", product.id, product.name)
        return product

    def update(self, product_id: int, fields: Dict[str, Any]) -> Optional[Product]:
        """
        Apply the supplied fields to an active product.

        `fields` holds only what the caller sent; anything missing is left as
        stored. Returns None when the product is absent or inactive.
        """
        violations = validate_update(fields)
        if violations:
            raise ProductValidationException(violations)

        product = self.repo.get_active(product_id)
        if product is None:
            return None

        changes = ProductUpdate.model_validate(effective_changes(fields)).model_dump(exclude_unset=True)
        for name, value in changes.items():
            setattr(product, name, value)
        product.updated_at = utcnow()

        product = self.repo.save(product)
        logger.info("Updated product id=%s fields=%s", product_id, sorted(changes))
        return product

    def soft_delete(self, product_id: int) -> bool:
        product = self.repo.get_active(product_id)
        if product is None:
            return False
        product.is_active = False
        product.updated_at = utcnow()
        self.repo.save(product)
        logger.info("Soft-deleted product id=%s", product_id)
        return True
