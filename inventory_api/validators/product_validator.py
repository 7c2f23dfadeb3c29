"""
Validation for product create/update payloads.

The field rules live on the pydantic models in schemas.product_schema
(ProductCreate / ProductUpdate). The functions here run those models over a
dict of supplied fields and turn pydantic's errors into a flat list of
Violation(field, message) tuples; an empty list means the payload is
acceptable.
"""
from collections import namedtuple
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from inventory_api.schemas.product_schema import ProductCreate, ProductUpdate

TEXT_FIELDS = ("name", "description", "category")
NUMERIC_FIELDS = ("price", "stock_quantity")

# request locations FastAPI prefixes onto error paths
REQUEST_LOCATIONS = ("body", "query", "path", "header")

Violation = namedtuple("Violation", ["field", "message"])


def field_label(name: str) -> str:
    """Wire (camelCase) name for a model field; other names pass through."""
    field = ProductCreate.model_fields.get(name)
    if field is not None and field.alias:
        return field.alias
    return name


def violations_from_errors(errors: Iterable[dict]) -> List[Violation]:
    violations = []
    for err in errors:
        loc = [field_label(str(part)) for part in err.get("loc", ()) if part not in REQUEST_LOCATIONS]
        violations.append(Violation(".".join(loc) or "request", err.get("msg", "Invalid value")))
    return violations


def effective_changes(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return the subset of supplied update fields that will actually be applied.

    Text fields only count when they are a non-empty string, so a text field
    can never be cleared through an update. Numeric fields count whenever a
    value is present, so zero is a real change.
    """
    changes = {}
    for name in TEXT_FIELDS:
        value = fields.get(name)
        if value:
            changes[name] = value
    for name in NUMERIC_FIELDS:
        value = fields.get(name)
        if value is not None:
            changes[name] = value
    return changes


def _validate(model, fields: Dict[str, Any]) -> List[Violation]:
    try:
        model.model_validate(fields)
    except ValidationError as e:
        return violations_from_errors(e.errors())
    return []


def validate_create(fields: Dict[str, Any]) -> List[Violation]:
    return _validate(ProductCreate, fields)


def validate_update(fields: Dict[str, Any]) -> List[Violation]:
    return _validate(ProductUpdate, effective_changes(fields))


def validate_paging(page: int, page_size: int) -> List[Violation]:
    violations = []
    if page < 1:
        violations.append(Violation("page", "Page must be greater than or equal to 1"))
    if page_size < 1:
        violations.append(Violation("pageSize", "Page size must be greater than 0"))
    return violations
