from decimal import Decimal

from inventory_api.validators.product_validator import (
    effective_changes,
    validate_create,
    validate_paging,
    validate_update,
    violations_from_errors,
)


def _fields(violations):
    return [v.field for v in violations]


def test_valid_create_has_no_violations():
    fields = {"name": "Widget", "price": Decimal("10.00"), "stock_quantity": 3, "category": "Tools"}
    assert validate_create(fields) == []


def test_create_accepts_wire_names():
    fields = {"name": "Widget", "price": "10.5", "stockQuantity": 3, "category": "Tools"}
    assert validate_create(fields) == []


def test_create_reports_every_missing_required_field():
    violations = validate_create({})
    assert _fields(violations) == ["name", "price", "stockQuantity", "category"]
    assert all(v.message for v in violations)


def test_create_rejects_blank_name_and_category():
    fields = {"name": "   ", "price": 1, "stock_quantity": 0, "category": ""}
    assert _fields(validate_create(fields)) == ["name", "category"]


def test_create_length_limits():
    fields = {
        "name": "n" * 201,
        "description": "d" * 1001,
        "price": 1,
        "stock_quantity": 0,
        "category": "c" * 101,
    }
    assert _fields(validate_create(fields)) == ["name", "description", "category"]


def test_create_accepts_values_at_the_limits():
    fields = {
        "name": "n" * 200,
        "description": "d" * 1000,
        "price": Decimal("0.01"),
        "stock_quantity": 0,
        "category": "c" * 100,
    }
    assert validate_create(fields) == []


def test_create_rejects_non_positive_price_and_negative_stock():
    fields = {"name": "Widget", "price": Decimal("0"), "stock_quantity": -1, "category": "Tools"}
    assert _fields(validate_create(fields)) == ["price", "stockQuantity"]


def test_price_with_more_than_two_decimal_places_is_rejected():
    fields = {"name": "Widget", "price": Decimal("0.001"), "stock_quantity": 1, "category": "Tools"}
    assert _fields(validate_create(fields)) == ["price"]
    assert _fields(validate_update({"price": Decimal("9.999")})) == ["price"]


def test_update_checks_only_supplied_fields():
    assert validate_update({}) == []
    assert validate_update({"stock_quantity": 10}) == []
    assert _fields(validate_update({"price": Decimal("-5")})) == ["price"]
    assert _fields(validate_update({"stock_quantity": -1})) == ["stockQuantity"]


def test_update_ignores_empty_text_fields():
    # empty text means "leave unchanged", so there is nothing to validate
    assert validate_update({"name": "", "category": None, "description": ""}) == []


def test_update_rejects_whitespace_name_and_long_description():
    violations = validate_update({"name": "  ", "description": "x" * 1001})
    assert _fields(violations) == ["name", "description"]


def test_effective_changes_follow_merge_policy():
    changes = effective_changes(
        {"name": "", "description": "new", "category": None, "price": None, "stock_quantity": 0}
    )
    assert changes == {"description": "new", "stock_quantity": 0}


def test_error_locations_use_wire_names():
    errors = [
        {"loc": ("body", "stock_quantity"), "msg": "bad"},
        {"loc": ("query", "pageSize"), "msg": "too big"},
        {"loc": ("body",), "msg": "missing body"},
    ]
    assert [tuple(v) for v in violations_from_errors(errors)] == [
        ("stockQuantity", "bad"),
        ("pageSize", "too big"),
        ("request", "missing body"),
    ]


def test_paging_rules():
    assert validate_paging(1, 10) == []
    assert _fields(validate_paging(0, 10)) == ["page"]
    assert _fields(validate_paging(1, 0)) == ["pageSize"]
