from typing import Iterable, List

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_api.validators.product_validator import Violation, violations_from_errors


def validation_detail(violations: Iterable[Violation]) -> dict:
    return {
        "message": "Validation failed",
        "errors": [{"field": v.field, "error": v.message} for v in violations],
    }


def validation_error(violations: List[Violation]) -> HTTPException:
    return HTTPException(status_code=400, detail=validation_detail(violations))


def not_found(product_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Product with ID {product_id} not found.")


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests (bad types, out-of-range query params) as 400s."""
    violations = violations_from_errors(exc.errors())
    return JSONResponse(status_code=400, content=jsonable_encoder({"detail": validation_detail(violations)}))
