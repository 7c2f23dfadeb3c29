import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from inventory_api.api.errors import not_found, validation_error
from inventory_api.config import settings
from inventory_api.db import get_db
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.schemas.product_schema import (
    PagedResult,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from inventory_api.services.catalogue_service import CatalogueService, ProductQueryParams
from inventory_api.services.product_service import ProductService, ProductValidationException

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalogue"])


@router.get("", summary="List products", response_model=PagedResult)
def list_products(
    category: Optional[str] = Query(None, description="exact category, case-insensitive"),
    search: Optional[str] = Query(None, description="search term for name or description"),
    sort_by: Optional[str] = Query("name", alias="sortBy", description="name, price, stock, category or created"),
    sort_descending: bool = Query(False, alias="sortDescending"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
):
    svc = CatalogueService(ProductRepository(db))
    params = ProductQueryParams(
        category=category,
        search=search,
        sort_by=sort_by,
        sort_descending=sort_descending,
        page=page,
        page_size=page_size,
    )
    try:
        return PagedResult.from_page(svc.list_products(params))
    except ProductValidationException as e:
        raise validation_error(e.violations)
    except Exception:
        logger.exception("Listing products failed")
        raise HTTPException(status_code=500, detail="An error occurred while retrieving products.")


# declared before /{product_id} so "low-stock" is not parsed as an id
@router.get("/low-stock", summary="List active products with low stock", response_model=List[ProductOut])
def list_low_stock(db: Session = Depends(get_db)):
    svc = CatalogueService(ProductRepository(db))
    try:
        return [ProductOut.model_validate(p) for p in svc.list_low_stock()]
    except Exception:
        logger.exception("Listing low-stock products failed")
        raise HTTPException(status_code=500, detail="An error occurred while retrieving low stock products.")


@router.get("/{product_id}", summary="Get product by ID", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = CatalogueService(ProductRepository(db))
    try:
        p = svc.get_product(product_id)
        out = ProductOut.model_validate(p) if p else None
    except Exception:
        logger.exception("Fetching product %s failed", product_id)
        raise HTTPException(status_code=500, detail="An error occurred while retrieving the product.")
    if out is None:
        raise not_found(product_id)
    return out


@router.post("", summary="Create product", status_code=201, response_model=ProductOut)
def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    svc = ProductService(ProductRepository(db))
    try:
        p = svc.create(payload.model_dump(exclude_unset=True))
        out = ProductOut.model_validate(p)
    except ProductValidationException as e:
        raise validation_error(e.violations)
    except Exception:
        logger.exception("Creating product failed")
        raise HTTPException(status_code=500, detail="An error occurred while creating the product.")
    response.headers["Location"] = str(request.url_for("get_product", product_id=out.id))
    return out


@router.put("/{product_id}", summary="Update product", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    svc = ProductService(ProductRepository(db))
    try:
        p = svc.update(product_id, payload.model_dump(exclude_unset=True))
        out = ProductOut.model_validate(p) if p else None
    except ProductValidationException as e:
        raise validation_error(e.violations)
    except Exception:
        logger.exception("Updating product %s failed", product_id)
        raise HTTPException(status_code=500, detail="An error occurred while updating the product.")
    if out is None:
        raise not_found(product_id)
    return out


@router.delete("/{product_id}", summary="Soft delete product", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    svc = ProductService(ProductRepository(db))
    try:
        deleted = svc.soft_delete(product_id)
    except Exception:
        logger.exception("Deleting product %s failed", product_id)
        raise HTTPException(status_code=500, detail="An error occurred while deleting the product.")
    if not deleted:
        raise not_found(product_id)
    return Response(status_code=204)
