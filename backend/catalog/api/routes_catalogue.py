from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from catalog.db import get_db
from catalog.exceptions import CatalogException
from catalog.schemas.product_schema import (
    ProductCreated,
    ProductFilter,
    ProductOut,
    ProductRequest,
    RatingIn,
)
from catalog.services.product_service import ProductService

router = APIRouter(tags=["catalogue"])


def _http_error(e: CatalogException) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get("", summary="Search products", response_model=List[ProductOut])
def search_products(
    name: Optional[str] = Query(None, description="search term for name or description"),
    category: Optional[str] = Query(None),
    sub_category: Optional[str] = Query(None),
    manufacturer: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None),
    max_price: Optional[float] = Query(None),
    rating: Optional[float] = Query(None, description="minimum average rating"),
    page: Optional[int] = Query(None, description="zero-based page"),
    size: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    filtro = ProductFilter(
        name=name,
        category=category,
        sub_category=sub_category,
        manufacturer=manufacturer,
        min_price=min_price,
        max_price=max_price,
        rating=rating,
        page=page,
        size=size,
    )
    return ProductService(db).search(filtro)


@router.get("/discounted", summary="List products on discount", response_model=List[ProductOut])
def list_discounted(db: Session = Depends(get_db)):
    return ProductService(db).list_discounted()


@router.get("/{product_id}", summary="Get product by id", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_by_id(product_id)
    except CatalogException as e:
        raise _http_error(e)


@router.post("", summary="Register product", status_code=201, response_model=ProductCreated)
def register_product(payload: ProductRequest, db: Session = Depends(get_db)):
    try:
        p = ProductService(db).register(payload)
        return {"id": p.id}
    except CatalogException as e:
        raise _http_error(e)


@router.put("/{product_id}", summary="Update product (partial)")
def update_product(product_id: str, payload: ProductRequest, db: Session = Depends(get_db)):
    try:
        p = ProductService(db).update(product_id, payload)
        return {"id": p.id}
    except CatalogException as e:
        raise _http_error(e)


@router.delete("/{product_id}", summary="Delete product and its supplier link")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    try:
        ProductService(db).delete(product_id)
        return {"ok": True}
    except CatalogException as e:
        raise _http_error(e)


@router.post("/{product_id}/remove-discount", summary="Drop the product's discount")
def remove_discount(product_id: str, db: Session = Depends(get_db)):
    try:
        p = ProductService(db).remove_discount(product_id)
        return {"id": p.id, "price": p.price}
    except CatalogException as e:
        raise _http_error(e)


@router.post("/{product_id}/ratings", summary="Rate a product", status_code=201)
def rate_product(product_id: str, payload: RatingIn, db: Session = Depends(get_db)):
    try:
        average = ProductService(db).rate(product_id, payload.value)
        return {"id": product_id, "average_rating": average}
    except CatalogException as e:
        raise _http_error(e)
