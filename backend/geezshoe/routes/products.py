# backend/geezshoe/routes/products.py
from typing import Optional, List
from fastapi import (
    APIRouter, Depends, HTTPException, Query, Request,
    UploadFile, File, Form
)
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from geezshoe.database import get_db
from geezshoe.models.admin import Admin
from geezshoe.models.product import Product
from geezshoe.repositories import ProductRepository
from geezshoe.utils.audit import write_log
from geezshoe.utils.storage import ObjectStorage, get_storage, PRODUCT_BUCKET, ALLOWED_IMAGE_TYPES, slugify, unique_name
from geezshoe.utils.tokenJWT import get_current_admin
import geezshoe.schemas.product as product_schemas

router = APIRouter(tags=["Products"])
logger = logging.getLogger(__name__)

def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None

def _page(query, page: int, page_size: int):
    total = query.count()
    items: List[Product] = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


# =========================
# SHOP (public)
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_shop_products(
    q: Optional[str] = Query(None, description="Search by name"),
    include_inactive: bool = Query(False),
    page: int = Query(1, ge=1),
    page_size: int = Query(12, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = db.query(Product)
    if not include_inactive:
        query = query.filter(Product.is_active == True)  # noqa: E712
    if q:
        query = query.filter(Product.name.ilike(f"%{q}%"))
    query = query.order_by(Product.created_at.desc(), Product.id.desc())
    return _page(query, page, page_size)


@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = ProductRepository(db).get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# ADMIN LIST
# =========================
@router.get("/admin/products", response_model=product_schemas.ProductListPage)
def list_admin_products(
    q: Optional[str] = Query(None, description="Name, or exact stock count when numeric"),
    active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    query = db.query(Product)
    if q:
        if q.strip().isdigit():
            query = query.filter(or_(Product.name.ilike(f"%{q}%"), Product.item_number == int(q)))
        else:
            query = query.filter(Product.name.ilike(f"%{q}%"))
    if active is not None:
        query = query.filter(Product.is_active == active)
    query = query.order_by(Product.created_at.desc(), Product.id.desc())
    return _page(query, page, page_size)


# =========================
# CREATE / UPDATE
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=201)
def add_product(
    payload: product_schemas.ProductIn,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    product = Product(**payload.to_row())
    try:
        ProductRepository(db).add(product)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Product insert failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Database Error: {e}")
    db.refresh(product)

    write_log(db, user_id=current_admin.id, action="PRODUCT_CREATE", resource="products",
              status="SUCCESS", ip=_client_ip(request), meta={"id": product.id, "name": product.name})
    return product


@router.put("/products/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductIn,
    request: Request,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    product = ProductRepository(db).get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    for key, value in payload.to_row().items():
        setattr(product, key, value)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Product update failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Database Error: {e}")
    db.refresh(product)

    write_log(db, user_id=current_admin.id, action="PRODUCT_UPDATE", resource="products",
              status="SUCCESS", ip=_client_ip(request), meta={"id": product.id})
    return product


# =========================
# IMAGES
# =========================
@router.post("/products/images", response_model=product_schemas.ImageUploadOut)
def upload_product_image(
    file: UploadFile = File(...),
    product_name: str = Form(...),
    replace_url: Optional[str] = Form(None),
    storage: ObjectStorage = Depends(get_storage),
    current_admin: Admin = Depends(get_current_admin),
):
    ext = ALLOWED_IMAGE_TYPES.get(file.content_type)
    if not ext:
        raise HTTPException(status_code=400, detail="Invalid file type")

    path = f"shoes/{slugify(product_name)}/{unique_name(ext)}"
    try:
        storage.upload(PRODUCT_BUCKET, path, file.file.read())
    except OSError as e:
        logger.error("Image upload failed: %s", e)
        raise HTTPException(status_code=500, detail=f"File save error: {e}")
    finally:
        file.file.close()

    # The slot's previous image is no longer referenced
    if replace_url:
        storage.remove_public_urls(PRODUCT_BUCKET, [replace_url])

    return {"url": storage.get_public_url(PRODUCT_BUCKET, path), "path": path}


# =========================
# DELETE
# =========================
@router.delete("/products/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_admin: Admin = Depends(get_current_admin),
):
    repo = ProductRepository(db)
    product = repo.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    # Stored images first, best effort
    storage.remove_public_urls(PRODUCT_BUCKET, product.image_urls or [])

    pid, pname = product.id, product.name
    repo.delete(product)
    db.commit()
    write_log(db, user_id=current_admin.id, action="PRODUCT_DELETE", resource="products",
              status="SUCCESS", ip=_client_ip(request), meta={"id": pid})
    return {"detail": f"Product '{pname}' deleted"}
