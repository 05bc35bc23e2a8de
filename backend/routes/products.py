# backend/routes/products.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from database import get_db
from models.product import Product, ProductImage
from models.quote import Quote
from models.quote_request import QuoteRequest
from utils.tokenJWT import importer_session
from utils.navigation import SessionContext
from utils.audit import write_log, client_ip
from utils.storage import save_upload, delete_upload, full_url
from utils import images as image_rules
import schemas.product as product_schemas

router = APIRouter(prefix="/importer", tags=["Importer products"])
logger = logging.getLogger(__name__)


# ---- HELPERS ----
def own_product(db: Session, product_id: int, profile_id: int) -> Product:
    product = (
        db.query(Product)
        .options(selectinload(Product.images))
        .filter(Product.id == product_id, Product.owner_id == profile_id)
        .first()
    )
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def _main_image_url(product: Product):
    main = next((img for img in product.images if img.is_main), None)
    if main is None and product.images:
        main = product.images[0]
    return main.url if main else None


def product_detail(db: Session, product: Product) -> product_schemas.ProductDetail:
    counts = dict(
        db.query(Quote.quote_request_id, func.count(Quote.id))
        .join(QuoteRequest, QuoteRequest.id == Quote.quote_request_id)
        .filter(QuoteRequest.product_id == product.id)
        .group_by(Quote.quote_request_id)
        .all()
    )
    requests = (
        db.query(QuoteRequest)
        .filter(QuoteRequest.product_id == product.id)
        .order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc())
        .all()
    )
    data = product_schemas.ProductOut.model_validate(product).model_dump()
    data["images"] = [product_schemas.ProductImageOut.model_validate(img) for img in product.images]
    data["quote_requests"] = [
        product_schemas.ProductRequestSummary(
            id=r.id, status=r.status, notes=r.notes, created_at=r.created_at,
            quotes_count=counts.get(r.id, 0),
        )
        for r in requests
    ]
    return product_schemas.ProductDetail.model_validate(data)


def _replace_images(db: Session, product: Product, incoming: List[product_schemas.ProductImageIn]):
    old_urls = [url for (url,) in db.query(ProductImage.url).filter(ProductImage.product_id == product.id).all()]

    # Delete then insert, as two separate commits
    db.query(ProductImage).filter(ProductImage.product_id == product.id).delete()
    db.commit()

    rows = [ProductImage(product_id=product.id, url=img.url, is_main=img.is_main) for img in incoming]
    image_rules.normalize_main(rows)
    if rows:
        db.add_all(rows)
        db.commit()

    kept = {img.url for img in incoming}
    for url in old_urls:
        if url not in kept:
            delete_upload(url, product.owner_id)


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=List[product_schemas.ProductListItem])
def list_products(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    products = (
        db.query(Product)
        .options(selectinload(Product.images))
        .filter(Product.owner_id == session.profile.id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    serialized = []
    for p in products:
        data = product_schemas.ProductOut.model_validate(p).model_dump()
        data["main_image_url"] = _main_image_url(p)
        serialized.append(product_schemas.ProductListItem.model_validate(data))
    return serialized


@router.get("/products/categories", response_model=List[str])
def list_categories(session: SessionContext = Depends(importer_session)):
    return product_schemas.PRODUCT_CATEGORIES


# =========================
# CREATE
# =========================
@router.post("/products", response_model=product_schemas.ProductDetail, status_code=201)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    fields = payload.model_dump(exclude={"images"})
    product = Product(owner_id=session.profile.id, **fields)
    db.add(product)
    db.commit()
    db.refresh(product)

    if payload.images:
        _replace_images(db, product, payload.images)
        db.refresh(product)

    write_log(
        db, profile_id=session.profile.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "name": product.name},
    )
    return product_detail(db, product)


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductDetail)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, product_id, session.profile.id)
    return product_detail(db, product)


# =========================
# UPDATE
# =========================
@router.put("/products/{product_id}", response_model=product_schemas.ProductDetail)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, product_id, session.profile.id)

    for key, value in payload.model_dump(exclude={"images"}).items():
        setattr(product, key, value)
    db.commit()

    if payload.images is not None:
        _replace_images(db, product, payload.images)
    db.refresh(product)

    write_log(
        db, profile_id=session.profile.id, action="PRODUCT_UPDATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id},
    )
    return product_detail(db, product)


# =========================
# IMAGES
# =========================
@router.post("/uploads", response_model=product_schemas.UploadResponse, status_code=201)
def upload_file(
    request: Request,
    file: UploadFile = File(...),
    session: SessionContext = Depends(importer_session),
):
    path = save_upload(file, session.profile.id)
    return {"url": full_url(request, path)}


@router.post("/products/{product_id}/images", response_model=List[product_schemas.ProductImageOut], status_code=201)
def add_product_images(
    product_id: int,
    request: Request,
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, product_id, session.profile.id)

    for file in files:
        path = save_upload(file, session.profile.id)
        image = ProductImage(
            product_id=product.id,
            url=full_url(request, path),
            is_main=image_rules.new_image_is_main(product.images),
        )
        product.images.append(image)
        db.commit()

    write_log(
        db, profile_id=session.profile.id, action="PRODUCT_IMAGE_ADD", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "count": len(files)},
    )
    db.refresh(product)
    return product.images


@router.patch("/products/{product_id}/images/{image_id}/main", response_model=List[product_schemas.ProductImageOut])
def set_main_product_image(
    product_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, product_id, session.profile.id)
    target = next((img for img in product.images if img.id == image_id), None)
    if target is None:
        raise HTTPException(status_code=404, detail="Image not found")

    image_rules.set_main_image(product.images, target)
    db.commit()
    db.refresh(product)
    return product.images


@router.delete("/products/{product_id}/images/{image_id}", response_model=List[product_schemas.ProductImageOut])
def delete_product_image(
    product_id: int,
    image_id: int,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, product_id, session.profile.id)
    target = next((img for img in product.images if img.id == image_id), None)
    if target is None:
        raise HTTPException(status_code=404, detail="Image not found")

    image_rules.remove_image(product.images, target)
    url = target.url
    db.delete(target)
    db.commit()
    delete_upload(url, session.profile.id)

    write_log(
        db, profile_id=session.profile.id, action="PRODUCT_IMAGE_DELETE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "image_id": image_id},
    )
    db.refresh(product)
    return product.images
