# backend/routes/quote_requests.py
import logging
from typing import Dict, Iterable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from database import get_db
from models.product import Product, ProductStatus
from models.profile import Profile, AppRole
from models.quote import Quote
from models.quote_request import QuoteRequest, QuoteRequestStatus
from utils.tokenJWT import importer_session
from utils.navigation import SessionContext
from utils.audit import write_log, client_ip
from utils.ranking import rank_quotes
from schemas.product import ProductBrief
from schemas.quote import RankedQuote
from schemas.user import ProfileBrief
import schemas.quote_request as request_schemas
from routes.products import own_product, product_detail

router = APIRouter(prefix="/importer", tags=["Importer quote requests"])
logger = logging.getLogger(__name__)


# ---- HELPERS ----
def quote_counts(db: Session, request_ids: Iterable[int]) -> Dict[int, int]:
    ids = list(request_ids)
    if not ids:
        return {}
    rows = (
        db.query(Quote.quote_request_id, func.count(Quote.id))
        .filter(Quote.quote_request_id.in_(ids))
        .group_by(Quote.quote_request_id)
        .all()
    )
    return dict(rows)


def to_list_items(db: Session, requests: List[QuoteRequest]) -> List[request_schemas.QuoteRequestListItem]:
    counts = quote_counts(db, (r.id for r in requests))
    items = []
    for r in requests:
        data = request_schemas.QuoteRequestOut.model_validate(r).model_dump()
        data["product"] = ProductBrief.model_validate(r.product) if r.product else None
        data["requester"] = ProfileBrief.model_validate(r.requester) if r.requester else None
        data["quotes_count"] = counts.get(r.id, 0)
        items.append(request_schemas.QuoteRequestListItem.model_validate(data))
    return items


def own_requests_query(db: Session, profile_id: int):
    return (
        db.query(QuoteRequest)
        .options(joinedload(QuoteRequest.product), joinedload(QuoteRequest.requester))
        .filter(QuoteRequest.requested_by_id == profile_id)
        .order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc())
    )


def _exporters(db: Session) -> List[Profile]:
    return db.query(Profile).filter(Profile.role == AppRole.EXPORTER).order_by(Profile.name.asc()).all()


# =========================
# EXPORTERS (assignment picker)
# =========================
@router.get("/exporters", response_model=List[ProfileBrief])
def list_exporters(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    return _exporters(db)


# =========================
# LIST
# =========================
@router.get("/quote-requests", response_model=List[request_schemas.QuoteRequestListItem])
def list_quote_requests(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    return to_list_items(db, own_requests_query(db, session.profile.id).all())


# =========================
# FORM VIEW
# =========================
@router.get("/quote-requests/new", response_model=request_schemas.QuoteRequestFormView)
def quote_request_form(
    product_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    if product_id is None:
        raise HTTPException(status_code=400, detail="Choose a product to request a quote for")
    product = own_product(db, product_id, session.profile.id)
    return {"product": product_detail(db, product), "exporters": _exporters(db)}


# =========================
# CREATE
# =========================
@router.post("/quote-requests", response_model=request_schemas.QuoteRequestOut, status_code=201)
def create_quote_request(
    payload: request_schemas.QuoteRequestCreate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    product = own_product(db, payload.product_id, session.profile.id)

    if payload.assigned_to_id is not None:
        assignee = db.query(Profile).filter(Profile.id == payload.assigned_to_id).first()
        if not assignee or assignee.role != AppRole.EXPORTER:
            raise HTTPException(status_code=400, detail="Assigned profile is not an exporter")

    quote_request = QuoteRequest(
        product_id=product.id,
        requested_by_id=session.profile.id,
        assigned_to_id=payload.assigned_to_id,
        notes=(payload.notes or "").strip() or None,
        status=QuoteRequestStatus.PENDING,
    )
    db.add(quote_request)
    db.commit()
    db.refresh(quote_request)

    # Separate write: first request moves the product out of draft
    if product.status == ProductStatus.DRAFT:
        product.status = ProductStatus.SENT_FOR_QUOTE
        db.commit()

    write_log(
        db, profile_id=session.profile.id, action="QUOTE_REQUEST_CREATE", resource="quote_requests",
        status="SUCCESS", ip=client_ip(request),
        meta={"id": quote_request.id, "product_id": product.id, "assigned_to_id": payload.assigned_to_id},
    )
    return quote_request


# =========================
# DETAIL (ranked offers)
# =========================
@router.get("/quote-requests/{request_id}", response_model=request_schemas.ImporterQuoteRequestDetail)
def get_quote_request(
    request_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    quote_request = (
        db.query(QuoteRequest)
        .options(joinedload(QuoteRequest.product).selectinload(Product.images))
        .filter(QuoteRequest.id == request_id, QuoteRequest.requested_by_id == session.profile.id)
        .first()
    )
    if not quote_request:
        raise HTTPException(status_code=404, detail="Quote request not found")

    quotes = (
        db.query(Quote)
        .filter(Quote.quote_request_id == quote_request.id)
        .order_by(Quote.id.asc())
        .all()
    )
    ranked = []
    for quote, best in rank_quotes(quotes):
        data = RankedQuote.model_validate(quote).model_dump()
        data["best_price"] = best
        ranked.append(data)

    data = request_schemas.QuoteRequestOut.model_validate(quote_request).model_dump()
    data["product"] = (
        request_schemas.ProductWithImages.model_validate(quote_request.product)
        if quote_request.product else None
    )
    data["quotes"] = ranked
    return request_schemas.ImporterQuoteRequestDetail.model_validate(data)
