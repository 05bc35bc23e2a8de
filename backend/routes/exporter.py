# backend/routes/exporter.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from database import get_db
from models.product import Product
from models.quote import Quote, QuoteStatus
from models.quote_request import QuoteRequest, QuoteRequestStatus
from models.simulation import QuoteCostSimulation
from utils.tokenJWT import exporter_session
from utils.navigation import SessionContext
from utils.audit import write_log, client_ip
from schemas.quote import QuoteCreate, QuoteOut
from schemas.user import ProfileBrief
import schemas.quote_request as request_schemas
from routes.quote_requests import to_list_items

router = APIRouter(prefix="/exporter", tags=["Exporter"])
logger = logging.getLogger(__name__)


# ---- HELPERS ----
def visible_requests_query(db: Session, profile_id: int):
    """Requests open to every exporter or assigned to this one, newest first."""
    return (
        db.query(QuoteRequest)
        .filter(or_(QuoteRequest.assigned_to_id.is_(None), QuoteRequest.assigned_to_id == profile_id))
        .order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc())
    )


def _visible_request(db: Session, request_id: int, profile_id: int) -> QuoteRequest:
    quote_request = (
        visible_requests_query(db, profile_id)
        .options(
            joinedload(QuoteRequest.product).selectinload(Product.images),
            joinedload(QuoteRequest.requester),
        )
        .filter(QuoteRequest.id == request_id)
        .first()
    )
    if not quote_request:
        raise HTTPException(status_code=404, detail="Quote request not found")
    return quote_request


def _own_quote(db: Session, quote_id: int, profile_id: int) -> Quote:
    quote = db.query(Quote).filter(Quote.id == quote_id, Quote.created_by_id == profile_id).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


# =========================
# REQUEST LIST
# =========================
@router.get("/quote-requests", response_model=List[request_schemas.QuoteRequestListItem])
def list_visible_requests(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    requests = (
        visible_requests_query(db, session.profile.id)
        .options(joinedload(QuoteRequest.product), joinedload(QuoteRequest.requester))
        .all()
    )
    return to_list_items(db, requests)


# =========================
# REQUEST DETAIL
# =========================
@router.get("/quote-requests/{request_id}", response_model=request_schemas.ExporterQuoteRequestDetail)
def get_visible_request(
    request_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    quote_request = _visible_request(db, request_id, session.profile.id)
    my_quotes = (
        db.query(Quote)
        .filter(Quote.quote_request_id == quote_request.id, Quote.created_by_id == session.profile.id)
        .order_by(Quote.created_at.desc(), Quote.id.desc())
        .all()
    )

    data = request_schemas.QuoteRequestOut.model_validate(quote_request).model_dump()
    data["product"] = (
        request_schemas.ProductWithImages.model_validate(quote_request.product)
        if quote_request.product else None
    )
    data["requester"] = ProfileBrief.model_validate(quote_request.requester) if quote_request.requester else None
    data["my_quotes"] = [QuoteOut.model_validate(q) for q in my_quotes]
    return request_schemas.ExporterQuoteRequestDetail.model_validate(data)


# =========================
# SUBMIT QUOTE
# =========================
@router.post("/quote-requests/{request_id}/quotes", response_model=QuoteOut, status_code=201)
def submit_quote(
    request_id: int,
    payload: QuoteCreate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    quote_request = _visible_request(db, request_id, session.profile.id)

    quote = Quote(
        quote_request_id=quote_request.id,
        created_by_id=session.profile.id,
        status=QuoteStatus.SUBMITTED,
        **payload.model_dump(),
    )
    db.add(quote)
    db.commit()
    db.refresh(quote)

    # Second, independent write. A failure here leaves the quote in place.
    try:
        quote_request.status = QuoteRequestStatus.COMPLETED
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Quote %s saved but request %s status was not updated", quote.id, quote_request.id)
        raise

    write_log(
        db, profile_id=session.profile.id, action="QUOTE_CREATE", resource="quotes",
        status="SUCCESS", ip=client_ip(request),
        meta={"id": quote.id, "quote_request_id": quote_request.id, "price_per_unit_usd": quote.price_per_unit_usd},
    )
    return quote


# =========================
# EDIT / DELETE OWN QUOTES
# =========================
@router.put("/quotes/{quote_id}", response_model=QuoteOut)
def update_quote(
    quote_id: int,
    payload: QuoteCreate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    quote = _own_quote(db, quote_id, session.profile.id)

    for key, value in payload.model_dump().items():
        setattr(quote, key, value)
    quote.status = QuoteStatus.SUBMITTED
    db.commit()
    db.refresh(quote)

    write_log(
        db, profile_id=session.profile.id, action="QUOTE_UPDATE", resource="quotes",
        status="SUCCESS", ip=client_ip(request), meta={"id": quote.id},
    )
    return quote


@router.delete("/quotes/{quote_id}")
def delete_quote(
    quote_id: int,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    quote = _own_quote(db, quote_id, session.profile.id)
    qid = quote.id

    # The importer's simulation history references this quote
    simulated = db.query(QuoteCostSimulation).filter(QuoteCostSimulation.quote_id == qid).count()
    if simulated:
        write_log(
            db, profile_id=session.profile.id, action="QUOTE_DELETE", resource="quotes",
            status="FAIL", ip=client_ip(request), meta={"id": qid, "reason": "Has simulations"},
        )
        raise HTTPException(status_code=409, detail="Quote already has cost simulations and cannot be deleted")

    db.delete(quote)
    db.commit()

    write_log(
        db, profile_id=session.profile.id, action="QUOTE_DELETE", resource="quotes",
        status="SUCCESS", ip=client_ip(request), meta={"id": qid},
    )
    return {"detail": f"Quote {qid} deleted"}
