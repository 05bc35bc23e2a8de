# backend/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from models.quote import Quote
from models.quote_request import QuoteRequest, QuoteRequestStatus
from utils.tokenJWT import importer_session, exporter_session
from utils.navigation import SessionContext
from routes.quote_requests import own_requests_query, to_list_items, quote_counts
from routes.exporter import visible_requests_query
from schemas.dashboard import ImporterDashboard, ExporterDashboard

router = APIRouter(tags=["Dashboard"])

RECENT_LIMIT = 5
OPEN_STATUSES = (QuoteRequestStatus.PENDING, QuoteRequestStatus.IN_PROGRESS)


# === Importer home ===

@router.get("/importer/dashboard", response_model=ImporterDashboard)
def importer_dashboard(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    profile = session.profile

    # Two independent reads, each fills its own part of the summary
    total_products = db.query(Product).filter(Product.owner_id == profile.id).count()
    request_ids = [
        rid for (rid,) in db.query(QuoteRequest.id).filter(QuoteRequest.requested_by_id == profile.id).all()
    ]
    quotes_received = sum(quote_counts(db, request_ids).values())

    recent = own_requests_query(db, profile.id).limit(RECENT_LIMIT).all()

    return ImporterDashboard(
        name=profile.name,
        total_products=total_products,
        quote_requests_sent=len(request_ids),
        quotes_received=quotes_received,
        recent_requests=to_list_items(db, recent),
    )


# === Exporter home ===

@router.get("/exporter/dashboard", response_model=ExporterDashboard)
def exporter_dashboard(
    db: Session = Depends(get_db),
    session: SessionContext = Depends(exporter_session),
):
    profile = session.profile

    pending_requests = (
        visible_requests_query(db, profile.id)
        .filter(QuoteRequest.status.in_(OPEN_STATUSES))
        .count()
    )
    quotes_submitted = db.query(Quote).filter(Quote.created_by_id == profile.id).count()
    recent = visible_requests_query(db, profile.id).limit(RECENT_LIMIT).all()

    return ExporterDashboard(
        name=profile.name,
        pending_requests=pending_requests,
        quotes_submitted=quotes_submitted,
        recent_requests=to_list_items(db, recent),
    )
