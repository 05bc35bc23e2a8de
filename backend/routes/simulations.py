# backend/routes/simulations.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.quote import Quote
from models.quote_request import QuoteRequest
from models.simulation import QuoteCostSimulation
from utils.tokenJWT import importer_session
from utils.navigation import SessionContext
from utils.audit import write_log, client_ip
from utils.cost_simulation import simulate_landed_cost, is_below_moq, SimulationInputError
import schemas.simulation as simulation_schemas

router = APIRouter(prefix="/importer", tags=["Cost simulation"])
logger = logging.getLogger(__name__)


# Quotes are visible to the importer who made the request they answer
def _visible_quote(db: Session, quote_id: int, profile_id: int) -> Quote:
    quote = (
        db.query(Quote)
        .join(QuoteRequest, QuoteRequest.id == Quote.quote_request_id)
        .filter(Quote.id == quote_id, QuoteRequest.requested_by_id == profile_id)
        .first()
    )
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


def _history(db: Session, quote_id: int):
    return (
        db.query(QuoteCostSimulation)
        .filter(QuoteCostSimulation.quote_id == quote_id)
        .order_by(QuoteCostSimulation.created_at.desc(), QuoteCostSimulation.id.desc())
        .all()
    )


@router.get("/quotes/{quote_id}/simulate", response_model=simulation_schemas.SimulationView)
def simulation_view(
    quote_id: int,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    quote = _visible_quote(db, quote_id, session.profile.id)
    defaults = simulation_schemas.SimulationCreate(
        quantity=quote.moq,
        exchange_rate=settings.DEFAULT_EXCHANGE_RATE,
    )
    return {
        "quote": quote,
        "defaults": defaults,
        "history": _history(db, quote.id),
    }


@router.post("/quotes/{quote_id}/simulate", response_model=simulation_schemas.SimulationResult, status_code=201)
def run_simulation(
    quote_id: int,
    payload: simulation_schemas.SimulationCreate,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionContext = Depends(importer_session),
):
    quote = _visible_quote(db, quote_id, session.profile.id)

    try:
        estimate = simulate_landed_cost(
            price_per_unit_usd=float(quote.price_per_unit_usd),
            quantity=payload.quantity,
            freight_usd=payload.freight_usd,
            insurance_usd=payload.insurance_usd,
            other_costs_usd=payload.other_costs_usd,
            tax_rate_percent=payload.tax_rate_percent,
            exchange_rate=payload.exchange_rate,
        )
    except SimulationInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    below_moq = is_below_moq(payload.quantity, quote.moq)
    if below_moq:
        logger.warning("Simulation for quote %s uses quantity %s below MOQ %s", quote.id, payload.quantity, quote.moq)

    # Append-only: every run becomes a new history row
    simulation = QuoteCostSimulation(
        quote_id=quote.id,
        quantity=payload.quantity,
        freight_usd=payload.freight_usd,
        insurance_usd=payload.insurance_usd,
        other_costs_usd=payload.other_costs_usd,
        tax_rate_percent=payload.tax_rate_percent,
        exchange_rate=payload.exchange_rate,
        estimated_total_cost_usd=estimate.estimated_total_cost_usd,
        estimated_total_cost_brl=estimate.estimated_total_cost_brl,
        estimated_unit_cost_usd=estimate.estimated_unit_cost_usd,
        estimated_unit_cost_brl=estimate.estimated_unit_cost_brl,
    )
    db.add(simulation)
    db.commit()
    db.refresh(simulation)

    write_log(
        db, profile_id=session.profile.id, action="SIMULATION_CREATE", resource="simulations",
        status="SUCCESS", ip=client_ip(request),
        meta={"id": simulation.id, "quote_id": quote.id, "quantity": payload.quantity, "below_moq": below_moq},
    )

    data = simulation_schemas.SimulationOut.model_validate(simulation).model_dump()
    data["below_moq"] = below_moq
    return simulation_schemas.SimulationResult.model_validate(data)
