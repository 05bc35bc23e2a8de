# backend/models/simulation.py
from sqlalchemy import Column, Integer, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

# One landed-cost estimate for a quote. Rows are append-only history:
# the API never updates or deletes them.
class QuoteCostSimulation(Base):
    __tablename__ = "quote_cost_simulations"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(Integer, ForeignKey("quotes.id"), nullable=False, index=True)

    # Inputs
    quantity = Column(Integer, nullable=False)
    freight_usd = Column(Float, nullable=False, default=0)
    insurance_usd = Column(Float, nullable=False, default=0)
    other_costs_usd = Column(Float, nullable=False, default=0)
    tax_rate_percent = Column(Float, nullable=False, default=0)
    exchange_rate = Column(Float, nullable=False)

    # Derived costs
    estimated_total_cost_usd = Column(Float, nullable=False)
    estimated_total_cost_brl = Column(Float, nullable=False)
    estimated_unit_cost_usd = Column(Float, nullable=False)
    estimated_unit_cost_brl = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    quote = relationship("Quote", back_populates="simulations")
