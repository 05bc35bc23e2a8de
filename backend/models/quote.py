# backend/models/quote.py
import enum
from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey, DateTime, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

class Incoterm(str, enum.Enum):
    EXW = "EXW"
    FOB = "FOB"
    CIF = "CIF"
    DDP = "DDP"

class QuoteStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

# A factory offer submitted by an exporter in answer to a quote request.
class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    quote_request_id = Column(Integer, ForeignKey("quote_requests.id"), nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    # Factory details
    factory_name = Column(String, nullable=False)
    factory_location = Column(String, nullable=True)
    incoterm = Column(Enum(Incoterm), nullable=True)

    # Commercial terms
    price_per_unit_usd = Column(Float, CheckConstraint("price_per_unit_usd > 0"), nullable=False)
    moq = Column(Integer, CheckConstraint("moq >= 1"), nullable=False)
    available_stock = Column(Integer, nullable=True)
    lead_time_days = Column(Integer, nullable=True)

    competitor_links = Column(Text, nullable=True)
    certifications = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)

    status = Column(
        Enum(QuoteStatus, values_callable=lambda e: [m.value for m in e]),
        default=QuoteStatus.SUBMITTED, nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    quote_request = relationship("QuoteRequest", back_populates="quotes")
    created_by = relationship("Profile")
    # Append-only history, never removed together with the quote
    simulations = relationship("QuoteCostSimulation", back_populates="quote", passive_deletes="all")
