# backend/models/quote_request.py
import enum
from sqlalchemy import Column, Integer, Text, ForeignKey, DateTime, Enum, func
from sqlalchemy.orm import relationship
from database import Base

class QuoteRequestStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

# An importer's solicitation for price/terms on one of their products.
# assigned_to_id = NULL means every exporter may answer it.
class QuoteRequest(Base):
    __tablename__ = "quote_requests"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    requested_by_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("profiles.id"), nullable=True, index=True)
    status = Column(
        Enum(QuoteRequestStatus, values_callable=lambda e: [m.value for m in e]),
        default=QuoteRequestStatus.PENDING, nullable=False,
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product = relationship("Product", back_populates="quote_requests")
    requester = relationship("Profile", foreign_keys=[requested_by_id])
    assignee = relationship("Profile", foreign_keys=[assigned_to_id])
    quotes = relationship("Quote", back_populates="quote_request", cascade="all, delete-orphan")
