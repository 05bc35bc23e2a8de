# backend/schemas/quote.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from models.quote import Incoterm, QuoteStatus


# Exporter input for a factory offer
class QuoteCreate(BaseModel):
    factory_name: str = Field(min_length=1)
    factory_location: Optional[str] = None
    incoterm: Optional[Incoterm] = None
    price_per_unit_usd: float = Field(gt=0)
    moq: int = Field(ge=1)
    available_stock: Optional[int] = Field(default=None, ge=0)
    lead_time_days: Optional[int] = Field(default=None, ge=0)
    competitor_links: Optional[str] = None
    certifications: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("incoterm", mode="before")
    @classmethod
    def _blank_incoterm(cls, v):
        return v or None

    @field_validator("factory_location", "competitor_links", "certifications", "remarks")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class QuoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quote_request_id: int
    created_by_id: int
    factory_name: str
    factory_location: Optional[str] = None
    incoterm: Optional[Incoterm] = None
    price_per_unit_usd: float
    moq: int
    available_stock: Optional[int] = None
    lead_time_days: Optional[int] = None
    competitor_links: Optional[str] = None
    certifications: Optional[str] = None
    remarks: Optional[str] = None
    status: QuoteStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Quote as shown to the importer, ranked by price
class RankedQuote(QuoteOut):
    best_price: bool = False
