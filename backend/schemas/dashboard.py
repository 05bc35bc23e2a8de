# backend/schemas/dashboard.py
from pydantic import BaseModel
from typing import List
from schemas.quote_request import QuoteRequestListItem


class ImporterDashboard(BaseModel):
    name: str
    total_products: int
    quote_requests_sent: int
    quotes_received: int
    recent_requests: List[QuoteRequestListItem]


class ExporterDashboard(BaseModel):
    name: str
    pending_requests: int
    quotes_submitted: int
    recent_requests: List[QuoteRequestListItem]
