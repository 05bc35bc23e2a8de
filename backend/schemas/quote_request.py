# backend/schemas/quote_request.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime
from models.quote_request import QuoteRequestStatus
from schemas.product import ProductBrief, ProductDetail, ProductOut, ProductImageOut
from schemas.quote import QuoteOut, RankedQuote
from schemas.user import ProfileBrief


class QuoteRequestCreate(BaseModel):
    product_id: int
    assigned_to_id: Optional[int] = None
    notes: Optional[str] = None


class QuoteRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    requested_by_id: int
    assigned_to_id: Optional[int] = None
    status: QuoteRequestStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Row in request lists and dashboards
class QuoteRequestListItem(QuoteRequestOut):
    product: Optional[ProductBrief] = None
    requester: Optional[ProfileBrief] = None
    quotes_count: int = 0


class ProductWithImages(ProductOut):
    images: List[ProductImageOut] = []


# Form view: the product being sent and the exporters it can be assigned to
class QuoteRequestFormView(BaseModel):
    product: ProductDetail
    exporters: List[ProfileBrief]


# Importer detail: request, product and offers ranked cheapest first
class ImporterQuoteRequestDetail(QuoteRequestOut):
    product: Optional[ProductWithImages] = None
    quotes: List[RankedQuote] = []


# Exporter detail: request, product, requester and the caller's own quotes
class ExporterQuoteRequestDetail(QuoteRequestOut):
    product: Optional[ProductWithImages] = None
    requester: Optional[ProfileBrief] = None
    my_quotes: List[QuoteOut] = []
