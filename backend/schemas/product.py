# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from models.product import ProductStatus
from models.quote_request import QuoteRequestStatus

# Categories offered by the product form
PRODUCT_CATEGORIES = [
    "Eletrônicos",
    "Têxteis",
    "Móveis",
    "Brinquedos",
    "Automotivo",
    "Casa e Decoração",
    "Ferramentas",
    "Embalagens",
    "Outros",
]


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProductImageIn(BaseModel):
    url: str = Field(min_length=1)
    is_main: bool = False


class ProductImageOut(ORMBase):
    id: int
    url: str
    is_main: bool


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str = Field(min_length=1)
    category: str
    internal_code: Optional[str] = None
    reference_link: Optional[str] = None
    target_price_usd: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    usage_notes: Optional[str] = None

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in PRODUCT_CATEGORIES:
            raise ValueError("Unknown category")
        return v

    # Blank optional inputs are stored as NULL
    @field_validator("internal_code", "reference_link", "description", "usage_notes")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


# Schema for creating a new product (images are URLs returned by /importer/uploads)
class ProductCreate(ProductBase):
    images: List[ProductImageIn] = []


# Full update; when 'images' is given it replaces the whole image list
class ProductUpdate(ProductBase):
    images: Optional[List[ProductImageIn]] = None


class ProductOut(ProductBase):
    id: int
    owner_id: int
    status: ProductStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Stored rows may predate the category list
    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        return v


class ProductListItem(ProductOut):
    main_image_url: Optional[str] = None


class ProductRequestSummary(ORMBase):
    id: int
    status: QuoteRequestStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    quotes_count: int = 0


# Product detail view: images and the quote requests made for it
class ProductDetail(ProductOut):
    images: List[ProductImageOut] = []
    quote_requests: List[ProductRequestSummary] = []


class ProductBrief(ORMBase):
    id: int
    name: str
    category: str


class UploadResponse(BaseModel):
    url: str
