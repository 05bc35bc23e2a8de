# backend/models/product.py
import enum
from sqlalchemy import Column, Integer, String, Float, Boolean, Text, ForeignKey, DateTime, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Lifecycle of a product. QUOTED exists in the schema but nothing sets it yet.
class ProductStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT_FOR_QUOTE = "sent_for_quote"
    QUOTED = "quoted"

# Model Product
# A product registered by an importer to be quoted by exporters.
# Owned exclusively by the importer profile that created it.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)
    internal_code = Column(String, nullable=True)
    reference_link = Column(String, nullable=True)

    # Price the importer hopes to reach, informational only.
    target_price_usd = Column(Float, CheckConstraint("target_price_usd >= 0"), nullable=True)

    description = Column(Text, nullable=True)
    usage_notes = Column(Text, nullable=True)

    status = Column(
        Enum(ProductStatus, values_callable=lambda e: [m.value for m in e]),
        default=ProductStatus.DRAFT, nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("Profile")
    images = relationship(
        "ProductImage", back_populates="product",
        cascade="all, delete-orphan", order_by="ProductImage.id",
    )
    quote_requests = relationship("QuoteRequest", back_populates="product")

# A stored picture of a product. At most one per product carries is_main.
class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    url = Column(String, nullable=False)
    is_main = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="images")
