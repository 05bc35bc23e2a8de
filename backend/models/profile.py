# backend/models/profile.py
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, func
from sqlalchemy.orm import relationship
from database import Base

# The two sides of the marketplace
class AppRole(str, enum.Enum):
    IMPORTER = "importer"
    EXPORTER = "exporter"

# Identity record created once at sign-up. The role never changes afterwards.
class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String, nullable=False)
    role = Column(Enum(AppRole, values_callable=lambda e: [m.value for m in e]), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")
