from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional
from datetime import datetime
from models.profile import AppRole

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for sign-up requests
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: AppRole = AppRole.IMPORTER

# Public profile details
class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    role: AppRole
    created_at: Optional[datetime] = None

# Short profile used inside other payloads (requester, exporter pickers)
class ProfileBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

# Output schema for the authenticated account
class UserResponse(UserBase):
    id: int

    class Config:
        from_attributes = True

# Current session: account plus joined profile
class SessionResponse(BaseModel):
    user: UserResponse
    profile: Optional[ProfileResponse] = None

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: AppRole
    home: str
