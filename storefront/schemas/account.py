"""
Account and authentication schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.schemas.base import CamelModel


class IdentityProfile(BaseModel):
    """Profile as the identity provider hands it to the browser"""
    model_config = ConfigDict(extra="ignore")

    sub: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None


class AuthSyncRequest(CamelModel):
    user: Optional[IdentityProfile] = None
    # Validated item by item so one stale entry does not sink the sync
    local_cart_items: List[Dict[str, Any]] = Field(default_factory=list)
    access_token: Optional[str] = None


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None


class UserOut(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    provider: Optional[str] = None
    created_at: Optional[datetime] = None


class ProfileUpdated(CamelModel):
    success: bool = True
    message: str
    user: UserOut
