"""
Catalog request and response schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from storefront.schemas.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class SubcategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category_id: int
    description: Optional[str] = None
    image_url: Optional[str] = None


class SubcategoryOut(SubcategoryCreate):
    id: int
    created_at: Optional[datetime] = None


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    image_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    in_stock: bool = True
    stock: int = Field(0, ge=0)
    featured: bool = False
    is_deal: bool = False
    deal_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    deal_expiry: Optional[datetime] = None

    @model_validator(mode="after")
    def check_deal(self):
        if self.is_deal and (self.deal_price is None or self.deal_expiry is None):
            raise ValueError("deals need both dealPrice and dealExpiry")
        return self


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    stock: Optional[int] = None
    featured: Optional[bool] = None
    is_deal: Optional[bool] = None
    deal_price: Optional[Decimal] = None
    deal_expiry: Optional[datetime] = None
    deal_active: bool = False
    effective_price: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
