"""
Cart and wishlist schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.schemas.base import CamelModel
from storefront.schemas.catalog import ProductOut


class CartItemCreate(CamelModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class CartItemUpdate(CamelModel):
    quantity: int = Field(..., ge=1)


class CartItemOut(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None
    product: Optional[ProductOut] = None


class WishlistItemCreate(CamelModel):
    product_id: int


class WishlistItemOut(CamelModel):
    id: int
    user_id: int
    product_id: int
    created_at: Optional[datetime] = None
    product: Optional[ProductOut] = None
